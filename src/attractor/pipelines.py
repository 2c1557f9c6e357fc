"""
Low-code methods for running attractor experiments.

The idea behind these pipelines is that it should only take one line of code to kick off an entire experiment.
Each pipeline builds or configures an engine from an AttractorConfig, runs it, and collects the statistics
one would otherwise compute by hand.
All pipelines are synchronous and draw every random number from the generator they are handed.
"""
import collections
import logging

import attractor.chip_firing
import attractor.hopfield
from attractor.config import load_config

logger = logging.getLogger(__name__)

RecallResult = collections.namedtuple("RecallResult", ["history", "energies", "overlaps", "retrieved"])


def recall(patterns, probe, rng, config=None):
    """
    Store patterns in a fresh Hopfield network and let it evolve from probe.

    Returns a RecallResult holding the state history, the energy of each state, the (T, P) overlap of each state
    with each pattern, and the index of the pattern retrieved by the final state (None if no pattern was reached).

    :param patterns: A non-empty list of bipolar states.
    :param probe: The bipolar start state, usually a noisy copy of one pattern.
    :param rng: A numpy Generator owned by the caller.
    :param config: An AttractorConfig. Defaults to load_config().
    """
    hypers = (config or load_config()).hopfield
    engine = attractor.hopfield.HopfieldEngine(len(probe))
    engine.train(patterns, hypers.rule)
    if hypers.connectivity is not None:
        engine.apply_erdos_renyi_topology(hypers.connectivity, rng)

    run = engine.run_async if hypers.asynchronous else engine.run
    history, iterations = run(probe, hypers.max_iterations, hypers.beta, rng)
    energies = attractor.hopfield.stat.energy_trajectory(engine, history)
    overlaps = attractor.hopfield.stat.pattern_overlaps(history, patterns)
    retrieved = attractor.hopfield.stat.retrieved_pattern(history[-1], patterns)
    logger.info("Recall ran %d iterations, final energy %s, retrieved pattern %s", iterations, energies[-1], retrieved)
    return RecallResult(history, energies, overlaps, retrieved)

def survey(engine, num_grains, rng, config=None):
    """
    Configure a chip-firing engine from config and drop num_grains chips on it at random.

    Returns a list of attractor.chip_firing.stat.Avalanche records.

    :param engine: A ChipFiringEngine. Its update mode and selection strategy are overwritten.
    :param num_grains: Number of chips to drop.
    :param rng: A numpy Generator owned by the caller.
    :param config: An AttractorConfig. Defaults to load_config().
    """
    hypers = (config or load_config()).chip_firing
    engine.update_mode = hypers.update_mode
    engine.selection_strategy = hypers.selection_strategy
    return attractor.chip_firing.stat.avalanche_survey(engine, num_grains, hypers.max_steps, rng)
