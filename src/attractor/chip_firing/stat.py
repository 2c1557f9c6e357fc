import collections
import logging

logger = logging.getLogger(__name__)

# One avalanche, measured three ways, plus whether it finished.
#   steps: number of calls to step(), as returned by trigger_avalanche().
#   firings: number of individual vertex firings. Equal to steps in sequential mode.
#   toppled: number of distinct vertices that fired at least once.
#   stable: False if the avalanche was cut off by max_steps.
Avalanche = collections.namedtuple("Avalanche", ["vertex", "steps", "firings", "toppled", "stable"])


def avalanche(engine, vertex, max_steps, rng):
    """
    Drop a chip on vertex, let the graph relax, and measure the resulting avalanche.

    Equivalent to trigger_avalanche(), and extends the engine's history the same way,
    but also records which vertices fired.

    :param engine: A ChipFiringEngine.
    :param vertex: Vertex to add a chip to.
    :param max_steps: Maximum number of steps the avalanche may take.
    :param rng: A numpy Generator owned by the caller.
    """
    engine.drop_chip(vertex)
    steps, firings, toppled = 0, 0, set()
    while steps < max_steps and not engine.is_stable():
        fired = engine.step(rng)
        firings += len(fired)
        toppled.update(fired)
        steps += 1
    logger.debug("Avalanche at vertex %d: %d steps, %d firings", vertex, steps, firings)
    return Avalanche(vertex, steps, firings, len(toppled), engine.is_stable())

def avalanche_survey(engine, num_grains, max_steps, rng):
    """
    Drop num_grains chips, one at a time, on uniformly random vertices, relaxing the graph after each.

    Returns a list of Avalanche records in the order the grains were dropped.
    History is cleared after each grain so that memory use stays bounded over long surveys.
    """
    avalanches = []
    for _ in range(num_grains):
        # RNG excludes hi endpoint.
        vertex = int(rng.integers(0, engine.size()))
        avalanches.append(avalanche(engine, vertex, max_steps, rng))
        engine.clear_history()
    logger.info("Survey of %d grains produced %d non-trivial avalanches", num_grains,
        sum(1 for item in avalanches if item.firings))
    return avalanches

def size_distribution(avalanches, key="firings"):
    """
    Count how many avalanches had each size.

    :param avalanches: A list of Avalanche records.
    :param key: Which measure of size to use: "steps", "firings" or "toppled".
    """
    assert key in ("steps", "firings", "toppled")
    return dict(sorted(collections.Counter(getattr(item, key) for item in avalanches).items()))
