from numpy.random import default_rng

import attractor.pipelines
from attractor.chip_firing import ChipFiringEngine, UpdateMode
from attractor.config import load_config


def test_recall_noisy_pattern(orthogonal_patterns, TrainingRule, rng):
	noisy = list(orthogonal_patterns[1])
	noisy[2] = -1.
	cfg = load_config({"hopfield": {"rule": TrainingRule, "max_iterations": 5}})
	result = attractor.pipelines.recall(orthogonal_patterns, noisy, rng, cfg)
	assert len(result.history) == 6
	assert len(result.energies) == 6
	assert result.overlaps.shape == (6, 2)
	assert result.history[-1].tolist() == orthogonal_patterns[1]
	assert result.retrieved == 1
	assert result.energies[-1] < result.energies[0]

def test_recall_asynchronous(orthogonal_patterns, rng):
	noisy = list(orthogonal_patterns[0])
	noisy[5] = -1.
	cfg = load_config({"hopfield": {"asynchronous": True, "max_iterations": 200}})
	result = attractor.pipelines.recall(orthogonal_patterns, noisy, rng, cfg)
	assert len(result.history) == 201
	assert result.retrieved == 0

def test_recall_fully_pruned(orthogonal_patterns, rng):
	# With no connections left, no neuron gets any field and zero field keeps the probability at one half.
	cfg = load_config({"hopfield": {"connectivity": 0., "max_iterations": 1}})
	result = attractor.pipelines.recall(orthogonal_patterns, orthogonal_patterns[0], rng, cfg)
	assert result.energies == [0., 0.]

def test_recall_is_reproducible(correlated_patterns):
	probe = [1., -1., 1., -1., 1., -1., 1., -1.]
	cfg = load_config({"hopfield": {"beta": .5, "max_iterations": 10}})
	first = attractor.pipelines.recall(correlated_patterns, probe, default_rng(6), cfg)
	second = attractor.pipelines.recall(correlated_patterns, probe, default_rng(6), cfg)
	assert first.energies == second.energies
	assert first.retrieved == second.retrieved

def test_survey_configures_engine():
	engine = ChipFiringEngine.new_grid(4, 4)
	cfg = load_config({"chip_firing": {"update_mode": "parallel", "max_steps": 500}})
	avalanches = attractor.pipelines.survey(engine, 12, default_rng(0), cfg)
	assert engine.update_mode == UpdateMode.PARALLEL
	assert len(avalanches) == 12
	assert engine.total_chips() == 12
	assert all(item.firings >= item.steps for item in avalanches)

def test_survey_defaults():
	engine = ChipFiringEngine.new_cycle(5)
	engine.update_mode = UpdateMode.PARALLEL
	avalanches = attractor.pipelines.survey(engine, 3, default_rng(1))
	assert engine.update_mode == UpdateMode.SEQUENTIAL
	assert all(item.firings == item.steps for item in avalanches)
