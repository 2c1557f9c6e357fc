import pytest

from attractor.hopfield import HopfieldEngine, TrainingRule, stat


def test_energy_trajectory(orthogonal_patterns, rng):
	engine = HopfieldEngine(8)
	engine.train(orthogonal_patterns, TrainingRule.HEBBIAN)
	history, _ = engine.run(orthogonal_patterns[0], 3, 100., rng)
	energies = stat.energy_trajectory(engine, history)
	assert len(energies) == 4
	assert energies == [engine.energy(orthogonal_patterns[0])] * 4

def test_pattern_overlaps(orthogonal_patterns):
	mirror = [-x for x in orthogonal_patterns[1]]
	overlaps = stat.pattern_overlaps([orthogonal_patterns[0], mirror], orthogonal_patterns)
	assert overlaps.shape == (2, 2)
	assert overlaps.tolist() == [[1., 0.], [0., -1.]]

def test_retrieved_pattern(orthogonal_patterns):
	assert stat.retrieved_pattern(orthogonal_patterns[1], orthogonal_patterns) == 1
	# Mirror images count as retrieval.
	assert stat.retrieved_pattern([-x for x in orthogonal_patterns[0]], orthogonal_patterns) == 0
	noisy = list(orthogonal_patterns[0])
	noisy[3] = -1.
	assert stat.retrieved_pattern(noisy, orthogonal_patterns) is None
	assert stat.retrieved_pattern(noisy, orthogonal_patterns, threshold=.75) == 0
	assert stat.retrieved_pattern(noisy, []) is None

def test_pseudo_inverse_stores_correlated_patterns(correlated_patterns):
	engine = HopfieldEngine(8)
	engine.train(correlated_patterns, TrainingRule.PSEUDO_INVERSE)
	for pattern in correlated_patterns:
		assert stat.is_fixed_point(engine, pattern)

def test_is_fixed_point_rejects_noisy_state(orthogonal_patterns):
	engine = HopfieldEngine(8)
	engine.train(orthogonal_patterns, TrainingRule.HEBBIAN)
	noisy = list(orthogonal_patterns[0])
	noisy[0] = -1.
	assert not stat.is_fixed_point(engine, noisy)

def test_untrained_network_fixes_everything():
	# Zero activation keeps the current value.
	assert stat.is_fixed_point(HopfieldEngine(3), [1., -1., 1.])
