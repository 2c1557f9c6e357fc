"""
Fixtures shared by the Hopfield and chip-firing tests.
Every fixture that needs randomness draws from a seeded numpy Generator so that failures are reproducible.
"""
import pytest
from numpy.random import default_rng

import attractor.chip_firing
import attractor.hopfield


@pytest.fixture()
def rng():
    return default_rng(2021)

# Two orthogonal patterns on 8 neurons. Under either training rule each is a strong attractor.
@pytest.fixture()
def orthogonal_patterns():
    return [[1., 1., 1., 1., 1., 1., 1., 1.],
            [1., -1., 1., -1., 1., -1., 1., -1.]]

# Two patterns on 8 neurons with overlap 0.5, where the training rules disagree.
@pytest.fixture()
def correlated_patterns():
    return [[1., 1., 1., 1., 1., 1., 1., 1.],
            [1., 1., 1., 1., 1., 1., -1., -1.]]

@pytest.fixture(params=[attractor.hopfield.TrainingRule.HEBBIAN, attractor.hopfield.TrainingRule.PSEUDO_INVERSE])
def TrainingRule(request):
    return request.param

# The 4 vertex path 0-1-2-3, with two chips on vertex 1. It stabilizes after two firings.
@pytest.fixture()
def PathGraph():
    return attractor.chip_firing.ChipFiringEngine.from_edge_list([(0, 1), (1, 2), (2, 3)], 4, [0, 2, 0, 0])

@pytest.fixture(params=[
    lambda: attractor.chip_firing.ChipFiringEngine.new_grid(3, 3),
    lambda: attractor.chip_firing.ChipFiringEngine.new_cycle(6),
    lambda: attractor.chip_firing.ChipFiringEngine.new_complete(5),
    lambda: attractor.chip_firing.ChipFiringEngine.new_star(5)],
    ids=["grid", "cycle", "complete", "star"])
def AnyGraph(request):
    return request.param()

@pytest.fixture(params=[attractor.chip_firing.UpdateMode.SEQUENTIAL, attractor.chip_firing.UpdateMode.PARALLEL])
def UpdateMode(request):
    return request.param
