import numpy as np
import pytest
import torch
from numpy.random import default_rng

import attractor.utils


def test_torchize_copies():
	tensor = torch.tensor([1, 2, 3])
	result = attractor.utils.torchize(tensor)
	result[0] = 9.
	assert tensor.tolist() == [1, 2, 3]
	assert result.dtype == torch.float64

def test_torchize_sources():
	assert attractor.utils.torchize(np.array([[1, 0], [0, 1]])).shape == (2, 2)
	assert attractor.utils.torchize((1, -1), dtype=torch.int64).tolist() == [1, -1]
	with pytest.raises(NotImplementedError):
		attractor.utils.torchize("1, -1")

def test_shape_checks():
	vector, matrix = torch.zeros(3), torch.zeros(3, 3)
	assert attractor.utils.is_vector(vector) and not attractor.utils.is_vector(matrix)
	assert attractor.utils.is_matrix(matrix) and not attractor.utils.is_matrix(vector)
	assert attractor.utils.is_square(matrix)
	assert not attractor.utils.is_square(torch.zeros(2, 3))

def test_is_symmetric():
	assert attractor.utils.is_symmetric(torch.tensor([[0., 2.], [2., 0.]]))
	assert not attractor.utils.is_symmetric(torch.tensor([[0., 2.], [1., 0.]]))

def test_all_bipolar():
	assert attractor.utils.all_bipolar(torch.tensor([1., -1., -1.]))
	assert not attractor.utils.all_bipolar(torch.tensor([1., 0., -1.]))

def test_is_perfect_square():
	assert [n for n in range(30) if attractor.utils.is_perfect_square(n)] == [0, 1, 4, 9, 16, 25]

def test_random_choice():
	items = [3, 5, 7]
	picks = {attractor.utils.random_choice(items, default_rng(seed)) for seed in range(50)}
	assert picks == {3, 5, 7}
	with pytest.raises(AssertionError):
		attractor.utils.random_choice([], default_rng(0))

def test_try_inverse():
	matrix = torch.tensor([[2., 0.], [0., 4.]], dtype=torch.float64)
	assert attractor.utils.try_inverse(matrix).tolist() == [[.5, 0.], [0., .25]]
	assert attractor.utils.try_inverse(torch.ones(2, 2, dtype=torch.float64)) is None
