import math

import numpy as np
import torch


def torchize(maybe_tensor, dtype=torch.float64):
	"""
	Massage something that looks like a tensor, ndarray or (nested) list into a tensor of the requested dtype.
	Returns a fresh tensor, so callers may mutate the result without aliasing the input.

	:param maybe_tensor: An array-like object.
	:param dtype: The torch dtype of the returned tensor.
	"""
	# Sometimes an object is a torch tensor that just needs a copy and a cast.
	if torch.is_tensor(maybe_tensor): return maybe_tensor.detach().clone().to(dtype)
	# Sometimes it is an ndarray
	elif isinstance(maybe_tensor, np.ndarray): return torch.tensor(maybe_tensor, dtype=dtype)
	# Plain python sequences, possibly nested one level for matricies.
	elif isinstance(maybe_tensor, (list, tuple)): return torch.tensor(maybe_tensor, dtype=dtype)
	else: raise NotImplementedError(f"Don't understand the datatype of {type(maybe_tensor)}")

def is_vector(tensor):
	"""
	Check if the tensor is 1D.

	:param tensor: A torch.Tensor of unknown shape.
	"""
	return len(tensor.shape) == 1

def is_matrix(tensor):
	"""
	Check if the tensor is 2D.
	If so, it is a matrix.

	:param tensor: A torch.Tensor of unknown shape.
	"""
	return len(tensor.shape) == 2

def is_square(tensor):
	"""
	If we have a tensor of matricies, the last two dims correspond to m x n of the matrix.
	For the tensor to be square, m==n.

	:param tensor: A torch.Tensor of unknown shape.
	"""
	return tensor.shape[-1] == tensor.shape[-2]

def is_symmetric(tensor):
	"""
	Return if all matricies in the tensor are symmetric about their diagonal.
	"""
	return bool(torch.equal(tensor, tensor.transpose(-1, -2)))

def all_bipolar(tensor):
	"""
	Check that a tensor contains only the values -1 or +1, a requirement for Hopfield states.
	"""
	# Perform elementwise equality to +1 or -1, then and together all elements.
	return bool(torch.all(torch.eq(tensor, 1) | torch.eq(tensor, -1)).item())

def is_perfect_square(n):
	"""
	Determine if a non-negative integer is the square of another integer.
	"""
	side = math.isqrt(n)
	return side * side == n

def random_choice(items, rng):
	"""
	Pick one element of a non-empty sequence uniformly at random.

	:param items: A non-empty, indexable sequence.
	:param rng: A numpy Generator owned by the caller.
	"""
	assert len(items) > 0
	# RNG excludes hi endpoint.
	return items[int(rng.integers(0, len(items)))]

def try_inverse(matrix):
	"""
	Invert a square matrix, returning None instead of raising if the matrix is singular.
	A matrix that is rank deficient up to roundoff counts as singular, even though LU may still "invert" it.

	:param matrix: A square, floating-point torch.Tensor.
	"""
	if torch.linalg.matrix_rank(matrix) < matrix.shape[-1]: return None
	try:
		return torch.linalg.inv(matrix)
	except torch.linalg.LinAlgError:
		return None
