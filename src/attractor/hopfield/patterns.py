import math

import torch

import attractor.utils
from .errors import DimensionMismatch, NotPerfectSquare


def random_state(num_neurons, rng):
    """
    Create a random bipolar state of a given size.

    :param num_neurons: The length of the output state.
    :param rng: A numpy Generator owned by the caller.
    Providing a seeded one allows you to get deterministic results out of this function.
    """
    # RNG excludes hi endpoint.
    # Rescale {0, 1} to {-1, +1} with some clever math.
    return torch.tensor(rng.integers(0, 2, num_neurons), dtype=torch.float64) * 2 - 1

def apply_noise(state, noise_level, rng):
    """
    Corrupt a bipolar state by flipping each entry independently with probability noise_level.
    Returns a new tensor; state is not modified.

    :param state: A bipolar state.
    :param noise_level: Probability, in [0, 1], that any given entry is flipped.
    :param rng: A numpy Generator owned by the caller. One draw is consumed per entry.
    """
    state = attractor.utils.torchize(state)
    draws = torch.from_numpy(rng.random(state.shape[0]))
    return torch.where(draws < noise_level, -state, state)

def overlap_matrix(patterns):
    """
    Compute C[p][q] = ξ_p·ξ_q / N between every pair of patterns.
    The diagonal is 1 for bipolar patterns; off-diagonal entries near ±1 mean the patterns will interfere.

    Returns None if there are no patterns.

    :param patterns: A list of equal-length bipolar states.
    """
    if len(patterns) == 0:
        return None
    xi = torch.stack([attractor.utils.torchize(pattern) for pattern in patterns])
    return (xi @ xi.t()) / xi.shape[1]

def overlap_histogram(overlaps, num_bins=10):
    """
    Bin the magnitudes of the off-diagonal overlaps into num_bins equal-width bins over [0, 1].
    An overlap of exactly 1 lands in the last bin.

    Returns (bin_centers, counts), both lists of length num_bins.
    Both lists are empty when there are fewer than two patterns.

    :param overlaps: A square overlap matrix, as from overlap_matrix().
    :param num_bins: Number of histogram bins.
    """
    if overlaps is None or overlaps.shape[0] < 2:
        return [], []
    # Only the strict upper triangle; the matrix is symmetric and its diagonal is trivially 1.
    rows, cols = torch.triu_indices(overlaps.shape[0], overlaps.shape[0], offset=1)
    magnitudes = overlaps[rows, cols].abs()
    bin_width = 1. / num_bins
    counts = [0] * num_bins
    for magnitude in magnitudes.tolist():
        counts[min(int(math.floor(magnitude / bin_width)), num_bins - 1)] += 1
    centers = [(idx + .5) * bin_width for idx in range(num_bins)]
    return centers, counts

def to_ascii(state, on="#", off="."):
    """
    Render a bipolar state as a square grid of characters, one row per line.

    :param state: A bipolar state whose length is a perfect square.
    :param on: Character used for +1 entries.
    :param off: Character used for -1 entries.
    """
    state = attractor.utils.torchize(state)
    if not attractor.utils.is_vector(state):
        raise DimensionMismatch(f"State vector has shape {tuple(state.shape)}, expected a vector")
    n = state.shape[0]
    if not attractor.utils.is_perfect_square(n):
        raise NotPerfectSquare(f"Cannot display {n} neurons as a square grid")
    side = math.isqrt(n)
    rows = state.view(side, side).tolist()
    return "\n".join("".join(on if value == 1 else off for value in row) for row in rows)
