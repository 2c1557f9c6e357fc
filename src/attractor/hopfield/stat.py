import torch

import attractor.utils


def energy_trajectory(engine, history):
    """
    Energy of every state in a trajectory, as returned by HopfieldEngine.run() or run_async().
    """
    return [engine.energy(state) for state in history]

def pattern_overlaps(history, patterns):
    """
    Compute the overlap m = ξ·S / N between every visited state and every stored pattern.

    Returns a (len(history), len(patterns)) tensor.
    An overlap of +1 means the state is the pattern, -1 means it is the pattern's mirror image.
    """
    states = torch.stack([attractor.utils.torchize(state) for state in history])
    xi = torch.stack([attractor.utils.torchize(pattern) for pattern in patterns])
    return (states @ xi.t()) / states.shape[1]

def retrieved_pattern(state, patterns, threshold=1.):
    """
    Determine which stored pattern, if any, a state has converged to.

    Returns the index of the first pattern whose overlap magnitude with state is at least threshold, else None.
    Mirror images count as retrieval, since -ξ is an attractor whenever ξ is.
    """
    if len(patterns) == 0:
        return None
    overlaps = pattern_overlaps([state], patterns)[0].abs()
    for idx, overlap in enumerate(overlaps.tolist()):
        # Tolerate rounding in the division by N.
        if overlap >= threshold - 1e-12:
            return idx
    return None

def is_fixed_point(engine, state):
    """
    Check whether the zero-temperature (sign) update leaves state unchanged.
    Neurons with zero activation keep their current value.
    """
    state = engine.validate_state(state)
    activation = engine.weights @ state
    updated = torch.where(activation > 0, torch.ones_like(state), -torch.ones_like(state))
    updated = torch.where(activation == 0, state, updated)
    return bool(torch.equal(updated, state))
