"""
Small discrete dynamical systems: Hopfield associative memories and chip-firing graphs.

attractor works on two kinds of system.
Hopfield networks evolve {-1,+1} states under a trained weight matrix towards low energy, stored patterns.
Chip-firing graphs move chips between vertices of a graph until no vertex can fire.

Both engines share the NeuralNetwork capability, take their randomness from a caller-supplied numpy Generator,
and record trajectories that callers may inspect after every step.
"""
from .network import NeuralNetwork
