"""
The capability shared by every network in attractor.

Hopfield networks and chip-firing graphs have little in common internally, but both can be trained on a list of
inputs, can be run forward from an input to a trajectory of states, and have a size.
Presentation code which only needs those three things may depend on this class rather than on a concrete engine.
"""
import abc


class NeuralNetwork(abc.ABC):
    """
    Abstract base class for networks that evolve a state in discrete time.

    Deriving classes own whatever matrices describe their structure.
    Randomness is never drawn from a global source; forward() must be handed a numpy Generator.
    """
    @abc.abstractmethod
    def forward(self, input, rng):
        """
        Evolve the network starting from input and return the trajectory of states visited.

        :param input: A starting state appropriate to the network.
        :param rng: A numpy Generator owned by the caller.
        """
        pass

    @abc.abstractmethod
    def train(self, data):
        """
        Fit the network's structure or state to the supplied data.

        :param data: A list of inputs.
        """
        pass

    @abc.abstractmethod
    def size(self):
        """
        The number of units (neurons, vertices) in the network.
        """
        pass
