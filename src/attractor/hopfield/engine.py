import enum
import logging

import torch

from attractor.network import NeuralNetwork
import attractor.utils
from .errors import DimensionMismatch, InvalidStateValue, SingularMatrix

logger = logging.getLogger(__name__)


class TrainingRule(enum.Enum):
    """
    Learning rules that turn a list of stored patterns into a weight matrix.
    """
    # Sum of outer products of the stored patterns.
    HEBBIAN = "hebbian"
    # Outer products weighted by the inverse of the pattern overlap matrix.
    PSEUDO_INVERSE = "pseudo_inverse"


class HopfieldEngine(NeuralNetwork):
    """
    A discrete-time Hopfield network over bipolar {-1,+1} states.

    Owns an NxN weight matrix W whose diagonal is always 0.
    States are never stored by the engine; they are supplied by the caller, validated, and returned as new tensors
    (except update_step_async, which mutates the state it is given).
    Every stochastic method takes a numpy Generator so that callers control reproducibility.
    """
    def __init__(self, num_neurons):
        """
        :param num_neurons: The number of neurons in the network. Must be greater than 0.
        """
        assert num_neurons > 0, "Number of neurons must be greater than 0."
        self.num_neurons = num_neurons
        self.weights = torch.zeros((num_neurons, num_neurons), dtype=torch.float64)

    def size(self):
        return self.num_neurons

    def validate_state(self, state):
        """
        Check that state is a bipolar vector with one entry per neuron.
        Returns the state as a float64 tensor that does not alias the input.

        :param state: A list, ndarray or tensor.
        """
        try:
            state = attractor.utils.torchize(state)
        except NotImplementedError as err:
            raise DimensionMismatch(f"State must be a vector of {self.num_neurons} entries, got {type(state).__name__}") from err
        if not attractor.utils.is_vector(state) or state.shape[0] != self.num_neurons:
            raise DimensionMismatch(f"State vector has shape {tuple(state.shape)} but expected ({self.num_neurons},)")
        if not attractor.utils.all_bipolar(state):
            bad = state[(state != 1) & (state != -1)][0].item()
            raise InvalidStateValue(f"State contains value {bad} which is not +1.0 or -1.0")
        return state

    def train(self, patterns, rule=TrainingRule.PSEUDO_INVERSE):
        """
        Replace the weight matrix with one that stores patterns.

        Hebbian: W_ij = Σ_p ξ_i^p ξ_j^p for i ≠ j.
        PseudoInverse: W_ij = Σ_{α,β} ξ_i^α (C⁻¹)_{αβ} ξ_j^β for i ≠ j, where C_{αβ} = ξ^α·ξ^β / N.
        W_ii = 0 under both rules. Weights are zeroed before training, so repeated calls do not accumulate.

        :param patterns: A list of bipolar states.
        :param rule: A TrainingRule.
        """
        self.weights = torch.zeros((self.num_neurons, self.num_neurons), dtype=torch.float64)
        if len(patterns) == 0:
            logger.warning("Training with an empty set of patterns; weights left at zero.")
            return

        # Rows of xi are patterns, columns are neurons.
        xi = torch.stack([self.validate_state(pattern) for pattern in patterns])
        logger.info("Training %d patterns on %d neurons using the %s rule.", len(patterns), self.num_neurons, rule.value)

        if rule == TrainingRule.HEBBIAN:
            weights = xi.t() @ xi
        elif rule == TrainingRule.PSEUDO_INVERSE:
            overlap = (xi @ xi.t()) / self.num_neurons
            inverse = attractor.utils.try_inverse(overlap)
            if inverse is None:
                raise SingularMatrix("Covariance matrix is singular, cannot compute pseudo-inverse. "
                    "Try Hebbian rule or different patterns.")
            weights = xi.t() @ inverse @ xi
            # Roundoff in the inverse can leave W a hair away from symmetric.
            if not attractor.utils.is_symmetric(weights):
                weights = (weights + weights.t()) / 2
        else: raise NotImplementedError(f"Unknown training rule {rule}")

        weights.fill_diagonal_(0.)
        self.weights = weights

    def _probability_up(self, activation, beta):
        # P(S=+1) = 1/(1+exp(-2βh)). With infinite beta a zero field would give inf*0=nan, so treat it as a coin flip.
        field = torch.where(activation == 0, torch.zeros_like(activation), 2 * beta * activation)
        return torch.sigmoid(field)

    def update_step(self, state, beta, rng):
        """
        Perform a single synchronous, stochastic update of every neuron.

        S_i(t+1) = +1 with probability 1 / (1 + exp(-2β Σ_j W_ij S_j(t))), otherwise -1.
        Consumes exactly one uniform draw from rng per neuron, in neuron order.

        :param state: The current bipolar state. It is not modified.
        :param beta: Inverse temperature. float('inf') yields the deterministic sign update.
        :param rng: A numpy Generator owned by the caller.
        """
        state = self.validate_state(state)
        activation = self.weights @ state
        prob_up = self._probability_up(activation, beta)
        draws = torch.from_numpy(rng.random(self.num_neurons))
        return torch.where(draws < prob_up, torch.ones_like(state), -torch.ones_like(state))

    def update_step_async(self, state, beta, rng):
        """
        Stochastically update one randomly chosen neuron in place.
        The activation is computed from the current contents of state, including earlier in-place updates.

        Returns the index of the neuron which was updated.

        :param state: A mutable sequence (tensor, ndarray or list) holding the current bipolar state. Modified in place.
        :param beta: Inverse temperature.
        :param rng: A numpy Generator owned by the caller.
        """
        # validate_state returns a detached copy; read from the copy, write back into the caller's state.
        current = self.validate_state(state)
        # RNG excludes hi endpoint.
        k = int(rng.integers(0, self.num_neurons))
        activation = torch.dot(self.weights[k], current)
        prob_up = self._probability_up(activation, beta).item()
        state[k] = 1. if rng.random() < prob_up else -1.
        return k

    def run(self, initial_state, max_iterations, beta, rng):
        """
        Run synchronous dynamics for exactly max_iterations updates.

        Stochastic dynamics do not reach a fixed point in general, so no early stopping is performed.
        Returns (history, max_iterations), where history[0] is the initial state and history has max_iterations+1 entries.

        :param initial_state: A bipolar state.
        :param max_iterations: Number of synchronous updates to perform.
        :param beta: Inverse temperature.
        :param rng: A numpy Generator owned by the caller.
        """
        current = self.validate_state(initial_state)
        history = [current]
        for _ in range(max_iterations):
            current = self.update_step(current, beta, rng)
            history.append(current)
        return history, max_iterations

    def run_async(self, initial_state, max_iterations, beta, rng):
        """
        Run asynchronous dynamics for exactly max_iterations sweeps.
        A sweep is num_neurons single-neuron updates, so every neuron is touched once in expectation.

        Returns (history, max_iterations), with one history entry per sweep plus the initial state.
        """
        current = self.validate_state(initial_state)
        history = [current.clone()]
        for _ in range(max_iterations):
            for _ in range(self.num_neurons):
                self.update_step_async(current, beta, rng)
            history.append(current.clone())
        return history, max_iterations

    def energy(self, state):
        """
        Compute the Lyapunov energy of a state, E = -0.5 Σ_{i≠j} W_ij S_i S_j.

        :param state: A bipolar state.
        """
        state = self.validate_state(state)
        # Exclude the diagonal explicitly rather than relying on W_ii = 0.
        off_diagonal = self.weights - torch.diag(torch.diagonal(self.weights))
        return (-.5 * (state @ off_diagonal @ state)).item()

    def apply_erdos_renyi_topology(self, p, rng):
        """
        Keep each connection (i, j), i < j, with probability p; otherwise zero both W_ij and W_ji.
        Pairs are visited in row-major order of the upper triangle with one uniform draw each.

        :param p: The probability of keeping a connection. Values outside [0, 1] skip pruning.
        :param rng: A numpy Generator owned by the caller.
        """
        if not 0. <= p <= 1.:
            logger.warning("Erdős-Rényi connectivity p must be between 0.0 and 1.0. Got %s. Skipping pruning.", p)
            return
        logger.info("Applying Erdős-Rényi topology with p = %s", p)
        rows, cols = torch.triu_indices(self.num_neurons, self.num_neurons, offset=1)
        draws = torch.from_numpy(rng.random(rows.shape[0]))
        prune = draws > p
        self.weights[rows[prune], cols[prune]] = 0.
        self.weights[cols[prune], rows[prune]] = 0.

    def forward(self, input, rng, beta=100., max_iterations=100):
        """
        Run synchronous dynamics from input at a high (near-deterministic) beta and return the history.
        """
        history, _ = self.run(input, max_iterations, beta, rng)
        return history
