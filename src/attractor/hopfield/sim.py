import logging

import gymnasium as gym
import gymnasium.spaces
import numpy as np

from .patterns import random_state

logger = logging.getLogger(__name__)


class HopfieldSimulator(gym.Env):
    """
    Expose a trained HopfieldEngine as an environment that advances one synchronous update per step.

    The engine is not copied; retraining it changes the dynamics of the simulator.
    Randomness comes from the environment's own np_random generator, which reset(seed=...) re-seeds.
    """
    metadata = {}

    def __init__(self, engine, beta=1.):
        """
        :param engine: A HopfieldEngine, usually already trained.
        :param beta: Inverse temperature used when step() is not given one.
        """
        self.engine = engine
        self.beta = beta
        self.state = None
        n = engine.size()
        self.observation_space = gym.spaces.Box(low=-1, high=1, shape=(n,), dtype=np.float64)
        # The action is the inverse temperature of the next update.
        self.action_space = gym.spaces.Box(low=0, high=np.inf, shape=(1,), dtype=np.float64)

    def reset(self, *, seed=None, options=None):
        """
        Reset the environment to a start state---either random or provided via options={"state": ...}.

        :param seed: Optional seed for the environment's random number generator.
        :param options: Optional dict. If it has a "state" key, simulation begins from that bipolar state.
        """
        super().reset(seed=seed)
        start = (options or {}).get("state")
        if start is not None:
            self.state = self.engine.validate_state(start)
        else:
            self.state = random_state(self.engine.size(), self.np_random)
        self.energy = self.engine.energy(self.state)
        return self.state, {"energy": self.energy}

    def step(self, action=None):
        """
        Apply one synchronous update at the requested inverse temperature.
        The reward is the negated energy of the new state, so lower energy is better.

        :param action: The beta for this update. If None, the simulator's default beta is used.
        """
        assert self.state is not None, "Must call reset() before step()."
        beta = self.beta if action is None else float(np.asarray(action).reshape(-1)[0])
        old_energy = self.energy
        self.state = self.engine.update_step(self.state, beta, self.np_random)
        self.energy = self.engine.energy(self.state)
        logger.debug("Hopfield step at beta=%s moved energy %s -> %s", beta, old_energy, self.energy)
        return self.state, -self.energy, False, False, {"energy": self.energy, "delta_e": self.energy - old_energy}
