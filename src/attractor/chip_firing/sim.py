import gymnasium as gym
import gymnasium.spaces
import numpy as np

from . import stat


class ChipFiringSimulator(gym.Env):
    """
    Expose a ChipFiringEngine as an environment where each action drops one chip and lets the graph relax.

    The reward is the number of individual firings in the resulting avalanche.
    Episodes never terminate on their own; truncated is set when an avalanche is cut off by max_steps.
    """
    metadata = {}

    def __init__(self, engine, max_steps=1000):
        """
        :param engine: A ChipFiringEngine. Its configuration at construction becomes the default start state.
        :param max_steps: Upper bound on the length of each avalanche.
        """
        self.engine = engine
        self.max_steps = max_steps
        self.start = engine.configuration.clone()
        n = engine.size()
        self.action_space = gym.spaces.Discrete(n)
        self.observation_space = gym.spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(n,), dtype=np.int64)

    def reset(self, *, seed=None, options=None):
        """
        Reset the environment to a start state---either the engine's initial configuration or one provided
        via options={"configuration": ...}.
        """
        super().reset(seed=seed)
        start = (options or {}).get("configuration")
        self.engine.set_configuration(self.start if start is None else start)
        return self.engine.configuration.clone(), {"total_chips": self.engine.total_chips()}

    def step(self, action):
        """
        Drop a chip on the vertex named by action and relax the graph.

        :param action: A vertex index.
        """
        result = stat.avalanche(self.engine, int(action), self.max_steps, self.np_random)
        info = {"avalanche": result, "total_chips": self.engine.total_chips()}
        return self.engine.configuration.clone(), result.firings, False, not result.stable, info
