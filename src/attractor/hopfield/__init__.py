"""
Tools to train and run Hopfield associative memories.

Hopfield networks work on states with {-1,+1} entries.
Provides an engine which stores patterns with Hebbian or pseudo-inverse learning and time-evolves states with
stochastic synchronous or asynchronous updates at inverse temperature beta.
Provides helpers for generating and corrupting patterns, statistics over trajectories, and a gymnasium environment.
"""

from .errors import *
from .engine import *
from .patterns import *
from .sim import *
from . import stat
