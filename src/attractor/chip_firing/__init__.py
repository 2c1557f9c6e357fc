"""
Tools to work and operate on chip-firing graphs, also known as sandpiles.

Chip-firing graphs place a non-negative number of chips on every vertex of a (multi-)graph.
A vertex holding at least as many chips as its degree is active, and may fire, sending one chip along every edge.
Provides an engine which fires vertices one at a time or all at once, runs configurations until stable, and triggers
avalanches by dropping single chips.
Provides builders for common graphs, random configurations, avalanche statistics, and a gymnasium environment.
"""

from .errors import *
from .engine import *
from .generate import *
from .sim import *
from . import stat
