"""
Configuration for attractor experiments.

An ``AttractorConfig`` groups the tunables of both engines into two sections, ``hopfield`` and ``chip_firing``.
Configuration can be loaded from a dict of overrides, a JSON file, or left at defaults::

    cfg = load_config()
    cfg = load_config({"hopfield": {"beta": 4.0, "rule": "hebbian"}})
    cfg = load_config(config_path="~/experiments/sandpile.json")

Enum-valued fields accept the enum member, its name (``"HEBBIAN"``) or its value (``"hebbian"``).
"""
import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from attractor.chip_firing.engine import SelectionStrategy, UpdateMode
from attractor.hopfield.engine import TrainingRule

logger = logging.getLogger(__name__)


@dataclass
class HopfieldConfig:
    """Parameters for training and running a Hopfield network."""

    beta: float = 100.0
    max_iterations: int = 100
    rule: TrainingRule = TrainingRule.PSEUDO_INVERSE
    # Run sweeps of single-neuron updates rather than synchronous updates.
    asynchronous: bool = False
    # Erdős-Rényi keep-probability applied after training. None keeps every connection.
    connectivity: Optional[float] = None


@dataclass
class ChipFiringConfig:
    """Parameters for running a chip-firing graph."""

    update_mode: UpdateMode = UpdateMode.SEQUENTIAL
    selection_strategy: SelectionStrategy = SelectionStrategy.FIRST_ACTIVE
    max_steps: int = 1000


@dataclass
class AttractorConfig:
    hopfield: HopfieldConfig = field(default_factory=HopfieldConfig)
    chip_firing: ChipFiringConfig = field(default_factory=ChipFiringConfig)


_SECTIONS = ("hopfield", "chip_firing")
_ENUMS = {"rule": TrainingRule, "update_mode": UpdateMode, "selection_strategy": SelectionStrategy}


def _apply_overrides(obj, section, overrides):
    """Apply a dict of overrides to a dataclass instance (in-place)."""
    known = {item.name for item in fields(obj)}
    for key, value in overrides.items():
        if key not in known:
            logger.warning("Ignoring unknown %s option %r", section, key)
            continue
        if key in _ENUMS and not isinstance(value, _ENUMS[key]):
            kind = _ENUMS[key]
            # Member names ("HEBBIAN") and values ("hebbian") are both accepted.
            # Anything else raises ValueError rather than silently keeping the default.
            value = kind[value] if value in kind.__members__ else kind(value)
        setattr(obj, key, value)


def load_config(overrides=None, config_path=None):
    """
    Create an ``AttractorConfig`` with defaults, optionally overridden.

    Override precedence (highest wins): the ``overrides`` dict, then the ``config_path`` JSON file, then defaults.

    :param overrides: Dict keyed by section name whose values are dicts of field->value pairs.
    :param config_path: Path to a JSON file with the same structure as overrides. A missing file is logged and skipped.
    """
    cfg = AttractorConfig()

    if config_path is not None:
        path = Path(config_path).expanduser()
        if path.exists():
            with open(path) as f:
                file_data = json.load(f)
            for section in _SECTIONS:
                if section in file_data:
                    _apply_overrides(getattr(cfg, section), section, file_data[section])
        else:
            logger.warning("Config file %s does not exist; using defaults", path)

    if overrides is not None:
        for section in _SECTIONS:
            if section in overrides:
                _apply_overrides(getattr(cfg, section), section, overrides[section])

    return cfg
