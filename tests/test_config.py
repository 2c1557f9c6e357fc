import json
import logging

import pytest

from attractor.chip_firing import SelectionStrategy, UpdateMode
from attractor.config import AttractorConfig, load_config
from attractor.hopfield import TrainingRule


def test_defaults():
	cfg = load_config()
	assert isinstance(cfg, AttractorConfig)
	assert cfg.hopfield.beta == 100.
	assert cfg.hopfield.max_iterations == 100
	assert cfg.hopfield.rule == TrainingRule.PSEUDO_INVERSE
	assert not cfg.hopfield.asynchronous
	assert cfg.hopfield.connectivity is None
	assert cfg.chip_firing.update_mode == UpdateMode.SEQUENTIAL
	assert cfg.chip_firing.selection_strategy == SelectionStrategy.FIRST_ACTIVE
	assert cfg.chip_firing.max_steps == 1000

def test_defaults_are_not_shared():
	first, second = load_config(), load_config()
	first.hopfield.beta = 1.
	assert second.hopfield.beta == 100.

def test_overrides_convert_enums():
	cfg = load_config({"hopfield": {"rule": "hebbian", "beta": 2.5},
		"chip_firing": {"update_mode": UpdateMode.PARALLEL, "selection_strategy": "random_active"}})
	assert cfg.hopfield.rule == TrainingRule.HEBBIAN
	assert cfg.hopfield.beta == 2.5
	assert cfg.chip_firing.update_mode == UpdateMode.PARALLEL
	assert cfg.chip_firing.selection_strategy == SelectionStrategy.RANDOM_ACTIVE

def test_enum_names_are_accepted():
	cfg = load_config({"hopfield": {"rule": "HEBBIAN"},
		"chip_firing": {"update_mode": "PARALLEL", "selection_strategy": "first_active"}})
	assert cfg.hopfield.rule == TrainingRule.HEBBIAN
	assert cfg.chip_firing.update_mode == UpdateMode.PARALLEL
	assert cfg.chip_firing.selection_strategy == SelectionStrategy.FIRST_ACTIVE

def test_bad_enum_value():
	with pytest.raises(ValueError):
		load_config({"chip_firing": {"update_mode": "sideways"}})

def test_unknown_keys_are_ignored(caplog):
	with caplog.at_level(logging.WARNING):
		cfg = load_config({"hopfield": {"temperature": 3.}, "plotting": {"dpi": 300}})
	assert not hasattr(cfg.hopfield, "temperature")
	assert "temperature" in caplog.text

def test_config_file(tmp_path):
	path = tmp_path / "experiment.json"
	path.write_text(json.dumps({"hopfield": {"max_iterations": 7, "asynchronous": True},
		"chip_firing": {"max_steps": 12}}))
	cfg = load_config(config_path=path)
	assert cfg.hopfield.max_iterations == 7
	assert cfg.hopfield.asynchronous
	assert cfg.chip_firing.max_steps == 12

def test_overrides_beat_config_file(tmp_path):
	path = tmp_path / "experiment.json"
	path.write_text(json.dumps({"hopfield": {"beta": 3., "connectivity": .5}}))
	cfg = load_config({"hopfield": {"beta": 9.}}, config_path=str(path))
	assert cfg.hopfield.beta == 9.
	assert cfg.hopfield.connectivity == .5

def test_missing_config_file(tmp_path, caplog):
	with caplog.at_level(logging.WARNING):
		cfg = load_config(config_path=tmp_path / "missing.json")
	assert cfg.hopfield.beta == 100.
	assert "does not exist" in caplog.text
