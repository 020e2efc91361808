"""Tests for configuration files."""

import json

import pytest

from galaxy_cloud.params import InvalidParameter, ParameterSet
from galaxy_cloud.utils.config import Config, load_config, save_config
from galaxy_cloud.utils.reproducibility import make_rng


def test_json_round_trip(tmp_path):
    config = Config(params=ParameterSet(count=700, spin=0.5), seed=12, workers=2)
    path = tmp_path / "config.json"

    save_config(config, str(path))
    loaded = load_config(str(path))

    assert loaded.params == config.params
    assert loaded.seed == 12
    assert loaded.workers == 2


def test_yaml_round_trip(tmp_path):
    pytest.importorskip("yaml")
    config = Config(params=ParameterSet(branches=5, color_outside="#00ff00"))
    path = tmp_path / "config.yaml"

    save_config(config, str(path))
    loaded = load_config(str(path))

    assert loaded.params == config.params


def test_original_keys_accepted(tmp_path):
    path = tmp_path / "legacy.json"
    path.write_text(json.dumps({"params": {"count": 5000, "randomnessPower": 2, "colorIn": "#ffffff"}}))

    config = load_config(str(path))

    assert config.params.count == 5000
    assert config.params.randomness_power == 2
    assert config.params.color_inside == (1.0, 1.0, 1.0)


def test_unknown_keys_rejected(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"particles": 10}))

    with pytest.raises(InvalidParameter):
        load_config(str(path))


def test_make_rng_is_seeded():
    assert make_rng(3).random() == make_rng(3).random()
    assert make_rng(3).random() != make_rng(4).random()
