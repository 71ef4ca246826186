"""Tests for game config defaults, file merge and env overrides."""

import json

import pytest

from stella.config import ConfigError, GameConfig, load_config
from stella.outcomes import OutcomeBand


def test_defaults():
    config = load_config(env={})
    assert config.action_window_seconds == 10.0
    assert config.starting_patience == 100
    assert config.starting_mood == 50
    assert config.timeout_tier == "terrible"
    assert "pet" in config.actions
    assert len(config.bands) == 7


def test_missing_file_uses_defaults(tmp_path):
    config = load_config(tmp_path / "nope.json", env={})
    assert config == GameConfig()


def test_file_overrides_scalars(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"action_window_seconds": 6, "title": "Stella Hard Mode"}))
    config = load_config(path, env={})
    assert config.action_window_seconds == 6.0
    assert config.title == "Stella Hard Mode"
    # untouched fields keep defaults
    assert config.starting_mood == 50


def test_file_replaces_bands_wholesale(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"bands": [
        {"tier": "terrible", "upper": 0.5, "patience_delta": -50, "mood_delta": -50},
        {"tier": "excellent", "upper": 1.0, "patience_delta": 50, "mood_delta": 50},
    ]}))
    config = load_config(path, env={})
    assert [b.tier for b in config.bands] == ["terrible", "excellent"]


def test_env_overrides_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"action_window_seconds": 6}))
    config = load_config(path, env={"STELLA_ACTION_WINDOW": "4.5", "STELLA_TICK_INTERVAL": "0.1"})
    assert config.action_window_seconds == 4.5
    assert config.tick_interval_seconds == 0.1


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError):
        load_config(path, env={})


def test_non_object_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_config(path, env={})


def test_bad_window_raises():
    with pytest.raises(ConfigError):
        load_config(env={"STELLA_ACTION_WINDOW": "-3"})


def test_gapped_bands_raise(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"bands": [
        {"tier": "terrible", "upper": 0.5, "patience_delta": -50, "mood_delta": -50},
    ]}))
    with pytest.raises(ConfigError):
        load_config(path, env={})


def test_timeout_tier_must_exist():
    with pytest.raises(ValueError):
        GameConfig(
            bands=[OutcomeBand(tier="good", upper=1.0, patience_delta=1, mood_delta=1)],
            timeout_tier="terrible",
        )


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)
