"""Tests for settings loading."""

import json

import pytest

from spend_sight.core.config import DEFAULT_CONFIG, load_config, week_start_index


def test_defaults_without_file():
    config = load_config()
    assert config == DEFAULT_CONFIG
    assert config["categories"] is not DEFAULT_CONFIG["categories"]


def test_missing_file(tmp_path):
    config = load_config(tmp_path / "nope.json")
    assert config["daily_window"] == 30
    assert config["default_category"] == "Other"


def test_file_overrides(tmp_path):
    path = tmp_path / "spend_sight.json"
    path.write_text(json.dumps({"daily_window": 14, "week_start": "Monday"}))
    config = load_config(path)
    assert config["daily_window"] == 14
    assert config["weekly_window"] == 12
    assert week_start_index(config) == 0


def test_env_overrides_db(monkeypatch, tmp_path):
    monkeypatch.setenv("SPEND_SIGHT_DB", "/data/receipts.sqlite")
    assert load_config()["db_path"] == "/data/receipts.sqlite"


def test_sunday_default():
    assert week_start_index(load_config()) == 6


@pytest.mark.parametrize("override", [
    {"default_category": "Travel"},
    {"daily_window": -1},
    {"week_start": "someday"},
])
def test_invalid_settings(tmp_path, override):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(override))
    with pytest.raises(ValueError):
        load_config(path)
