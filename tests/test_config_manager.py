"""Persistent user settings."""
import json

import pytest

from config import DEFAULT_COUNTER_WIDTH, DEFAULT_FALSE_POSITIVE_RATE, DEFAULT_TOP_K
from core.utilities.config_manager import ConfigManager, config_manager


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.json"


def test_defaults_without_file(config_path):
    manager = ConfigManager(config_path)
    assert manager.get_top_k() == DEFAULT_TOP_K
    assert manager.get_false_positive_rate() == DEFAULT_FALSE_POSITIVE_RATE
    assert manager.get_counter_width() == DEFAULT_COUNTER_WIDTH
    assert manager.get_minimize_width() is False
    assert manager.get_log_level() == "WARNING"


def test_explicit_path_does_not_replace_singleton(config_path):
    assert ConfigManager(config_path) is not config_manager
    assert ConfigManager() is config_manager


def test_settings_persist(config_path):
    manager = ConfigManager(config_path)
    manager.set_top_k(7)
    manager.set_false_positive_rate(0.05)
    manager.set_counter_width(6)
    manager.set_minimize_width(1)
    manager.set_log_level("debug")

    reloaded = ConfigManager(config_path)
    assert reloaded.get_top_k() == 7
    assert reloaded.get_false_positive_rate() == 0.05
    assert reloaded.get_counter_width() == 6
    assert reloaded.get_minimize_width() is True
    assert reloaded.get_log_level() == "DEBUG"


def test_top_k_is_clamped(config_path):
    manager = ConfigManager(config_path)
    manager.set_top_k(0)
    assert manager.get_top_k() == 1
    manager.set_top_k(1_000_000)
    assert manager.get_top_k() == 10_000


@pytest.mark.parametrize("setter, value", [
    ("set_false_positive_rate", 0),
    ("set_false_positive_rate", 1),
    ("set_counter_width", 0),
    ("set_counter_width", 33),
    ("set_log_level", "verbose"),
])
def test_invalid_values_rejected(config_path, setter, value):
    manager = ConfigManager(config_path)
    with pytest.raises(ValueError):
        getattr(manager, setter)(value)
    assert not config_path.exists()


def test_missing_keys_filled_from_defaults(config_path):
    config_path.write_text(json.dumps({"top_k": 3}))
    manager = ConfigManager(config_path)
    assert manager.get_top_k() == 3
    assert manager.get_counter_width() == DEFAULT_COUNTER_WIDTH


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_unreadable_file_falls_back_to_defaults(config_path, content):
    config_path.write_text(content)
    assert ConfigManager(config_path).settings == ConfigManager.DEFAULT_SETTINGS


@pytest.mark.parametrize("key, value", [
    ("top_k", "5"),
    ("top_k", 0),
    ("top_k", True),
    ("false_positive_rate", 1.5),
    ("false_positive_rate", "0.1"),
    ("counter_width", 64),
    ("minimize_width", "yes"),
    ("log_level", "chatty"),
])
def test_invalid_file_values_fall_back_to_defaults(config_path, key, value):
    settings = {"top_k": 9}
    settings[key] = value
    config_path.write_text(json.dumps(settings))
    manager = ConfigManager(config_path)

    assert manager.get(key) == ConfigManager.DEFAULT_SETTINGS[key]
    if key != "top_k":
        assert manager.get_top_k() == 9


def test_valid_file_values_are_kept(config_path):
    settings = {"top_k": 40, "false_positive_rate": 0.2, "counter_width": 8,
                "minimize_width": True, "log_level": "info"}
    config_path.write_text(json.dumps(settings))
    manager = ConfigManager(config_path)

    assert manager.settings == settings
    assert manager.get_log_level() == "INFO"
