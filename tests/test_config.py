"""Tests for configuration defaults and overrides."""

import pytest

from src.planet_generation.events import EventHistoryGenerator
from src.planet_generation.planetary import generate_snapshot
from src.utils.config import DEFAULT_CONFIGURATION, EVENT_PROBABILITIES, Configuration
from src.utils.exceptions import ConfigurationError, InvalidInputError


def test_defaults_available():
    assert dict(DEFAULT_CONFIGURATION["event_probabilities"]) == EVENT_PROBABILITIES
    assert "biomes" in DEFAULT_CONFIGURATION
    assert len(DEFAULT_CONFIGURATION["biomes"]) == 6


def test_override_replaces_value():
    config = Configuration({"event_max_duration": 5})
    assert config["event_max_duration"] == 5
    assert DEFAULT_CONFIGURATION["event_max_duration"] == 3


def test_override_does_not_leak():
    overrides = {"event_probabilities": {"early": 1.0, "middle": 1.0, "late": 1.0}}
    config = Configuration(overrides)
    overrides["event_probabilities"]["early"] = 0.0
    assert config["event_probabilities"]["early"] == 1.0
    assert EVENT_PROBABILITIES["early"] == 0.1


def test_unknown_override_key():
    with pytest.raises(ConfigurationError):
        Configuration({"warp_speed": 9})


def test_missing_table_entry():
    with pytest.raises(ConfigurationError):
        DEFAULT_CONFIGURATION.lookup("event_names", "supernova")
    with pytest.raises(ConfigurationError):
        DEFAULT_CONFIGURATION.lookup("biomes", 6)


def test_missing_band_probability():
    config = Configuration({"event_probabilities": {"early": 0.5}})
    with pytest.raises(ConfigurationError):
        EventHistoryGenerator(config).history("Terra", 10)


def test_error_hierarchy():
    assert issubclass(ConfigurationError, LookupError)
    assert issubclass(InvalidInputError, ValueError)


def test_tables_are_frozen():
    """Writing to a returned table fails and later snapshots are unchanged."""
    before = generate_snapshot("Terra-1000", 7)
    with pytest.raises(TypeError):
        DEFAULT_CONFIGURATION["generator_settings"]["water_probability"] = 0.0
    with pytest.raises(TypeError):
        DEFAULT_CONFIGURATION.lookup("biomes", 0)["name"] = "Swamp"
    with pytest.raises(TypeError):
        DEFAULT_CONFIGURATION["climate_arcs"][0] = "frozen"
    with pytest.raises(TypeError):
        DEFAULT_CONFIGURATION.lookup("biomes", 0)["tree_palette"][0] = "#000000"
    assert DEFAULT_CONFIGURATION["generator_settings"]["water_probability"] == 0.3
    assert generate_snapshot("Terra-1000", 7) == before
    assert before.water == 0.34811830051024506
