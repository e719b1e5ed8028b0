"""Tests for storage records and snapshot serialization."""

import json

import pytest

from src.planet_generation.planetary import PlanetGenerator, generate_snapshot
from src.utils.config import STORAGE_VERSION
from src.utils.exceptions import InvalidInputError
from src.utils.serialization import (
    DEFAULT_PLANET_NAME,
    DEFAULT_SETTINGS,
    StorageRecord,
    UserData,
    snapshot_from_dict,
    snapshot_to_dict,
)


@pytest.fixture
def rich_snapshot(eventful_config):
    """A mature snapshot with events, satellites and lifeforms."""
    return PlanetGenerator("Terra-1000", eventful_config).generate(70)


def test_snapshot_round_trip(rich_snapshot):
    assert rich_snapshot.events and rich_snapshot.satellites and rich_snapshot.lifeforms
    assert snapshot_from_dict(snapshot_to_dict(rich_snapshot)) == rich_snapshot


def test_snapshot_round_trip_through_json(rich_snapshot):
    text = json.dumps(snapshot_to_dict(rich_snapshot))
    assert snapshot_from_dict(json.loads(text)) == rich_snapshot


def test_early_snapshot_round_trip():
    snapshot = generate_snapshot("Terra-1000", 2)
    assert snapshot_from_dict(snapshot_to_dict(snapshot)) == snapshot


def test_storage_record_round_trip(rich_snapshot):
    record = StorageRecord(
        user=UserData(seed="Terra-1000", planet_name="Terra", current_day=70,
                      last_visit="2024-05-01T10:00:00", total_visits=12,
                      achievements=["first_moon"]),
        planet=rich_snapshot,
        event_history=list(rich_snapshot.events),
    )
    restored = StorageRecord.from_json(record.to_json(indent=2))
    assert restored == record
    assert restored.version == STORAGE_VERSION


def test_record_without_planet():
    record = StorageRecord(user=UserData(seed="x"))
    data = record.to_dict()
    assert data["planet_data"] is None
    assert StorageRecord.from_dict(data) == record


def test_old_record_is_migrated():
    old = {"user_data": {"seed": "Terra", "settings": {"theme": "dark"}},
           "version": "0.9.0"}
    record = StorageRecord.from_dict(old)
    assert record.version == STORAGE_VERSION
    assert record.user.planet_name == DEFAULT_PLANET_NAME
    assert record.user.current_day == 1
    assert record.user.total_visits == 1
    assert record.user.achievements == []
    assert record.user.settings == {**DEFAULT_SETTINGS, "theme": "dark"}
    assert record.planet is None
    assert record.event_history == []


def test_missing_user_data():
    with pytest.raises(InvalidInputError):
        StorageRecord.from_dict({"version": STORAGE_VERSION})


def test_missing_snapshot_field(rich_snapshot):
    data = snapshot_to_dict(rich_snapshot)
    del data["stage"]
    with pytest.raises(InvalidInputError):
        snapshot_from_dict(data)


def test_invalid_json():
    with pytest.raises(InvalidInputError):
        StorageRecord.from_json("{not json")


@pytest.mark.parametrize("path, value", [
    (("stage",), "gaseous"),
    (("events", 0, "type"), "supernova"),
    (("lifeforms", 0, "type"), "dragon"),
    (("events", 0, "impact"), ["water"]),
])
def test_bad_snapshot_value(rich_snapshot, path, value):
    """Values that do not fit their field raise InvalidInputError."""
    data = snapshot_to_dict(rich_snapshot)
    target = data
    for key in path[:-1]:
        target = target[key]
    target[path[-1]] = value
    with pytest.raises(InvalidInputError):
        snapshot_from_dict(data)


def test_extra_nested_key(rich_snapshot):
    data = snapshot_to_dict(rich_snapshot)
    data["satellites"][0]["gravity"] = 9.8
    with pytest.raises(InvalidInputError):
        snapshot_from_dict(data)
    data = snapshot_to_dict(rich_snapshot)
    data["lifeforms"][0]["habitat"] = "ocean"
    with pytest.raises(InvalidInputError):
        snapshot_from_dict(data)
