"""Tests for planet snapshots."""

import math

import pytest

from conftest import SEEDS
from src.planet_generation.planetary import (
    PlanetGenerator,
    generate_snapshot,
    habitability_score,
    planet_stats,
    validate_planet_name,
    validate_seed,
)
from src.planet_generation.stages import Stage
from src.utils.exceptions import InvalidInputError


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("day", [1, 9, 33, 75])
def test_snapshot_deterministic(seed, day):
    assert generate_snapshot(seed, day) == generate_snapshot(seed, day)


@pytest.mark.parametrize("seed", SEEDS)
def test_event_history_prefix(seed):
    early = generate_snapshot(seed, 20)
    late = generate_snapshot(seed, 90)
    assert tuple(e for e in late.events if e.day <= 20) == early.events


@pytest.mark.parametrize("seed", SEEDS)
def test_snapshot_bounds(seed):
    for snapshot in PlanetGenerator(seed).history(70):
        assert snapshot.temperature >= 50
        assert 0.0 <= snapshot.atmosphere <= 1.0
        assert 0.0 <= snapshot.water <= 1.0
        assert 0.0 <= snapshot.life <= 1.0
        assert snapshot.radius > 0
        assert 0.0 <= snapshot.evolution.next_stage_progress <= 1.0
        assert all(e.day <= snapshot.current_day for e in snapshot.events)
        assert all(l.day_appeared <= snapshot.current_day for l in snapshot.lifeforms)
        assert len(snapshot.satellites) <= 3


def test_stage_and_points_monotonic():
    history = PlanetGenerator("Terra-1000").history(80)
    ranks = [s.stage.rank for s in history]
    points = [s.evolution.evolution_points for s in history]
    assert ranks == sorted(ranks)
    assert points == sorted(points)


def test_terra_day_one():
    """Day 1 of Terra-1000 reproduces the recorded run."""
    snapshot = generate_snapshot("Terra-1000", 1)
    assert snapshot.stage is Stage.SEED
    assert snapshot.color == "#9CA3AF"
    assert snapshot.temperature == 180.4133066503528
    assert snapshot.water == 0.0
    assert snapshot.life == 0.0
    assert snapshot.events == ()
    assert snapshot.evolution.stage_requirements.min_days == 3


def test_terra_day_sixty():
    snapshot = generate_snapshot("Terra-1000", 60)
    assert snapshot.stage is Stage.MATURE
    assert snapshot.evolution.evolution_points == math.floor(60 * 10 + math.sqrt(60) * 5) == 638
    assert snapshot.evolution.next_stage_progress == 1.0
    assert snapshot.evolution.stage_requirements.min_days == 60


def test_resources_mirror_attributes():
    snapshot = generate_snapshot("Kepler-22b", 40)
    assert snapshot.resources.gases == snapshot.atmosphere
    assert snapshot.resources.water == snapshot.water
    assert 0.0 <= snapshot.resources.minerals <= 1.0
    assert 0.0 <= snapshot.resources.energy <= 1.0


def test_radius_seed_constant_within_stage():
    """Radius only changes when the stage does."""
    generator = PlanetGenerator("Terra-1000")
    assert generator.generate(31).radius == generator.generate(45).radius
    assert generator.generate(1).radius < generator.generate(60).radius


def test_history_matches_single_days():
    generator = PlanetGenerator("Terra-1000")
    history = generator.history(6)
    assert len(history) == 6
    assert history[-1] == generator.generate(6)
    assert [s.current_day for s in history] == list(range(1, 7))


@pytest.mark.parametrize("day", [0, -3, 2.0])
def test_invalid_day(day):
    with pytest.raises(InvalidInputError):
        generate_snapshot("Terra", day)


def test_invalid_seed():
    with pytest.raises(InvalidInputError):
        validate_seed(1000)
    assert validate_seed("") == ""


@pytest.mark.parametrize("name, valid", [
    ("Terra Nova", True),
    ("Kepler-22b", True),
    ("Земля", True),
    ("my_planet", True),
    ("", False),
    ("   ", False),
    ("A", False),
    ("X" * 21, False),
    ("Terra!", False),
])
def test_validate_planet_name(name, valid):
    ok, message = validate_planet_name(name)
    assert ok is valid
    assert (message is None) is valid


def test_planet_stats_empty():
    stats = planet_stats(None)
    assert stats["total_events"] == 0
    assert stats["habitability_score"] == 0


def test_planet_stats(eventful_config):
    snapshot = PlanetGenerator("Terra", eventful_config).generate(40)
    stats = planet_stats(snapshot)
    assert stats["total_events"] == 40
    assert stats["total_satellites"] == 3
    assert stats["total_lifeforms"] == len(snapshot.lifeforms) > 0
    assert stats["evolution_level"] == snapshot.evolution.evolution_points
    assert stats["average_temperature"] == snapshot.temperature
    assert 0 <= stats["habitability_score"] <= 100


def test_habitability_range():
    for day in (1, 30, 90):
        assert 0 <= habitability_score(generate_snapshot("Gaia", day)) <= 100


def test_terra_day_seven_water():
    """Recorded water level of Terra-1000 on day 7."""
    assert generate_snapshot("Terra-1000", 7).water == 0.34811830051024506
