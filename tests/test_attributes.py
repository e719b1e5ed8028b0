"""Tests for per-day attribute synthesis."""

import math

import pytest

from conftest import SEEDS
from src.planet_generation.attributes import AttributeSynthesizer, evolution_points
from src.planet_generation.stages import Stage, classify_stage, stage_parameters
from src.utils.config import GENERATOR_SETTINGS, Configuration


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("day", [1, 3, 8, 15, 31, 61, 200])
def test_attribute_bounds(seed, day):
    attrs = AttributeSynthesizer().synthesize(seed, day, classify_stage(day))
    assert attrs.temperature >= 50
    for value in (attrs.atmosphere, attrs.water, attrs.life,
                  attrs.minerals, attrs.energy):
        assert 0.0 <= value <= 1.0


def test_color_from_stage_palette():
    for day in (1, 10, 40, 90):
        stage = classify_stage(day)
        attrs = AttributeSynthesizer().synthesize("Terra-1000", day, stage)
        assert attrs.color in stage_parameters(stage).palette


@pytest.mark.parametrize("stage", [Stage.SEED, Stage.CORE])
def test_dry_stages_have_no_water_or_life(stage, eventful_config):
    attrs = AttributeSynthesizer(eventful_config).synthesize("Terra", 2, stage)
    assert attrs.water == 0.0
    assert attrs.life == 0.0


def test_life_only_in_life_stages(eventful_config):
    synthesizer = AttributeSynthesizer(eventful_config)
    assert synthesizer.synthesize("Terra", 20, Stage.SURFACE).life == 0.0
    assert synthesizer.synthesize("Terra", 40, Stage.LIFE).life > 0.0


def test_gated_water_present_when_roll_always_succeeds(eventful_config):
    attrs = AttributeSynthesizer(eventful_config).synthesize("Terra", 20, Stage.SURFACE)
    assert attrs.water >= stage_parameters(Stage.SURFACE).base_water


@pytest.mark.parametrize("day, stage", [
    (20, Stage.SURFACE), (40, Stage.LIFE), (70, Stage.MATURE),
])
def test_failed_gate_leaves_water_and_life_at_zero(day, stage):
    """A failed water or life roll gives exactly 0 even in late stages."""
    dry = Configuration({"generator_settings": dict(
        GENERATOR_SETTINGS, water_probability=0.0, life_probability=0.0)})
    for seed in SEEDS:
        attrs = AttributeSynthesizer(dry).synthesize(seed, day, stage)
        assert attrs.water == 0.0
        assert attrs.life == 0.0


def test_water_can_vanish_overnight():
    """Water is not monotonic: some day has water and the next has none."""
    synthesizer = AttributeSynthesizer()
    water = {day: synthesizer.synthesize("Terra-1000", day, classify_stage(day)).water
             for day in range(14, 200)}
    drops = [day for day in range(14, 199) if water[day] > 0.0 and water[day + 1] == 0.0]
    assert drops
    day = drops[0]
    assert synthesizer.synthesize("Terra-1000", day + 1, classify_stage(day + 1)).water == 0.0
    assert synthesizer.synthesize("Terra-1000", day, classify_stage(day)).water == water[day]


def test_day_regenerated_alone_matches():
    """Day 5 depends only on (seed, 5), not on earlier days being computed."""
    synthesizer = AttributeSynthesizer()
    alone = synthesizer.synthesize("Terra-1000", 5, Stage.CORE)
    for day in range(1, 5):
        synthesizer.synthesize("Terra-1000", day, classify_stage(day))
    assert synthesizer.synthesize("Terra-1000", 5, Stage.CORE) == alone


def test_evolution_points_values():
    assert evolution_points(1) == 15
    assert evolution_points(60) == 638
    assert evolution_points(100) == math.floor(1000 + 10 * 5)


def test_evolution_points_non_decreasing():
    points = [evolution_points(day) for day in range(1, 400)]
    assert points == sorted(points)
