"""Tests for stage classification and the stage tables."""

import pytest

from src.planet_generation.stages import (
    Stage,
    classify_stage,
    next_stage,
    stage_parameters,
    stage_progress,
    stage_requirements,
    validate_day,
)
from src.utils.config import Configuration
from src.utils.exceptions import ConfigurationError, InvalidInputError


@pytest.mark.parametrize("day, stage", [
    (1, Stage.SEED),
    (2, Stage.SEED),
    (3, Stage.CORE),
    (6, Stage.CORE),
    (7, Stage.ATMOSPHERE),
    (13, Stage.ATMOSPHERE),
    (14, Stage.SURFACE),
    (29, Stage.SURFACE),
    (30, Stage.LIFE),
    (59, Stage.LIFE),
    (60, Stage.MATURE),
    (1000, Stage.MATURE),
])
def test_classify_stage(day, stage):
    assert classify_stage(day) is stage


def test_stage_never_regresses():
    ranks = [classify_stage(day).rank for day in range(1, 120)]
    assert ranks == sorted(ranks)


@pytest.mark.parametrize("day", [0, -1, 1.5, "3", True, None])
def test_invalid_days_rejected(day):
    with pytest.raises(InvalidInputError):
        validate_day(day)


def test_invalid_day_is_value_error():
    with pytest.raises(ValueError):
        classify_stage(0)


def test_next_stage():
    assert next_stage(Stage.SEED) is Stage.CORE
    assert next_stage(Stage.LIFE) is Stage.MATURE
    assert next_stage(Stage.MATURE) is None


def test_stage_progress():
    assert stage_progress(1, Stage.SEED) == pytest.approx(1 / 3)
    assert stage_progress(20, Stage.SURFACE) == pytest.approx(20 / 30)
    assert stage_progress(45, Stage.LIFE) == pytest.approx(45 / 60)
    assert stage_progress(500, Stage.MATURE) == 1.0


def test_min_days_increase():
    days = [stage_requirements(stage).min_days for stage in Stage]
    assert days == [1, 3, 7, 14, 30, 60]


def test_stage_parameters_record():
    params = stage_parameters(Stage.MATURE)
    assert params.stage is Stage.MATURE
    assert params.requirements.min_days == 60
    assert params.relative_size == 1.0
    assert params.palette[0] == params.base_color
    assert len(params.palette) == 4


def test_missing_stage_entry_is_configuration_error():
    config = Configuration({"stage_requirements": {"seed": {"min_days": 1}}})
    with pytest.raises(ConfigurationError):
        classify_stage(5, config)
