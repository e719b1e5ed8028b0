"""Evolution stages of a planet.

A planet moves through six ordered stages purely as a function of the day
number. All stage-dependent behaviour (attribute bases, colors, 2D size,
3D terrain modulation) reads the one ``StageParameters`` record per stage.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from src.utils.config import Configuration, DEFAULT_CONFIGURATION
from src.utils.exceptions import InvalidInputError


class Stage(str, Enum):
    """Evolution stage, ordered from least to most advanced."""

    SEED = "seed"
    CORE = "core"
    ATMOSPHERE = "atmosphere"
    SURFACE = "surface"
    LIFE = "life"
    MATURE = "mature"

    @property
    def rank(self) -> int:
        return _STAGES.index(self)


_STAGES = list(Stage)


@dataclass(frozen=True)
class StageRequirements:
    """Requirements to reach a stage. Only ``min_days`` gates progression;
    the climate bounds are informational targets shown to the player."""

    min_days: int
    min_temperature: Optional[float] = None
    max_temperature: Optional[float] = None
    min_atmosphere: Optional[float] = None
    min_water: Optional[float] = None
    min_life: Optional[float] = None


@dataclass(frozen=True)
class StageParameters:
    """Everything that varies by stage, in one record."""

    stage: Stage
    requirements: StageRequirements
    relative_size: float
    base_atmosphere: float
    base_water: float
    base_life: float
    base_color: str
    color_variations: Tuple[str, ...]
    terrain_size_multiplier: float
    terrain_detail: int
    tree_multiplier: float
    rock_multiplier: float
    noise_intensity: float

    @property
    def palette(self) -> Tuple[str, ...]:
        """Base color followed by its variations."""
        return (self.base_color,) + self.color_variations


def validate_day(day: int) -> int:
    """Reject anything that is not an integer day number of at least 1.

    Raises:
        InvalidInputError: If ``day`` is not an integer or is below 1
    """
    if isinstance(day, bool) or not isinstance(day, int):
        raise InvalidInputError(f"Day must be an integer, got {day!r}")
    if day < 1:
        raise InvalidInputError(f"Day must be at least 1, got {day}")
    return day


def stage_requirements(stage: Stage,
                       config: Configuration = DEFAULT_CONFIGURATION) -> StageRequirements:
    """Look up the requirements of ``stage``."""
    raw = config.lookup("stage_requirements", Stage(stage).value)
    return StageRequirements(**raw)


def stage_parameters(stage: Stage,
                     config: Configuration = DEFAULT_CONFIGURATION) -> StageParameters:
    """Look up the full parameter record of ``stage``.

    Raises:
        ConfigurationError: If the stage tables lack an entry for ``stage``
    """
    stage = Stage(stage)
    raw = dict(config.lookup("stage_parameters", stage.value))
    raw["color_variations"] = tuple(raw["color_variations"])
    return StageParameters(stage=stage,
                           requirements=stage_requirements(stage, config),
                           **raw)


def classify_stage(day: int, config: Configuration = DEFAULT_CONFIGURATION) -> Stage:
    """Map a day number to the most advanced stage it qualifies for.

    Stages are tried from ``mature`` down to ``seed``; the first whose
    ``min_days`` is at most ``day`` wins.

    Args:
        day: Day number, at least 1

    Returns:
        The planet's stage on that day
    """
    validate_day(day)
    for stage in reversed(_STAGES):
        if day >= stage_requirements(stage, config).min_days:
            return stage
    return Stage.SEED


def next_stage(stage: Stage) -> Optional[Stage]:
    """The stage after ``stage``, or None for ``mature``."""
    index = Stage(stage).rank
    if index + 1 < len(_STAGES):
        return _STAGES[index + 1]
    return None


def stage_progress(day: int, stage: Stage,
                   config: Configuration = DEFAULT_CONFIGURATION) -> float:
    """Progress towards the next stage as ``min(1, day / next.min_days)``.

    A mature planet has nowhere left to go and reports 1.0.
    """
    following = next_stage(stage)
    if following is None:
        return 1.0
    return min(1.0, day / stage_requirements(following, config).min_days)
