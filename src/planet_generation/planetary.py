"""Planet snapshots for KosmoKorn.

This module composes stage classification, attribute synthesis, event
history, satellites and lifeforms into one immutable ``PlanetSnapshot``
for a ``(seed, day)`` pair. Snapshots are regenerated, never mutated:
asking for the same pair twice yields equal snapshots, and asking for a
later day never changes what earlier days produced.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from src.utils.config import Configuration, DEFAULT_CONFIGURATION
from src.utils.exceptions import InvalidInputError

from .attributes import AttributeSynthesizer, evolution_points
from .events import EventHistoryGenerator, PlanetEvent
from .lifeforms import Lifeform, LifeformGenerator
from .random_stream import create_stream
from .satellites import Satellite, SatelliteGenerator
from .stages import (
    Stage,
    StageRequirements,
    classify_stage,
    next_stage,
    stage_parameters,
    stage_progress,
    stage_requirements,
    validate_day,
)

logger = logging.getLogger(__name__)

IDEAL_TEMPERATURE = 288.0  # ~15°C
RADIUS_VARIATION = 0.2
MIN_RADIUS = 0.1

_PLANET_NAME_PATTERN = re.compile(r"^[\w\s-]+$")


@dataclass(frozen=True)
class PlanetResources:
    minerals: float
    gases: float
    water: float
    energy: float


@dataclass(frozen=True)
class PlanetEvolution:
    evolution_points: int
    next_stage_progress: float
    stage_requirements: StageRequirements


@dataclass(frozen=True)
class PlanetSnapshot:
    """The complete state of a planet on one day."""

    seed: str
    current_day: int
    stage: Stage
    color: str
    radius: float
    temperature: float
    atmosphere: float
    water: float
    life: float
    satellites: Tuple[Satellite, ...]
    events: Tuple[PlanetEvent, ...]
    lifeforms: Tuple[Lifeform, ...]
    resources: PlanetResources
    evolution: PlanetEvolution


def validate_seed(seed: str) -> str:
    """Accept any string, including the empty one.

    Raises:
        InvalidInputError: If ``seed`` is not a string
    """
    if not isinstance(seed, str):
        raise InvalidInputError(f"Seed must be a string, got {type(seed).__name__}")
    return seed


def validate_planet_name(name: str) -> Tuple[bool, Optional[str]]:
    """Check a player-chosen planet name.

    Names must not be blank, must be 2-20 characters long and may only
    contain letters, digits, spaces, underscores and hyphens.

    Args:
        name: Name typed by the player

    Returns:
        Tuple of (is_valid, error message or None)
    """
    if not name.strip():
        return False, "Planet name cannot be empty"
    if len(name) < 2:
        return False, "Planet name must be at least 2 characters long"
    if len(name) > 20:
        return False, "Planet name must not exceed 20 characters"
    if not _PLANET_NAME_PATTERN.match(name):
        return False, "Name may only contain letters, digits, spaces and hyphens"
    return True, None


class PlanetGenerator:
    """Generates deterministic snapshots of one planet.

    Each facet of the snapshot reads its own sub-stream of the seed, so
    the generator holds no random state between calls and is safe to
    share between threads.
    """

    def __init__(self, seed: str, config: Configuration = DEFAULT_CONFIGURATION):
        """Initialize the PlanetGenerator.

        Args:
            seed: String identifying the planet's whole timeline
            config: Generator configuration; defaults when omitted
        """
        self.seed = validate_seed(seed)
        self.config = config
        self.attributes = AttributeSynthesizer(config)
        self.event_history = EventHistoryGenerator(config)
        self.satellite_generator = SatelliteGenerator(config)
        self.lifeform_generator = LifeformGenerator(config)

    def radius(self, stage: Stage) -> float:
        """Relative planet size for ``stage`` with a seed-constant variation."""
        factor = 1 + (create_stream(self.seed, "radius").next() - 0.5) * RADIUS_VARIATION
        return max(MIN_RADIUS, stage_parameters(stage, self.config).relative_size * factor)

    def generate(self, day: int) -> PlanetSnapshot:
        """Generate the snapshot of the planet on ``day``.

        Args:
            day: Day number, at least 1

        Returns:
            The PlanetSnapshot for that day

        Raises:
            InvalidInputError: If ``day`` is not an integer of at least 1
        """
        validate_day(day)

        stage = classify_stage(day, self.config)
        attrs = self.attributes.synthesize(self.seed, day, stage)
        following = next_stage(stage)

        snapshot = PlanetSnapshot(
            seed=self.seed,
            current_day=day,
            stage=stage,
            color=attrs.color,
            radius=self.radius(stage),
            temperature=attrs.temperature,
            atmosphere=attrs.atmosphere,
            water=attrs.water,
            life=attrs.life,
            satellites=tuple(self.satellite_generator.generate(self.seed, day)),
            events=tuple(self.event_history.history(self.seed, day)),
            lifeforms=tuple(self.lifeform_generator.generate(self.seed, day, attrs.life)),
            resources=PlanetResources(
                minerals=attrs.minerals,
                gases=attrs.atmosphere,
                water=attrs.water,
                energy=attrs.energy,
            ),
            evolution=PlanetEvolution(
                evolution_points=evolution_points(day),
                next_stage_progress=stage_progress(day, stage, self.config),
                stage_requirements=stage_requirements(following or stage, self.config),
            ),
        )
        logger.debug(
            "Generated %r day %d: stage=%s, %d events, %d satellites, %d lifeforms",
            self.seed, day, stage.value, len(snapshot.events),
            len(snapshot.satellites), len(snapshot.lifeforms),
        )
        return snapshot

    def history(self, day: int) -> List[PlanetSnapshot]:
        """Snapshots for every day from 1 to ``day``."""
        validate_day(day)
        return [self.generate(current) for current in range(1, day + 1)]


def generate_snapshot(seed: str, day: int,
                      config: Configuration = DEFAULT_CONFIGURATION) -> PlanetSnapshot:
    """Generate the snapshot of planet ``seed`` on ``day``."""
    return PlanetGenerator(seed, config).generate(day)


def habitability_score(snapshot: PlanetSnapshot) -> int:
    """Score from 0 to 100 of how friendly the planet is to life.

    Temperature counts for 30%, atmosphere and water 25% each and life 20%.
    """
    temperature_score = max(0.0, 1 - abs(snapshot.temperature - IDEAL_TEMPERATURE) / 100)
    total = (temperature_score * 0.3
             + min(1.0, snapshot.atmosphere) * 0.25
             + min(1.0, snapshot.water) * 0.25
             + min(1.0, snapshot.life) * 0.2)
    return int(round(total * 100))


def planet_stats(snapshot: Optional[PlanetSnapshot]) -> Dict[str, float]:
    """Summary figures shown next to the planet."""
    if snapshot is None:
        return {
            "total_events": 0,
            "total_lifeforms": 0,
            "total_satellites": 0,
            "evolution_level": 0,
            "average_temperature": 0.0,
            "habitability_score": 0,
        }
    return {
        "total_events": len(snapshot.events),
        "total_lifeforms": len(snapshot.lifeforms),
        "total_satellites": len(snapshot.satellites),
        "evolution_level": snapshot.evolution.evolution_points,
        "average_temperature": snapshot.temperature,
        "habitability_score": habitability_score(snapshot),
    }
