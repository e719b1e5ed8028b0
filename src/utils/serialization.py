"""Persistence records for KosmoKorn.

A ``StorageRecord`` is what the app keeps between visits: the player's
data, the last planet snapshot and the event history. Records convert to
plain dictionaries and JSON; records written by older versions are
migrated by filling in defaults.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.planet_generation.events import EventType, PlanetEvent
from src.planet_generation.lifeforms import Lifeform, LifeformType
from src.planet_generation.planetary import (
    PlanetEvolution,
    PlanetResources,
    PlanetSnapshot,
)
from src.planet_generation.satellites import Satellite
from src.planet_generation.stages import Stage, StageRequirements

from .config import STORAGE_VERSION
from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_PLANET_NAME = "New Planet"

DEFAULT_SETTINGS = {
    "enable_sound": True,
    "enable_animations": True,
    "theme": "space",
    "language": "en",
    "notifications": True,
}


def _require(data: Dict[str, Any], *keys: str) -> None:
    if not isinstance(data, dict):
        raise InvalidInputError(f"Expected a mapping, got {type(data).__name__}")
    missing = [key for key in keys if key not in data]
    if missing:
        raise InvalidInputError(f"Record is missing fields: {', '.join(missing)}")


def event_to_dict(event: PlanetEvent) -> Dict[str, Any]:
    return {
        "id": event.id,
        "type": EventType(event.type).value,
        "title": event.title,
        "description": event.description,
        "day": event.day,
        "impact": dict(event.impact),
        "duration": event.duration,
        "probability": event.probability,
    }


def event_from_dict(data: Dict[str, Any]) -> PlanetEvent:
    _require(data, "id", "type", "title", "description", "day")
    try:
        return PlanetEvent(
            id=data["id"],
            type=EventType(data["type"]),
            title=data["title"],
            description=data["description"],
            day=data["day"],
            impact=data.get("impact", {}),
            duration=data.get("duration", 1),
            probability=data.get("probability", 0.0),
        )
    except (ValueError, TypeError) as e:
        raise InvalidInputError(f"Invalid event record: {e}") from e


def snapshot_to_dict(snapshot: PlanetSnapshot) -> Dict[str, Any]:
    """Convert a snapshot into JSON-ready primitives.

    Args:
        snapshot: The snapshot to convert

    Returns:
        Nested dictionary of strings, numbers, lists and None
    """
    requirements = snapshot.evolution.stage_requirements
    return {
        "seed": snapshot.seed,
        "current_day": snapshot.current_day,
        "stage": snapshot.stage.value,
        "color": snapshot.color,
        "radius": snapshot.radius,
        "temperature": snapshot.temperature,
        "atmosphere": snapshot.atmosphere,
        "water": snapshot.water,
        "life": snapshot.life,
        "satellites": [
            {
                "id": s.id,
                "name": s.name,
                "size": s.size,
                "distance": s.distance,
                "color": s.color,
                "orbit_speed": s.orbit_speed,
                "type": s.type,
            }
            for s in snapshot.satellites
        ],
        "events": [event_to_dict(e) for e in snapshot.events],
        "lifeforms": [
            {
                "id": l.id,
                "type": l.type.value,
                "name": l.name,
                "population": l.population,
                "complexity": l.complexity,
                "day_appeared": l.day_appeared,
                "description": l.description,
            }
            for l in snapshot.lifeforms
        ],
        "resources": {
            "minerals": snapshot.resources.minerals,
            "gases": snapshot.resources.gases,
            "water": snapshot.resources.water,
            "energy": snapshot.resources.energy,
        },
        "evolution": {
            "evolution_points": snapshot.evolution.evolution_points,
            "next_stage_progress": snapshot.evolution.next_stage_progress,
            "stage_requirements": {
                "min_days": requirements.min_days,
                "min_temperature": requirements.min_temperature,
                "max_temperature": requirements.max_temperature,
                "min_atmosphere": requirements.min_atmosphere,
                "min_water": requirements.min_water,
                "min_life": requirements.min_life,
            },
        },
    }


def snapshot_from_dict(data: Dict[str, Any]) -> PlanetSnapshot:
    """Rebuild a snapshot from ``snapshot_to_dict`` output.

    Raises:
        InvalidInputError: If a required field is missing or a value does
            not fit its field
    """
    _require(data, "seed", "current_day", "stage", "color", "radius",
             "temperature", "atmosphere", "water", "life", "resources",
             "evolution")
    resources = data["resources"]
    evolution = data["evolution"]
    _require(resources, "minerals", "gases", "water", "energy")
    _require(evolution, "evolution_points", "next_stage_progress",
             "stage_requirements")

    try:
        events = tuple(event_from_dict(e) for e in data.get("events", []))
        return PlanetSnapshot(
            seed=data["seed"],
            current_day=data["current_day"],
            stage=Stage(data["stage"]),
            color=data["color"],
            radius=data["radius"],
            temperature=data["temperature"],
            atmosphere=data["atmosphere"],
            water=data["water"],
            life=data["life"],
            satellites=tuple(Satellite(**s) for s in data.get("satellites", [])),
            events=events,
            lifeforms=tuple(
                Lifeform(**{**l, "type": LifeformType(l["type"])})
                for l in data.get("lifeforms", [])
            ),
            resources=PlanetResources(**resources),
            evolution=PlanetEvolution(
                evolution_points=evolution["evolution_points"],
                next_stage_progress=evolution["next_stage_progress"],
                stage_requirements=StageRequirements(**evolution["stage_requirements"]),
            ),
        )
    except InvalidInputError:
        raise
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidInputError(f"Invalid snapshot record: {e}") from e


@dataclass
class UserData:
    """What the app remembers about the player."""

    seed: str
    planet_name: str = DEFAULT_PLANET_NAME
    current_day: int = 1
    last_visit: Optional[str] = None  # ISO 8601
    total_visits: int = 1
    achievements: List[str] = field(default_factory=list)
    settings: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_SETTINGS))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "planet_name": self.planet_name,
            "current_day": self.current_day,
            "last_visit": self.last_visit,
            "total_visits": self.total_visits,
            "achievements": list(self.achievements),
            "settings": dict(self.settings),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserData":
        _require(data, "seed")
        return cls(
            seed=data["seed"],
            planet_name=data.get("planet_name") or DEFAULT_PLANET_NAME,
            current_day=data.get("current_day") or 1,
            last_visit=data.get("last_visit"),
            total_visits=data.get("total_visits") or 1,
            achievements=list(data.get("achievements") or []),
            settings={**DEFAULT_SETTINGS, **(data.get("settings") or {})},
        )


@dataclass
class StorageRecord:
    """Everything persisted for one player."""

    user: UserData
    planet: Optional[PlanetSnapshot] = None
    event_history: List[PlanetEvent] = field(default_factory=list)
    version: str = STORAGE_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_data": self.user.to_dict(),
            "planet_data": snapshot_to_dict(self.planet) if self.planet else None,
            "event_history": [event_to_dict(e) for e in self.event_history],
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StorageRecord":
        """Load a record, migrating it when it was written by another version.

        Args:
            data: Output of ``to_dict``, possibly from an older version

        Returns:
            The StorageRecord, always at the current version

        Raises:
            InvalidInputError: If the user data or a nested record lacks
                required fields
        """
        _require(data, "user_data")
        if data.get("version") != STORAGE_VERSION:
            logger.info("Migrating storage record from version %r to %s",
                        data.get("version"), STORAGE_VERSION)

        planet = data.get("planet_data")
        return cls(
            user=UserData.from_dict(data["user_data"]),
            planet=snapshot_from_dict(planet) if planet else None,
            event_history=[event_from_dict(e) for e in data.get("event_history") or []],
            version=STORAGE_VERSION,
        )

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "StorageRecord":
        """Parse a record from JSON.

        Raises:
            InvalidInputError: If ``text`` is not valid JSON or misses fields
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"Storage record is not valid JSON: {e}") from e
        return cls.from_dict(data)
