"""Cosmic event history of a planet.

For every day ``d`` from 1 to the target day a stream keyed
``"<seed>-events-<d>"`` is rolled once against the probability of the
day's band. A successful roll produces one event from further draws of
the same stream. A day's outcome depends only on ``(seed, d)``, so the
history up to day N is always a prefix of the history up to any later
day and days can be generated in any order or in parallel.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple, Union

from src.utils.config import Configuration, DEFAULT_CONFIGURATION

from .random_stream import SeededRandomStream, create_stream
from .stages import validate_day

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Kinds of cosmic events, in draw order."""

    COMET = "comet"
    SOLAR_FLARE = "solar_flare"
    TECTONIC = "tectonic"
    VOLCANIC = "volcanic"
    METEOR = "meteor"
    ASTEROID = "asteroid"
    AURORA = "aurora"


@dataclass(frozen=True)
class PlanetEvent:
    """A cosmic event that happened on a given day.

    ``impact`` pairs attribute names (temperature, atmosphere, water, life,
    radius) with signed deltas; only the attributes the event type touches
    are present. A mapping may be passed in; it is stored as a tuple of
    pairs so the event stays immutable and hashable. ``probability`` is
    the roll that triggered the event and is informational only.
    """

    id: str
    type: EventType
    title: str
    description: str
    day: int
    impact: Union[Tuple[Tuple[str, float], ...], Mapping[str, float]] = ()
    duration: int = 1
    probability: float = 0.0

    def __post_init__(self):
        pairs = self.impact.items() if isinstance(self.impact, Mapping) else self.impact
        object.__setattr__(self, "impact", tuple((str(name), float(delta))
                                                 for name, delta in pairs))


def event_id(day: int, event_type: EventType) -> str:
    return f"event-{day}-{EventType(event_type).value}"


def _impact(event_type: EventType, rng: SeededRandomStream) -> Dict[str, float]:
    if event_type is EventType.COMET:
        return {"water": (rng.next() - 0.5) * 0.2,
                "life": (rng.next() - 0.5) * 0.1}
    if event_type is EventType.SOLAR_FLARE:
        return {"temperature": (rng.next() - 0.3) * 100,
                "atmosphere": (rng.next() - 0.7) * 0.1}
    if event_type is EventType.TECTONIC:
        return {"radius": rng.next() * 0.05}
    if event_type is EventType.VOLCANIC:
        return {"temperature": rng.next() * 50,
                "atmosphere": rng.next() * 0.1}
    if event_type is EventType.METEOR:
        return {"radius": (rng.next() - 0.5) * 0.02}
    if event_type is EventType.ASTEROID:
        return {"radius": rng.next() * 0.01}
    # Aurora: a small boost to life.
    return {"life": rng.next() * 0.05}


class EventHistoryGenerator:
    """Replays the per-day event rolls of a planet."""

    def __init__(self, config: Configuration = DEFAULT_CONFIGURATION):
        self.config = config
        self.probabilities = config["event_probabilities"]
        self.band_limits = config["event_band_limits"]

    def band(self, day: int) -> str:
        """Name of the probability band ``day`` falls in."""
        if day <= self.band_limits["early"]:
            return "early"
        if day <= self.band_limits["middle"]:
            return "middle"
        return "late"

    def probability(self, day: int) -> float:
        return self.config.lookup("event_probabilities", self.band(day))

    def event_for_day(self, seed: str, day: int) -> Optional[PlanetEvent]:
        """The event of ``day``, or None when that day was quiet.

        Args:
            seed: Planet seed
            day: Day number, at least 1

        Returns:
            The day's PlanetEvent, or None
        """
        validate_day(day)
        rng = create_stream(seed, "events", day)
        roll = rng.next()
        if roll >= self.probability(day):
            return None
        return self._synthesize(day, roll, rng)

    def history(self, seed: str, day: int) -> List[PlanetEvent]:
        """All events from day 1 up to and including ``day``, ascending."""
        validate_day(day)
        events = []
        for current in range(1, day + 1):
            event = self.event_for_day(seed, current)
            if event is not None:
                events.append(event)
        logger.debug("Seed %r: %d events in %d days", seed, len(events), day)
        return events

    def _synthesize(self, day: int, roll: float,
                    rng: SeededRandomStream) -> PlanetEvent:
        event_type = rng.choice(list(EventType))
        title = rng.choice(self.config.lookup("event_names", event_type.value))
        description = rng.choice(
            self.config.lookup("event_descriptions", event_type.value)
        )
        impact = _impact(event_type, rng)
        duration = rng.index(self.config["event_max_duration"]) + 1

        return PlanetEvent(
            id=event_id(day, event_type),
            type=event_type,
            title=title,
            description=description,
            day=day,
            impact=impact,
            duration=duration,
            probability=roll,
        )
