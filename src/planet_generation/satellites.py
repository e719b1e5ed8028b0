"""Moons, rings and debris orbiting a planet."""

from dataclasses import dataclass
from typing import List

from src.utils.config import Configuration, DEFAULT_CONFIGURATION

from .random_stream import SeededRandomStream, create_stream

SATELLITE_TYPES = ("moon", "ring", "debris")


@dataclass(frozen=True)
class Satellite:
    id: str
    name: str
    size: float
    distance: float
    color: str
    orbit_speed: float
    type: str


class SatelliteGenerator:
    """Fills up to three satellite slots for a planet on a given day.

    Slot ``i`` is available once ``day > i * 10`` and is then filled with
    a fixed probability. Each slot draws from its own stream keyed by seed,
    day and slot, so whether slot 0 is filled never changes slot 2.
    """

    def __init__(self, config: Configuration = DEFAULT_CONFIGURATION):
        self.config = config

    def generate(self, seed: str, day: int) -> List[Satellite]:
        probability = self.config["generator_settings"]["satellite_probability"]
        spacing = self.config["satellite_slot_day_spacing"]

        satellites = []
        for slot in range(self.config["satellite_slots"]):
            rng = create_stream(seed, "satellites", day, slot)
            if rng.chance(probability) and day > slot * spacing:
                satellites.append(self._satellite(slot, rng))
        return satellites

    def _satellite(self, slot: int, rng: SeededRandomStream) -> Satellite:
        names = self.config["satellite_names"]
        name_pool = names[slot] if slot < len(names) else names[0]
        return Satellite(
            id=f"satellite-{slot}",
            name=rng.choice(name_pool),
            size=0.1 + rng.next() * 0.3,
            distance=2 + slot * 1.5 + rng.next() * 0.5,
            color=rng.choice(self.config["satellite_colors"]),
            orbit_speed=1 + rng.next() * 2,
            type=self._satellite_type(rng),
        )

    def _satellite_type(self, rng: SeededRandomStream) -> str:
        roll = rng.next()
        cumulative = 0.0
        for kind in SATELLITE_TYPES:
            cumulative += self.config.lookup("satellite_type_weights", kind)
            if roll < cumulative:
                return kind
        # Rounding in the weights can leave a sliver above the last bound.
        return SATELLITE_TYPES[-1]
