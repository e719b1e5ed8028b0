"""Day-by-day physical attributes of a planet.

Every random term of a day is drawn from the day's own stream,
``"<seed>-<day>"``, so day 5 regenerated on its own equals day 5 produced
while replaying days 1-5.

Water and life are gated by a probability roll each day. When the roll
fails the value is exactly 0 for that day, so neither is monotonic in
the day number.
"""

import math
from dataclasses import dataclass

from src.utils.config import Configuration, DEFAULT_CONFIGURATION

from .random_stream import SeededRandomStream, create_stream
from .stages import Stage, StageParameters, stage_parameters

_LIFE_STAGES = (Stage.LIFE, Stage.MATURE)
_DRY_STAGES = (Stage.SEED, Stage.CORE)


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(high, max(low, value))


@dataclass(frozen=True)
class DayAttributes:
    """Scalar attributes of one planet on one day."""

    color: str
    temperature: float
    atmosphere: float
    water: float
    life: float
    minerals: float
    energy: float


class AttributeSynthesizer:
    """Derives temperature, atmosphere, water, life and resources per day."""

    def __init__(self, config: Configuration = DEFAULT_CONFIGURATION):
        self.config = config
        self.settings = config["generator_settings"]

    def synthesize(self, seed: str, day: int, stage: Stage) -> DayAttributes:
        """Compute the attributes of ``seed`` on ``day``.

        Args:
            seed: Planet seed
            day: Day number, at least 1
            stage: Stage of the planet on that day

        Returns:
            DayAttributes for the day
        """
        params = stage_parameters(stage, self.config)
        rng = create_stream(seed, day)

        color = rng.choice(params.palette)
        temperature = self.temperature(day, rng)
        atmosphere = self.atmosphere(day, params, rng)
        water = self.water(day, params, rng)
        life = self.life(day, params, rng)
        minerals = self.minerals(day, rng)
        energy = self.energy(day, temperature, rng)

        return DayAttributes(
            color=color,
            temperature=temperature,
            atmosphere=atmosphere,
            water=water,
            life=life,
            minerals=minerals,
            energy=energy,
        )

    def temperature(self, day: int, rng: SeededRandomStream) -> float:
        """Slow sinusoidal drift around the base temperature plus noise."""
        drift = (math.sin(day * self.settings["temperature_period_factor"])
                 * self.settings["temperature_amplitude"])
        variation = self.settings["temperature_variation"]
        noise = (rng.next() - 0.5) * variation
        return max(self.settings["min_temperature"],
                   self.settings["base_temperature"] + drift + noise)

    def atmosphere(self, day: int, params: StageParameters,
                   rng: SeededRandomStream) -> float:
        day_effect = min(day * 0.01, 0.5)
        return _clamp(params.base_atmosphere + day_effect + rng.next() * 0.2)

    def water(self, day: int, params: StageParameters,
              rng: SeededRandomStream) -> float:
        if params.stage in _DRY_STAGES:
            return 0.0
        if not rng.chance(self.settings["water_probability"]):
            return 0.0
        day_effect = min(day * 0.005, 0.3)
        return _clamp(params.base_water + day_effect + rng.next() * 0.3)

    def life(self, day: int, params: StageParameters,
             rng: SeededRandomStream) -> float:
        if params.stage not in _LIFE_STAGES:
            return 0.0
        if not rng.chance(self.settings["life_probability"]):
            return 0.0
        day_effect = min((day - 30) * 0.01, 0.5)
        return _clamp(params.base_life + day_effect + rng.next() * 0.2)

    def minerals(self, day: int, rng: SeededRandomStream) -> float:
        return min(1.0, day * 0.01 + rng.next() * 0.3)

    def energy(self, day: int, temperature: float,
               rng: SeededRandomStream) -> float:
        heat = max(0.0, (temperature - 200.0) / 200.0)
        return min(1.0, heat + day * 0.005 + rng.next() * 0.2)


def evolution_points(day: int) -> int:
    """``floor(day*10 + sqrt(day)*5)``; non-decreasing in ``day``."""
    return int(math.floor(day * 10 + math.sqrt(day) * 5))
