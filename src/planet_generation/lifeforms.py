"""Lifeform species living on a planet."""

from dataclasses import dataclass
from enum import Enum
from typing import List

from src.utils.config import Configuration, DEFAULT_CONFIGURATION

from .random_stream import SeededRandomStream, create_stream


class LifeformType(str, Enum):
    """Lifeform tiers in ascending order of complexity."""

    MICROORGANISM = "microorganism"
    PLANT = "plant"
    ANIMAL = "animal"
    INTELLIGENT = "intelligent"
    ADVANCED = "advanced"


_TIERS = list(LifeformType)


@dataclass(frozen=True)
class Lifeform:
    id: str
    type: LifeformType
    name: str
    population: int
    complexity: int
    day_appeared: int
    description: str


class LifeformGenerator:
    """Populates the species list of a planet from its life level.

    At most ``min(5, floor(life * 10))`` candidates are considered, each
    accepted independently. The candidate's position picks its tier, so
    the first accepted candidates are always the simplest forms.
    """

    def __init__(self, config: Configuration = DEFAULT_CONFIGURATION):
        self.config = config

    def generate(self, seed: str, day: int, life: float) -> List[Lifeform]:
        """Generate the lifeforms of ``seed`` on ``day``.

        Args:
            seed: Planet seed
            day: Day number, at least 1
            life: The planet's life level on that day, in [0, 1]

        Returns:
            Accepted lifeforms in candidate order
        """
        if life <= 0:
            return []

        rng = create_stream(seed, "lifeforms", day)
        probability = self.config["generator_settings"]["lifeform_probability"]
        candidates = min(self.config["max_lifeforms"], int(life * 10))

        lifeforms = []
        for index in range(candidates):
            if rng.chance(probability):
                lifeforms.append(self._lifeform(day, index, rng))
        return lifeforms

    def _lifeform(self, day: int, index: int,
                  rng: SeededRandomStream) -> Lifeform:
        tier = _TIERS[min(index, len(_TIERS) - 1)]
        return Lifeform(
            id=f"lifeform-{index}",
            type=tier,
            name=rng.choice(self.config.lookup("lifeform_names", tier.value)),
            population=int(rng.next() * 1_000_000) + 1000,
            complexity=min(index + 1, 5),
            day_appeared=max(1, day - int(rng.next() * 20)),
            description=rng.choice(
                self.config.lookup("lifeform_descriptions", tier.value)
            ),
        )
