"""Biomes, climate arcs and the day-by-day look of the 3D planet.

A planet's biome and climate arc are fixed by its seed. Its stage and the
day number then scale size, mesh detail, noise and vegetation on top of
the biome's own multipliers.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from src.utils.config import Configuration, DEFAULT_CONFIGURATION
from src.utils.exceptions import InvalidInputError

from .random_stream import create_stream
from .stages import Stage, stage_parameters, validate_day
from .terrain import NoiseConfig, TerrainParams

# Stages drawn with the stage palette in 2D; later stages use the biome's.
_EARLY_STAGES = (Stage.SEED, Stage.CORE, Stage.ATMOSPHERE)


@dataclass(frozen=True)
class BiomePreset:
    """A named color and noise preset for the planet surface."""

    name: str
    ground_color: str
    water_color: str
    tree_palette: Tuple[str, ...]
    rock_color: str
    noise_frequency_multiplier: float
    noise_displacement_multiplier: float
    water_threshold_delta: float
    max_trees_multiplier: float
    max_rocks_multiplier: float
    palette_2d: Dict[str, str]


def biome_count(config: Configuration = DEFAULT_CONFIGURATION) -> int:
    return len(config["biomes"])


def biome_preset(index: int, config: Configuration = DEFAULT_CONFIGURATION) -> BiomePreset:
    """The preset at ``index``.

    Raises:
        ConfigurationError: If the biome table has no such entry
    """
    raw = dict(config.lookup("biomes", index))
    raw["tree_palette"] = tuple(raw["tree_palette"])
    raw["palette_2d"] = dict(raw["palette_2d"])
    return BiomePreset(**raw)


class BiomeSelector:
    """Picks the biome of a seed.

    The index is the first draw of the seed's ``"world"`` stream and so is
    the same for every day and every caller, 2D or 3D.
    """

    def __init__(self, config: Configuration = DEFAULT_CONFIGURATION):
        self.config = config

    def index(self, seed: str, override: Optional[int] = None) -> int:
        """Biome index of ``seed``, or ``override`` when one is given.

        Raises:
            InvalidInputError: If ``override`` is outside the biome table
        """
        count = biome_count(self.config)
        if override is not None:
            if isinstance(override, bool) or not isinstance(override, int) \
                    or not 0 <= override < count:
                raise InvalidInputError(
                    f"Biome index must be an integer in 0..{count - 1}, got {override!r}")
            return override
        return create_stream(seed, "world").index(count)

    def select(self, seed: str, override: Optional[int] = None) -> BiomePreset:
        return biome_preset(self.index(seed, override), self.config)


def biome_palette_2d(stage: Stage, biome_index: int,
                     config: Configuration = DEFAULT_CONFIGURATION) -> Dict[str, str]:
    """Primary, secondary and accent colors for the 2D planet."""
    stage = Stage(stage)
    if stage in _EARLY_STAGES:
        return dict(config.lookup("stage_palettes_2d", stage.value))
    return biome_preset(biome_index, config).palette_2d


@dataclass(frozen=True)
class ClimateArc:
    """The long-term water trend of a planet.

    Attributes:
        name: One of desert, terraform, oscillate, glacier, stable, tectonic
        amplitude: Size of the water threshold shift
        phase: Phase of the oscillate arc, in radians
        tectonic_intensity: Coastline roughening of the tectonic arc
    """

    name: str
    amplitude: float
    phase: float
    tectonic_intensity: float

    @classmethod
    def for_seed(cls, seed: str,
                 config: Configuration = DEFAULT_CONFIGURATION) -> "ClimateArc":
        rng = create_stream(seed, "climate")
        return cls(
            name=rng.choice(config["climate_arcs"]),
            amplitude=0.18 + 0.15 * rng.next(),
            phase=rng.next() * math.pi * 2,
            tectonic_intensity=0.6 + 0.8 * rng.next(),
        )

    def water_threshold(self, base: float, day: int, progress: float) -> float:
        """Shift the biome's base water threshold for ``day``."""
        if self.name == "desert":
            return base - self.amplitude * progress
        if self.name == "terraform":
            return base + self.amplitude * progress
        if self.name == "oscillate":
            swing = math.sin((day + self.phase) * 0.25)
            return base + self.amplitude * swing * (0.3 + 0.7 * progress)
        if self.name == "glacier":
            return base + 0.12 * progress
        if self.name == "tectonic":
            return base - 0.05 * progress
        return base

    def frequency_factor(self, progress: float) -> float:
        if self.name == "tectonic":
            return 1 + progress * self.tectonic_intensity
        return 1.0


@dataclass(frozen=True)
class PlanetAppearance:
    """Everything the 3D view needs besides the mutations."""

    seed: str
    day: int
    stage: Stage
    biome_index: int
    biome: BiomePreset
    climate_arc: ClimateArc
    progress: float
    radius: float
    detail: int
    noise: NoiseConfig
    time_offset: float
    max_trees: int
    max_rocks: int

    def terrain_params(self, mutations=()) -> TerrainParams:
        return TerrainParams(
            radius=self.radius,
            detail=self.detail,
            ground_color=self.biome.ground_color,
            water_color=self.biome.water_color,
            noise=self.noise,
            time_offset=self.time_offset,
            mutations=tuple(mutations),
        )


def planet_appearance(seed: str, day: int, stage: Stage,
                      config: Configuration = DEFAULT_CONFIGURATION,
                      biome_index: Optional[int] = None) -> PlanetAppearance:
    """Work out the 3D look of planet ``seed`` on ``day``.

    Args:
        seed: Planet seed
        day: Day number, at least 1
        stage: Stage of the planet on that day
        config: Generator configuration
        biome_index: Explicit biome, overriding the seed's own

    Returns:
        The PlanetAppearance for that day
    """
    validate_day(day)
    params = stage_parameters(stage, config)
    index = BiomeSelector(config).index(seed, biome_index)
    biome = biome_preset(index, config)
    arc = ClimateArc.for_seed(seed, config)
    defaults = config["default_noise_config"]

    progress = max(0.0, min(1.0, day / config["terrain_progress_days"]))
    radius = float(round(config["terrain_base_radius"] * params.terrain_size_multiplier))
    detail = max(config["terrain_min_detail"], params.terrain_detail)

    displacement = (defaults["displacement_scale"] * biome.noise_displacement_multiplier
                    * params.noise_intensity * (0.7 + 0.5 * progress))
    frequency = (defaults["frequency"] * biome.noise_frequency_multiplier
                 * arc.frequency_factor(progress))

    base_threshold = max(0.0, min(1.0, defaults["water_threshold"]
                                  + biome.water_threshold_delta))
    threshold = arc.water_threshold(base_threshold, day, progress)

    rng = create_stream(seed, "terrain", day)
    time_offset = rng.next() * 1000
    if rng.chance(config["water_pulse_chance"]):
        threshold += (rng.next() - 0.5) * 0.25
    low, high = config["water_threshold_limits"]
    threshold = max(low, min(high, threshold))

    growth = 0.5 + 0.5 * progress
    max_trees = round(config["default_max_trees"] * biome.max_trees_multiplier
                      * params.tree_multiplier * growth)
    max_rocks = round(config["default_max_rocks"] * biome.max_rocks_multiplier
                      * params.rock_multiplier * growth)

    return PlanetAppearance(
        seed=seed,
        day=day,
        stage=Stage(stage),
        biome_index=index,
        biome=biome,
        climate_arc=arc,
        progress=progress,
        radius=radius,
        detail=detail,
        noise=NoiseConfig(
            frequency=frequency,
            displacement_scale=displacement,
            water_threshold=threshold,
            water_floor_noise_value=defaults["water_floor_noise_value"],
        ),
        time_offset=time_offset,
        max_trees=max_trees,
        max_rocks=max_rocks,
    )
