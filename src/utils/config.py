"""Default configuration for KosmoKorn planet generation.

This module holds the internal constants of the generator: probabilities,
stage tables, name pools, biome presets and terrain defaults. The
``Configuration`` class wraps them and accepts a dictionary of overrides,
so a specific planet setup never requires editing this file.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .exceptions import ConfigurationError


# --- Generator probabilities and base values ---
GENERATOR_SETTINGS = {
    "base_temperature": 273.0,  # Kelvin
    "temperature_variation": 200.0,
    "temperature_amplitude": 50.0,
    "temperature_period_factor": 0.1,
    "min_temperature": 50.0,
    "water_probability": 0.3,
    "life_probability": 0.1,
    "satellite_probability": 0.25,
    "lifeform_probability": 0.6,
}

STAGE_REQUIREMENTS = {
    "seed": {"min_days": 1},
    "core": {"min_days": 3, "min_temperature": 200.0},
    "atmosphere": {"min_days": 7, "min_temperature": 250.0,
                   "min_atmosphere": 0.2},
    "surface": {"min_days": 14, "min_temperature": 200.0,
                "max_temperature": 400.0, "min_atmosphere": 0.4,
                "min_water": 0.1},
    "life": {"min_days": 30, "min_temperature": 250.0,
             "max_temperature": 350.0, "min_atmosphere": 0.6,
             "min_water": 0.3, "min_life": 0.1},
    "mature": {"min_days": 60, "min_temperature": 280.0,
               "max_temperature": 320.0, "min_atmosphere": 0.8,
               "min_water": 0.5, "min_life": 0.5},
}

# The single canonical per-stage table. Attribute synthesis, the 2D size
# and the 3D terrain modulation all read from here.
STAGE_PARAMETERS = {
    "seed": {
        "relative_size": 0.1,
        "base_atmosphere": 0.0,
        "base_water": 0.0,
        "base_life": 0.0,
        "base_color": "#9CA3AF",
        "color_variations": ["#4B5563", "#6B7280", "#9CA3AF"],
        "terrain_size_multiplier": 0.25,
        "terrain_detail": 3,
        "tree_multiplier": 0.0,
        "rock_multiplier": 0.0,
        "noise_intensity": 0.3,
    },
    "core": {
        "relative_size": 0.3,
        "base_atmosphere": 0.0,
        "base_water": 0.0,
        "base_life": 0.0,
        "base_color": "#F87171",
        "color_variations": ["#DC2626", "#EF4444", "#F87171"],
        "terrain_size_multiplier": 0.4,
        "terrain_detail": 5,
        "tree_multiplier": 0.0,
        "rock_multiplier": 0.0,
        "noise_intensity": 0.5,
    },
    "atmosphere": {
        "relative_size": 0.5,
        "base_atmosphere": 0.3,
        "base_water": 0.1,
        "base_life": 0.0,
        "base_color": "#FBBF24",
        "color_variations": ["#F59E0B", "#FBBF24", "#FCD34D"],
        "terrain_size_multiplier": 0.6,
        "terrain_detail": 8,
        "tree_multiplier": 0.1,
        "rock_multiplier": 0.2,
        "noise_intensity": 0.7,
    },
    "surface": {
        "relative_size": 0.7,
        "base_atmosphere": 0.6,
        "base_water": 0.4,
        "base_life": 0.0,
        "base_color": "#34D399",
        "color_variations": ["#059669", "#10B981", "#34D399"],
        "terrain_size_multiplier": 0.8,
        "terrain_detail": 12,
        "tree_multiplier": 0.5,
        "rock_multiplier": 0.6,
        "noise_intensity": 0.9,
    },
    "life": {
        "relative_size": 0.9,
        "base_atmosphere": 0.8,
        "base_water": 0.7,
        "base_life": 0.3,
        "base_color": "#60A5FA",
        "color_variations": ["#3B82F6", "#60A5FA", "#93C5FD"],
        "terrain_size_multiplier": 0.95,
        "terrain_detail": 14,
        "tree_multiplier": 0.8,
        "rock_multiplier": 0.8,
        "noise_intensity": 1.0,
    },
    "mature": {
        "relative_size": 1.0,
        "base_atmosphere": 1.0,
        "base_water": 0.8,
        "base_life": 0.8,
        "base_color": "#A78BFA",
        "color_variations": ["#8B5CF6", "#A78BFA", "#C4B5FD"],
        "terrain_size_multiplier": 1.0,
        "terrain_detail": 15,
        "tree_multiplier": 1.0,
        "rock_multiplier": 1.0,
        "noise_intensity": 1.0,
    },
}

# Pastel palettes used by the 2D view while the planet has no surface yet.
STAGE_PALETTES_2D = {
    "seed": {"primary": "#8B4513", "secondary": "#654321",
             "accent": "#D2691E"},
    "core": {"primary": "#FF0000", "secondary": "#FF4500",
             "accent": "#FFD700"},
    "atmosphere": {"primary": "#87CEEB", "secondary": "#4682B4",
                   "accent": "#1E90FF"},
    "surface": {"primary": "#0066CC", "secondary": "#228B22",
                "accent": "#32CD32"},
    "life": {"primary": "#0066CC", "secondary": "#228B22",
             "accent": "#32CD32"},
    "mature": {"primary": "#0066CC", "secondary": "#228B22",
               "accent": "#32CD32"},
}

# --- Cosmic events ---
# Day bands: early is days 1-7, middle days 8-30, late days 31+.
EVENT_PROBABILITIES = {
    "early": 0.1,
    "middle": 0.15,
    "late": 0.2,
}
EVENT_BAND_LIMITS = {
    "early": 7,
    "middle": 30,
}

EVENT_NAMES = {
    "comet": ["Hale-Bopp Comet", "Halley's Comet", "Minor Comet",
              "Icy Wanderer"],
    "solar_flare": ["Solar Storm", "Magnetic Storm", "Coronal Mass Ejection",
                    "Solar Wind"],
    "tectonic": ["Tectonic Shift", "Earthquake", "Mountain Building",
                 "Crustal Rift"],
    "volcanic": ["Supervolcano", "Volcanic Eruption", "Lava Flows",
                 "Volcanic Winter"],
    "meteor": ["Meteor Shower", "Asteroid Strike", "Space Rock",
               "Falling Star"],
    "asteroid": ["Large Asteroid", "Stone Giant", "Cosmic Boulder",
                 "Iron Asteroid"],
    "aurora": ["Northern Lights", "Magnetic Glow", "Plasma Dance",
               "Curtain of Light"],
}

EVENT_DESCRIPTIONS = {
    "comet": ["A bright comet passes close to the planet",
              "An icy wanderer delivers water and organics",
              "The comet's tail lights up the sky"],
    "solar_flare": ["A solar storm reaches the planet",
                    "The planet's magnetic field is disturbed",
                    "A coronal ejection sweeps through the atmosphere"],
    "tectonic": ["Tectonic plates are shifting",
                 "A powerful earthquake reshapes the landscape",
                 "New mountain ridges are forming"],
    "volcanic": ["A supervolcano erupts",
                 "Lava forges new land",
                 "Ash briefly hides the sun"],
    "meteor": ["A meteor shower rains down on the planet",
               "A large meteor leaves a crater",
               "Space rocks bring rare minerals"],
    "asteroid": ["A large asteroid flies past",
                 "The asteroid's gravity disturbs the tides",
                 "An iron giant nudges the orbits of the moons"],
    "aurora": ["Auroras light up the poles",
               "The magnetic field puts on a light show",
               "Plasma dances across the sky"],
}

EVENT_MAX_DURATION = 3

# --- Satellites ---
SATELLITE_SLOTS = 3
SATELLITE_SLOT_DAY_SPACING = 10
SATELLITE_NAMES = [
    ["Luna", "Selene", "Diana", "Artemis"],
    ["Phobos", "Deimos", "Titan", "Europa"],
    ["Io", "Callisto", "Ganymede", "Enceladus"],
]
SATELLITE_COLORS = ["#9CA3AF", "#6B7280", "#4B5563", "#D1D5DB", "#F3F4F6"]
# Probability of each satellite type, drawn in this order.
SATELLITE_TYPE_WEIGHTS = {"moon": 0.7, "ring": 0.2, "debris": 0.1}

# --- Lifeforms ---
MAX_LIFEFORMS = 5
LIFEFORM_NAMES = {
    "microorganism": ["Archaea", "Bacteria", "Cyanobacteria"],
    "plant": ["Algae", "Mosses", "Ferns", "Trees"],
    "animal": ["Protozoa", "Arthropods", "Fish", "Reptiles"],
    "intelligent": ["Primates", "Sentient Beings", "Civilization"],
    "advanced": ["Elder Race", "Technological Civilization"],
}
LIFEFORM_DESCRIPTIONS = {
    "microorganism": ["Simple single-celled organisms",
                      "The foundation of all life on the planet",
                      "The first living things in the oceans"],
    "plant": ["Photosynthesizing organisms",
              "They produce oxygen for the atmosphere",
              "The base of every food chain"],
    "animal": ["Mobile multicellular organisms",
               "A wide variety of life forms",
               "Active consumers of energy"],
    "intelligent": ["Sentient beings with developed brains",
                    "Capable of abstract thought",
                    "They make tools and culture"],
    "advanced": ["A highly developed technological civilization",
                 "Masters of space travel",
                 "Able to reshape their own planet"],
}

# --- Biomes ---
BIOMES = [
    {
        "name": "forest",
        "ground_color": "#417B2B",
        "water_color": "#2080D0",
        "tree_palette": ["#509A36", "#3C8A2C", "#6BBE53", "#4CAF2F",
                         "#3E9F2A"],
        "rock_color": "#808080",
        "noise_frequency_multiplier": 1.0,
        "noise_displacement_multiplier": 1.0,
        "water_threshold_delta": 0.0,
        "max_trees_multiplier": 1.0,
        "max_rocks_multiplier": 1.0,
        "palette_2d": {"primary": "#417B2B", "secondary": "#2e6c1f",
                       "accent": "#0f3f0e"},
    },
    {
        "name": "desert",
        "ground_color": "#C2B280",
        "water_color": "#1D74C9",
        "tree_palette": ["#C6B36D", "#D1BF79", "#B9A764", "#CAB56F",
                         "#B29E5D"],
        "rock_color": "#9B8B6E",
        "noise_frequency_multiplier": 0.9,
        "noise_displacement_multiplier": 0.7,
        "water_threshold_delta": -0.2,
        "max_trees_multiplier": 0.25,
        "max_rocks_multiplier": 1.2,
        "palette_2d": {"primary": "#C2B280", "secondary": "#B39B6E",
                       "accent": "#8E7A4E"},
    },
    {
        "name": "ice",
        "ground_color": "#A7E8FF",
        "water_color": "#5BC0FF",
        "tree_palette": ["#7AD3FF", "#99DEFF", "#B5E6FF", "#8FD8FF",
                         "#66CCFF"],
        "rock_color": "#B0C4DE",
        "noise_frequency_multiplier": 0.8,
        "noise_displacement_multiplier": 0.9,
        "water_threshold_delta": 0.15,
        "max_trees_multiplier": 0.2,
        "max_rocks_multiplier": 0.8,
        "palette_2d": {"primary": "#A7E8FF", "secondary": "#7AD3FF",
                       "accent": "#5BC0FF"},
    },
    {
        "name": "oceanic",
        "ground_color": "#1F6AA5",
        "water_color": "#1B6BB8",
        "tree_palette": ["#3AA7A1", "#2A908B", "#5CC1BA", "#2F9E98",
                         "#46B7B0"],
        "rock_color": "#6F8FA6",
        "noise_frequency_multiplier": 1.1,
        "noise_displacement_multiplier": 0.8,
        "water_threshold_delta": 0.25,
        "max_trees_multiplier": 0.35,
        "max_rocks_multiplier": 0.6,
        "palette_2d": {"primary": "#1B6BB8", "secondary": "#1F6AA5",
                       "accent": "#0F4B8A"},
    },
    {
        "name": "volcanic",
        "ground_color": "#5A2D27",
        "water_color": "#3A3A3A",
        "tree_palette": ["#E25822", "#FF7F50", "#D94C1A", "#F27A3A",
                         "#F2A679"],
        "rock_color": "#4A4A4A",
        "noise_frequency_multiplier": 1.2,
        "noise_displacement_multiplier": 1.4,
        "water_threshold_delta": -0.3,
        "max_trees_multiplier": 0.1,
        "max_rocks_multiplier": 1.6,
        "palette_2d": {"primary": "#5A2D27", "secondary": "#3D1F1C",
                       "accent": "#E25822"},
    },
    {
        "name": "alien",
        "ground_color": "#6C5B7B",
        "water_color": "#355C7D",
        "tree_palette": ["#C06C84", "#F67280", "#99B898", "#C06C84",
                         "#F8B195"],
        "rock_color": "#7E6A8E",
        "noise_frequency_multiplier": 1.05,
        "noise_displacement_multiplier": 1.1,
        "water_threshold_delta": 0.05,
        "max_trees_multiplier": 0.8,
        "max_rocks_multiplier": 1.2,
        "palette_2d": {"primary": "#6C5B7B", "secondary": "#355C7D",
                       "accent": "#C06C84"},
    },
]

CLIMATE_ARCS = ["desert", "terraform", "oscillate", "glacier", "stable",
                "tectonic"]

# --- Terrain ---
DEFAULT_NOISE_CONFIG = {
    "frequency": 0.015,
    "displacement_scale": 15.0,
    "water_threshold": 0.4,
    "water_floor_noise_value": 0.2,
}
NOISE_SEED = 0
TERRAIN_BASE_RADIUS = 100.0
TERRAIN_MIN_DETAIL = 3
TERRAIN_PROGRESS_DAYS = 30
LAVA_COLOR = "#E25822"
ASH_COLOR = "#4A4A4A"
MUTATION_ACTIVATION_THRESHOLD = 0.35
MUTATION_MIN_RADIUS = 0.0001
WATER_PULSE_CHANCE = 0.15
WATER_THRESHOLD_LIMITS = (0.05, 0.95)

# Mutation shape ranges: (base, spread) so value = base + spread * r.
MUTATION_SHAPES = {
    "volcanic": {"radius": (0.22, 0.25), "strength": (2.0, 4.0)},
    "meteor": {"radius": (0.12, 0.2), "strength": (1.0, 2.0)},
}

# --- Surface objects ---
DEFAULT_MAX_TREES = 600
DEFAULT_MAX_ROCKS = 200
TREE_TRUNK_COLOR = "#764114"
TREE_SIZE_RANGE = (5.0, 15.0)
TREE_BODY_RATIO_RANGE = (0.5, 0.7)
ROCK_SIZE_RANGE = (2.0, 4.0)
TREE_COLOR_NOISE_FREQUENCY = 0.01

# --- Persistence ---
STORAGE_VERSION = "1.0.0"


_DEFAULTS = {
    "generator_settings": GENERATOR_SETTINGS,
    "stage_requirements": STAGE_REQUIREMENTS,
    "stage_parameters": STAGE_PARAMETERS,
    "stage_palettes_2d": STAGE_PALETTES_2D,
    "event_probabilities": EVENT_PROBABILITIES,
    "event_band_limits": EVENT_BAND_LIMITS,
    "event_names": EVENT_NAMES,
    "event_descriptions": EVENT_DESCRIPTIONS,
    "event_max_duration": EVENT_MAX_DURATION,
    "satellite_slots": SATELLITE_SLOTS,
    "satellite_slot_day_spacing": SATELLITE_SLOT_DAY_SPACING,
    "satellite_names": SATELLITE_NAMES,
    "satellite_colors": SATELLITE_COLORS,
    "satellite_type_weights": SATELLITE_TYPE_WEIGHTS,
    "max_lifeforms": MAX_LIFEFORMS,
    "lifeform_names": LIFEFORM_NAMES,
    "lifeform_descriptions": LIFEFORM_DESCRIPTIONS,
    "biomes": BIOMES,
    "climate_arcs": CLIMATE_ARCS,
    "default_noise_config": DEFAULT_NOISE_CONFIG,
    "noise_seed": NOISE_SEED,
    "terrain_base_radius": TERRAIN_BASE_RADIUS,
    "terrain_min_detail": TERRAIN_MIN_DETAIL,
    "terrain_progress_days": TERRAIN_PROGRESS_DAYS,
    "lava_color": LAVA_COLOR,
    "ash_color": ASH_COLOR,
    "mutation_activation_threshold": MUTATION_ACTIVATION_THRESHOLD,
    "mutation_min_radius": MUTATION_MIN_RADIUS,
    "mutation_shapes": MUTATION_SHAPES,
    "water_pulse_chance": WATER_PULSE_CHANCE,
    "water_threshold_limits": WATER_THRESHOLD_LIMITS,
    "default_max_trees": DEFAULT_MAX_TREES,
    "default_max_rocks": DEFAULT_MAX_ROCKS,
    "tree_trunk_color": TREE_TRUNK_COLOR,
    "tree_size_range": TREE_SIZE_RANGE,
    "tree_body_ratio_range": TREE_BODY_RATIO_RANGE,
    "rock_size_range": ROCK_SIZE_RANGE,
    "tree_color_noise_frequency": TREE_COLOR_NOISE_FREQUENCY,
    "storage_version": STORAGE_VERSION,
}


def _freeze(value: Any) -> Any:
    """Copy ``value`` into immutable containers: mappings become read-only
    proxies and lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


class Configuration:
    """Read-only view over the generator defaults with user overrides.

    Values are looked up with ``config["key"]``. Overrides replace the
    default value wholesale; nested dictionaries are not merged.
    Tables come back frozen, so writing to them raises ``TypeError``.
    """

    def __init__(self, overrides: Optional[Dict[str, Any]] = None):
        """Initialize the Configuration.

        Args:
            overrides: Mapping of setting name to replacement value

        Raises:
            ConfigurationError: If an override names an unknown setting
        """
        overrides = overrides or {}
        unknown = sorted(set(overrides) - set(_DEFAULTS))
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}"
            )
        self._settings = {
            key: _freeze(value) for key, value in {**_DEFAULTS, **overrides}.items()
        }

    def __getitem__(self, key: str) -> Any:
        try:
            return self._settings[key]
        except KeyError:
            raise ConfigurationError(f"Missing configuration key: {key}") from None

    def __contains__(self, key: str) -> bool:
        return key in self._settings

    def lookup(self, key: str, entry: Any) -> Any:
        """Fetch one entry of a table setting.

        Args:
            key: Name of the table (e.g. ``"stage_requirements"``)
            entry: Key or index into the table

        Returns:
            The table entry

        Raises:
            ConfigurationError: If the table has no such entry
        """
        table = self[key]
        try:
            return table[entry]
        except (KeyError, IndexError, TypeError):
            raise ConfigurationError(
                f"Configuration table '{key}' has no entry {entry!r}"
            ) from None


DEFAULT_CONFIGURATION = Configuration()
