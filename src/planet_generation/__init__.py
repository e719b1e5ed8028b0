"""Deterministic planet generation for KosmoKorn."""

from .random_stream import SeededRandomStream, create_stream, sub_seed
from .stages import (
    Stage,
    StageParameters,
    StageRequirements,
    classify_stage,
    next_stage,
    stage_parameters,
    stage_progress,
    stage_requirements,
    validate_day,
)
from .attributes import AttributeSynthesizer, DayAttributes, evolution_points
from .events import EventHistoryGenerator, EventType, PlanetEvent
from .satellites import Satellite, SatelliteGenerator
from .lifeforms import Lifeform, LifeformGenerator, LifeformType
from .planetary import (
    PlanetEvolution,
    PlanetGenerator,
    PlanetResources,
    PlanetSnapshot,
    generate_snapshot,
    habitability_score,
    planet_stats,
    validate_planet_name,
    validate_seed,
)
from .terrain import (
    NoiseConfig,
    NoiseField,
    Rock,
    SurfaceObjects,
    SurfacePlacer,
    TerrainMesh,
    TerrainMutation,
    TerrainParams,
    TerrainSynthesizer,
    Tree,
    fibonacci_sphere_points,
    icosphere,
    mutations_from_events,
)
from .biomes import (
    BiomePreset,
    BiomeSelector,
    ClimateArc,
    PlanetAppearance,
    biome_palette_2d,
    biome_preset,
    planet_appearance,
)
from .world import PlanetScene, World

__all__ = [
    'SeededRandomStream', 'create_stream', 'sub_seed',
    'Stage', 'StageParameters', 'StageRequirements', 'classify_stage',
    'next_stage', 'stage_parameters', 'stage_progress', 'stage_requirements',
    'validate_day',
    'AttributeSynthesizer', 'DayAttributes', 'evolution_points',
    'EventHistoryGenerator', 'EventType', 'PlanetEvent',
    'Satellite', 'SatelliteGenerator',
    'Lifeform', 'LifeformGenerator', 'LifeformType',
    'PlanetEvolution', 'PlanetGenerator', 'PlanetResources', 'PlanetSnapshot',
    'generate_snapshot', 'habitability_score', 'planet_stats',
    'validate_planet_name', 'validate_seed',
    'NoiseConfig', 'NoiseField', 'Rock', 'SurfaceObjects', 'SurfacePlacer',
    'TerrainMesh', 'TerrainMutation', 'TerrainParams', 'TerrainSynthesizer',
    'Tree', 'fibonacci_sphere_points', 'icosphere', 'mutations_from_events',
    'BiomePreset', 'BiomeSelector', 'ClimateArc', 'PlanetAppearance',
    'biome_palette_2d', 'biome_preset', 'planet_appearance',
    'PlanetScene', 'World',
]
