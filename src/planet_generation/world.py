"""Everything needed to draw one planet on one day.

``World`` ties the snapshot engine to the 3D terrain: it derives the
planet's appearance from its stage and biome, turns the event history into
terrain mutations, and synthesizes the mesh and its trees and rocks.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from src.utils.config import Configuration, DEFAULT_CONFIGURATION

from .biomes import PlanetAppearance, planet_appearance
from .events import PlanetEvent
from .planetary import PlanetGenerator, PlanetSnapshot
from .random_stream import create_stream
from .terrain import (
    SurfaceObjects,
    SurfacePlacer,
    TerrainMesh,
    TerrainMutation,
    TerrainSynthesizer,
    mutations_from_events,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanetScene:
    snapshot: PlanetSnapshot
    appearance: PlanetAppearance
    mutations: Tuple[TerrainMutation, ...]
    mesh: TerrainMesh
    surface: SurfaceObjects


class World:
    """Builds the full scene of a planet for any day.

    The terrain synthesizer is created once and reused; it keeps no state
    between calls, so one World can serve any number of days.
    """

    def __init__(self, seed: str, config: Configuration = DEFAULT_CONFIGURATION,
                 biome_index: Optional[int] = None):
        """Initialize the World.

        Args:
            seed: Planet seed
            config: Generator configuration; defaults when omitted
            biome_index: Explicit biome for every day, overriding the seed's
        """
        self.planet = PlanetGenerator(seed, config)
        self.seed = self.planet.seed
        self.config = config
        self.biome_index = biome_index
        self.synthesizer = TerrainSynthesizer(config)
        self.placer = SurfacePlacer(self.synthesizer)

    def mutations(self, day: int,
                  events: Iterable[PlanetEvent]) -> List[TerrainMutation]:
        return mutations_from_events(self.seed, events, day, self.config)

    def build(self, day: int, with_surface: bool = True) -> PlanetScene:
        """Generate the snapshot of ``day`` and synthesize its terrain.

        Args:
            day: Day number, at least 1
            with_surface: Whether to place trees and rocks

        Returns:
            The PlanetScene for that day
        """
        snapshot = self.planet.generate(day)
        appearance = planet_appearance(self.seed, day, snapshot.stage,
                                       self.config, self.biome_index)
        mutations = tuple(self.mutations(day, snapshot.events))
        params = appearance.terrain_params(mutations)
        mesh = self.synthesizer.synthesize(params)

        surface = SurfaceObjects()
        if with_surface:
            surface = self.placer.place(
                create_stream(self.seed, "vegetation", day),
                params,
                max_trees=appearance.max_trees,
                max_rocks=appearance.max_rocks,
                tree_palette=appearance.biome.tree_palette,
                rock_color=appearance.biome.rock_color,
            )

        logger.debug("Scene %r day %d: biome=%s, arc=%s, %d mutations",
                     self.seed, day, appearance.biome.name,
                     appearance.climate_arc.name, len(mutations))
        return PlanetScene(snapshot=snapshot, appearance=appearance,
                           mutations=mutations, mesh=mesh, surface=surface)
