"""Tests for full scene assembly."""

import numpy as np

from src.planet_generation.stages import Stage
from src.planet_generation.world import World


def test_seed_stage_scene():
    scene = World("Terra-1000").build(1)
    assert scene.snapshot.stage is Stage.SEED
    assert scene.appearance.radius == 25
    assert scene.mesh.face_count == 20 * 4 ** 2
    assert scene.surface.trees == () and scene.surface.rocks == ()


def test_scene_deterministic():
    a = World("Kepler-22b").build(8, with_surface=False)
    b = World("Kepler-22b").build(8, with_surface=False)
    assert a.snapshot == b.snapshot
    assert a.mutations == b.mutations
    assert np.array_equal(a.mesh.positions, b.mesh.positions)
    assert np.array_equal(a.mesh.colors, b.mesh.colors)


def test_mutations_follow_event_history(eventful_config):
    world = World("Terra", eventful_config)
    scene = world.build(5, with_surface=False)
    kinds = [e.type.value for e in scene.snapshot.events]
    expected = sum(kind in ("volcanic", "meteor") for kind in kinds)
    assert len(scene.mutations) == expected
    assert list(scene.mutations) == world.mutations(5, scene.snapshot.events)


def test_biome_override_applies():
    scene = World("Terra", biome_index=4).build(2, with_surface=False)
    assert scene.appearance.biome.name == "volcanic"
    assert scene.appearance.biome_index == 4


def test_surface_stage_places_objects():
    scene = World("Terra-1000", biome_index=0).build(16)
    appearance = scene.appearance
    assert len(scene.surface.trees) <= appearance.max_trees
    assert len(scene.surface.rocks) <= appearance.max_rocks
    for tree in scene.surface.trees:
        assert tree.body_color.startswith("#")
        assert np.linalg.norm(tree.position) > appearance.radius
