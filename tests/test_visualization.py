"""Tests for the matplotlib visualizer."""

import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from src.planet_generation.planetary import PlanetGenerator
from src.planet_generation.world import World
from src.utils import Visualizer


def test_plot_timeline(eventful_config):
    history = PlanetGenerator("Terra", eventful_config).history(12)
    ax, temperature_ax = Visualizer().plot_timeline(history, title="Terra")
    assert ax.get_title() == "Terra"
    assert len(ax.get_lines()) == 3 + 12
    assert len(temperature_ax.get_lines()) == 1


def test_plot_terrain_and_surface():
    scene = World("Terra-1000", biome_index=0).build(16)
    fig = plt.figure()
    ax = fig.add_subplot(111, projection="3d")
    visualizer = Visualizer()
    collection = visualizer.plot_terrain(scene.mesh, ax=ax)
    assert isinstance(collection, Poly3DCollection)
    trees, rocks = visualizer.plot_surface_objects(scene.surface, ax)
    assert trees == len(scene.surface.trees)
    assert rocks == len(scene.surface.rocks)


def test_plot_terrain_creates_axis():
    scene = World("Kepler-22b").build(1, with_surface=False)
    collection = Visualizer().plot_terrain(scene.mesh)
    assert collection.axes is not None
