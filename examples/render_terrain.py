#!/usr/bin/env python3
"""Example script to demonstrate 3D terrain synthesis.

This script builds the terrain of a planet for a given day, with its
biome, climate arc, volcanic and meteor scars, trees and rocks, and
renders it with matplotlib.
"""

import argparse
import logging
import matplotlib.pyplot as plt
from src.planet_generation import World
from src.utils import Visualizer


def main():
    """Main function to demonstrate terrain synthesis."""
    parser = argparse.ArgumentParser(description='Render the 3D terrain of a KosmoKorn planet')
    parser.add_argument('--seed', type=str, default='Terra-1000', help='Planet seed (default: Terra-1000)')
    parser.add_argument('--day', type=int, default=45, help='Day to render (default: 45)')
    parser.add_argument('--biome', type=int, default=None, help='Force a biome index (0-5)')
    parser.add_argument('--no-surface', action='store_true', help='Skip trees and rocks')
    parser.add_argument('--output', type=str, default=None, help='Save the figure to this file')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    print(f"\n=== Building {args.seed} on day {args.day} ===")
    world = World(args.seed, biome_index=args.biome)
    scene = world.build(args.day, with_surface=not args.no_surface)
    appearance = scene.appearance

    print(f"Stage: {scene.snapshot.stage.value}")
    print(f"Biome: {appearance.biome.name}, climate arc: {appearance.climate_arc.name}")
    print(f"Radius: {appearance.radius:.0f}, detail: {appearance.detail}")
    print(f"Water threshold: {appearance.noise.water_threshold:.3f}")
    print(f"Faces: {scene.mesh.face_count} ({scene.mesh.water_fraction:.0%} water)")
    for mutation in scene.mutations:
        print(f"  {mutation.type} scar, radius {mutation.radius:.2f}, "
              f"strength {mutation.strength:.2f}")

    fig = plt.figure(figsize=(9, 9))
    ax = fig.add_subplot(111, projection="3d")
    visualizer = Visualizer()
    visualizer.plot_terrain(scene.mesh, ax=ax,
                            title=f"{args.seed} - day {args.day} ({appearance.biome.name})")
    trees, rocks = visualizer.plot_surface_objects(scene.surface, ax)
    print(f"Trees: {trees}, rocks: {rocks}")

    if args.output:
        fig.savefig(args.output, dpi=150)
        print(f"Figure saved to {args.output}")
    else:
        plt.show()

    print("\nTerrain rendering complete!")


if __name__ == "__main__":
    main()
