"""Example script demonstrating daily planet generation for KosmoKorn.

This script replays a planet's life from day 1, prints what it looks like
on the chosen day, plots its attribute timeline and optionally saves the
result as a storage record.
"""

import argparse
import logging
import matplotlib.pyplot as plt
from src.planet_generation import (
    PlanetGenerator,
    BiomeSelector,
    biome_palette_2d,
    planet_stats,
    validate_planet_name,
)
from src.utils import Visualizer
from src.utils.serialization import StorageRecord, UserData


def print_snapshot(snapshot):
    """Print a short report of one snapshot."""
    print(f"\n=== {snapshot.seed} on day {snapshot.current_day} ===")
    print(f"Stage: {snapshot.stage.value}")
    print(f"Color: {snapshot.color}, radius: {snapshot.radius:.3f}")
    print(f"Temperature: {snapshot.temperature:.1f} K "
          f"({snapshot.temperature - 273.15:.1f} °C)")
    print(f"Atmosphere: {snapshot.atmosphere:.0%}, water: {snapshot.water:.0%}, "
          f"life: {snapshot.life:.0%}")
    print(f"Evolution points: {snapshot.evolution.evolution_points} "
          f"({snapshot.evolution.next_stage_progress:.0%} to next stage)")

    for satellite in snapshot.satellites:
        print(f"  Satellite {satellite.name} ({satellite.type}), "
              f"distance {satellite.distance:.2f}")
    for lifeform in snapshot.lifeforms:
        print(f"  Lifeform {lifeform.name} ({lifeform.type.value}), "
              f"population {lifeform.population:,}")


def main():
    """Main function to demonstrate planet generation."""
    parser = argparse.ArgumentParser(description='Generate a KosmoKorn planet for a given day')
    parser.add_argument('--seed', type=str, default='Terra-1000', help='Planet seed (default: Terra-1000)')
    parser.add_argument('--day', type=int, default=30, help='Day to generate (default: 30)')
    parser.add_argument('--name', type=str, default='Terra', help='Planet name')
    parser.add_argument('--output', type=str, default=None, help='Write a storage record as JSON')
    parser.add_argument('--no-plot', action='store_true', help='Skip the timeline plot')
    parser.add_argument('--verbose', action='store_true', help='Show generator debug logs')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    valid, message = validate_planet_name(args.name)
    if not valid:
        parser.error(message)

    generator = PlanetGenerator(args.seed)
    history = generator.history(args.day)
    snapshot = history[-1]
    print_snapshot(snapshot)

    biome_index = BiomeSelector().index(args.seed)
    print(f"2D palette: {biome_palette_2d(snapshot.stage, biome_index)}")

    print("\n=== Event History ===")
    for event in snapshot.events:
        print(f"Day {event.day:3d}: {event.title} - {event.description}")
    if not snapshot.events:
        print("A quiet planet so far.")

    print("\n=== Statistics ===")
    for key, value in planet_stats(snapshot).items():
        print(f"{key}: {value}")

    if args.output:
        record = StorageRecord(
            user=UserData(seed=args.seed, planet_name=args.name,
                          current_day=args.day, total_visits=args.day),
            planet=snapshot,
            event_history=list(snapshot.events),
        )
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(record.to_json(indent=2))
        print(f"\nStorage record saved to {args.output}")

    if not args.no_plot:
        Visualizer().plot_timeline(history, title=f"{args.name} - first {args.day} days")
        plt.tight_layout()
        plt.show()

    print("\nPlanet generation complete!")


if __name__ == "__main__":
    main()
