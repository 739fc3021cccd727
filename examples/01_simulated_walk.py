#!/usr/bin/env python3
"""
Example 1: Simulated walk

Records a scripted walk with a manual clock and turns it into a route.

This example shows how to:
1. Plug host collaborators (clock, tile oracle, hazards) into the generator
2. Forward ticks while recording
3. Generate, inspect and learn a route
4. Use the advisory survey, prediction and frontier helpers
"""

from route_learner import PipelineSettings, RouteGenerator, Waypoint
from route_learner.utils.interfaces import ManualClock
from route_learner.utils.logging import configure_logging

FLOOR = 7


class WallOracle:
    """Everything is walkable except a short wall at x = 6."""

    def is_walkable(self, position):
        return not (position.x == 6 and 2 <= position.y <= 4)


class FixedHazards:
    def hazard_positions(self):
        return [Waypoint(x=14, y=12, z=FLOOR)]


def scripted_walk():
    """East along y = 0, then north, then east again."""
    path = [(x, 0) for x in range(0, 10)]
    path += [(9, y) for y in range(1, 10)]
    path += [(x, 9) for x in range(10, 16)]
    return [Waypoint(x=x, y=y, z=FLOOR) for x, y in path]


def main():
    """Run the simulated walk example"""
    print("="*70)
    print("route-learner - Simulated Walk Example")
    print("="*70)

    clock = ManualClock()
    settings = PipelineSettings(log_level="WARNING")
    configure_logging(settings.log_level)
    generator = RouteGenerator(
        settings=settings,
        clock=clock,
        tile_oracle=WallOracle(),
        hazard_source=FixedHazards(),
    )

    print("\n1. Recording walk...")
    generator.start_recording()
    for position in scripted_walk():
        generator.tick(position=position)
        clock.advance(600)

    print(f"   Points recorded: {generator.recorded_point_count}")
    print(f"   Duration: {generator.recording_duration:.1f}s")

    print("\n2. Advisory survey...")
    report = generator.analyze()
    for message in report.advisory_messages:
        print(f"   - {message}")

    print("\n3. Prediction and frontier...")
    print(f"   Next waypoint: {generator.predictive_update()}")
    print(f"   Frontier tiles (radius 3): {len(generator.explore_frontier(radius=3))}")

    print("\n4. Generating route...")
    route = generator.stop_recording()
    print(f"   Name: {route.name}")
    print(f"   Distance: {route.total_distance:.1f} tiles")
    for waypoint in route.waypoints:
        print(f"   ({waypoint.x}, {waypoint.y}, {waypoint.z})")

    learned = generator.learner.routes[-1]
    print(f"\n   Learned signature: {learned.signature}")

    print("\n" + "="*70)
    print("Example completed!")
    print("="*70)


if __name__ == "__main__":
    main()
