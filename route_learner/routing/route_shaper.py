"""Route shaping: simplification, smoothing, validation and spacing.

Turns a coarse sequence of representative points into a short, walkable
waypoint path. The four stages run in a fixed order and each one falls back
to returning its input for degenerate shapes, so ``optimize_route`` is total.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from route_learner.config.constants import (
    DEFAULT_MIN_WAYPOINT_DISTANCE,
    DEFAULT_SIMPLIFICATION_TOLERANCE,
    MIN_SIMPLIFICATION_TOLERANCE,
    SMOOTHING_STEPS,
)
from route_learner.config.settings import PipelineSettings
from route_learner.utils.data_models import Waypoint
from route_learner.utils.geometry import (
    catmull_rom,
    planar_distance,
    round_half_up,
    segment_distance,
)
from route_learner.utils.interfaces import TileOracle, tile_is_walkable
from route_learner.utils.logging import get_logger


class RouteShaper:
    """Produce a clean, walkable, evenly spaced waypoint sequence.

    Pipeline, in order:

    1. Douglas-Peucker simplification with ``simplification_tolerance``
    2. Catmull-Rom smoothing at t = 0 and t = 0.5 per interior window
    3. Walkability validation against the optional ``TileOracle``
    4. Merging of points closer than ``min_waypoint_distance``

    The shaper keeps no state between calls apart from its configuration.
    """

    def __init__(
        self,
        tile_oracle: Optional[TileOracle] = None,
        simplification_tolerance: float = DEFAULT_SIMPLIFICATION_TOLERANCE,
        min_waypoint_distance: float = DEFAULT_MIN_WAYPOINT_DISTANCE,
    ) -> None:
        """Configure the shaper.

        Args:
            tile_oracle: Map query service; ``None`` treats every tile as walkable.
            simplification_tolerance: Maximum chord deviation, in tiles, a
                point may have and still be dropped.
            min_waypoint_distance: Minimum planar spacing of kept waypoints.
        """
        self.tile_oracle = tile_oracle
        self.simplification_tolerance = max(
            MIN_SIMPLIFICATION_TOLERANCE, float(simplification_tolerance)
        )
        self.min_waypoint_distance = max(1.0, float(min_waypoint_distance))
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    @classmethod
    def from_settings(
        cls, settings: PipelineSettings, tile_oracle: Optional[TileOracle] = None
    ) -> "RouteShaper":
        return cls(
            tile_oracle=tile_oracle,
            simplification_tolerance=settings.simplification_tolerance,
            min_waypoint_distance=settings.min_waypoint_distance,
        )

    def optimize_route(self, points: Sequence[Waypoint]) -> List[Waypoint]:
        """Run simplify, smooth, validate and merge in order.

        Args:
            points: Ordered representative points.

        Returns:
            Final waypoints; inputs shorter than 2 points come back unchanged.
        """
        if len(points) < 2:
            return list(points)

        simplified = self.simplify(points)
        smoothed = self.smooth(simplified)
        validated = self.validate(smoothed)
        merged = self.merge_close_points(validated)

        self.logger.debug(
            "Route optimized",
            input_points=len(points),
            simplified=len(simplified),
            smoothed=len(smoothed),
            validated=len(validated),
            merged=len(merged)
        )
        return merged

    def simplify(self, points: Sequence[Waypoint]) -> List[Waypoint]:
        """Douglas-Peucker simplification using an explicit segment stack.

        A segment keeps only its endpoints unless an interior point deviates
        from the chord by more than the tolerance; the farthest such point
        (earliest on ties) splits the segment and both halves are processed
        the same way.
        """
        if len(points) <= 2:
            return list(points)

        keep = [False] * len(points)
        keep[0] = keep[-1] = True
        stack = [(0, len(points) - 1)]

        while stack:
            first, last = stack.pop()
            if last - first < 2:
                continue

            max_distance = 0.0
            split = first
            for index in range(first + 1, last):
                distance = segment_distance(points[index], points[first], points[last])
                if distance > max_distance:
                    max_distance = distance
                    split = index

            if max_distance > self.simplification_tolerance:
                keep[split] = True
                stack.append((split, last))
                stack.append((first, split))

        return [point for point, kept in zip(points, keep) if kept]

    def smooth(self, points: Sequence[Waypoint]) -> List[Waypoint]:
        """Catmull-Rom smoothing over every interior 4-point window.

        The endpoints are preserved unchanged; each window contributes the
        spline at ``SMOOTHING_STEPS`` rounded to tiles on the floor of its
        second control point. Fewer than 4 points are returned unchanged.
        """
        if len(points) < 4:
            return list(points)

        smoothed = [points[0]]
        for index in range(1, len(points) - 2):
            window = points[index - 1:index + 3]
            controls = [(point.x, point.y) for point in window]
            for t in SMOOTHING_STEPS:
                x, y = catmull_rom(controls, t)
                smoothed.append(
                    Waypoint(x=round_half_up(x), y=round_half_up(y), z=points[index].z)
                )
        smoothed.append(points[-1])

        return smoothed

    def validate(self, points: Sequence[Waypoint]) -> List[Waypoint]:
        """Drop waypoints on tiles the oracle reports as unwalkable."""
        if self.tile_oracle is None:
            return list(points)

        validated = [point for point in points if tile_is_walkable(self.tile_oracle, point)]

        dropped = len(points) - len(validated)
        if dropped:
            self.logger.debug("Unwalkable waypoints removed", dropped=dropped)

        return validated

    def merge_close_points(self, points: Sequence[Waypoint]) -> List[Waypoint]:
        """Keep a point only if it is far enough from the last kept point."""
        merged: List[Waypoint] = []
        for point in points:
            if not merged or planar_distance(point, merged[-1]) >= self.min_waypoint_distance:
                merged.append(point)
        return merged

    def set_tolerance(self, tolerance: float) -> None:
        self.simplification_tolerance = max(MIN_SIMPLIFICATION_TOLERANCE, float(tolerance))

    def set_min_distance(self, distance: float) -> None:
        self.min_waypoint_distance = max(1.0, float(distance))
