"""
Area survey of a raw trail

Advisory pass behind ``RouteGenerator.analyze``: groups the trail into
areas, classifies each as a danger area, a chokepoint or a safe zone, and
phrases the counts as human-readable advice. Also tracks explored tiles to
propose an exploration frontier. Nothing here feeds route generation.
"""

from typing import List, Optional, Sequence, Set, Tuple

import numpy as np

from route_learner.config.constants import (
    DEFAULT_AREA_THRESHOLD,
    DEFAULT_CHOKEPOINT_PACE_MS,
    DEFAULT_EXPLORATION_RADIUS,
    DEFAULT_HAZARD_RADIUS,
    FRONTIER_NEIGHBOURHOOD,
    MIN_SURVEY_POINTS,
)
from route_learner.config.settings import PipelineSettings
from route_learner.utils.data_models import AnalysisReport, TrailPoint, Waypoint, ZoneInfo
from route_learner.utils.geometry import planar_distance
from route_learner.utils.interfaces import (
    HazardSource,
    TileOracle,
    current_hazards,
    tile_is_walkable,
)
from route_learner.utils.logging import get_logger

TileKey = Tuple[int, int, int]


class AreaSurveyor:
    """
    Classify the areas an agent moved through

    An area is classified as:
    - danger: a hazard lies within ``hazard_radius`` of its center
    - chokepoint: its mean pace, milliseconds per tile between
      time-ordered samples, exceeds ``chokepoint_pace_ms``; pace does not
      depend on how densely the trail was sampled, so a thinned trail of a
      steady walk stays safe while standing still shows up as a slow pace
    - safe: anything else

    Usage:
        ```python
        surveyor = AreaSurveyor(hazard_source=host)
        report = surveyor.survey(trail)
        print(report.advisory_messages)
        ```
    """

    def __init__(
        self,
        area_threshold: float = DEFAULT_AREA_THRESHOLD,
        chokepoint_pace_ms: int = DEFAULT_CHOKEPOINT_PACE_MS,
        hazard_radius: float = DEFAULT_HAZARD_RADIUS,
        exploration_radius: int = DEFAULT_EXPLORATION_RADIUS,
        hazard_source: Optional[HazardSource] = None,
        tile_oracle: Optional[TileOracle] = None,
    ):
        """
        Args:
            area_threshold: Planar radius, in tiles, an area claims around its
                first point
            chokepoint_pace_ms: Mean milliseconds per tile moved above which
                an area is a chokepoint
            hazard_radius: Distance from an area center within which a hazard
                makes it dangerous
            exploration_radius: Default square radius for frontier search
            hazard_source: Optional host view of hazards
            tile_oracle: Optional walkability oracle for frontier search
        """
        self.area_threshold = area_threshold
        self.chokepoint_pace_ms = chokepoint_pace_ms
        self.hazard_radius = hazard_radius
        self.exploration_radius = exploration_radius
        self.hazard_source = hazard_source
        self.tile_oracle = tile_oracle

        self._explored: Set[TileKey] = set()
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    @classmethod
    def from_settings(
        cls,
        settings: PipelineSettings,
        hazard_source: Optional[HazardSource] = None,
        tile_oracle: Optional[TileOracle] = None,
    ) -> "AreaSurveyor":
        return cls(
            area_threshold=settings.area_threshold,
            chokepoint_pace_ms=settings.chokepoint_pace_ms,
            hazard_radius=settings.hazard_radius,
            exploration_radius=settings.exploration_radius,
            hazard_source=hazard_source,
            tile_oracle=tile_oracle,
        )

    def survey(self, points: Sequence[TrailPoint]) -> AnalysisReport:
        """
        Classify every area of the trail and summarise the counts

        Args:
            points: Raw trail points

        Returns:
            AnalysisReport; empty for fewer than MIN_SURVEY_POINTS points
        """
        if len(points) < MIN_SURVEY_POINTS:
            return AnalysisReport()

        hazards = current_hazards(self.hazard_source)
        zones = [self.describe_area(area, hazards) for area in self.group_areas(points)]

        report = AnalysisReport(
            safe_zone_count=sum(1 for zone in zones if zone.kind == "safe"),
            chokepoint_count=sum(1 for zone in zones if zone.kind == "chokepoint"),
            danger_area_count=sum(1 for zone in zones if zone.kind == "danger"),
            zones=zones,
        )
        report.advisory_messages = self._advise(report)

        self.logger.debug(
            "Trail surveyed",
            points=len(points),
            areas=len(zones),
            danger=report.danger_area_count,
            chokepoints=report.chokepoint_count,
            safe=report.safe_zone_count
        )
        return report

    def group_areas(self, points: Sequence[TrailPoint]) -> List[List[TrailPoint]]:
        """
        Greedy single-pass grouping

        Each unassigned point opens an area and claims every later unassigned
        point within ``area_threshold`` of it.
        """
        areas = []
        used = [False] * len(points)

        for i, anchor in enumerate(points):
            if used[i]:
                continue
            used[i] = True
            area = [anchor]

            for j in range(i + 1, len(points)):
                if not used[j] and planar_distance(anchor, points[j]) <= self.area_threshold:
                    area.append(points[j])
                    used[j] = True

            areas.append(area)

        return areas

    def describe_area(
        self,
        area: Sequence[TrailPoint],
        hazards: Optional[Sequence[Waypoint]] = None,
    ) -> ZoneInfo:
        """Center, spread, timing and classification of one area."""
        coords = np.array([(p.x, p.y, p.z) for p in area], dtype=float)
        center = coords.mean(axis=0)
        spread = float(np.hypot(coords[:, 0] - center[0], coords[:, 1] - center[1]).mean())

        ordered = sorted(area, key=lambda p: p.timestamp)
        timestamps = np.array([p.timestamp for p in ordered], dtype=np.int64)
        time_spent = int(timestamps[-1] - timestamps[0])

        mean_interval = 0.0
        mean_pace = 0.0
        if len(ordered) > 1:
            gaps = np.diff(timestamps).astype(float)
            xs = np.array([p.x for p in ordered], dtype=float)
            ys = np.array([p.y for p in ordered], dtype=float)
            # Revisits of the same tile count as one tile of movement
            steps = np.maximum(np.hypot(np.diff(xs), np.diff(ys)), 1.0)
            mean_interval = float(gaps.mean())
            mean_pace = float((gaps / steps).mean())

        if self._near_hazard(center, hazards or []):
            kind = "danger"
        elif mean_pace > self.chokepoint_pace_ms:
            kind = "chokepoint"
        else:
            kind = "safe"

        return ZoneInfo(
            kind=kind,
            center_x=float(center[0]),
            center_y=float(center[1]),
            center_z=float(center[2]),
            radius=spread,
            point_count=len(area),
            time_spent_ms=time_spent,
            mean_interval_ms=mean_interval,
            mean_pace_ms=mean_pace,
        )

    def _near_hazard(self, center: np.ndarray, hazards: Sequence[Waypoint]) -> bool:
        return any(
            float(np.hypot(center[0] - hazard.x, center[1] - hazard.y)) <= self.hazard_radius
            for hazard in hazards
        )

    @staticmethod
    def _advise(report: AnalysisReport) -> List[str]:
        messages = []
        if report.danger_area_count:
            messages.append(
                f"Found {report.danger_area_count} danger area(s) - consider avoiding them"
            )
        if report.safe_zone_count:
            messages.append(
                f"Found {report.safe_zone_count} safe zone(s) suitable for repeated visits"
            )
        if report.chokepoint_count:
            messages.append(
                f"Found {report.chokepoint_count} chokepoint(s) where movement stalled"
            )
        return messages

    # Exploration ---------------------------------------------------------

    @staticmethod
    def _key(position) -> TileKey:
        return (position.x, position.y, position.z)

    def mark_explored(self, position) -> None:
        self._explored.add(self._key(position))

    def is_explored(self, position) -> bool:
        return self._key(position) in self._explored

    @property
    def explored_count(self) -> int:
        return len(self._explored)

    def reset_exploration(self) -> None:
        self._explored.clear()

    def explore_frontier(self, current: Waypoint, radius: Optional[int] = None) -> List[Waypoint]:
        """
        Unexplored walkable tiles bordering explored ground

        Args:
            current: Center of the square search window
            radius: Square radius; defaults to ``exploration_radius``

        Returns:
            Frontier tiles ordered by column, then row
        """
        radius = self.exploration_radius if radius is None else max(0, radius)
        if not self._explored:
            return []

        frontier = []
        for x in range(current.x - radius, current.x + radius + 1):
            for y in range(current.y - radius, current.y + radius + 1):
                candidate = Waypoint(x=x, y=y, z=current.z)
                if self.is_explored(candidate):
                    continue
                if not self._borders_explored(candidate):
                    continue
                if tile_is_walkable(self.tile_oracle, candidate):
                    frontier.append(candidate)

        return frontier

    def _borders_explored(self, position: Waypoint) -> bool:
        reach = FRONTIER_NEIGHBOURHOOD
        return any(
            (position.x + dx, position.y + dy, position.z) in self._explored
            for dx in range(-reach, reach + 1)
            for dy in range(-reach, reach + 1)
        )
