"""Route generation from recorded movement for route-learner."""

from __future__ import annotations

import math
from enum import Enum
from typing import List, Optional

from route_learner.analysis.area_survey import AreaSurveyor
from route_learner.analysis.clustering import TrailClusterer
from route_learner.config.settings import PipelineSettings
from route_learner.data_collection.trail_sampler import TrailSampler
from route_learner.learning.pattern_learner import PatternLearner
from route_learner.routing.route_shaper import RouteShaper
from route_learner.utils.data_models import AnalysisReport, GeneratedRoute, Waypoint
from route_learner.utils.interfaces import (
    Clock,
    HazardSource,
    PositionSource,
    SystemClock,
    TileOracle,
    query_position,
)
from route_learner.utils.logging import get_logger


class InsufficientDataError(ValueError):
    """Raised when a recording holds too few points to build a route."""

    def __init__(self, point_count: int, required: int) -> None:
        super().__init__(
            f"Need at least {required} recorded points to generate a route, got {point_count}"
        )
        self.point_count = point_count
        self.required = required


class RecorderState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"


class RouteGenerator:
    """Record a walk and turn it into a learned, walkable route.

    Owns one sampler, clusterer, route shaper, pattern learner and area
    surveyor, plus the registry of generated routes. Recording is toggled
    explicitly; route generation is a synchronous one-shot pass:

    record → cluster → representative waypoints → shape → learn → store
    """

    def __init__(
        self,
        settings: Optional[PipelineSettings] = None,
        clock: Optional[Clock] = None,
        position_source: Optional[PositionSource] = None,
        tile_oracle: Optional[TileOracle] = None,
        hazard_source: Optional[HazardSource] = None,
    ) -> None:
        """Initialize the generator and its components.

        Args:
            settings: Pipeline settings; read from the environment when omitted.
            clock: Time source; defaults to the monotonic system clock.
            position_source: Host service queried on ticks without a position.
            tile_oracle: Optional walkability oracle for validation and snapping.
            hazard_source: Optional host view of hazards for the area survey.
        """
        self.settings = settings or PipelineSettings()
        self.clock = clock or SystemClock()
        self.position_source = position_source
        self.route_name_prefix = self.settings.route_name_prefix

        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

        self.sampler = TrailSampler.from_settings(self.settings, clock=self.clock)
        self.clusterer = TrailClusterer.from_settings(self.settings)
        self.shaper = RouteShaper.from_settings(self.settings, tile_oracle=tile_oracle)
        self.learner = PatternLearner.from_settings(
            self.settings, clock=self.clock, tile_oracle=tile_oracle
        )
        self.surveyor = AreaSurveyor.from_settings(
            self.settings, hazard_source=hazard_source, tile_oracle=tile_oracle
        )

        self.state = RecorderState.IDLE
        self._generated_routes: List[GeneratedRoute] = []

        self.logger.info(
            "Route generator initialized",
            tile_oracle=tile_oracle is not None,
            position_source=position_source is not None,
            hazard_source=hazard_source is not None
        )

    @property
    def is_recording(self) -> bool:
        return self.state is RecorderState.RECORDING

    @property
    def recorded_point_count(self) -> int:
        return self.sampler.count()

    @property
    def recording_duration(self) -> float:
        """Seconds covered by the current trail."""
        return self.sampler.duration()

    def start_recording(self) -> None:
        """Clear the trail and explored tiles, then sample on every tick."""
        self.sampler.clear()
        self.surveyor.reset_exploration()
        self.sampler.recording_enabled = True
        self.state = RecorderState.RECORDING
        self.logger.info("Recording started - walk your route")

    def stop_recording(self) -> GeneratedRoute:
        """Stop sampling and generate a route from the recorded trail.

        Raises:
            InsufficientDataError: If too few points were recorded; the trail
                is kept so the caller can inspect it or keep recording.
        """
        self.sampler.recording_enabled = False
        self.state = RecorderState.IDLE
        self.logger.info(
            "Recording stopped - generating route",
            points=self.sampler.count()
        )
        return self.generate_route()

    def reset_recording(self) -> None:
        """Discard the trail and explored tiles and return to idle without a route."""
        self.sampler.clear()
        self.surveyor.reset_exploration()
        self.state = RecorderState.IDLE

    def generate_route(self) -> GeneratedRoute:
        """Run the full pipeline over the current trail.

        Returns:
            The stored GeneratedRoute.

        Raises:
            InsufficientDataError: If the trail has fewer than
                ``settings.min_route_points`` points.
        """
        trail = self.sampler.get_trail()
        required = self.settings.min_route_points
        if len(trail) < required:
            self.logger.warning(
                "Not enough recorded points to generate a route",
                points=len(trail),
                required=required
            )
            raise InsufficientDataError(len(trail), required)

        k = min(
            self.settings.max_clusters,
            math.ceil(len(trail) / self.settings.points_per_cluster),
        )
        clusters = self.clusterer.cluster(trail, k)
        self.logger.info("Trail clustered", points=len(trail), clusters=len(clusters))

        representatives = self.clusterer.representative_waypoints(clusters)
        final = self.shaper.optimize_route(representatives)
        self.logger.info(
            "Route shaped",
            representatives=len(representatives),
            waypoints=len(final)
        )

        self.learner.record_route(final, self.route_name_prefix)

        created_at = self.clock.now()
        route = GeneratedRoute(
            name=f"{self.route_name_prefix}_{created_at}",
            waypoints=tuple(final),
            created_at=created_at,
        )
        self._generated_routes.append(route)

        self.logger.info(
            "Route generated",
            name=route.name,
            waypoints=len(route.waypoints),
            distance=route.total_distance
        )
        return route

    def analyze(self) -> AnalysisReport:
        """Advisory survey of the raw trail; does not modify any state."""
        return self.surveyor.survey(self.sampler.get_trail())

    def predictive_update(self) -> Optional[Waypoint]:
        """Predict the next waypoint from the two newest trail points."""
        trail = self.sampler.get_trail()
        if len(trail) < 2:
            return None

        return self.learner.predict_next(trail[-1].to_waypoint(), trail[-2].to_waypoint())

    def explore_frontier(self, radius: Optional[int] = None) -> List[Waypoint]:
        """Frontier tiles around the newest trail point; empty without a trail."""
        trail = self.sampler.get_trail()
        if not trail:
            return []
        return self.surveyor.explore_frontier(trail[-1].to_waypoint(), radius)

    def get_generated_routes(self) -> List[GeneratedRoute]:
        return list(self._generated_routes)

    def get_last_route(self) -> Optional[GeneratedRoute]:
        return self._generated_routes[-1] if self._generated_routes else None

    def tick(
        self,
        clock: Optional[Clock] = None,
        position: Optional[Waypoint] = None,
    ) -> bool:
        """Forward one host tick to the sampler while recording.

        Args:
            clock: Clock for this tick; defaults to the generator's clock.
            position: Current tile; queried from the position source when omitted.

        Returns:
            ``True`` if a trail point was recorded.
        """
        if self.state is not RecorderState.RECORDING:
            return False

        if position is None and self.position_source is not None:
            position = query_position(self.position_source)

        recorded = self.sampler.record_sample(clock or self.clock, position)
        if recorded:
            self.surveyor.mark_explored(position)
        return recorded
