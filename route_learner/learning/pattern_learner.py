"""Route pattern learning and next-waypoint prediction.

Summarises every recorded route as a compact directional signature, keeps
the signatures that recur often enough as patterns, finds stored routes
similar to a new one, and extrapolates the agent's next waypoint from its
last two positions.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Optional, Sequence

from route_learner.config.constants import (
    DEFAULT_FREQUENCY_THRESHOLD,
    DEFAULT_SIMILARITY_THRESHOLD,
    DEFAULT_SNAP_RADIUS,
)
from route_learner.config.settings import PipelineSettings
from route_learner.utils.data_models import LearnedRoute, RoutePattern, Waypoint
from route_learner.utils.geometry import quantize_direction
from route_learner.utils.interfaces import Clock, SystemClock, TileOracle, tile_is_walkable
from route_learner.utils.logging import get_logger

logger = get_logger(__name__)


class PatternLearner:
    """Registry of learned routes with signature-based pattern detection.

    The registry is append-only: ``record_route`` adds a ``LearnedRoute`` and
    recomputes the pattern table from scratch, which keeps results identical
    regardless of insertion history. Accessors return copies.

    Usage::

        learner = PatternLearner(clock=SystemClock(), tile_oracle=oracle)
        learner.record_route(waypoints, "depot_loop")

        learner.patterns                         # recurring signatures
        learner.similar_routes(new_waypoints)    # routes with >= 80% match
        learner.predict_next(current, previous)  # extrapolated next tile
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        tile_oracle: Optional[TileOracle] = None,
        frequency_threshold: int = DEFAULT_FREQUENCY_THRESHOLD,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        snap_radius: int = DEFAULT_SNAP_RADIUS,
    ) -> None:
        """Initialize an empty registry.

        Args:
            clock: Time source for route names and timestamps.
            tile_oracle: Map query service used to snap predictions.
            frequency_threshold: Occurrences a signature needs to become a pattern.
            similarity_threshold: Fraction of matching codes for similar routes.
            snap_radius: Largest square radius searched for a walkable tile.
        """
        self.clock = clock or SystemClock()
        self.tile_oracle = tile_oracle
        self.frequency_threshold = max(1, frequency_threshold)
        self.similarity_threshold = similarity_threshold
        self.snap_radius = max(0, snap_radius)

        self._routes: List[LearnedRoute] = []
        self._patterns: List[RoutePattern] = []

    @classmethod
    def from_settings(
        cls,
        settings: PipelineSettings,
        clock: Optional[Clock] = None,
        tile_oracle: Optional[TileOracle] = None,
    ) -> "PatternLearner":
        return cls(
            clock=clock,
            tile_oracle=tile_oracle,
            frequency_threshold=settings.frequency_threshold,
            similarity_threshold=settings.similarity_threshold,
            snap_radius=settings.snap_radius,
        )

    @property
    def routes(self) -> List[LearnedRoute]:
        return list(self._routes)

    @property
    def patterns(self) -> List[RoutePattern]:
        return list(self._patterns)

    def record_route(
        self, waypoints: Sequence[Waypoint], name: Optional[str] = None
    ) -> LearnedRoute:
        """Store a route and refresh the pattern table.

        Args:
            waypoints: Final waypoints of the route.
            name: Route name; defaults to ``Route_<clock ms>``.

        Returns:
            The stored ``LearnedRoute``.
        """
        recorded_at = self.clock.now()
        route = LearnedRoute(
            name=name or f"Route_{recorded_at}",
            waypoints=tuple(waypoints),
            recorded_at=recorded_at,
            signature=self.signature(waypoints),
        )

        self._routes.append(route)
        self._update_patterns()

        logger.debug(
            "Route learned",
            name=route.name,
            signature=route.signature,
            routes=len(self._routes),
            patterns=len(self._patterns)
        )
        return route

    def _update_patterns(self) -> None:
        frequencies = Counter(route.signature for route in self._routes)
        self._patterns = [
            RoutePattern(signature=signature, frequency=frequency)
            for signature, frequency in frequencies.items()
            if frequency >= self.frequency_threshold
        ]

    @staticmethod
    def signature(waypoints: Sequence[Waypoint]) -> str:
        """Concatenate one octant code per consecutive waypoint pair."""
        if len(waypoints) < 2:
            return ""

        return "".join(
            str(quantize_direction(curr.x - prev.x, curr.y - prev.y))
            for prev, curr in zip(waypoints, waypoints[1:])
        )

    def signatures_similar(self, first: str, second: str) -> bool:
        """Equal-length signatures agreeing on enough positions."""
        if len(first) != len(second):
            return False
        if not first:
            return True

        matches = sum(1 for a, b in zip(first, second) if a == b)
        return matches / len(first) >= self.similarity_threshold

    def similar_routes(self, waypoints: Sequence[Waypoint]) -> List[LearnedRoute]:
        """Stored routes whose signature is similar to that of ``waypoints``."""
        target = self.signature(waypoints)
        return [
            route for route in self._routes
            if self.signatures_similar(target, route.signature)
        ]

    def predict_next(
        self, current: Waypoint, previous: Optional[Waypoint]
    ) -> Optional[Waypoint]:
        """Extrapolate one step of constant velocity and snap it to the map.

        Args:
            current: Most recent position.
            previous: Position before ``current``; ``None`` gives no prediction.

        Returns:
            Predicted waypoint on ``current``'s floor, or ``None``.
        """
        if previous is None:
            return None

        predicted = Waypoint(
            x=current.x + (current.x - previous.x),
            y=current.y + (current.y - previous.y),
            z=current.z,
        )
        return self.snap_to_walkable(predicted)

    def snap_to_walkable(self, position: Waypoint) -> Waypoint:
        """Nearest walkable tile in growing square rings around ``position``.

        Rings of radius 0 to ``snap_radius`` are scanned column by column;
        the first walkable tile wins. When none is found, ``position`` is
        returned unchanged.
        """
        if self.tile_oracle is None:
            return position

        for radius in range(self.snap_radius + 1):
            for dx in range(-radius, radius + 1):
                for dy in range(-radius, radius + 1):
                    if max(abs(dx), abs(dy)) != radius:
                        continue
                    candidate = position.offset(dx, dy)
                    if tile_is_walkable(self.tile_oracle, candidate):
                        return candidate

        logger.debug(
            "No walkable tile near prediction",
            x=position.x,
            y=position.y,
            z=position.z,
            radius=self.snap_radius
        )
        return position

    def clear(self) -> None:
        """Forget all learned routes and patterns."""
        self._routes = []
        self._patterns = []
