"""Passive trail recording for route learning.

Records the agent's position once per host tick, throttled by elapsed time
and by distance from the last accepted sample, into an in-memory trail that
the route generator later clusters and shapes.
"""

from __future__ import annotations

from typing import List, Optional

from route_learner.config.constants import (
    DEFAULT_MAX_TRAIL_POINTS,
    DEFAULT_MIN_SAMPLE_DISTANCE,
    DEFAULT_SAMPLE_INTERVAL_MS,
    MIN_SAMPLE_INTERVAL_MS,
)
from route_learner.config.settings import PipelineSettings
from route_learner.utils.data_models import TrailPoint, Waypoint
from route_learner.utils.geometry import planar_distance
from route_learner.utils.interfaces import Clock
from route_learner.utils.logging import get_logger

logger = get_logger(__name__)


class TrailSampler:
    """Throttled recorder that owns the raw trail buffer.

    A position becomes a new ``TrailPoint`` when at least
    ``sample_interval_ms`` passed since the last accepted sample and the agent
    moved at least ``min_distance`` tiles from it. The very first position is
    always accepted. Without any clock the time throttle is skipped and
    points are stamped ``0``, which yields a zero-duration trail.

    Past ``max_points`` the trail is thinned to every other kept point and
    from then on only every second accepted sample is kept, so spacing stays
    even from the first point to the newest one.

    Usage::

        sampler = TrailSampler(clock=SystemClock())

        # Once per host tick
        sampler.record_sample(None, position_source.current_position())

        trail = sampler.get_trail()
        sampler.clear()
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        sample_interval_ms: int = DEFAULT_SAMPLE_INTERVAL_MS,
        min_distance: float = DEFAULT_MIN_SAMPLE_DISTANCE,
        max_points: int = DEFAULT_MAX_TRAIL_POINTS,
    ) -> None:
        """Initialize an empty, enabled sampler.

        Args:
            clock: Fallback clock used when a call does not pass one.
            sample_interval_ms: Minimum time between accepted samples.
            min_distance: Minimum planar distance in tiles between samples.
            max_points: Trail length that triggers thinning of the buffer.
        """
        self.clock = clock
        self.sample_interval_ms = max(MIN_SAMPLE_INTERVAL_MS, sample_interval_ms)
        self.min_distance = max(1.0, float(min_distance))
        self.max_points = max(2, max_points)
        self.recording_enabled = True

        self._trail: List[TrailPoint] = []
        self._last_position: Optional[Waypoint] = None
        self._last_sample_ms: Optional[int] = None

        # Every stride-th accepted sample is kept; the newest one in between
        # rides along as a provisional tail that the next sample replaces
        self._stride = 1
        self._accepted = 0
        self._provisional_tail = False

    @classmethod
    def from_settings(
        cls, settings: PipelineSettings, clock: Optional[Clock] = None
    ) -> "TrailSampler":
        return cls(
            clock=clock,
            sample_interval_ms=settings.sample_interval_ms,
            min_distance=settings.min_sample_distance,
            max_points=settings.max_trail_points,
        )

    def _now(self, clock: Optional[Clock]) -> Optional[int]:
        active = clock if clock is not None else self.clock
        return active.now() if active is not None else None

    def should_sample(
        self, clock: Optional[Clock], position: Optional[Waypoint]
    ) -> bool:
        """Decide whether ``position`` qualifies as a new trail point.

        Args:
            clock: Clock for this tick; falls back to the sampler's own.
            position: Current agent tile, ``None`` when unavailable.

        Returns:
            ``True`` when the sample passes the time and distance throttles.
        """
        if position is None:
            return False

        if self._last_position is None:
            return True

        now = self._now(clock)
        if (
            now is not None
            and self._last_sample_ms is not None
            and now - self._last_sample_ms < self.sample_interval_ms
        ):
            return False

        return planar_distance(position, self._last_position) >= self.min_distance

    def record_sample(
        self, clock: Optional[Clock], position: Optional[Waypoint]
    ) -> bool:
        """Record ``position`` when recording and throttles allow it.

        Returns:
            ``True`` if the sample was accepted; it either extends the trail
            or replaces the provisional tail.

        Side Effects:
            Updates the last accepted position/time and may thin the buffer.
        """
        if not self.recording_enabled:
            return False
        if not self.should_sample(clock, position):
            return False

        now = self._now(clock)
        timestamp = now if now is not None else 0

        point = TrailPoint(x=position.x, y=position.y, z=position.z, timestamp=timestamp)
        if self._provisional_tail:
            self._trail[-1] = point
        else:
            self._trail.append(point)

        self._provisional_tail = self._accepted % self._stride != 0
        self._accepted += 1
        self._last_position = position
        self._last_sample_ms = now

        if len(self._trail) > self.max_points:
            self._thin()

        return True

    def _thin(self) -> None:
        """Double the stride and drop every other kept point.

        Kept points sit at evenly spaced sample counts, so halving them keeps
        the trail evenly spaced along its whole length. The newest point
        survives as the provisional tail when it falls between kept ones.
        """
        before = len(self._trail)
        newest = self._trail[-1]
        kept = self._trail[:-1] if self._provisional_tail else self._trail

        thinned = kept[::2]
        self._stride *= 2
        self._provisional_tail = thinned[-1] is not newest
        if self._provisional_tail:
            thinned.append(newest)
        self._trail = thinned

        logger.debug(
            "Trail thinned",
            before=before,
            after=len(self._trail),
            max_points=self.max_points,
            stride=self._stride
        )

    def get_trail(self) -> List[TrailPoint]:
        """Return a copy of the trail, oldest first."""
        return list(self._trail)

    def clear(self) -> None:
        """Drop all points and forget the last accepted sample."""
        self._trail = []
        self._last_position = None
        self._last_sample_ms = None
        self._stride = 1
        self._accepted = 0
        self._provisional_tail = False

    def duration(self) -> float:
        """Seconds between the first and last trail points (0.0 for fewer than 2)."""
        if len(self._trail) < 2:
            return 0.0
        return (self._trail[-1].timestamp - self._trail[0].timestamp) / 1000

    def count(self) -> int:
        return len(self._trail)

    def __len__(self) -> int:
        return len(self._trail)

    def toggle(self) -> bool:
        """Flip ``recording_enabled`` and return the new value."""
        self.recording_enabled = not self.recording_enabled
        return self.recording_enabled

    def set_min_distance(self, distance: float) -> None:
        self.min_distance = max(1.0, float(distance))

    def set_sample_interval(self, interval_ms: int) -> None:
        self.sample_interval_ms = max(MIN_SAMPLE_INTERVAL_MS, int(interval_ms))
