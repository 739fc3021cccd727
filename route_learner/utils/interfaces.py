"""Host collaborator interfaces consumed by the route-learning pipeline.

Every collaborator is optional. Code that queries one goes through the
helpers at the bottom of this module so that a missing or failing host
service degrades to permissive behaviour instead of blocking output.
"""

from __future__ import annotations

import time
from typing import Iterable, List, Optional, Protocol

from route_learner.utils.data_models import Waypoint
from route_learner.utils.logging import get_logger

logger = get_logger(__name__)


class Clock(Protocol):
    """Millisecond time source, monotonic for the process lifetime."""

    def now(self) -> int:
        """Return the current time in milliseconds."""


class PositionSource(Protocol):
    """Live position of the agent."""

    def current_position(self) -> Optional[Waypoint]:
        """Return the agent's tile, or ``None`` when it is unknown."""


class TileOracle(Protocol):
    """Map query service answering tile walkability."""

    def is_walkable(self, position: Waypoint) -> bool:
        """Return ``True`` when the agent can stand on ``position``."""


class HazardSource(Protocol):
    """Host view of hostile entities near the agent."""

    def hazard_positions(self) -> Iterable[Waypoint]:
        """Return tiles currently occupied by hazards."""


class SystemClock:
    """Clock backed by ``time.monotonic``."""

    def now(self) -> int:
        return int(time.monotonic() * 1000)


class ManualClock:
    """Clock advanced explicitly by the caller, for replays and simulations."""

    def __init__(self, start_ms: int = 0) -> None:
        self._now = start_ms

    def now(self) -> int:
        return self._now

    def advance(self, delta_ms: int) -> int:
        """Move the clock forward and return the new time."""
        if delta_ms < 0:
            raise ValueError("ManualClock cannot move backwards")
        self._now += delta_ms
        return self._now


def tile_is_walkable(oracle: Optional[TileOracle], position: Waypoint) -> bool:
    """Ask ``oracle`` about ``position``, failing open when it is absent or errors."""
    if oracle is None:
        return True

    try:
        return bool(oracle.is_walkable(position))
    except Exception as error:
        logger.warning(
            "Tile oracle failed; treating tile as walkable",
            x=position.x,
            y=position.y,
            z=position.z,
            error=str(error)
        )
        return True


def current_hazards(source: Optional[HazardSource]) -> List[Waypoint]:
    """Return hazard tiles from ``source``; no source or a failing one means none."""
    if source is None:
        return []

    try:
        return list(source.hazard_positions() or [])
    except Exception as error:
        logger.warning("Hazard source failed; assuming no hazards", error=str(error))
        return []


def query_position(source: Optional[PositionSource]) -> Optional[Waypoint]:
    """Current position from ``source``; a missing or failing source means no sample."""
    if source is None:
        return None

    try:
        return source.current_position()
    except Exception as error:
        logger.warning("Position source failed; skipping sample", error=str(error))
        return None
