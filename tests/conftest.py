"""Shared fixtures: deterministic clock and fake host collaborators."""

from typing import Iterable, List, Optional, Set, Tuple

import pytest

from route_learner.config import PipelineSettings
from route_learner.utils.data_models import TrailPoint, Waypoint
from route_learner.utils.interfaces import ManualClock

Tile = Tuple[int, int, int]


class GridTileOracle:
    """Walkability oracle over an explicit tile set.

    With ``walkable`` set, only those tiles are walkable; otherwise every
    tile except ``blocked`` is.
    """

    def __init__(
        self,
        blocked: Iterable[Tile] = (),
        walkable: Optional[Iterable[Tile]] = None,
    ) -> None:
        self.blocked: Set[Tile] = set(blocked)
        self.walkable = set(walkable) if walkable is not None else None
        self.queries: List[Tile] = []

    def is_walkable(self, position: Waypoint) -> bool:
        key = (position.x, position.y, position.z)
        self.queries.append(key)
        if self.walkable is not None:
            return key in self.walkable
        return key not in self.blocked


class FailingOracle:
    def is_walkable(self, position: Waypoint) -> bool:
        raise RuntimeError("map not loaded")


class ScriptedPositionSource:
    """Returns the scripted positions in order, then ``None``."""

    def __init__(self, positions: Iterable[Optional[Waypoint]]) -> None:
        self._positions = list(positions)

    def current_position(self) -> Optional[Waypoint]:
        return self._positions.pop(0) if self._positions else None


class StaticHazards:
    def __init__(self, positions: Iterable[Waypoint]) -> None:
        self.positions = list(positions)

    def hazard_positions(self) -> List[Waypoint]:
        return self.positions


def wp(x: int, y: int, z: int = 7) -> Waypoint:
    return Waypoint(x=x, y=y, z=z)


def tp(x: int, y: int, timestamp: int = 0, z: int = 7) -> TrailPoint:
    return TrailPoint(x=x, y=y, z=z, timestamp=timestamp)


@pytest.fixture
def clock():
    return ManualClock(start_ms=1_000)


@pytest.fixture
def settings():
    """Defaults only, ignoring any local .env file."""
    return PipelineSettings(_env_file=None)


@pytest.fixture
def l_shaped_trail():
    """Six points turning north after walking east, sampled every 500 ms."""
    coords = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (2, 3)]
    return [tp(x, y, timestamp=i * 500) for i, (x, y) in enumerate(coords)]
