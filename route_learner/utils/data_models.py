import math
from typing import List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Waypoint(BaseModel):
    """Spatial-only tile position used for navigation playback"""
    model_config = ConfigDict(frozen=True)

    x: int = Field(description="Tile column")
    y: int = Field(description="Tile row")
    z: int = Field(description="Floor level")

    def offset(self, dx: int, dy: int) -> "Waypoint":
        """Return the tile shifted by ``(dx, dy)`` on the same floor."""
        return Waypoint(x=self.x + dx, y=self.y + dy, z=self.z)


class TrailPoint(BaseModel):
    """Raw sampled position with the clock time it was accepted at"""
    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    z: int
    timestamp: int = Field(ge=0, description="Clock time in milliseconds")

    def to_waypoint(self) -> Waypoint:
        return Waypoint(x=self.x, y=self.y, z=self.z)


class GeneratedRoute(BaseModel):
    """Final route handed to the storage/playback consumer"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Unique route name")
    waypoints: Tuple[Waypoint, ...]
    created_at: int = Field(description="Clock time in milliseconds")

    @property
    def total_distance(self) -> float:
        """Total planar route length in tiles."""
        if len(self.waypoints) < 2:
            return 0.0

        return sum(
            math.hypot(curr.x - prev.x, curr.y - prev.y)
            for prev, curr in zip(self.waypoints, self.waypoints[1:])
        )


class LearnedRoute(BaseModel):
    """Route stored in the pattern learner's registry"""
    model_config = ConfigDict(frozen=True)

    name: str
    waypoints: Tuple[Waypoint, ...]
    recorded_at: int = Field(description="Clock time in milliseconds")
    signature: str = Field(description="Octant code per consecutive waypoint pair")
    completed: bool = Field(default=False)


class RoutePattern(BaseModel):
    """Signature that recurs at least ``frequency_threshold`` times"""
    model_config = ConfigDict(frozen=True)

    signature: str
    frequency: int = Field(ge=1)


class ZoneInfo(BaseModel):
    """Advisory description of one surveyed area of the trail"""
    kind: Literal["safe", "chokepoint", "danger"]
    center_x: float
    center_y: float
    center_z: float
    radius: float = Field(ge=0, description="Mean planar distance of members from the center")
    point_count: int = Field(ge=1)
    time_spent_ms: int = Field(ge=0)
    mean_interval_ms: float = Field(ge=0, description="Mean gap between member timestamps")
    mean_pace_ms: float = Field(ge=0, description="Mean milliseconds per tile between member samples")


class AnalysisReport(BaseModel):
    """Read-only advisory output of the area survey"""
    safe_zone_count: int = 0
    chokepoint_count: int = 0
    danger_area_count: int = 0
    advisory_messages: List[str] = Field(default_factory=list)
    zones: List[ZoneInfo] = Field(default_factory=list)
