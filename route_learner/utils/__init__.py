from .data_models import (
    AnalysisReport,
    GeneratedRoute,
    LearnedRoute,
    RoutePattern,
    TrailPoint,
    Waypoint,
    ZoneInfo,
)
from .logging import StructuredLogger, configure_logging, get_logger
from .geometry import (
    catmull_rom,
    planar_distance,
    quantize_direction,
    round_half_up,
    segment_distance,
)
from .interfaces import (
    Clock,
    HazardSource,
    ManualClock,
    PositionSource,
    SystemClock,
    TileOracle,
    current_hazards,
    query_position,
    tile_is_walkable,
)

__all__ = [
    "AnalysisReport",
    "GeneratedRoute",
    "LearnedRoute",
    "RoutePattern",
    "TrailPoint",
    "Waypoint",
    "ZoneInfo",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
    "catmull_rom",
    "planar_distance",
    "quantize_direction",
    "round_half_up",
    "segment_distance",
    "Clock",
    "HazardSource",
    "ManualClock",
    "PositionSource",
    "SystemClock",
    "TileOracle",
    "current_hazards",
    "query_position",
    "tile_is_walkable",
]
