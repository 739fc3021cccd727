from .constants import (
    DEFAULT_AREA_THRESHOLD,
    DEFAULT_CHOKEPOINT_PACE_MS,
    DEFAULT_EXPLORATION_RADIUS,
    DEFAULT_FREQUENCY_THRESHOLD,
    DEFAULT_HAZARD_RADIUS,
    DEFAULT_MAX_CLUSTERS,
    DEFAULT_MAX_TRAIL_POINTS,
    DEFAULT_MIN_POINTS_PER_CLUSTER,
    DEFAULT_MIN_SAMPLE_DISTANCE,
    DEFAULT_MIN_WAYPOINT_DISTANCE,
    DEFAULT_POINTS_PER_CLUSTER,
    DEFAULT_ROUTE_NAME_PREFIX,
    DEFAULT_SAMPLE_INTERVAL_MS,
    DEFAULT_SIMILARITY_THRESHOLD,
    DEFAULT_SIMPLIFICATION_TOLERANCE,
    DEFAULT_SNAP_RADIUS,
    DIRECTION_OCTANTS,
    FRONTIER_NEIGHBOURHOOD,
    MIN_ROUTE_POINTS,
    MIN_SAMPLE_INTERVAL_MS,
    MIN_SIMPLIFICATION_TOLERANCE,
    MIN_SURVEY_POINTS,
    SMOOTHING_STEPS,
)
from .settings import PipelineSettings

__all__ = [
    "DEFAULT_AREA_THRESHOLD",
    "DEFAULT_CHOKEPOINT_PACE_MS",
    "DEFAULT_EXPLORATION_RADIUS",
    "DEFAULT_FREQUENCY_THRESHOLD",
    "DEFAULT_HAZARD_RADIUS",
    "DEFAULT_MAX_CLUSTERS",
    "DEFAULT_MAX_TRAIL_POINTS",
    "DEFAULT_MIN_POINTS_PER_CLUSTER",
    "DEFAULT_MIN_SAMPLE_DISTANCE",
    "DEFAULT_MIN_WAYPOINT_DISTANCE",
    "DEFAULT_POINTS_PER_CLUSTER",
    "DEFAULT_ROUTE_NAME_PREFIX",
    "DEFAULT_SAMPLE_INTERVAL_MS",
    "DEFAULT_SIMILARITY_THRESHOLD",
    "DEFAULT_SIMPLIFICATION_TOLERANCE",
    "DEFAULT_SNAP_RADIUS",
    "DIRECTION_OCTANTS",
    "FRONTIER_NEIGHBOURHOOD",
    "MIN_ROUTE_POINTS",
    "MIN_SAMPLE_INTERVAL_MS",
    "MIN_SIMPLIFICATION_TOLERANCE",
    "MIN_SURVEY_POINTS",
    "SMOOTHING_STEPS",
    "PipelineSettings",
]
