"""Project-wide constants for route-learner configuration."""

from typing import Final

# Trail sampling
DEFAULT_SAMPLE_INTERVAL_MS: Final[int] = 500
MIN_SAMPLE_INTERVAL_MS: Final[int] = 100
DEFAULT_MIN_SAMPLE_DISTANCE: Final[float] = 1.0  # tiles
DEFAULT_MAX_TRAIL_POINTS: Final[int] = 2000

# Clustering
DEFAULT_MIN_POINTS_PER_CLUSTER: Final[int] = 3
DEFAULT_MAX_CLUSTERS: Final[int] = 10
DEFAULT_POINTS_PER_CLUSTER: Final[int] = 5

# Route shaping
DEFAULT_SIMPLIFICATION_TOLERANCE: Final[float] = 1.0  # tiles
MIN_SIMPLIFICATION_TOLERANCE: Final[float] = 0.5
DEFAULT_MIN_WAYPOINT_DISTANCE: Final[float] = 2.0  # tiles
SMOOTHING_STEPS: Final[tuple] = (0.0, 0.5)

# Pattern learning
DEFAULT_FREQUENCY_THRESHOLD: Final[int] = 2
DEFAULT_SIMILARITY_THRESHOLD: Final[float] = 0.8
DEFAULT_SNAP_RADIUS: Final[int] = 5
DIRECTION_OCTANTS: Final[int] = 8

# Route generation
MIN_ROUTE_POINTS: Final[int] = 5
DEFAULT_ROUTE_NAME_PREFIX: Final[str] = "AutoRoute"

# Area survey
DEFAULT_AREA_THRESHOLD: Final[float] = 10.0  # tiles
DEFAULT_CHOKEPOINT_PACE_MS: Final[int] = 2000  # ms per tile moved
DEFAULT_HAZARD_RADIUS: Final[float] = 10.0  # tiles
DEFAULT_EXPLORATION_RADIUS: Final[int] = 30
FRONTIER_NEIGHBOURHOOD: Final[int] = 2
MIN_SURVEY_POINTS: Final[int] = 3
