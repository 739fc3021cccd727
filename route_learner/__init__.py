"""
route-learner: learn walkable routes from an agent's movement trail.

Record a trail with ``RouteGenerator.tick``, then ``stop_recording`` clusters,
simplifies, smooths and validates it into a short waypoint route and learns
its directional signature for later prediction.
"""

from route_learner.config import PipelineSettings
from route_learner.data_collection.route_generator import (
    InsufficientDataError,
    RecorderState,
    RouteGenerator,
)
from route_learner.data_collection.trail_sampler import TrailSampler
from route_learner.analysis import AreaSurveyor, Cluster, TrailClusterer
from route_learner.learning import PatternLearner
from route_learner.routing import RouteShaper
from route_learner.utils.data_models import (
    AnalysisReport,
    GeneratedRoute,
    LearnedRoute,
    RoutePattern,
    TrailPoint,
    Waypoint,
    ZoneInfo,
)

__version__ = "0.1.0"

__all__ = [
    "PipelineSettings",
    "InsufficientDataError",
    "RecorderState",
    "RouteGenerator",
    "TrailSampler",
    "AreaSurveyor",
    "Cluster",
    "TrailClusterer",
    "PatternLearner",
    "RouteShaper",
    "AnalysisReport",
    "GeneratedRoute",
    "LearnedRoute",
    "RoutePattern",
    "TrailPoint",
    "Waypoint",
    "ZoneInfo",
]
