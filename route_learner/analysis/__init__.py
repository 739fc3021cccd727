"""
Trail analysis for route-learner

- TrailClusterer: farthest-point seeded clustering into representative points
- AreaSurveyor: advisory safe zone / chokepoint / danger area survey and
  exploration frontier
"""

from .clustering import Centroid, Cluster, TrailClusterer
from .area_survey import AreaSurveyor

__all__ = [
    "Centroid",
    "Cluster",
    "TrailClusterer",
    "AreaSurveyor",
]
