"""
Trail clustering

Groups raw trail points into ``k`` spatial clusters with deterministic
farthest-point seeding and nearest-centroid assignment, then reduces every
cluster to one representative waypoint.
"""

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence

from route_learner.config.constants import DEFAULT_MIN_POINTS_PER_CLUSTER
from route_learner.config.settings import PipelineSettings
from route_learner.utils.data_models import TrailPoint, Waypoint
from route_learner.utils.geometry import planar_distance, round_half_up


@dataclass(frozen=True)
class Centroid:
    """Arithmetic mean of a cluster's members (not necessarily a member)"""
    x: float
    y: float
    z: float


@dataclass
class Cluster:
    """Ordered, non-empty group of trail points with a running mean"""
    points: List[TrailPoint] = field(default_factory=list)
    _sum_x: float = field(default=0.0, init=False, repr=False)
    _sum_y: float = field(default=0.0, init=False, repr=False)
    _sum_z: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        members, self.points = self.points, []
        for point in members:
            self.add(point)

    def add(self, point: TrailPoint) -> None:
        self.points.append(point)
        self._sum_x += point.x
        self._sum_y += point.y
        self._sum_z += point.z

    @property
    def centroid(self) -> Centroid:
        count = len(self.points)
        if count == 0:
            raise ValueError("Empty cluster has no centroid")
        return Centroid(
            x=self._sum_x / count,
            y=self._sum_y / count,
            z=self._sum_z / count,
        )

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[TrailPoint]:
        return iter(self.points)


class TrailClusterer:
    """
    Partition a trail into spatial clusters

    Usage:
        ```python
        clusterer = TrailClusterer()
        clusters = clusterer.cluster(trail, k=3)
        waypoints = clusterer.representative_waypoints(clusters)
        ```
    """

    def __init__(self, min_points_per_cluster: int = DEFAULT_MIN_POINTS_PER_CLUSTER):
        """
        Args:
            min_points_per_cluster: Below this many points the whole trail
                becomes a single cluster
        """
        self.min_points_per_cluster = max(2, min_points_per_cluster)

    @classmethod
    def from_settings(cls, settings: PipelineSettings) -> "TrailClusterer":
        return cls(min_points_per_cluster=settings.min_points_per_cluster)

    def cluster(self, points: Sequence[TrailPoint], k: int) -> List[Cluster]:
        """
        Group ``points`` into at most ``k`` clusters

        Seeds open one singleton cluster each, in seed order. Every other
        point, in trail order, joins the cluster whose running centroid is
        nearest in the (x, y) plane; ties go to the earlier cluster.

        Args:
            points: Trail points in recording order
            k: Requested cluster count; normalized into [1, len(points)]

        Returns:
            Clusters covering every input point exactly once
        """
        if not points:
            return []

        if len(points) < self.min_points_per_cluster:
            return [Cluster(list(points))]

        k = min(max(1, k), len(points))
        seed_indices = self.select_seeds(points, k)
        clusters = [Cluster([points[index]]) for index in seed_indices]
        seeded = set(seed_indices)

        for index, point in enumerate(points):
            if index in seeded:
                continue

            nearest = 0
            min_distance = math.inf
            for cluster_index, cluster in enumerate(clusters):
                distance = planar_distance(point, cluster.centroid)
                if distance < min_distance:
                    min_distance = distance
                    nearest = cluster_index

            clusters[nearest].add(point)

        return clusters

    def select_seeds(self, points: Sequence[TrailPoint], k: int) -> List[int]:
        """
        Farthest-point seed selection

        The first point is the first seed. Each further seed is the unchosen
        point whose distance to its nearest seed is largest, the earliest
        such point on ties.

        Returns:
            Indices into ``points`` in selection order
        """
        if not points:
            return []

        seeds = [0]
        chosen = {0}
        # Distance from every point to its nearest seed so far
        nearest_seed = [planar_distance(point, points[0]) for point in points]

        while len(seeds) < min(k, len(points)):
            farthest = None
            max_min_distance = -1.0
            for index, distance in enumerate(nearest_seed):
                if index not in chosen and distance > max_min_distance:
                    max_min_distance = distance
                    farthest = index

            if farthest is None:
                break

            seeds.append(farthest)
            chosen.add(farthest)
            for index, point in enumerate(points):
                nearest_seed[index] = min(
                    nearest_seed[index], planar_distance(point, points[farthest])
                )

        return seeds

    @staticmethod
    def centroid(cluster: Cluster) -> Centroid:
        return cluster.centroid

    def representative_waypoints(self, clusters: Sequence[Cluster]) -> List[Waypoint]:
        """One rounded centroid per non-empty cluster, in cluster order."""
        representatives = []
        for cluster in clusters:
            if not len(cluster):
                continue
            center = cluster.centroid
            representatives.append(
                Waypoint(
                    x=round_half_up(center.x),
                    y=round_half_up(center.y),
                    z=round_half_up(center.z),
                )
            )
        return representatives

    def set_min_points(self, min_points: int) -> None:
        self.min_points_per_cluster = max(2, min_points)
