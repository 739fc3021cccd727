"""Pipeline settings management for route-learner."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

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
    MIN_ROUTE_POINTS,
    MIN_SAMPLE_INTERVAL_MS,
    MIN_SIMPLIFICATION_TOLERANCE,
)

# Load environment variables from .env file
load_dotenv()


class PipelineSettings(BaseSettings):
    """Route-learning settings loaded from ``ROUTE_LEARNER_*`` environment variables.

    Each orchestrator builds its own instance; there is no process-wide copy.
    """

    model_config = SettingsConfigDict(
        env_prefix="ROUTE_LEARNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Trail sampling
    sample_interval_ms: int = Field(
        default=DEFAULT_SAMPLE_INTERVAL_MS,
        ge=MIN_SAMPLE_INTERVAL_MS,
        description="Minimum milliseconds between accepted samples",
    )
    min_sample_distance: float = Field(default=DEFAULT_MIN_SAMPLE_DISTANCE, ge=1.0)
    max_trail_points: int = Field(
        default=DEFAULT_MAX_TRAIL_POINTS,
        ge=MIN_ROUTE_POINTS,
        description="Trail length that triggers thinning",
    )

    # Clustering
    min_points_per_cluster: int = Field(default=DEFAULT_MIN_POINTS_PER_CLUSTER, ge=2)
    max_clusters: int = Field(default=DEFAULT_MAX_CLUSTERS, ge=1)
    points_per_cluster: int = Field(default=DEFAULT_POINTS_PER_CLUSTER, ge=1)

    # Route shaping
    simplification_tolerance: float = Field(
        default=DEFAULT_SIMPLIFICATION_TOLERANCE, ge=MIN_SIMPLIFICATION_TOLERANCE
    )
    min_waypoint_distance: float = Field(default=DEFAULT_MIN_WAYPOINT_DISTANCE, ge=1.0)

    # Pattern learning
    frequency_threshold: int = Field(default=DEFAULT_FREQUENCY_THRESHOLD, ge=1)
    similarity_threshold: float = Field(default=DEFAULT_SIMILARITY_THRESHOLD, gt=0, le=1)
    snap_radius: int = Field(default=DEFAULT_SNAP_RADIUS, ge=0)

    # Route generation
    min_route_points: int = Field(default=MIN_ROUTE_POINTS, ge=2)
    route_name_prefix: str = Field(default=DEFAULT_ROUTE_NAME_PREFIX, min_length=1)

    # Area survey
    area_threshold: float = Field(default=DEFAULT_AREA_THRESHOLD, gt=0)
    chokepoint_pace_ms: int = Field(default=DEFAULT_CHOKEPOINT_PACE_MS, ge=0)
    hazard_radius: float = Field(default=DEFAULT_HAZARD_RADIUS, ge=0)
    exploration_radius: int = Field(default=DEFAULT_EXPLORATION_RADIUS, ge=1)

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Applied by the entry point through configure_logging",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level
