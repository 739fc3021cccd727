"""
Planar geometry helpers for tile coordinates

Distances ignore ``z``: every stage of the pipeline works floor-locally.
"""

import math
from typing import Any, Sequence

import numpy as np

from route_learner.config.constants import DIRECTION_OCTANTS

OCTANT_ANGLE = math.pi / 4

# Rows are powers of t (1, t, t^2, t^3), columns the control points p0..p3
CATMULL_ROM_BASIS = 0.5 * np.array(
    [
        [0.0, 2.0, 0.0, 0.0],
        [-1.0, 0.0, 1.0, 0.0],
        [2.0, -5.0, 4.0, -1.0],
        [-1.0, 3.0, -3.0, 1.0],
    ]
)


def planar_distance(a: Any, b: Any) -> float:
    """Euclidean distance between two objects with ``x``/``y`` attributes."""
    return math.hypot(a.x - b.x, a.y - b.y)


def round_half_up(value: float) -> int:
    """Round to the nearest tile, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


def segment_distance(point: Any, start: Any, end: Any) -> float:
    """
    Distance from ``point`` to the segment ``start``-``end``

    The projection is clamped to the segment, and a degenerate segment
    measures the distance to ``start``.
    """
    dx = end.x - start.x
    dy = end.y - start.y

    if dx == 0 and dy == 0:
        return math.hypot(point.x - start.x, point.y - start.y)

    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / (dx * dx + dy * dy)
    t = max(0.0, min(1.0, t))

    return math.hypot(point.x - (start.x + t * dx), point.y - (start.y + t * dy))


def catmull_rom(control_points: Sequence[Sequence[float]], t: float) -> np.ndarray:
    """
    Evaluate a uniform Catmull-Rom segment between the middle two controls

    Args:
        control_points: Four control points, each a sequence of coordinates
        t: Curve parameter in [0, 1]; 0 yields the second control point

    Returns:
        Interpolated coordinates, one per axis
    """
    controls = np.asarray(control_points, dtype=float)
    if controls.shape[0] != 4:
        raise ValueError(f"Catmull-Rom needs 4 control points, got {controls.shape[0]}")

    powers = np.array([1.0, t, t * t, t * t * t])
    return powers @ CATMULL_ROM_BASIS @ controls


def quantize_direction(dx: float, dy: float) -> int:
    """
    Map a displacement to one of eight compass octant codes

    Code is ``floor((atan2(dy, dx) + pi) / (pi / 4)) mod 8``: west is 0,
    south 2, east 4 and north 6 with y growing northwards.
    """
    sector = (math.atan2(dy, dx) + math.pi) / OCTANT_ANGLE
    # Exact compass directions land on sector boundaries
    return int(math.floor(round(sector, 9))) % DIRECTION_OCTANTS
