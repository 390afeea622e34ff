"""
Stroke Simplifier Module

Reduces a freehand stroke to its structurally significant vertices by
dropping interior points where the path barely bends.
"""

import logging
import math
from typing import List, Sequence

from ..constants import DEFAULT_ANGLE_TOLERANCE_DEG
from ..sketch.stroke import Point

logger = logging.getLogger(__name__)


def vertex_angle(prev: Point, current: Point, nxt: Point) -> float:
    """
    Calculate the angle at `current` between the vectors to `prev` and `nxt`.

    A straight pass-through gives 180 degrees, a hairpin gives 0.

    Args:
        prev: Previous retained point
        current: Candidate point
        nxt: Next raw point

    Returns:
        Angle in degrees (0-180), or 180 if either vector has zero length
    """
    ax, ay = prev.x - current.x, prev.y - current.y
    bx, by = nxt.x - current.x, nxt.y - current.y

    len_a = math.hypot(ax, ay)
    len_b = math.hypot(bx, by)

    # Coincident points carry no direction; treat as colinear
    if len_a == 0 or len_b == 0:
        return 180.0

    cos_angle = (ax * bx + ay * by) / (len_a * len_b)
    cos_angle = max(-1.0, min(1.0, cos_angle))
    return math.degrees(math.acos(cos_angle))


def is_colinear(prev: Point, current: Point, nxt: Point,
                angle_tolerance: float = DEFAULT_ANGLE_TOLERANCE_DEG) -> bool:
    """Check if the path through `current` deviates from straight by no more than the tolerance."""
    return 180.0 - vertex_angle(prev, current, nxt) <= angle_tolerance


def _simplify_pass(points: Sequence[Point], angle_tolerance: float) -> List[Point]:
    kept = [points[0]]
    for i in range(1, len(points) - 1):
        if not is_colinear(kept[-1], points[i], points[i + 1], angle_tolerance):
            kept.append(points[i])
    kept.append(points[-1])
    return kept


def simplify(points: Sequence[Point],
             angle_tolerance: float = DEFAULT_ANGLE_TOLERANCE_DEG) -> List[Point]:
    """
    Simplify a stroke by removing near-colinear interior points.

    Each pass walks the stroke once, comparing every interior point against
    the last point kept so far and the next raw point; it is kept only if
    the path bends there by more than `angle_tolerance` degrees. The first
    and last points are always kept.

    Dropping a point changes the neighbour its predecessor is measured
    against, so passes repeat until nothing more is dropped. The result is
    a fixed point: simplifying it again returns the same points.

    Args:
        points: Raw stroke points in drawing order
        angle_tolerance: Maximum deviation from 180 degrees still treated as straight

    Returns:
        New list of retained points (input is not modified)
    """
    if len(points) <= 2:
        return list(points)

    kept = list(points)
    passes = 0
    while True:
        reduced = _simplify_pass(kept, angle_tolerance)
        passes += 1
        if len(reduced) == len(kept):
            break
        kept = reduced

    logger.debug(f"Simplified stroke: {len(points)} -> {len(kept)} points in {passes} passes")
    return kept
