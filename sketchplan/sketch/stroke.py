"""
Stroke Data Structures Module

Defines the Point and Stroke types shared by every stage of the engine.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..constants import MIN_STROKE_POINTS, StrokeRole

logger = logging.getLogger(__name__)


class StrokeFormatError(ValueError):
    """Raised when stroke data violates the input contract (e.g. non-numeric coordinates)."""
    pass


@dataclass
class Point:
    """A 2D point in canvas pixels (or real-world units after scaling)."""
    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def copy(self) -> "Point":
        return Point(self.x, self.y)

    def to_dict(self, decimals: Optional[int] = None) -> Dict[str, float]:
        """Convert point to {"x", "y"} dictionary for JSON serialization."""
        if decimals is None:
            return {"x": self.x, "y": self.y}
        return {"x": round(self.x, decimals), "y": round(self.y, decimals)}


@dataclass
class Stroke:
    """
    One continuous pen gesture.

    The role (wall, door, dimension) is assigned by the drawing surface,
    usually from the pen color. The engine trusts it.
    """
    points: List[Point] = field(default_factory=list)
    role: str = StrokeRole.WALL
    color: Optional[str] = None

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_segment(self) -> bool:
        """True if the stroke has enough points to form at least one segment."""
        return len(self.points) >= MIN_STROKE_POINTS

    @property
    def first(self) -> Optional[Point]:
        return self.points[0] if self.points else None

    @property
    def last(self) -> Optional[Point]:
        return self.points[-1] if self.points else None


def _coerce_number(value: Any, axis: str) -> float:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool):
        raise StrokeFormatError(f"Non-numeric {axis} coordinate: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise StrokeFormatError(f"Non-numeric {axis} coordinate: {value!r}")
    if math.isnan(number) or math.isinf(number):
        raise StrokeFormatError(f"Non-finite {axis} coordinate: {value!r}")
    return number


def to_point(raw: Any) -> Point:
    """
    Convert a raw point to a Point.

    Accepts Point, {"x": .., "y": ..} dictionaries and (x, y) sequences.

    Args:
        raw: Raw point value

    Returns:
        Point object

    Raises:
        StrokeFormatError: If the value is not a point or has non-numeric coordinates
    """
    if isinstance(raw, Point):
        return raw.copy()

    if isinstance(raw, dict):
        if "x" not in raw or "y" not in raw:
            raise StrokeFormatError(f"Point is missing x or y: {raw!r}")
        return Point(_coerce_number(raw["x"], "x"), _coerce_number(raw["y"], "y"))

    if isinstance(raw, (list, tuple)) and len(raw) >= 2:
        return Point(_coerce_number(raw[0], "x"), _coerce_number(raw[1], "y"))

    raise StrokeFormatError(f"Cannot interpret {raw!r} as a point")


def to_points(raw_points: Optional[Sequence[Any]]) -> List[Point]:
    """Convert a sequence of raw points to a list of Points."""
    if not raw_points:
        return []
    return [to_point(p) for p in raw_points]


def make_stroke(raw_points: Optional[Sequence[Any]], role: str = StrokeRole.WALL,
                color: Optional[str] = None) -> Stroke:
    """Build a Stroke from raw points, validating the coordinates."""
    return Stroke(points=to_points(raw_points), role=role, color=color)


def bounding_box(points: Sequence[Point]) -> Optional[Tuple[float, float, float, float]]:
    """
    Calculate the bounding box of a set of points.

    Returns:
        (x0, y0, x1, y1) or None for an empty input
    """
    if not points:
        return None
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return (min(xs), min(ys), max(xs), max(ys))
