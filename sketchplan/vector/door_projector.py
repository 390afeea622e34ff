"""
Door Projector Module

Snaps door strokes onto the wall graph. A door is a single straight
opening: only the first and last point of its stroke matter, and each is
moved to the closest point on the nearest wall segment.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from shapely.geometry import LineString, Point as ShapelyPoint

from ..constants import DEFAULT_MAX_SNAP_DISTANCE_PX
from ..sketch.stroke import Point, Stroke
from .graph_builder import WallGraph

logger = logging.getLogger(__name__)


@dataclass
class Door:
    """A door opening snapped onto the walls, keeping its drawn endpoints."""
    start: Point
    end: Point
    original_start: Point
    original_end: Point
    start_snapped: bool = True
    end_snapped: bool = True

    @property
    def original(self) -> Tuple[Point, Point]:
        return (self.original_start, self.original_end)

    @property
    def width(self) -> float:
        """Opening width in the door's current units."""
        return self.start.distance_to(self.end)

    def to_dict(self, include_original: bool = True,
                decimals: Optional[int] = None) -> Dict[str, Any]:
        """Convert door to dictionary for JSON serialization."""
        data = {
            "start": self.start.to_dict(decimals),
            "end": self.end.to_dict(decimals),
        }
        if include_original:
            data["original"] = {
                "start": self.original_start.to_dict(decimals),
                "end": self.original_end.to_dict(decimals),
            }
        return data


def closest_point_on_segment(point: Point, seg_start: Point,
                             seg_end: Point) -> Tuple[Point, float]:
    """
    Find the closest point on a finite segment.

    The projection is clamped to the segment, not the infinite line. A
    zero-length segment falls back to its single point.

    Args:
        point: Point to project
        seg_start: Segment start
        seg_end: Segment end

    Returns:
        Tuple of (closest point, distance)
    """
    if seg_start.distance_to(seg_end) == 0:
        return seg_start.copy(), point.distance_to(seg_start)

    line = LineString([seg_start.as_tuple(), seg_end.as_tuple()])
    target = ShapelyPoint(point.x, point.y)
    projected = line.interpolate(line.project(target))
    closest = Point(float(projected.x), float(projected.y))
    return closest, point.distance_to(closest)


def snap_to_walls(point: Point, graph: WallGraph) -> Optional[Tuple[Point, float]]:
    """
    Snap a point onto the nearest wall edge.

    Args:
        point: Point to snap
        graph: Rectified wall graph

    Returns:
        Tuple of (snapped point, distance), or None if the graph has no edges
    """
    best: Optional[Tuple[Point, float]] = None
    for edge in graph.edges:
        seg_start, seg_end = graph.edge_points(edge)
        candidate = closest_point_on_segment(point, seg_start, seg_end)
        if best is None or candidate[1] < best[1]:
            best = candidate
    return best


def _snap_endpoint(point: Point, graph: WallGraph,
                   max_snap_distance: Optional[float]) -> Tuple[Point, bool]:
    result = snap_to_walls(point, graph)
    if result is None:
        return point.copy(), False

    snapped, distance = result
    if max_snap_distance is not None and distance > max_snap_distance:
        logger.warning(
            f"Door endpoint ({point.x:.1f}, {point.y:.1f}) is {distance:.1f} px "
            f"from the nearest wall (max {max_snap_distance}), left unsnapped"
        )
        return point.copy(), False
    return snapped, True


def project_doors(door_strokes: Sequence[Stroke], graph: WallGraph,
                  max_snap_distance: Optional[float] = DEFAULT_MAX_SNAP_DISTANCE_PX) -> List[Door]:
    """
    Project door strokes onto the wall graph.

    This is the main entry point for door snapping.

    Args:
        door_strokes: Strokes tagged as doors
        graph: Rectified wall graph
        max_snap_distance: If set, endpoints farther than this from every
            wall keep their drawn position

    Returns:
        One Door per door stroke with at least two points
    """
    doors = []
    for index, stroke in enumerate(door_strokes):
        if not stroke.is_segment:
            logger.debug(f"Skipping door stroke {index}: {len(stroke)} points")
            continue

        first, last = stroke.first, stroke.last
        start, start_snapped = _snap_endpoint(first, graph, max_snap_distance)
        end, end_snapped = _snap_endpoint(last, graph, max_snap_distance)

        doors.append(Door(
            start=start,
            end=end,
            original_start=first.copy(),
            original_end=last.copy(),
            start_snapped=start_snapped,
            end_snapped=end_snapped,
        ))

    if doors and not graph.edges:
        logger.warning("No walls to snap doors onto; doors keep their drawn positions")

    logger.info(f"Door projector: {len(door_strokes)} strokes -> {len(doors)} doors")
    return doors
