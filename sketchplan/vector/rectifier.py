"""
Axis Rectifier Module

Snaps near-horizontal and near-vertical wall edges onto the axes and
removes duplicate edges. Shared nodes are moved in place, so alignment
propagates through every edge that touches them.
"""

import logging
import math
from typing import Dict, List, Optional

from ..constants import DEFAULT_SNAP_TOLERANCE_DEG
from .graph_builder import Edge, WallGraph

logger = logging.getLogger(__name__)

HORIZONTAL = "horizontal"
VERTICAL = "vertical"


def edge_direction(graph: WallGraph, edge: Edge) -> float:
    """
    Calculate the direction of an edge in degrees, normalized to [0, 360).

    Args:
        graph: Wall graph
        edge: Pair of node indices

    Returns:
        Direction angle in degrees
    """
    start, end = graph.edge_points(edge)
    angle = math.degrees(math.atan2(end.y - start.y, end.x - start.x))
    return angle % 360.0


def angular_distance(angle1: float, angle2: float) -> float:
    """
    Calculate the smallest difference between two angles on the circle.

    Returns:
        Difference in degrees (0-180)
    """
    diff = abs(angle1 - angle2) % 360.0
    return min(diff, 360.0 - diff)


def classify_direction(angle: float,
                       snap_tolerance: float = DEFAULT_SNAP_TOLERANCE_DEG) -> Optional[str]:
    """
    Classify a direction as near-horizontal, near-vertical or neither.

    Args:
        angle: Direction in degrees
        snap_tolerance: Maximum deviation from an axis

    Returns:
        HORIZONTAL, VERTICAL or None for diagonals
    """
    if min(angular_distance(angle, 0.0), angular_distance(angle, 180.0)) <= snap_tolerance:
        return HORIZONTAL
    if min(angular_distance(angle, 90.0), angular_distance(angle, 270.0)) <= snap_tolerance:
        return VERTICAL
    return None


def snap_edge(graph: WallGraph, edge: Edge,
              snap_tolerance: float = DEFAULT_SNAP_TOLERANCE_DEG) -> Optional[str]:
    """
    Snap one edge to its axis by averaging the off-axis coordinate of its nodes.

    Args:
        graph: Wall graph (nodes modified in place)
        edge: Edge to snap
        snap_tolerance: Maximum deviation from an axis

    Returns:
        The classification applied, or None if the edge was left unchanged
    """
    orientation = classify_direction(edge_direction(graph, edge), snap_tolerance)
    start, end = graph.edge_points(edge)

    if orientation == HORIZONTAL:
        shared_y = (start.y + end.y) / 2
        start.y = shared_y
        end.y = shared_y
    elif orientation == VERTICAL:
        shared_x = (start.x + end.x) / 2
        start.x = shared_x
        end.x = shared_x

    return orientation


def deduplicate_edges(edges: List[Edge]) -> List[Edge]:
    """
    Collapse edges joining the same unordered node pair.

    The last occurrence of each pair wins, at the position of the first.

    Args:
        edges: Edges possibly containing duplicates

    Returns:
        Edges with unique unordered node pairs
    """
    unique: Dict[frozenset, Edge] = {}
    for edge in edges:
        unique[frozenset(edge)] = edge
    return list(unique.values())


def rectify(graph: WallGraph,
            snap_tolerance: float = DEFAULT_SNAP_TOLERANCE_DEG) -> WallGraph:
    """
    Rectify a wall graph in place.

    Edges are visited in order. Near-horizontal edges get a shared y, near-
    vertical edges a shared x; diagonal walls are left alone. Afterwards
    duplicate edges are collapsed.

    Args:
        graph: Wall graph built for this submission
        snap_tolerance: Maximum deviation from an axis in degrees

    Returns:
        The same graph object, with adjusted nodes and unique edges
    """
    counts = {HORIZONTAL: 0, VERTICAL: 0, None: 0}
    for edge in graph.edges:
        counts[snap_edge(graph, edge, snap_tolerance)] += 1

    before = len(graph.edges)
    graph.edges = deduplicate_edges(graph.edges)

    logger.info(
        f"Rectifier: {counts[HORIZONTAL]} horizontal, {counts[VERTICAL]} vertical, "
        f"{counts[None]} diagonal; {before} -> {len(graph.edges)} edges"
    )
    return graph


def unaligned_edges(graph: WallGraph,
                    snap_tolerance: float = DEFAULT_SNAP_TOLERANCE_DEG) -> List[Edge]:
    """
    Find near-axis edges whose endpoints are not exactly aligned.

    Later snaps can pull a shared node off an earlier edge's axis; this
    reports such edges so callers can run another pass or warn.
    """
    result = []
    for edge in graph.edges:
        orientation = classify_direction(edge_direction(graph, edge), snap_tolerance)
        start, end = graph.edge_points(edge)
        if orientation == HORIZONTAL and start.y != end.y:
            result.append(edge)
        elif orientation == VERTICAL and start.x != end.x:
            result.append(edge)
    return result
