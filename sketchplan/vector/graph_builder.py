"""
Graph Builder Module

Converts simplified wall strokes into a planar wall graph: deduplicated
nodes joined by edges. Endpoints drawn close together collapse into a
shared node so that walls which touch on the canvas share a vertex.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..constants import (
    DEFAULT_ANGLE_TOLERANCE_DEG,
    DEFAULT_MERGE_DISTANCE_PX,
    MergeStrategy,
)
from ..sketch.stroke import Point, Stroke
from .simplifier import simplify

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]


@dataclass
class WallGraph:
    """
    Wall graph built from one submission.

    Nodes are referenced by index only; edges are pairs of node indices.
    """
    nodes: List[Point] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def edge_points(self, edge: Edge) -> Tuple[Point, Point]:
        """Get the endpoint coordinates of an edge."""
        i, j = edge
        return self.nodes[i], self.nodes[j]

    def edge_length(self, edge: Edge) -> float:
        start, end = self.edge_points(edge)
        return start.distance_to(end)

    def total_length(self) -> float:
        """Sum of all edge lengths."""
        return sum(self.edge_length(e) for e in self.edges)

    def degree(self, node_index: int) -> int:
        """Number of edges touching a node."""
        return sum(1 for i, j in self.edges if node_index in (i, j))

    def copy(self) -> "WallGraph":
        return WallGraph(nodes=[p.copy() for p in self.nodes], edges=list(self.edges))


def find_node(nodes: Sequence[Point], point: Point, merge_distance: float) -> Optional[int]:
    """
    Find the first existing node within merge distance of a point.

    Args:
        nodes: Existing nodes
        point: Candidate point
        merge_distance: Maximum distance to reuse a node

    Returns:
        Node index or None
    """
    for index, node in enumerate(nodes):
        if node.distance_to(point) <= merge_distance:
            return index
    return None


def resolve_node(nodes: List[Point], point: Point, merge_distance: float) -> int:
    """
    Get the index of the node for a point, appending a new node if none is close.

    The first point seen anchors the node; later nearby points do not move it.
    """
    index = find_node(nodes, point, merge_distance)
    if index is None:
        nodes.append(point.copy())
        index = len(nodes) - 1
    return index


def stroke_polylines(strokes: Sequence[Stroke],
                     angle_tolerance: float = DEFAULT_ANGLE_TOLERANCE_DEG) -> List[List[Point]]:
    """
    Simplify each stroke, dropping those that cannot form a segment.

    Args:
        strokes: Wall strokes
        angle_tolerance: Simplification tolerance in degrees

    Returns:
        List of simplified polylines with at least two points
    """
    polylines = []
    for index, stroke in enumerate(strokes):
        if not stroke.is_segment:
            logger.debug(f"Skipping stroke {index}: {len(stroke)} points")
            continue
        polylines.append(simplify(stroke.points, angle_tolerance))
    return polylines


def _edges_from_assignment(polylines: Sequence[Sequence[Point]],
                           point_nodes: Sequence[int]) -> Tuple[List[Edge], int]:
    # point_nodes is flat, in the same order as the polyline vertices
    edges = []
    self_loops = 0
    offset = 0
    for points in polylines:
        for k in range(len(points) - 1):
            i, j = point_nodes[offset + k], point_nodes[offset + k + 1]
            if i == j:
                self_loops += 1
                continue
            edges.append((i, j))
        offset += len(points)
    return edges, self_loops


def assign_nodes_greedy(polylines: Sequence[Sequence[Point]],
                        merge_distance: float) -> Tuple[List[Point], List[int]]:
    """
    Resolve every polyline vertex to a node, reusing the first nearby node.

    Order-dependent: the first point seen anchors each node, so two points
    within merge distance of each other can still land on different nodes
    when one of them was captured by an earlier anchor.

    Returns:
        Tuple of (nodes, node index for each vertex in stroke order)
    """
    nodes: List[Point] = []
    point_nodes = [
        resolve_node(nodes, p, merge_distance)
        for points in polylines
        for p in points
    ]
    return nodes, point_nodes


def build_graph_greedy(polylines: Sequence[Sequence[Point]], merge_distance: float) -> WallGraph:
    """
    Build a graph by greedily merging each endpoint into the first nearby node.

    Args:
        polylines: Simplified strokes
        merge_distance: Endpoint merge distance in pixels

    Returns:
        WallGraph with edges in stroke order (duplicates possible)
    """
    nodes, point_nodes = assign_nodes_greedy(polylines, merge_distance)
    edges, self_loops = _edges_from_assignment(polylines, point_nodes)

    if self_loops:
        logger.debug(f"Discarded {self_loops} self-loop edges")
    return WallGraph(nodes=nodes, edges=edges)


class _UnionFind:
    def __init__(self, size: int):
        self.parent = list(range(size))

    def find(self, item: int) -> int:
        root = item
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[item] != root:
            self.parent[item], item = root, self.parent[item]
        return root

    def union(self, a: int, b: int) -> None:
        root_a, root_b = self.find(a), self.find(b)
        if root_a != root_b:
            # Keep the earlier point as root so cluster order follows drawing order
            if root_b < root_a:
                root_a, root_b = root_b, root_a
            self.parent[root_b] = root_a


def assign_nodes_clustered(polylines: Sequence[Sequence[Point]],
                           merge_distance: float) -> Tuple[List[Point], List[int]]:
    """
    Resolve every polyline vertex to a node by clustering close points.

    Every pair of vertices within merge distance is joined (transitively)
    into one cluster, so any two such points always share a node. Each
    cluster becomes a node at the centroid of its members; nodes are
    numbered by first appearance.

    Returns:
        Tuple of (nodes, node index for each vertex in stroke order)
    """
    raw_points = [p for points in polylines for p in points]
    if not raw_points:
        return [], []

    coords = np.array([[p.x, p.y] for p in raw_points], dtype=float)
    diffs = coords[:, None, :] - coords[None, :, :]
    distances = np.hypot(diffs[..., 0], diffs[..., 1])
    close_i, close_j = np.nonzero(np.triu(distances <= merge_distance, k=1))

    clusters = _UnionFind(len(raw_points))
    for a, b in zip(close_i.tolist(), close_j.tolist()):
        clusters.union(a, b)

    node_of_root: Dict[int, int] = {}
    members: List[List[int]] = []
    point_nodes: List[int] = []
    for index in range(len(raw_points)):
        root = clusters.find(index)
        if root not in node_of_root:
            node_of_root[root] = len(members)
            members.append([])
        members[node_of_root[root]].append(index)
        point_nodes.append(node_of_root[root])

    nodes = []
    for member_indices in members:
        centroid = coords[member_indices].mean(axis=0)
        nodes.append(Point(float(centroid[0]), float(centroid[1])))
    return nodes, point_nodes


def build_graph_clustered(polylines: Sequence[Sequence[Point]], merge_distance: float) -> WallGraph:
    """
    Build a graph by clustering all pairwise-close points, independent of order.

    Args:
        polylines: Simplified strokes
        merge_distance: Endpoint merge distance in pixels

    Returns:
        WallGraph with edges in stroke order (duplicates possible)
    """
    nodes, point_nodes = assign_nodes_clustered(polylines, merge_distance)
    edges, self_loops = _edges_from_assignment(polylines, point_nodes)

    if self_loops:
        logger.debug(f"Discarded {self_loops} self-loop edges")
    return WallGraph(nodes=nodes, edges=edges)


def build_graph(strokes: Sequence[Stroke],
                merge_distance: float = DEFAULT_MERGE_DISTANCE_PX,
                angle_tolerance: float = DEFAULT_ANGLE_TOLERANCE_DEG,
                strategy: str = MergeStrategy.GREEDY) -> WallGraph:
    """
    Build a wall graph from wall strokes.

    This is the main entry point for graph building. Each stroke is
    simplified, then consecutive simplified points become candidate edges
    whose endpoints are resolved to shared nodes.

    Args:
        strokes: Wall strokes (raw, not yet simplified)
        merge_distance: Points within this distance share a node
        angle_tolerance: Simplification tolerance in degrees
        strategy: MergeStrategy.GREEDY (default) or MergeStrategy.CLUSTER

    Returns:
        WallGraph (edges not yet deduplicated)

    Raises:
        ValueError: If the strategy is unknown
    """
    polylines = stroke_polylines(strokes, angle_tolerance)

    if strategy == MergeStrategy.GREEDY:
        graph = build_graph_greedy(polylines, merge_distance)
    elif strategy == MergeStrategy.CLUSTER:
        graph = build_graph_clustered(polylines, merge_distance)
    else:
        raise ValueError(f"Unknown merge strategy: {strategy}")

    logger.info(
        f"Graph builder ({strategy}): {len(strokes)} strokes -> "
        f"{graph.node_count} nodes, {graph.edge_count} edges"
    )
    return graph
