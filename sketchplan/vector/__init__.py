# Stroke vectorization module

from .simplifier import (
    vertex_angle,
    is_colinear,
    simplify,
)

from .graph_builder import (
    WallGraph,
    find_node,
    resolve_node,
    stroke_polylines,
    assign_nodes_greedy,
    assign_nodes_clustered,
    build_graph_greedy,
    build_graph_clustered,
    build_graph,
)

from .rectifier import (
    HORIZONTAL,
    VERTICAL,
    edge_direction,
    classify_direction,
    deduplicate_edges,
    rectify,
    unaligned_edges,
)

from .door_projector import (
    Door,
    closest_point_on_segment,
    snap_to_walls,
    project_doors,
)

__all__ = [
    # Simplifier
    "vertex_angle",
    "is_colinear",
    "simplify",
    # Graph Builder
    "WallGraph",
    "find_node",
    "resolve_node",
    "stroke_polylines",
    "assign_nodes_greedy",
    "assign_nodes_clustered",
    "build_graph_greedy",
    "build_graph_clustered",
    "build_graph",
    # Rectifier
    "HORIZONTAL",
    "VERTICAL",
    "edge_direction",
    "classify_direction",
    "deduplicate_edges",
    "rectify",
    "unaligned_edges",
    # Door Projector
    "Door",
    "closest_point_on_segment",
    "snap_to_walls",
    "project_doors",
]
