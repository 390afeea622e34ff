#!/usr/bin/env python
"""
Graph Builder Tests

Tests for:
- Node merging within merge distance
- Self-loop removal
- Skipping of empty/degenerate strokes
- Greedy vs cluster merge strategies
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sketchplan.constants import MergeStrategy
from sketchplan.sketch import Point, Stroke, make_stroke
from sketchplan.vector import (
    WallGraph,
    assign_nodes_clustered,
    assign_nodes_greedy,
    build_graph,
    stroke_polylines,
)


def node_coords(graph):
    return [(p.x, p.y) for p in graph.nodes]


def jittered_square():
    corners = [(0, 0), (200, 0), (200, 200), (0, 200)]
    jitter = [(0, 0), (6, -4), (-5, 7), (3, 3)]
    strokes = []
    for k in range(4):
        (ax, ay), (bx, by) = corners[k], corners[(k + 1) % 4]
        (jax, jay), (jbx, jby) = jitter[k], jitter[(k + 1) % 4]
        strokes.append(make_stroke([(ax + jax, ay + jay), (bx - jby, by + jbx)]))
    return strokes


def drifting_strokes():
    return [
        make_stroke([(0, 0), (0, 200)]),
        make_stroke([(20, 0), (20, 300)]),
        make_stroke([(40, 0), (40, 500)]),
    ]


def assert_close_points_share_node(raw, point_nodes, merge_distance):
    for a, (p, node_p) in enumerate(zip(raw, point_nodes)):
        for q, node_q in zip(raw[a + 1:], point_nodes[a + 1:]):
            if p.distance_to(q) <= merge_distance:
                assert node_p == node_q, f"{p} and {q} split across nodes"


class TestGreedyMerge:
    """Tests for the default greedy node merge."""

    def test_nearby_endpoints_share_node(self):
        """(100,100) and (110,105) are ~11.2 px apart, within 25."""
        strokes = [
            make_stroke([(0, 0), (100, 100)]),
            make_stroke([(110, 105), (200, 105)]),
        ]
        graph = build_graph(strokes, merge_distance=25)

        assert graph.node_count == 3
        assert graph.edges == [(0, 1), (1, 2)]
        # The first-seen point anchors the node
        assert node_coords(graph)[1] == (100, 100)
        print("  [PASS] Nearby endpoints merged")

    def test_distant_endpoints_stay_separate(self):
        strokes = [
            make_stroke([(0, 0), (100, 0)]),
            make_stroke([(150, 0), (250, 0)]),
        ]
        graph = build_graph(strokes, merge_distance=25)
        assert graph.node_count == 4
        assert graph.edges == [(0, 1), (2, 3)]
        print("  [PASS] Distant endpoints separate")

    def test_self_loop_discarded(self):
        """A stroke shorter than the merge distance collapses to one node."""
        graph = build_graph([make_stroke([(0, 0), (10, 0)])], merge_distance=25)
        assert graph.node_count == 1
        assert graph.edges == []
        print("  [PASS] Self-loop discarded")

    def test_closed_rectangle(self):
        stroke = make_stroke([(0, 0), (100, 0), (100, 100), (0, 100), (3, 2)])
        graph = build_graph([stroke], merge_distance=25)

        assert graph.node_count == 4
        assert graph.edges == [(0, 1), (1, 2), (2, 3), (3, 0)]
        print("  [PASS] Closed stroke shares its start node")

    def test_duplicates_kept_before_rectification(self):
        strokes = [make_stroke([(0, 0), (100, 0)]), make_stroke([(0, 0), (100, 0)])]
        graph = build_graph(strokes, merge_distance=25)
        assert graph.edges == [(0, 1), (0, 1)]
        print("  [PASS] Duplicate edges kept at this stage")

    def test_degenerate_strokes_skipped(self):
        strokes = [
            Stroke(points=[]),
            make_stroke([(5, 5)]),
            make_stroke([(0, 0), (50, 0), (100, 0)]),
        ]
        graph = build_graph(strokes, merge_distance=25)
        assert node_coords(graph) == [(0, 0), (100, 0)]
        assert graph.edges == [(0, 1)]
        print("  [PASS] Empty and single-point strokes skipped")

    def test_strokes_are_simplified(self):
        stroke = make_stroke([(0, 0), (50, 0), (100, 0), (100, 50), (100, 100)])
        graph = build_graph([stroke], merge_distance=10)
        assert node_coords(graph) == [(0, 0), (100, 0), (100, 100)]
        print("  [PASS] Interior colinear points not turned into nodes")

    def test_jittered_corners_share_nodes(self):
        """Each raw corner point lands on the node within merge distance of it."""
        polylines = stroke_polylines(jittered_square())
        nodes, point_nodes = assign_nodes_greedy(polylines, 25)
        raw = [p for points in polylines for p in points]

        assert len(nodes) == 4
        for p, index in zip(raw, point_nodes):
            assert nodes[index].distance_to(p) <= 25
        assert_close_points_share_node(raw, point_nodes, 25)
        print("  [PASS] Jittered corners merged")

    def test_greedy_chain_drift(self):
        """
        (20,0) is captured by the (0,0) anchor, so (40,0), 20 px from
        (20,0) but 40 px from the anchor, starts a node of its own.
        """
        strokes = drifting_strokes()
        nodes, point_nodes = assign_nodes_greedy(stroke_polylines(strokes), 25)
        assert point_nodes == [0, 1, 0, 2, 3, 4]

        graph = build_graph(strokes, merge_distance=25)
        assert node_coords(graph) == [(0, 0), (0, 200), (20, 300), (40, 0), (40, 500)]
        assert graph.edges == [(0, 1), (0, 2), (3, 4)]
        print("  [PASS] Greedy merge drifts with drawing order")

    def test_no_self_loops(self):
        strokes = [
            make_stroke([(0, 0), (5, 5), (200, 0), (204, 3), (200, 200)]),
            make_stroke([(198, 199), (0, 200), (2, 1)]),
        ]
        graph = build_graph(strokes, merge_distance=25)
        assert graph.edges
        assert all(i != j for i, j in graph.edges)
        print("  [PASS] No self-loops")


class TestClusterMerge:
    """Tests for order-independent cluster merging."""

    def test_cluster_uses_centroid(self):
        strokes = [
            make_stroke([(0, 0), (100, 0)]),
            make_stroke([(110, 0), (200, 0)]),
        ]
        graph = build_graph(strokes, merge_distance=25, strategy=MergeStrategy.CLUSTER)

        assert node_coords(graph) == [(0, 0), (105, 0), (200, 0)]
        assert graph.edges == [(0, 1), (1, 2)]
        print("  [PASS] Cluster node at centroid")

    def test_cluster_is_order_independent(self):
        a = make_stroke([(0, 0), (100, 0)])
        b = make_stroke([(110, 0), (200, 0)])
        forward = build_graph([a, b], merge_distance=25, strategy=MergeStrategy.CLUSTER)
        backward = build_graph([b, a], merge_distance=25, strategy=MergeStrategy.CLUSTER)

        assert sorted(node_coords(forward)) == sorted(node_coords(backward))
        print("  [PASS] Cluster result independent of stroke order")

    def test_cluster_chains_transitively(self):
        """A-B and B-C close but A-C far: all three still merge."""
        strokes = [
            make_stroke([(0, 0), (0, 100)]),
            make_stroke([(20, 0), (20, 300)]),
            make_stroke([(40, 0), (40, 500)]),
        ]
        graph = build_graph(strokes, merge_distance=25, strategy=MergeStrategy.CLUSTER)
        assert (20, 0) in node_coords(graph)
        assert graph.node_count == 4
        print("  [PASS] Transitive clustering")

    def test_close_points_always_share_node(self):
        for strokes in (drifting_strokes(), jittered_square()):
            polylines = stroke_polylines(strokes)
            nodes, point_nodes = assign_nodes_clustered(polylines, 25)
            raw = [p for points in polylines for p in points]
            assert_close_points_share_node(raw, point_nodes, 25)

        nodes, point_nodes = assign_nodes_clustered(stroke_polylines(drifting_strokes()), 25)
        assert point_nodes == [0, 1, 0, 2, 0, 3]
        assert (nodes[0].x, nodes[0].y) == (20, 0)
        print("  [PASS] Every pair within merge distance shares a node")

    def test_cluster_empty_input(self):
        graph = build_graph([], strategy=MergeStrategy.CLUSTER)
        assert graph.nodes == [] and graph.edges == []
        print("  [PASS] Empty input")

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValueError):
            build_graph([make_stroke([(0, 0), (100, 0)])], strategy="nearest")
        print("  [PASS] Unknown strategy rejected")


class TestWallGraph:
    """Tests for WallGraph helpers."""

    def test_lengths_and_degree(self):
        graph = WallGraph(
            nodes=[Point(0, 0), Point(30, 0), Point(30, 40)],
            edges=[(0, 1), (1, 2)],
        )
        assert graph.edge_length((0, 1)) == 30
        assert graph.total_length() == 70
        assert graph.degree(1) == 2
        assert graph.degree(0) == 1
        print("  [PASS] Lengths and degree")

    def test_copy_is_independent(self):
        graph = WallGraph(nodes=[Point(0, 0), Point(1, 1)], edges=[(0, 1)])
        clone = graph.copy()
        clone.nodes[0].x = 99
        clone.edges.append((1, 0))
        assert graph.nodes[0].x == 0
        assert graph.edges == [(0, 1)]
        print("  [PASS] Copy independent")
