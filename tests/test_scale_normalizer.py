#!/usr/bin/env python
"""
Scale Normalizer Tests

Tests for:
- Reference length from dimension strokes
- Scale factor computation and its fallbacks
- Rescaling of nodes and doors
- Unit formatting
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sketchplan.calibration import (
    compute_scale_factor,
    format_imperial_length,
    format_length,
    normalize,
    pixels_to_real,
    real_to_pixels,
    reference_length_from_strokes,
    scale_doors,
    scale_graph,
)
from sketchplan.constants import StrokeRole
from sketchplan.sketch import Point, make_stroke
from sketchplan.vector import Door, WallGraph


def make_graph(nodes, edges):
    return WallGraph(nodes=[Point(x, y) for x, y in nodes], edges=list(edges))


def make_door(start, end):
    return Door(
        start=Point(*start),
        end=Point(*end),
        original_start=Point(*start),
        original_end=Point(*end),
    )


class TestScaleFactor:
    """Tests for scale factor computation."""

    def test_dimension_over_reference(self):
        assert compute_scale_factor(24, 240) == pytest.approx(0.1)
        print("  [PASS] 24 / 240 px = 0.1")

    def test_dimension_text_accepted(self):
        assert compute_scale_factor("24'", 240) == pytest.approx(0.1)
        print("  [PASS] Dimension text parsed")

    def test_unusable_inputs_skip(self):
        assert compute_scale_factor(24, 0) is None
        assert compute_scale_factor(24, -5) is None
        assert compute_scale_factor(24, None) is None
        assert compute_scale_factor(None, 240) is None
        assert compute_scale_factor("abc", 240) is None
        assert compute_scale_factor(0, 240) is None
        print("  [PASS] Unusable inputs return None")

    def test_reference_length_is_longer_bbox_side(self):
        strokes = [
            make_stroke([(10, 10), (130, 15)], role=StrokeRole.DIMENSION),
            make_stroke([(130, 15), (250, 20)], role=StrokeRole.DIMENSION),
        ]
        assert reference_length_from_strokes(strokes) == 240
        vertical = [make_stroke([(0, 0), (3, 120)], role=StrokeRole.DIMENSION)]
        assert reference_length_from_strokes(vertical) == 120
        assert reference_length_from_strokes([]) == 0.0
        print("  [PASS] Reference length from bounding box")


class TestNormalize:
    """Tests for rescaling graph and doors."""

    def test_node_scaled(self):
        graph = make_graph([(50, 50), (150, 50)], [(0, 1)])
        result = normalize(graph, [], 24, 240)

        assert result.scale_factor == pytest.approx(0.1)
        assert result.is_scaled
        assert result.graph.nodes[0].x == pytest.approx(5)
        assert result.graph.nodes[0].y == pytest.approx(5)
        assert result.graph.nodes[1].x == pytest.approx(15)
        print("  [PASS] (50,50) scales to (5,5)")

    def test_doors_scaled_originals_kept(self):
        graph = make_graph([(0, 0), (200, 0)], [(0, 1)])
        door = make_door((100, 0), (140, 0))
        door.original_start = Point(100, 12)

        result = normalize(graph, [door], 24, 240)
        scaled = result.doors[0]
        assert scaled.start.x == pytest.approx(10)
        assert scaled.end.x == pytest.approx(14)
        assert (scaled.original_start.x, scaled.original_start.y) == (100, 12)
        assert (scaled.original_end.x, scaled.original_end.y) == (140, 0)
        print("  [PASS] Doors scaled, originals stay in pixels")

    def test_skip_keeps_pixels(self):
        graph = make_graph([(50, 50), (150, 50)], [(0, 1)])
        door = make_door((60, 50), (90, 50))

        result = normalize(graph, [door], 24, 0)
        assert result.scale_factor is None
        assert not result.is_scaled
        assert (graph.nodes[0].x, graph.nodes[0].y) == (50, 50)
        assert (result.doors[0].start.x, result.doors[0].start.y) == (60, 50)

        result = normalize(graph, [door], "not a number", 240)
        assert result.scale_factor is None
        assert (graph.nodes[1].x, graph.nodes[1].y) == (150, 50)
        print("  [PASS] Scaling skipped without a usable dimension")

    def test_scale_by_one_is_noop(self):
        graph = make_graph([(12.5, 7.25), (3, 4)], [(0, 1)])
        scale_graph(graph, 1)
        assert [(p.x, p.y) for p in graph.nodes] == [(12.5, 7.25), (3, 4)]
        print("  [PASS] Scaling by 1 is a no-op")

    def test_scale_linearity(self):
        once = make_graph([(12.5, 7.25), (3, 40)], [(0, 1)])
        twice = make_graph([(12.5, 7.25), (3, 40)], [(0, 1)])

        scale_graph(once, 0.5 * 3.0)
        scale_graph(scale_graph(twice, 0.5), 3.0)
        for a, b in zip(once.nodes, twice.nodes):
            assert a.x == pytest.approx(b.x)
            assert a.y == pytest.approx(b.y)

        doors_once = scale_doors([make_door((10, 20), (30, 40))], 0.2 * 7)
        doors_twice = scale_doors(scale_doors([make_door((10, 20), (30, 40))], 0.2), 7)
        assert doors_once[0].end.y == pytest.approx(doors_twice[0].end.y)
        print("  [PASS] Scaling by s then t equals scaling by s*t")


class TestUnitConverter:
    """Tests for unit conversion and formatting."""

    def test_pixels_to_real(self):
        assert pixels_to_real(100, None) == 100
        assert pixels_to_real(100, 0.1) == pytest.approx(10)
        assert real_to_pixels(10, 0.1) == pytest.approx(100)
        assert real_to_pixels(10, 0) == 0.0
        print("  [PASS] Pixel/real conversion")

    def test_format_imperial_length(self):
        assert format_imperial_length(10.5) == "10'-6\""
        assert format_imperial_length(10.0) == "10'-0\""
        assert format_imperial_length(9.999) == "10'-0\""
        assert format_imperial_length(3.3) == "3'-3.6\""
        print("  [PASS] Imperial formatting")

    def test_format_length(self):
        assert format_length(123.46, None) == "123.5 px"
        assert format_length(10.5, 0.1) == "10'-6\""
        assert format_length(10.5, 0.1, in_feet=False) == "10.50 units"
        assert format_length(10.5, None, in_feet=False) == "10.5 px"
        print("  [PASS] Length formatting")
