"""
Scale Normalizer Module

Derives a real-world scale from one annotated dimension and rescales the
wall graph and doors from canvas pixels into real-world units.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

import numpy as np

from ..sketch.stroke import Point, Stroke
from ..text.dimension_parser import parse_dimension_value
from ..vector.door_projector import Door
from ..vector.graph_builder import WallGraph

logger = logging.getLogger(__name__)


@dataclass
class NormalizedResult:
    """Graph and doors after normalization, with the factor applied (if any)."""
    graph: WallGraph
    doors: List[Door] = field(default_factory=list)
    scale_factor: Optional[float] = None

    @property
    def is_scaled(self) -> bool:
        return self.scale_factor is not None


def reference_length_from_strokes(strokes: Sequence[Stroke]) -> float:
    """
    Measure the dimension annotation in pixels.

    Uses the larger side of the bounding box around all points of the
    dimension stroke(s).

    Args:
        strokes: Dimension strokes

    Returns:
        Reference length in pixels (0.0 if there are no points)
    """
    coords = [(p.x, p.y) for stroke in strokes for p in stroke.points]
    if not coords:
        return 0.0

    array = np.asarray(coords, dtype=float)
    extent = array.max(axis=0) - array.min(axis=0)
    return float(extent.max())


def compute_scale_factor(dimension_value: Any,
                         reference_length_pixels: Optional[float]) -> Optional[float]:
    """
    Calculate real-world units per pixel.

    Args:
        dimension_value: Real-world length the annotation represents
        reference_length_pixels: Annotation length on the canvas

    Returns:
        Scale factor, or None when either input is unusable
    """
    value = parse_dimension_value(dimension_value)
    if value is None:
        logger.debug(f"Dimension value {dimension_value!r} is not numeric")
        return None

    if reference_length_pixels is None or not reference_length_pixels > 0:
        logger.debug(f"Reference length {reference_length_pixels!r} is not positive")
        return None

    return value / float(reference_length_pixels)


def _scale_point(point: Point, factor: float) -> None:
    point.x *= factor
    point.y *= factor


def scale_graph(graph: WallGraph, factor: float) -> WallGraph:
    """Multiply every node coordinate by the factor, in place."""
    if graph.nodes:
        coords = np.array([[p.x, p.y] for p in graph.nodes], dtype=float) * factor
        for node, (x, y) in zip(graph.nodes, coords.tolist()):
            node.x, node.y = x, y
    return graph


def scale_doors(doors: Sequence[Door], factor: float) -> List[Door]:
    """
    Multiply door start/end coordinates by the factor, in place.

    Original (drawn) endpoints stay in canvas pixels.
    """
    for door in doors:
        _scale_point(door.start, factor)
        _scale_point(door.end, factor)
    return list(doors)


def normalize(graph: WallGraph, doors: Sequence[Door], dimension_value: Any,
              reference_length_pixels: Optional[float]) -> NormalizedResult:
    """
    Rescale the graph and doors into real-world units.

    This is the main entry point for scale normalization. When the
    dimension is missing or non-numeric, or the reference length is not
    positive, nothing is scaled and pixel coordinates are returned.

    Args:
        graph: Rectified wall graph
        doors: Doors projected onto the graph
        dimension_value: Real-world length of the annotation
        reference_length_pixels: Annotation length on the canvas

    Returns:
        NormalizedResult with scale_factor None if scaling was skipped
    """
    factor = compute_scale_factor(dimension_value, reference_length_pixels)
    if factor is None:
        logger.warning("No usable dimension; returning pixel coordinates")
        return NormalizedResult(graph=graph, doors=list(doors), scale_factor=None)

    scale_graph(graph, factor)
    scaled_doors = scale_doors(doors, factor)

    logger.info(
        f"Scale: {dimension_value} / {reference_length_pixels:.1f} px = {factor:.4f} units/px"
    )
    return NormalizedResult(graph=graph, doors=scaled_doors, scale_factor=factor)
