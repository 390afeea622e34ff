"""
Pipeline Orchestration Module

Runs the full stroke-to-graph workflow for one submission:
strokes -> simplified graph -> rectified graph -> doors -> scaled output.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import EngineConfig, load_settings, config_from_settings
from .calibration.scale_normalizer import normalize, reference_length_from_strokes
from .calibration.unit_converter import format_length
from .output.json_writer import build_payload, generate_json_filename, write_payload_json
from .sketch.reader import Sketch, read_sketch
from .text.recognizer import RecognizedValue, Recognizer, RoomLabel, StaticRecognizer
from .vector.door_projector import Door, project_doors
from .vector.graph_builder import WallGraph, build_graph
from .vector.rectifier import rectify, unaligned_edges

logger = logging.getLogger(__name__)


@dataclass
class SketchResult:
    """Result from vectorizing one sketch."""
    graph: WallGraph
    doors: List[Door]
    rooms: List[RoomLabel] = field(default_factory=list)
    scale_factor: Optional[float] = None
    dimension: Optional[RecognizedValue] = None
    reference_length_pixels: float = 0.0
    warnings: List[str] = field(default_factory=list)
    processing_time: float = 0.0
    config: EngineConfig = field(default_factory=EngineConfig)

    @property
    def units(self) -> str:
        if self.scale_factor is None:
            return "pixels"
        return "feet" if self.dimension.in_feet else "units"

    def wall_lengths(self) -> List[float]:
        """Length of every wall, in output units."""
        return [self.graph.edge_length(e) for e in self.graph.edges]

    def scale_info(self) -> Dict[str, Any]:
        return {
            "scale_factor": self.scale_factor,
            "units": self.units,
            "dimension_value": self.dimension.value if self.dimension else None,
            "dimension_text": self.dimension.text if self.dimension else None,
            "reference_length_pixels": self.reference_length_pixels,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to the JSON payload for the downstream consumer."""
        return build_payload(
            self.graph,
            self.doors,
            rooms=self.rooms,
            scale=self.scale_info(),
            include_original=self.config.include_original,
            decimals=self.config.coordinate_decimals,
        )


def _scale_rooms(rooms: List[RoomLabel], factor: Optional[float]) -> List[RoomLabel]:
    if factor is None:
        return list(rooms)
    return [RoomLabel(r.text, r.center_x * factor, r.center_y * factor) for r in rooms]


def vectorize_sketch(sketch: Sketch, config: Optional[EngineConfig] = None,
                     recognizer: Optional[Recognizer] = None) -> SketchResult:
    """
    Vectorize one sketch.

    Args:
        sketch: Classified strokes plus any dimension/room readings
        config: Engine configuration (defaults if None)
        recognizer: Source of the dimension reading and room labels;
            falls back to the readings stored on the sketch

    Returns:
        SketchResult with the final graph, doors, rooms and scale
    """
    start_time = time.time()
    config = config or EngineConfig()
    config.validate()
    warnings = []

    # Walls
    graph = build_graph(
        sketch.wall_strokes,
        merge_distance=config.merge_distance,
        angle_tolerance=config.angle_tolerance,
        strategy=config.merge_strategy,
    )
    if not graph.edges:
        warnings.append("No wall segments found in sketch")

    rectify(graph, config.snap_tolerance)
    leftover = unaligned_edges(graph, config.snap_tolerance)
    if leftover:
        warnings.append(f"{len(leftover)} near-axis walls left unaligned by shared nodes")

    # Doors
    doors = project_doors(sketch.door_strokes, graph, config.max_snap_distance)
    unsnapped = sum(1 for d in doors if not (d.start_snapped and d.end_snapped))
    if unsnapped:
        warnings.append(f"{unsnapped} doors have endpoints not snapped to a wall")

    # Scale
    dimension = recognizer.recognize(sketch) if recognizer else sketch.dimension
    reference_length = reference_length_from_strokes(sketch.dimension_strokes)

    if dimension is None:
        warnings.append("No dimension recognized; coordinates are in pixels")
        normalized = normalize(graph, doors, None, reference_length)
    elif not dimension.is_numeric:
        warnings.append(f"Dimension '{dimension.text}' is not numeric; coordinates are in pixels")
        normalized = normalize(graph, doors, None, reference_length)
    elif reference_length <= 0:
        warnings.append("Dimension annotation has no length; coordinates are in pixels")
        normalized = normalize(graph, doors, dimension.value, reference_length)
    else:
        normalized = normalize(graph, doors, dimension.value, reference_length)

    # Rooms
    rooms = recognizer.recognize_rooms(sketch) if recognizer else []
    if not rooms:
        rooms = list(sketch.rooms)
    rooms = _scale_rooms(rooms, normalized.scale_factor)

    result = SketchResult(
        graph=normalized.graph,
        doors=normalized.doors,
        rooms=rooms,
        scale_factor=normalized.scale_factor,
        dimension=dimension,
        reference_length_pixels=reference_length,
        warnings=warnings,
        processing_time=time.time() - start_time,
        config=config,
    )

    logger.info(
        f"Vectorized sketch: {len(result.graph.edges)} walls, {len(result.doors)} doors, "
        f"{len(result.rooms)} rooms, total wall length "
        f"{format_length(result.graph.total_length(), result.scale_factor, result.units == 'feet')}"
    )
    return result


def run_pipeline(args) -> SketchResult:
    """
    Run the full pipeline from a sketch file to a JSON payload.

    Args:
        args: Parsed command-line arguments

    Returns:
        SketchResult for the sketch
    """
    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=log_level, format='%(message)s')

    config = config_from_settings(load_settings(args.settings))
    config = config.with_overrides(
        merge_distance=args.merge_distance,
        angle_tolerance=args.angle_tolerance,
        snap_tolerance=args.snap_tolerance,
        merge_strategy=args.merge_strategy,
        max_snap_distance=args.max_snap_distance,
        verbose=args.verbose,
    )
    if args.no_original:
        config = config.with_overrides(include_original=False)

    logger.info(f"Processing: {args.input}")
    sketch = read_sketch(args.input)

    recognizer = None
    if args.dimension:
        recognizer = StaticRecognizer(
            dimension=RecognizedValue.from_raw(None, args.dimension),
            rooms=sketch.rooms,
        )

    result = vectorize_sketch(sketch, config, recognizer)

    output_path = args.output
    if output_path.lower().endswith(".json"):
        json_path = output_path
    else:
        json_path = generate_json_filename(args.input, output_path)
    write_payload_json(result.to_dict(), json_path)

    # Summary
    logger.info(f"\nSummary:")
    logger.info(f"  Walls: {len(result.graph.edges)}")
    logger.info(f"  Doors: {len(result.doors)}")
    if result.scale_factor is not None:
        logger.info(f"  Scale: {result.scale_factor:.4f} {result.units}/px")
    logger.info(f"  Processing time: {result.processing_time:.3f}s")

    if result.warnings:
        logger.info(f"\nWarnings ({len(result.warnings)}):")
        for w in result.warnings[:10]:
            logger.info(f"  - {w}")
        if len(result.warnings) > 10:
            logger.info(f"  ... and {len(result.warnings) - 10} more")

    return result
