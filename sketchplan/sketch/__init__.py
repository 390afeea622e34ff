# Sketch input module

from .stroke import (
    Point,
    Stroke,
    StrokeFormatError,
    to_point,
    to_points,
    make_stroke,
    bounding_box,
)

from .reader import (
    Sketch,
    SketchReadError,
    parse_color,
    classify_color,
    parse_sketch_dict,
    parse_path_data,
    parse_svg_strokes,
    read_sketch_json,
    read_sketch_svg,
    read_sketch,
)

__all__ = [
    # Stroke
    "Point",
    "Stroke",
    "StrokeFormatError",
    "to_point",
    "to_points",
    "make_stroke",
    "bounding_box",
    # Reader
    "Sketch",
    "SketchReadError",
    "parse_color",
    "classify_color",
    "parse_sketch_dict",
    "parse_path_data",
    "parse_svg_strokes",
    "read_sketch_json",
    "read_sketch_svg",
    "read_sketch",
]
