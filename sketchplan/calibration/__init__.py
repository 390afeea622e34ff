# Scale calibration module

from .scale_normalizer import (
    NormalizedResult,
    reference_length_from_strokes,
    compute_scale_factor,
    scale_graph,
    scale_doors,
    normalize,
)

from .unit_converter import (
    pixels_to_real,
    real_to_pixels,
    format_imperial_length,
    format_length,
)

__all__ = [
    # Scale Normalizer
    "NormalizedResult",
    "reference_length_from_strokes",
    "compute_scale_factor",
    "scale_graph",
    "scale_doors",
    "normalize",
    # Unit Converter
    "pixels_to_real",
    "real_to_pixels",
    "format_imperial_length",
    "format_length",
]
