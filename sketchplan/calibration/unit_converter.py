"""
Unit Converter Module

Functions for converting and formatting lengths after scaling.
"""

import logging
from typing import Optional

from ..constants import INCHES_PER_FOOT

logger = logging.getLogger(__name__)


def pixels_to_real(length_in_pixels: float, scale_factor: Optional[float]) -> float:
    """
    Convert a canvas length to real-world units.

    Args:
        length_in_pixels: Length on the canvas
        scale_factor: Real-world units per pixel (None = unscaled)

    Returns:
        Length in real-world units, or the pixel length when unscaled
    """
    if scale_factor is None:
        return length_in_pixels
    return length_in_pixels * scale_factor


def real_to_pixels(real_length: float, scale_factor: float) -> float:
    """
    Convert a real-world length back to canvas pixels.

    Returns 0.0 with a warning if the scale factor is 0.
    """
    if scale_factor == 0:
        logger.warning("Scale factor is 0, returning 0")
        return 0.0
    return real_length / scale_factor


def format_imperial_length(length_feet: float) -> str:
    """
    Format a length in feet as imperial string (e.g., 10'-6").

    Args:
        length_feet: Length in feet

    Returns:
        Formatted string like "10'-6""
    """
    feet = int(length_feet)
    remaining_inches = (length_feet - feet) * INCHES_PER_FOOT

    if remaining_inches < 0.1:
        return f"{feet}'-0\""
    elif abs(remaining_inches - round(remaining_inches)) < 0.1:
        inches = int(round(remaining_inches))
        if inches == INCHES_PER_FOOT:
            return f"{feet + 1}'-0\""
        return f"{feet}'-{inches}\""
    else:
        return f"{feet}'-{remaining_inches:.1f}\""


def format_length(length: float, scale_factor: Optional[float], in_feet: bool = True) -> str:
    """
    Format a length for logs.

    Pixels when unscaled; imperial when the dimension was in feet; plain
    units when the dimension was a bare number.
    """
    if scale_factor is None:
        return f"{length:.1f} px"
    if not in_feet:
        return f"{length:.2f} units"
    return format_imperial_length(length)
