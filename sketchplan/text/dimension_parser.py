"""
Dimension Parser Module

Converts the text of a recognized dimension annotation ("24'", "10'-6\"",
"3 1/2 ft", "3.5m") into a number. Imperial and metric readings are
normalized to feet; bare numbers are returned as-is.
"""

import logging
import math
import re
from typing import Any, Optional

from ..constants import INCHES_PER_FOOT, FEET_PER_METER

logger = logging.getLogger(__name__)

# Whole, decimal, mixed ("3 1/2") or pure fraction ("1/2")
NUMBER = r"(?:\d+(?:\.\d+)?(?:\s+\d+/\d+)?|\d+/\d+)"

FEET_UNIT = r"(?:'|ft\.?|feet|foot)"
INCH_UNIT = r"(?:\"|''|in\.?|inch|inches)"

# Feet with optional inches: 24', 10'-6", 10' 6", 12'-3 1/2", 3 1/2 ft
FEET_INCHES_PATTERN = re.compile(
    rf"^({NUMBER})\s*{FEET_UNIT}(?:\s*-?\s*({NUMBER})\s*{INCH_UNIT}?)?$",
    re.IGNORECASE
)

# Inches only: 126", 48 in, 30 1/2 inches
INCHES_ONLY_PATTERN = re.compile(
    rf"^({NUMBER})\s*{INCH_UNIT}$",
    re.IGNORECASE
)

# Metric: 3000mm, 300 cm, 3.5m, 2 meters
METRIC_PATTERN = re.compile(
    r"^(\d+(?:\.\d+)?)\s*(mm|cm|m|meters?|metres?)$",
    re.IGNORECASE
)

# Bare number: 24, 12.5, 7 1/2
BARE_NUMBER_PATTERN = re.compile(rf"^({NUMBER})$")

METRIC_TO_METERS = {
    "mm": 0.001,
    "cm": 0.01,
    "m": 1.0,
}


def parse_mixed_number(text: str) -> float:
    """
    Parse a whole, decimal, mixed or fractional number.

    Examples:
        "12" -> 12.0, "3.5" -> 3.5, "3 1/2" -> 3.5, "1/4" -> 0.25

    Raises:
        ValueError: If the text is not a number or has a zero denominator
    """
    total = 0.0
    for part in text.split():
        if "/" in part:
            num, denom = part.split("/")
            if float(denom) == 0:
                raise ValueError(f"Zero denominator in {text!r}")
            total += float(num) / float(denom)
        else:
            total += float(part)
    return total


def _normalize(text: str) -> str:
    # Typographic primes from OCR and text recognizers
    text = text.strip().replace("′", "'").replace("’", "'")
    text = text.replace("″", '"').replace("”", '"')
    return re.sub(r"\s+", " ", text)


def parse_dimension_text(text: Optional[str]) -> Optional[float]:
    """
    Parse dimension text into a numeric length.

    Args:
        text: Recognized dimension text

    Returns:
        Length in feet for imperial/metric text, the number itself for
        unitless text, or None if the text is not a dimension
    """
    if not text:
        return None

    normalized = _normalize(text)

    try:
        match = FEET_INCHES_PATTERN.match(normalized)
        if match:
            feet = parse_mixed_number(match.group(1))
            inches = parse_mixed_number(match.group(2)) if match.group(2) else 0.0
            return feet + inches / INCHES_PER_FOOT

        match = INCHES_ONLY_PATTERN.match(normalized)
        if match:
            return parse_mixed_number(match.group(1)) / INCHES_PER_FOOT

        match = METRIC_PATTERN.match(normalized)
        if match:
            unit = match.group(2).lower()
            unit = unit if unit in METRIC_TO_METERS else "m"
            meters = float(match.group(1)) * METRIC_TO_METERS[unit]
            return meters * FEET_PER_METER

        match = BARE_NUMBER_PATTERN.match(normalized)
        if match:
            return parse_mixed_number(match.group(1))
    except ValueError as e:
        logger.debug(f"Could not parse dimension '{text}': {e}")
        return None

    logger.debug(f"Text is not a dimension: '{text}'")
    return None


def parse_dimension_value(value: Any) -> Optional[float]:
    """
    Coerce a recognizer's dimension value to a positive float.

    Numbers are used directly, strings go through parse_dimension_text.
    Anything else (None, non-numeric, zero, negative, NaN) yields None.
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        number = parse_dimension_text(value)
        if number is None:
            return None
    else:
        return None

    if math.isnan(number) or math.isinf(number) or number <= 0:
        return None
    return number


def has_length_unit(text: Optional[str]) -> bool:
    """True if the text names a unit (feet, inches or metric) rather than a bare number."""
    if not text:
        return False
    normalized = _normalize(text)
    return any(
        pattern.match(normalized)
        for pattern in (FEET_INCHES_PATTERN, INCHES_ONLY_PATTERN, METRIC_PATTERN)
    )
