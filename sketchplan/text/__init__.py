# Recognized text module

from .dimension_parser import (
    parse_mixed_number,
    parse_dimension_text,
    parse_dimension_value,
    has_length_unit,
)

from .recognizer import (
    RecognizedValue,
    RoomLabel,
    Recognizer,
    StaticRecognizer,
)

__all__ = [
    # Dimension Parser
    "parse_mixed_number",
    "parse_dimension_text",
    "parse_dimension_value",
    "has_length_unit",
    # Recognizer
    "RecognizedValue",
    "RoomLabel",
    "Recognizer",
    "StaticRecognizer",
]
