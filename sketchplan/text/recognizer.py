"""
Recognizer Module

Capability interface for the external recognizer that reads dimension
values and room labels off the canvas. The engine only consumes its
results, so geometry stays testable without any external service.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..constants import Confidence
from .dimension_parser import has_length_unit, parse_dimension_value

logger = logging.getLogger(__name__)


@dataclass
class RecognizedValue:
    """A dimension reading supplied by a recognizer."""
    value: Optional[float]
    text: str = ""
    confidence: str = Confidence.MEDIUM

    @property
    def is_numeric(self) -> bool:
        return self.value is not None

    @property
    def in_feet(self) -> bool:
        """True if the text carried a unit, so the value was normalized to feet."""
        return has_length_unit(self.text)

    @classmethod
    def from_raw(cls, value: Any, text: Optional[str] = None) -> "RecognizedValue":
        """
        Build a reading from loosely typed recognizer output.

        The numeric value wins; when it is missing or unusable the text is
        parsed instead. A reading with neither is kept with value None so
        callers can report it.
        """
        number = parse_dimension_value(value)
        if number is None and text:
            number = parse_dimension_value(text)

        if text is None:
            text = "" if value is None else str(value)

        confidence = Confidence.HIGH if number is not None else Confidence.NONE
        return cls(value=number, text=text, confidence=confidence)

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "text": self.text, "confidence": self.confidence}


@dataclass
class RoomLabel:
    """A room name read off the canvas, with its center in canvas pixels."""
    text: str
    center_x: float
    center_y: float

    @classmethod
    def from_dict(cls, data: Any) -> Optional["RoomLabel"]:
        """
        Parse {"text_content": .., "center_point": {"x", "y"}}.

        Returns None for entries without text or a usable center.
        """
        if not isinstance(data, dict):
            return None

        text = str(data.get("text_content") or data.get("text") or "").strip()
        center = data.get("center_point") or data.get("center") or {}
        if not text or not isinstance(center, dict):
            logger.debug(f"Skipping room label without text or center: {data!r}")
            return None

        try:
            return cls(text=text, center_x=float(center["x"]), center_y=float(center["y"]))
        except (KeyError, TypeError, ValueError):
            logger.debug(f"Skipping room label with bad center: {data!r}")
            return None

    def to_dict(self, decimals: Optional[int] = None) -> Dict[str, Any]:
        x, y = self.center_x, self.center_y
        if decimals is not None:
            x, y = round(x, decimals), round(y, decimals)
        return {"text_content": self.text, "center_point": {"x": x, "y": y}}


class Recognizer:
    """
    Base class for dimension/room-label recognizers.

    Implementations wrap whatever reads the canvas (a hosted vision model,
    an OCR engine, user input) and return None when nothing was recognized.
    """

    def recognize(self, source: Any) -> Optional[RecognizedValue]:
        raise NotImplementedError

    def recognize_rooms(self, source: Any) -> List[RoomLabel]:
        return []


class StaticRecognizer(Recognizer):
    """Recognizer returning values known up front (CLI flags, stored sketches, tests)."""

    def __init__(self, dimension: Optional[RecognizedValue] = None,
                 rooms: Optional[List[RoomLabel]] = None):
        self.dimension = dimension
        self.rooms = list(rooms or [])

    def recognize(self, source: Any) -> Optional[RecognizedValue]:
        return self.dimension

    def recognize_rooms(self, source: Any) -> List[RoomLabel]:
        return list(self.rooms)
