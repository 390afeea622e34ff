"""
Sketch Reader Module

Functions for loading canvas sketches (JSON stroke dumps or SVG exports)
into classified strokes.
"""

import json
import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..constants import (
    NAMED_COLORS,
    COLOR_DOMINANCE_MARGIN,
    StrokeRole,
)
from ..text.recognizer import RoomLabel, RecognizedValue
from .stroke import Point, Stroke, StrokeFormatError, to_point, to_points

logger = logging.getLogger(__name__)


class SketchReadError(Exception):
    """Raised when a sketch file cannot be read."""
    pass


@dataclass
class Sketch:
    """The canvas state captured at submission time."""
    strokes: List[Stroke] = field(default_factory=list)
    dimension: Optional[RecognizedValue] = None
    rooms: List[RoomLabel] = field(default_factory=list)
    source: str = ""

    def strokes_for(self, role: str) -> List[Stroke]:
        return [s for s in self.strokes if s.role == role]

    @property
    def wall_strokes(self) -> List[Stroke]:
        return self.strokes_for(StrokeRole.WALL)

    @property
    def door_strokes(self) -> List[Stroke]:
        return self.strokes_for(StrokeRole.DOOR)

    @property
    def dimension_strokes(self) -> List[Stroke]:
        return self.strokes_for(StrokeRole.DIMENSION)


# =============================================================================
# COLOR CLASSIFICATION
# =============================================================================

HEX_COLOR_PATTERN = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE)
RGB_COLOR_PATTERN = re.compile(
    r"^rgba?\(\s*(\d+(?:\.\d+)?)\s*,\s*(\d+(?:\.\d+)?)\s*,\s*(\d+(?:\.\d+)?)",
    re.IGNORECASE
)


def parse_color(color: Optional[str]) -> Optional[Tuple[int, int, int]]:
    """
    Parse a CSS/SVG color string to an RGB tuple.

    Supports #rgb, #rrggbb, rgb(r, g, b) and a handful of named colors.

    Args:
        color: Color string

    Returns:
        (r, g, b) tuple or None if not parseable
    """
    if not color:
        return None

    text = color.strip().lower()

    if text in NAMED_COLORS:
        return NAMED_COLORS[text]

    match = HEX_COLOR_PATTERN.match(text)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    match = RGB_COLOR_PATTERN.match(text)
    if match:
        return tuple(min(255, int(float(v))) for v in match.groups())

    return None


def classify_color(color: Optional[str]) -> str:
    """
    Map a pen color to a stroke role by its dominant channel.

    Blue is a wall, green is a door, red is a dimension annotation.

    Args:
        color: Color string

    Returns:
        StrokeRole value (UNKNOWN if no channel dominates)
    """
    rgb = parse_color(color)
    if rgb is None:
        return StrokeRole.UNKNOWN

    r, g, b = rgb
    if b - max(r, g) >= COLOR_DOMINANCE_MARGIN:
        return StrokeRole.WALL
    if g - max(r, b) >= COLOR_DOMINANCE_MARGIN:
        return StrokeRole.DOOR
    if r - max(g, b) >= COLOR_DOMINANCE_MARGIN:
        return StrokeRole.DIMENSION
    return StrokeRole.UNKNOWN


def resolve_role(role: Optional[str], color: Optional[str]) -> str:
    """Use an explicit role when given, otherwise classify by color."""
    if role:
        role = role.strip().lower()
        if role in StrokeRole.ALL:
            return role
        logger.debug(f"Unknown stroke role '{role}', falling back to color")
    return classify_color(color)


# =============================================================================
# JSON SKETCHES
# =============================================================================

def parse_sketch_dict(data: Dict[str, Any], source: str = "") -> Sketch:
    """
    Build a Sketch from a decoded JSON document.

    Expected layout:
        {"strokes": [{"role": "wall", "color": "#00f", "points": [[x, y], ...]}],
         "dimension": {"value": 24, "text": "24'"},
         "rooms": [{"text_content": "KITCHEN", "center_point": {"x": 1, "y": 2}}]}

    Args:
        data: Decoded JSON object
        source: Description of where the data came from (for logging)

    Returns:
        Sketch object

    Raises:
        SketchReadError: If the document is not a JSON object
        StrokeFormatError: If a coordinate is non-numeric
    """
    if not isinstance(data, dict):
        raise SketchReadError(f"Sketch must be a JSON object: {source}")

    strokes = []
    skipped = 0
    for raw in data.get("strokes", []) or []:
        if not isinstance(raw, dict):
            raise StrokeFormatError(f"Stroke must be an object: {raw!r}")
        color = raw.get("color")
        role = resolve_role(raw.get("role"), color)
        if role == StrokeRole.UNKNOWN:
            skipped += 1
            continue
        strokes.append(Stroke(points=to_points(raw.get("points")), role=role, color=color))

    if skipped:
        logger.debug(f"Ignored {skipped} strokes with no recognizable role")

    dimension = None
    raw_dimension = data.get("dimension")
    if isinstance(raw_dimension, dict):
        dimension = RecognizedValue.from_raw(raw_dimension.get("value"), raw_dimension.get("text"))
    elif raw_dimension is not None:
        dimension = RecognizedValue.from_raw(raw_dimension, None)

    rooms = []
    for raw in data.get("rooms", []) or []:
        label = RoomLabel.from_dict(raw)
        if label is not None:
            rooms.append(label)

    logger.info(f"Loaded sketch {source}: {len(strokes)} strokes, {len(rooms)} room labels")
    return Sketch(strokes=strokes, dimension=dimension, rooms=rooms, source=source)


def read_sketch_json(filepath: str) -> Sketch:
    """
    Read a JSON stroke dump.

    Args:
        filepath: Path to the JSON file

    Returns:
        Sketch object

    Raises:
        SketchReadError: If the file is missing or not valid JSON
    """
    path = Path(filepath)
    if not path.is_file():
        raise SketchReadError(f"File not found: {filepath}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SketchReadError(f"Invalid JSON in {filepath}: {e}")

    return parse_sketch_dict(data, source=str(path))


# =============================================================================
# SVG SKETCHES
# =============================================================================

PATH_TOKEN_PATTERN = re.compile(r"[MmLlHhVvZzCcSsQqTtAa]|-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
STYLE_STROKE_PATTERN = re.compile(r"(?:^|;)\s*stroke\s*:\s*([^;]+)", re.IGNORECASE)


def _local_tag(element: ET.Element) -> str:
    # Strip the "{namespace}" prefix ElementTree adds
    return element.tag.rsplit("}", 1)[-1]


def _element_color(element: ET.Element) -> Optional[str]:
    style = element.get("style", "")
    match = STYLE_STROKE_PATTERN.search(style)
    if match:
        return match.group(1).strip()
    return element.get("stroke")


def parse_path_data(d: str) -> List[List[Point]]:
    """
    Parse an SVG path "d" attribute into polylines.

    Only straight-line commands are supported (M, L, H, V, Z and their
    relative forms), which is what canvas freehand exports produce. Each
    moveto starts a new polyline.

    Args:
        d: Path data string

    Returns:
        List of polylines (lists of Points)
    """
    tokens = PATH_TOKEN_PATTERN.findall(d or "")
    polylines: List[List[Point]] = []
    current: List[Point] = []
    command = None
    x = y = 0.0
    start = None
    i = 0

    def take() -> float:
        nonlocal i
        value = float(tokens[i])
        i += 1
        return value

    try:
        while i < len(tokens):
            token = tokens[i]
            if token.isalpha():
                command = token
                i += 1
                if command not in "MmLlHhVvZz":
                    logger.debug(f"Unsupported path command '{command}', skipping its arguments")
                    continue
                if command in "Zz":
                    if start is not None and current:
                        current.append(start.copy())
                        x, y = start.x, start.y
                    continue
            elif command is None:
                raise StrokeFormatError(f"Path data must start with a command: {d!r}")

            if command in "Mm":
                dx, dy = take(), take()
                x, y = (x + dx, y + dy) if command == "m" else (dx, dy)
                if len(current) >= 2:
                    polylines.append(current)
                current = [Point(x, y)]
                start = Point(x, y)
                # Subsequent pairs after a moveto are implicit linetos
                command = "l" if command == "m" else "L"
            elif command in "Ll":
                dx, dy = take(), take()
                x, y = (x + dx, y + dy) if command == "l" else (dx, dy)
                current.append(Point(x, y))
            elif command in "Hh":
                value = take()
                x = x + value if command == "h" else value
                current.append(Point(x, y))
            elif command in "Vv":
                value = take()
                y = y + value if command == "v" else value
                current.append(Point(x, y))
            else:
                i += 1
    except StrokeFormatError:
        raise
    except (IndexError, ValueError):
        raise StrokeFormatError(f"Truncated path data: {d!r}")

    if len(current) >= 2:
        polylines.append(current)
    return polylines


def _parse_points_attribute(value: str) -> List[Point]:
    numbers = re.findall(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?", value or "")
    if len(numbers) % 2:
        raise StrokeFormatError(f"Odd number of coordinates in points: {value!r}")
    return [Point(float(numbers[k]), float(numbers[k + 1])) for k in range(0, len(numbers), 2)]


def parse_svg_strokes(svg_content: str) -> List[Stroke]:
    """
    Extract classified strokes from SVG markup.

    Args:
        svg_content: SVG document as a string

    Returns:
        List of strokes whose color maps to a known role

    Raises:
        SketchReadError: If the markup is not valid XML
    """
    try:
        root = ET.fromstring(svg_content)
    except ET.ParseError as e:
        raise SketchReadError(f"Invalid SVG: {e}")

    strokes = []
    for element in root.iter():
        tag = _local_tag(element)
        if tag not in ("line", "polyline", "polygon", "path"):
            continue

        color = _element_color(element)
        role = resolve_role(element.get("data-role"), color)
        if role == StrokeRole.UNKNOWN:
            logger.debug(f"Ignoring <{tag}> with color {color!r}")
            continue

        if tag == "line":
            polylines = [[
                to_point((element.get("x1", 0), element.get("y1", 0))),
                to_point((element.get("x2", 0), element.get("y2", 0))),
            ]]
        elif tag in ("polyline", "polygon"):
            points = _parse_points_attribute(element.get("points", ""))
            if tag == "polygon" and points:
                points.append(points[0].copy())
            polylines = [points]
        else:
            polylines = parse_path_data(element.get("d", ""))

        for points in polylines:
            strokes.append(Stroke(points=points, role=role, color=color))

    logger.debug(f"Parsed {len(strokes)} strokes from SVG")
    return strokes


def read_sketch_svg(filepath: str) -> Sketch:
    """
    Read a canvas SVG export.

    Args:
        filepath: Path to the SVG file

    Returns:
        Sketch with classified strokes (no dimension or rooms)
    """
    path = Path(filepath)
    if not path.is_file():
        raise SketchReadError(f"File not found: {filepath}")

    strokes = parse_svg_strokes(path.read_text(encoding="utf-8"))
    logger.info(f"Loaded sketch {path}: {len(strokes)} strokes")
    return Sketch(strokes=strokes, source=str(path))


def read_sketch(filepath: str) -> Sketch:
    """Read a sketch, picking the reader from the file extension."""
    suffix = Path(filepath).suffix.lower()
    if suffix == ".svg":
        return read_sketch_svg(filepath)
    if suffix == ".json":
        return read_sketch_json(filepath)
    raise SketchReadError(f"Unsupported sketch format: {filepath}")
