"""
JSON Writer Module

Serializes the wall graph and doors into the {walls, doors} payload
handed to the downstream consumer.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..constants import COORDINATE_DECIMALS, WALL_ID_PREFIX
from ..text.recognizer import RoomLabel
from ..vector.door_projector import Door
from ..vector.graph_builder import WallGraph

logger = logging.getLogger(__name__)


def walls_to_dicts(graph: WallGraph,
                   decimals: Optional[int] = COORDINATE_DECIMALS) -> List[Dict[str, Any]]:
    """
    Convert graph edges to wall records.

    IDs are assigned as wall_<index> in edge order.
    """
    walls = []
    for index, edge in enumerate(graph.edges):
        start, end = graph.edge_points(edge)
        walls.append({
            "wall_id": f"{WALL_ID_PREFIX}{index}",
            "start_point": start.to_dict(decimals),
            "end_point": end.to_dict(decimals),
        })
    return walls


def doors_to_dicts(doors: Sequence[Door], include_original: bool = True,
                   decimals: Optional[int] = COORDINATE_DECIMALS) -> List[Dict[str, Any]]:
    """Convert doors to door records."""
    return [door.to_dict(include_original, decimals) for door in doors]


def build_payload(graph: WallGraph, doors: Sequence[Door],
                  rooms: Optional[Sequence[RoomLabel]] = None,
                  scale: Optional[Dict[str, Any]] = None,
                  include_original: bool = True,
                  decimals: Optional[int] = COORDINATE_DECIMALS) -> Dict[str, Any]:
    """
    Build the output payload.

    Args:
        graph: Final wall graph
        doors: Final doors
        rooms: Room labels from the recognizer (omitted when None)
        scale: Scale metadata (omitted when None)
        include_original: Include pre-snap door endpoints
        decimals: Coordinate rounding (None = no rounding)

    Returns:
        Dictionary with "walls" and "doors" (plus "rooms"/"scale" if given)
    """
    payload = {
        "walls": walls_to_dicts(graph, decimals),
        "doors": doors_to_dicts(doors, include_original, decimals),
    }
    if rooms is not None:
        payload["rooms"] = [room.to_dict(decimals) for room in rooms]
    if scale is not None:
        payload["scale"] = scale
    return payload


def generate_json_filename(input_path: str, output_dir: str) -> str:
    """Build <output_dir>/<input stem>_plan.json."""
    stem = Path(input_path).stem
    return str(Path(output_dir) / f"{stem}_plan.json")


def write_payload_json(payload: Dict[str, Any], output_path: str) -> str:
    """
    Write a payload to a JSON file, creating parent directories.

    Returns:
        The path written
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)

    logger.info(
        f"JSON written: {path} ({len(payload.get('walls', []))} walls, "
        f"{len(payload.get('doors', []))} doors)"
    )
    return str(path)
