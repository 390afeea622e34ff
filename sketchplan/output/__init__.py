# Output module

from .json_writer import (
    walls_to_dicts,
    doors_to_dicts,
    build_payload,
    generate_json_filename,
    write_payload_json,
)

__all__ = [
    "walls_to_dicts",
    "doors_to_dicts",
    "build_payload",
    "generate_json_filename",
    "write_payload_json",
]
