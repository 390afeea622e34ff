"""
Command Line Interface Module

Parses command-line arguments for the sketch vectorization pipeline.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .constants import (
    MIN_MERGE_DISTANCE_PX,
    MAX_MERGE_DISTANCE_PX,
    MAX_SNAP_TOLERANCE_DEG,
    MergeStrategy,
)

SUPPORTED_SUFFIXES = (".json", ".svg")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the pipeline."""
    parser = argparse.ArgumentParser(
        prog="sketchplan",
        description="Convert freehand floor plan sketches into a wall graph with doors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m sketchplan.cli -i sketch.json -o ./output
  python -m sketchplan.cli -i sketch.svg -o plan.json --dimension "24'"
  python -m sketchplan.cli -i sketch.json -o ./output --merge-strategy cluster -v
        """
    )

    # Required arguments
    parser.add_argument(
        "-i", "--input",
        required=True,
        help="Input sketch file (.json stroke dump or .svg export)"
    )

    parser.add_argument(
        "-o", "--output",
        required=True,
        help="Output JSON file or directory"
    )

    # Optional arguments
    parser.add_argument(
        "--settings",
        help="Settings YAML file (default: config/settings.yaml)"
    )

    parser.add_argument(
        "--dimension",
        help="Recognized dimension text for the red annotation (e.g. \"24'\", \"10'-6\\\"\")"
    )

    # Engine tunables
    engine_group = parser.add_argument_group('engine')

    engine_group.add_argument(
        "--merge-distance",
        type=float,
        help="Endpoint merge distance in pixels"
    )

    engine_group.add_argument(
        "--angle-tolerance",
        type=float,
        help="Stroke simplification tolerance in degrees"
    )

    engine_group.add_argument(
        "--snap-tolerance",
        type=float,
        help="Axis snapping tolerance in degrees"
    )

    engine_group.add_argument(
        "--merge-strategy",
        choices=list(MergeStrategy.ALL),
        help="Node merging: greedy (order-dependent) or cluster (centroids)"
    )

    engine_group.add_argument(
        "--max-snap-distance",
        type=float,
        help="Leave door endpoints farther than this from any wall unsnapped"
    )

    parser.add_argument(
        "--no-original",
        action="store_true",
        help="Omit pre-snap door endpoints from the output"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    return parser


def validate_args(args: argparse.Namespace) -> Tuple[bool, str]:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments

    Returns:
        Tuple of (is_valid, error_message)
    """
    input_path = Path(args.input)
    if not input_path.exists():
        return False, f"Input file not found: {args.input}"

    if input_path.suffix.lower() not in SUPPORTED_SUFFIXES:
        return False, f"Input file must be one of {', '.join(SUPPORTED_SUFFIXES)}: {args.input}"

    if args.settings and not Path(args.settings).exists():
        return False, f"Settings file not found: {args.settings}"

    if args.merge_distance is not None and not MIN_MERGE_DISTANCE_PX <= args.merge_distance <= MAX_MERGE_DISTANCE_PX:
        return False, f"Merge distance must be between {MIN_MERGE_DISTANCE_PX} and {MAX_MERGE_DISTANCE_PX}: {args.merge_distance}"

    for name in ("angle_tolerance", "snap_tolerance"):
        value = getattr(args, name)
        if value is not None and value < 0:
            return False, f"{name.replace('_', ' ').capitalize()} must be >= 0: {value}"

    if args.snap_tolerance is not None and args.snap_tolerance >= MAX_SNAP_TOLERANCE_DEG:
        return False, f"Snap tolerance must be below {MAX_SNAP_TOLERANCE_DEG}: {args.snap_tolerance}"

    if args.max_snap_distance is not None and args.max_snap_distance < 0:
        return False, f"Max snap distance must be >= 0: {args.max_snap_distance}"

    return True, ""


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse and validate command-line arguments.

    Args:
        args: Optional list of arguments (uses sys.argv if None)

    Returns:
        Parsed and validated arguments
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    is_valid, error_msg = validate_args(parsed)
    if not is_valid:
        parser.error(error_msg)

    return parsed


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = parse_args(argv)

    # Import pipeline and run
    from .pipeline import run_pipeline

    try:
        run_pipeline(args)
    except KeyboardInterrupt:
        print("\nProcessing cancelled by user")
        return 1
    except Exception as e:
        print(f"\nError: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
