"""
Sketch Plan - Master Constants Reference

Default tunables for the stroke-to-graph engine. Values here are the
defaults; config/settings.yaml and CLI flags override them per run.
"""

# =============================================================================
# STROKE SIMPLIFICATION CONSTANTS
# =============================================================================

# Interior points bending less than this are dropped (degrees from straight)
DEFAULT_ANGLE_TOLERANCE_DEG = 10.0

# Strokes need at least this many points to form a segment
MIN_STROKE_POINTS = 2

# =============================================================================
# GRAPH BUILDING CONSTANTS
# =============================================================================

# Raw endpoints closer than this collapse into one node (pixels)
DEFAULT_MERGE_DISTANCE_PX = 25.0

# Sensible range for merge distance when validating user input
MIN_MERGE_DISTANCE_PX = 0.0
MAX_MERGE_DISTANCE_PX = 200.0

# =============================================================================
# RECTIFICATION CONSTANTS
# =============================================================================

# Edges within this of 0/90/180/270 degrees are snapped to the axis
DEFAULT_SNAP_TOLERANCE_DEG = 10.0

# Snap tolerance must stay below 45 or an edge could be both
MAX_SNAP_TOLERANCE_DEG = 45.0

# =============================================================================
# DOOR PROJECTION CONSTANTS
# =============================================================================

# None = always snap to the nearest wall, however far away
DEFAULT_MAX_SNAP_DISTANCE_PX = None

# =============================================================================
# OUTPUT CONSTANTS
# =============================================================================

# Decimal places kept in serialized coordinates
COORDINATE_DECIMALS = 3

# Prefix for wall identifiers in the output payload
WALL_ID_PREFIX = "wall_"

# Include pre-snap door endpoints in the payload
DEFAULT_INCLUDE_ORIGINAL = True

# =============================================================================
# UNIT CONSTANTS
# =============================================================================

INCHES_PER_FOOT = 12
FEET_PER_METER = 3.28084

# =============================================================================
# STROKE ROLE COLORS
# Blue pens draw walls, green doors, red dimension annotations
# =============================================================================

# Named colors accepted from SVG exports
NAMED_COLORS = {
    "blue": (0, 0, 255),
    "navy": (0, 0, 128),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "red": (255, 0, 0),
    "darkred": (139, 0, 0),
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
}

# A channel must exceed the others by this much to count as dominant
COLOR_DOMINANCE_MARGIN = 60

# =============================================================================
# STROKE ROLES
# =============================================================================

class StrokeRole:
    WALL = "wall"
    DOOR = "door"
    DIMENSION = "dimension"
    UNKNOWN = "unknown"

    ALL = (WALL, DOOR, DIMENSION)

# =============================================================================
# NODE MERGE STRATEGIES
# =============================================================================

class MergeStrategy:
    GREEDY = "greedy"
    CLUSTER = "cluster"

    ALL = (GREEDY, CLUSTER)

# =============================================================================
# CONFIDENCE LEVELS
# =============================================================================

class Confidence:
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    NONE = "NONE"
