"""
RoadGen Constants Module

Centralized constants for the road generator.

Conventions:
    x: left to right
    y: downwards (y = 0 is the top layer)
    z: depth
    Level roads lie on the bottom face of their voxel.

Usage:
    from roadgen.constants import STRAIGHT_ROTATIONS, SHAPE_SQUARE
"""

# =============================================================================
# Orientation (relative to the build frame, clockwise)
# =============================================================================

ORIENTATION_FORWARD = 1
ORIENTATION_FORWARD_RIGHT = 2
ORIENTATION_RIGHT = 3
ORIENTATION_BACK_RIGHT = 4
ORIENTATION_BACK = 5
ORIENTATION_BACK_LEFT = 6
ORIENTATION_LEFT = 7
ORIENTATION_FORWARD_LEFT = 8

ORIENTATIONS = tuple(range(1, 9))
DIAGONAL_ORIENTATIONS = (2, 4, 6, 8)
# The only diagonals a road takes; a sloped one cannot be built at all.
TURN_ORIENTATIONS = (2, 8)

# Orientations a road segment may actually take and the straight heading
# each one folds into when the build frame is updated.
STRAIGHT_EQUIVALENT = {
    ORIENTATION_FORWARD: ORIENTATION_FORWARD,
    ORIENTATION_FORWARD_RIGHT: ORIENTATION_RIGHT,
    ORIENTATION_FORWARD_LEFT: ORIENTATION_LEFT,
}

# =============================================================================
# Climb
# =============================================================================

CLIMB_UP = 1
CLIMB_LEVEL = 0
CLIMB_DOWN = -1

CLIMBS = (CLIMB_DOWN, CLIMB_LEVEL, CLIMB_UP)

# =============================================================================
# Build frame (absolute heading)
# =============================================================================

# 1 = +z, 3 = +x, 5 = -z, 7 = -x
STRAIGHT_ROTATIONS = (1, 3, 5, 7)

# Arbitrary reference heading every road starts with
INITIAL_ROTATION = 1

# Horizontal unit step (dx, dz) for each absolute heading
HEADING_STEPS = {
    1: (0, 1),
    3: (1, 0),
    5: (0, -1),
    7: (-1, 0),
}

AXES = ("x", "y", "z")

# =============================================================================
# Footprint shapes
# =============================================================================

SHAPE_NONE = "none"
SHAPE_SQUARE = "square"
SHAPE_TRIANGLE = "triangle"

FACE_KIND_TRIANGLE = "triangle"
FACE_KIND_QUAD = "quad"

# =============================================================================
# Generation Parameters
# =============================================================================

DEFAULT_SIZE = 100
DEFAULT_LINEARITY = 4  # Straight-ahead weight of the reference generator
DEFAULT_ALTITUDE_VARIATION = 1
DEFAULT_COUNT = 1

# Output file naming for batch runs
ROAD_FILE_PREFIX = "road_"
