from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Union

from .constants import (
    CLIMB_DOWN,
    CLIMB_LEVEL,
    CLIMB_UP,
    DIAGONAL_ORIENTATIONS,
    FACE_KIND_QUAD,
    FACE_KIND_TRIANGLE,
)
from .coords import Direction, Position, absolute_orientation, validate_rotation
from .errors import InternalInconsistencyError, InvalidArgumentError, InvalidSlopeError


@dataclass(frozen=True)
class Voxel:
    """Lattice cell identified by its minimal corner."""
    position: Position

    def __post_init__(self):
        if not isinstance(self.position, Position):
            raise InvalidArgumentError(f"Voxel needs a Position, got {self.position!r}")

    def base_corners(self) -> Tuple[Position, Position, Position, Position]:
        """Footprint corners: v1 = corner, v2 = +x, v3 = +x+z, v4 = +z."""
        v1 = self.position
        v2 = v1.increased("x")
        v3 = v2.increased("z")
        v4 = v1.increased("z")
        return v1, v2, v3, v4


@dataclass(frozen=True)
class Triangle:
    p1: Position
    p2: Position
    p3: Position

    kind = FACE_KIND_TRIANGLE

    @property
    def vertices(self) -> Tuple[Position, Position, Position]:
        return self.p1, self.p2, self.p3


@dataclass(frozen=True)
class Quad:
    p1: Position
    p2: Position
    p3: Position
    p4: Position

    kind = FACE_KIND_QUAD

    @property
    def vertices(self) -> Tuple[Position, Position, Position, Position]:
        return self.p1, self.p2, self.p3, self.p4


Face = Union[Triangle, Quad]

# Absolute straight heading -> indices of the two corners on the far edge,
# the ones a slope raises or lowers.
FAR_EDGE: Dict[int, Tuple[int, int]] = {
    1: (2, 3),  # +z: v3, v4
    3: (1, 2),  # +x: v2, v3
    5: (0, 1),  # -z: v1, v2
    7: (0, 3),  # -x: v1, v4
}

# (absolute diagonal heading, build frame) -> corner indices of the wedge.
# A right turn and a left turn sharing one diagonal heading mirror each other.
TURN_WEDGES: Dict[Tuple[int, int], Tuple[int, int, int]] = {
    (2, 1): (0, 1, 2),
    (2, 3): (2, 3, 0),
    (4, 3): (3, 0, 1),
    (4, 5): (2, 3, 1),
    (6, 5): (0, 2, 3),
    (6, 7): (1, 2, 0),
    (8, 7): (3, 1, 2),
    (8, 1): (0, 3, 1),
}


def _sloped_quad(corners, heading: int, climb: int) -> Quad:
    vertices = list(corners)
    if climb != CLIMB_LEVEL:
        for index in FAR_EDGE[heading]:
            if climb == CLIMB_UP:
                vertices[index] = vertices[index].decreased("y")
            elif climb == CLIMB_DOWN:
                vertices[index] = vertices[index].increased("y")
    return Quad(*vertices)


def build_face(voxel: Voxel, direction: Direction, rotation: int) -> Face:
    """
    Build the visible surface of one road segment.

    Straight headings give a quad whose far edge is raised (climb up, y - 1)
    or lowered (climb down, y + 1). Diagonal headings give a level wedge made
    of three footprint corners.

    Args:
        voxel: The cell the segment occupies.
        direction: Orientation relative to ``rotation`` and climb.
        rotation: Absolute heading of the build frame (1, 3, 5 or 7).

    Returns:
        A Quad or a Triangle. The lattice is never touched.

    Raises:
        InvalidSlopeError: for a diagonal heading with nonzero climb.
        InternalInconsistencyError: for a heading/frame pair no road produces.
    """
    if not isinstance(voxel, Voxel) or not isinstance(direction, Direction):
        raise InvalidArgumentError(f"Wrong arguments for road face: {voxel!r}, {direction!r}")
    validate_rotation(rotation)

    corners = voxel.base_corners()
    heading = absolute_orientation(direction.orientation, rotation)

    if heading in FAR_EDGE:
        return _sloped_quad(corners, heading, direction.climb)

    if heading in DIAGONAL_ORIENTATIONS:
        if direction.climb != CLIMB_LEVEL:
            raise InvalidSlopeError("Cannot create non-horizontal diagonal road segment")
        wedge = TURN_WEDGES.get((heading, rotation))
        if wedge is None:
            raise InternalInconsistencyError(
                f"No turn wedge for heading {heading} in frame {rotation}"
            )
        return Triangle(*(corners[index] for index in wedge))

    raise InternalInconsistencyError(
        f"Invalid orientation for road face: heading={heading}"
        f" orientation={direction.orientation} rotation={rotation}"
    )
