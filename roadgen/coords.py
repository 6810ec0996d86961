from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import List

import numpy as np

from .constants import (
    AXES,
    CLIMBS,
    CLIMB_LEVEL,
    DIAGONAL_ORIENTATIONS,
    HEADING_STEPS,
    ORIENTATIONS,
    STRAIGHT_EQUIVALENT,
    STRAIGHT_ROTATIONS,
    TURN_ORIENTATIONS,
)
from .errors import (
    ConstructionError,
    InternalInconsistencyError,
    InvalidArgumentError,
    InvalidSlopeError,
)


def _coerce_coordinate(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConstructionError(f"Coordinate {name} must be a number, got {value!r}")
    fval = float(value)
    if not math.isfinite(fval) or fval != math.floor(fval):
        raise ConstructionError(f"Coordinate {name} must be a finite integer, got {value!r}")
    if fval < 0:
        raise ConstructionError(f"Coordinate {name} must be non-negative, got {value!r}")
    return int(fval)


@dataclass(frozen=True)
class Position:
    """Integer lattice point. Y grows downwards."""
    x: int
    y: int
    z: int

    def __post_init__(self):
        for axis in AXES:
            object.__setattr__(self, axis, _coerce_coordinate(axis, getattr(self, axis)))

    def _shifted(self, axis: str, amount: int) -> Position:
        if axis not in AXES:
            raise InvalidArgumentError(f"Expected one of {AXES}, got {axis!r}")
        values = {"x": self.x, "y": self.y, "z": self.z}
        values[axis] += amount
        return Position(**values)

    def increased(self, axis: str) -> Position:
        """Return the position one unit further along ``axis``."""
        return self._shifted(axis, 1)

    def decreased(self, axis: str) -> Position:
        """Return the position one unit back along ``axis``."""
        return self._shifted(axis, -1)

    def as_list(self) -> List[int]:
        return [self.x, self.y, self.z]

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.int64)


@dataclass(frozen=True)
class Direction:
    """Orientation relative to the build frame plus vertical climb."""
    orientation: int
    climb: int = CLIMB_LEVEL

    def __post_init__(self):
        if isinstance(self.orientation, bool) or self.orientation not in ORIENTATIONS:
            raise ConstructionError(f"Unaccepted orientation for direction: {self.orientation!r}")
        if isinstance(self.climb, bool) or self.climb not in CLIMBS:
            raise ConstructionError(f"Unaccepted climb for direction: {self.climb!r}")
        if self.orientation in TURN_ORIENTATIONS and self.climb != CLIMB_LEVEL:
            raise InvalidSlopeError("Cannot create non-horizontal diagonal road segment")

    @property
    def is_turn(self) -> bool:
        return self.orientation in DIAGONAL_ORIENTATIONS


def validate_rotation(rotation: int) -> int:
    if isinstance(rotation, bool) or rotation not in STRAIGHT_ROTATIONS:
        raise InvalidArgumentError(f"Rotation must be one of {STRAIGHT_ROTATIONS}, got {rotation!r}")
    return rotation


def absolute_orientation(orientation: int, rotation: int) -> int:
    """Re-express a frame-relative orientation as an absolute 1..8 heading."""
    return ((orientation + rotation - 2) % 8) + 1


def straight_equivalent(orientation: int) -> int:
    try:
        return STRAIGHT_EQUIVALENT[orientation]
    except KeyError:
        raise InternalInconsistencyError(
            f"Orientation {orientation} is not a road heading"
        ) from None


def next_rotation(rotation: int, orientation: int) -> int:
    """Fold a segment's orientation into the build frame."""
    rotated = rotation - 1 + straight_equivalent(orientation)
    if rotated >= 9:
        rotated -= 8
    return rotated


def step(position: Position, rotation: int, climb: int) -> Position:
    """Move one voxel along ``rotation``, then apply ``climb`` on y."""
    dx, dz = HEADING_STEPS[validate_rotation(rotation)]
    moved = position
    if dx > 0:
        moved = moved.increased("x")
    elif dx < 0:
        moved = moved.decreased("x")
    if dz > 0:
        moved = moved.increased("z")
    elif dz < 0:
        moved = moved.decreased("z")

    if climb > 0:
        moved = moved.decreased("y")
    elif climb < 0:
        moved = moved.increased("y")
    return moved
