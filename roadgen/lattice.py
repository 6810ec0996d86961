"""Cubical cell storage for one generation attempt."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Iterator, Tuple

import numpy as np

from .constants import HEADING_STEPS
from .coords import Position, validate_rotation
from .errors import ConstructionError, InvalidArgumentError, OutOfBoundsError


class _Marker:
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return self.name


EMPTY = None
OCCUPIED = _Marker("OCCUPIED")
RESERVED = _Marker("RESERVED")
OUT_OF_BOUNDS = _Marker("OUT_OF_BOUNDS")


@dataclass(frozen=True)
class Neighborhood:
    """Cell reads around a voxel, named relative to the build frame.

    ``upward``/``downward``/``above``/``under`` cover two vertically stacked
    cells and are only EMPTY when both are.
    """
    left: Any
    right: Any
    forward: Any
    upward: Any
    downward: Any
    above: Any
    under: Any
    under_left: Any
    under_right: Any

    def is_clear(self, *names: str) -> bool:
        return all(getattr(self, name) is EMPTY for name in names)

    def as_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


class Lattice:
    """Dense S x S x S cell storage with a flat backing array."""

    __slots__ = ("size", "_data")

    def __init__(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size < 1:
            raise ConstructionError(f"Lattice size must be a positive integer, got {size!r}")
        self.size = int(size)
        self._data = np.full(self.size ** 3, EMPTY, dtype=object)

    # Internal utilities -------------------------------------------------
    def _index(self, pos: Position) -> int:
        if not isinstance(pos, Position):
            raise InvalidArgumentError(f"Expected a Position, got {pos!r}")
        if not self.contains(pos.x, pos.y, pos.z):
            raise OutOfBoundsError(f"Position {pos.as_list()} outside lattice of size {self.size}")
        size = self.size
        return (pos.x * size + pos.y) * size + pos.z

    def _probe(self, x: int, y: int, z: int) -> Any:
        if not self.contains(x, y, z):
            return OUT_OF_BOUNDS
        return self.get(Position(x, y, z))

    def _probe_column(self, x: int, y: int, z: int, dy: int) -> Any:
        """Read two stacked cells starting at (x, y, z) and going ``dy`` per step."""
        first = self._probe(x, y, z)
        second = self._probe(x, y + dy, z)
        if first is OUT_OF_BOUNDS or second is OUT_OF_BOUNDS:
            return OUT_OF_BOUNDS
        return first if first is not EMPTY else second

    # API ----------------------------------------------------------------
    def contains(self, x: int, y: int, z: int) -> bool:
        size = self.size
        return 0 <= x < size and 0 <= y < size and 0 <= z < size

    def get(self, pos: Position) -> Any:
        return self._data[self._index(pos)]

    def set(self, pos: Position, value: Any) -> None:
        self._data[self._index(pos)] = value

    def is_clear(self, pos: Position) -> bool:
        return self.get(pos) is EMPTY

    def clear(self) -> None:
        self._data[:] = EMPTY

    def count_filled(self) -> int:
        return sum(1 for value in self._data if value is not EMPTY)

    def filled_cells(self) -> Iterator[Tuple[Position, Any]]:
        size = self.size
        for index, value in enumerate(self._data):
            if value is EMPTY:
                continue
            x, rest = divmod(index, size * size)
            y, z = divmod(rest, size)
            yield Position(x, y, z), value

    def neighborhood(self, pos: Position, rotation: int) -> Neighborhood:
        """Read the nine cells that decide where a road may go next from ``pos``.

        ``rotation`` is the absolute heading the road is advancing along. Cells
        outside the cube read as OUT_OF_BOUNDS instead of raising.
        """
        validate_rotation(rotation)
        self._index(pos)

        fx, fz = HEADING_STEPS[rotation]
        # Left and right are the forward vector turned a quarter each way.
        lx, lz = -fz, fx
        rx, rz = fz, -fx
        x, y, z = pos.x, pos.y, pos.z

        return Neighborhood(
            left=self._probe(x + lx, y, z + lz),
            right=self._probe(x + rx, y, z + rz),
            forward=self._probe(x + fx, y, z + fz),
            upward=self._probe_column(x + fx, y - 1, z + fz, -1),
            downward=self._probe_column(x + fx, y + 1, z + fz, 1),
            above=self._probe_column(x, y - 1, z, -1),
            under=self._probe_column(x, y + 1, z, 1),
            under_left=self._probe(x + lx, y + 1, z + lz),
            under_right=self._probe(x + rx, y + 1, z + rz),
        )

