from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Tuple

from .constants import (
    CLIMB_DOWN,
    CLIMB_LEVEL,
    CLIMB_UP,
    INITIAL_ROTATION,
    ORIENTATION_FORWARD,
    ORIENTATION_FORWARD_LEFT,
    ORIENTATION_FORWARD_RIGHT,
    SHAPE_NONE,
    SHAPE_SQUARE,
    SHAPE_TRIANGLE,
)
from .coords import Direction, Position, next_rotation, step
from .errors import ConstructionError
from .faces import Face, Voxel, build_face
from .lattice import EMPTY, OCCUPIED, RESERVED, Lattice, Neighborhood

TURN_LEFT = Direction(ORIENTATION_FORWARD_LEFT, CLIMB_LEVEL)
TURN_RIGHT = Direction(ORIENTATION_FORWARD_RIGHT, CLIMB_LEVEL)
CLIMB = Direction(ORIENTATION_FORWARD, CLIMB_UP)
DESCEND = Direction(ORIENTATION_FORWARD, CLIMB_DOWN)
STRAIGHT = Direction(ORIENTATION_FORWARD, CLIMB_LEVEL)

# Reads that only matter for the voxel entered after the current one.
ONWARD_CELLS = ("left", "right", "forward", "upward", "downward", "under_left", "under_right")


@dataclass(frozen=True)
class Segment:
    """One placed piece of road and the surface built for it."""
    voxel: Voxel
    direction: Direction
    rotation: int
    face: Face = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "face", build_face(self.voxel, self.direction, self.rotation))

    @property
    def shape(self) -> str:
        return SHAPE_TRIANGLE if self.direction.is_turn else SHAPE_SQUARE


@dataclass
class _Frame:
    voxel: Position
    rotation: int
    prev_shape: str
    candidates: List[Direction]
    # Cells written when the frame was entered, with the values they replaced.
    undo: List[Tuple[Position, Any]]
    next_index: int = 0


def road_options(hood: Neighborhood, prev_shape: str, linearity: int, altitude_variation: int) -> List[Direction]:
    """
    List the admissible next steps, with weighted options repeated.

    An option listed k times is k times as likely to come first out of a
    uniform shuffle, which is how ``linearity`` and ``altitude_variation`` bias
    the road.
    """
    options: List[Direction] = []
    after_square = prev_shape == SHAPE_SQUARE

    if after_square and hood.is_clear("left", "right", "under_left", "under"):
        options.append(TURN_LEFT)
    if after_square and hood.is_clear("right", "left", "under_right", "under"):
        options.append(TURN_RIGHT)
    if hood.is_clear("left", "right", "upward", "forward", "above"):
        options.extend([CLIMB] * altitude_variation)
    if hood.is_clear("left", "right", "downward", "under", "forward"):
        options.extend([DESCEND] * altitude_variation)
    if hood.is_clear("left", "right", "forward", "downward", "under"):
        options.extend([STRAIGHT] * linearity)
    return options


def _validate_weight(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConstructionError(f"{name} must be a positive integer, got {value!r}")
    return value


class PathSearch:
    """
    Depth-first backtracking search for one road on one fresh lattice.

    Frames live on an explicit stack so the road length is not bounded by the
    interpreter's recursion limit. Every lattice write made when entering a
    voxel is logged on its frame and reverted when the frame is abandoned, so
    a failed branch leaves no marks behind.
    """

    def __init__(
        self,
        size: int,
        linearity: int = 1,
        altitude_variation: int = 1,
        rng: Optional[random.Random] = None,
        verbose: bool = False,
    ):
        self.size = _validate_weight("size", size)
        self.linearity = _validate_weight("linearity", linearity)
        self.altitude_variation = _validate_weight("altitude_variation", altitude_variation)
        self.rng = rng if rng is not None else random.Random()
        self.verbose = verbose
        self.lattice = Lattice(self.size)
        self.segments: List[Segment] = []
        self.frames_entered = 0
        self.backtracks = 0

    def start_position(self) -> Position:
        return Position(self.size // 2, 0, 0)

    # Internal helpers ---------------------------------------------------
    def _enter(self, voxel: Position, rotation: int, prev_shape: str) -> Optional[_Frame]:
        lattice = self.lattice
        self.frames_entered += 1

        undo = [(voxel, lattice.get(voxel))]
        lattice.set(voxel, OCCUPIED)

        hood = lattice.neighborhood(voxel, rotation)
        last = len(self.segments) == self.size - 1
        if last:
            # Nothing is entered after the last piece, so onward reads do not count.
            hood = replace(hood, **{name: EMPTY for name in ONWARD_CELLS})
        candidates = road_options(hood, prev_shape, self.linearity, self.altitude_variation)
        if last and not candidates:
            # A level cap needs no clearance at all.
            candidates = [STRAIGHT]

        if not candidates:
            self._backtrack(voxel, rotation, undo)
            return None

        for y in (voxel.y - 1, voxel.y + 1):
            if not lattice.contains(voxel.x, y, voxel.z):
                continue
            headroom = Position(voxel.x, y, voxel.z)
            if lattice.get(headroom) is EMPTY:
                undo.append((headroom, EMPTY))
                lattice.set(headroom, RESERVED)

        self.rng.shuffle(candidates)
        # Later copies of an option that already failed would search the same
        # subtree from the same lattice state, so only first occurrences stay.
        candidates = list(dict.fromkeys(candidates))
        return _Frame(voxel, rotation, prev_shape, candidates, undo)

    def _revert(self, undo: List[Tuple[Position, Any]]) -> None:
        for pos, previous in reversed(undo):
            self.lattice.set(pos, previous)

    def _backtrack(self, voxel: Position, rotation: int, undo: List[Tuple[Position, Any]]) -> None:
        self._revert(undo)
        self.backtracks += 1
        if self.verbose:
            print(
                f"  Backtracking from {voxel.as_list()}"
                f" (rotation {rotation}, depth {len(self.segments)})"
            )

    def _finish(self, segments: Optional[List[Segment]]) -> Optional[List[Segment]]:
        if self.verbose:
            outcome = "found" if segments is not None else "not found"
            print(
                f"Info: Road of size {self.size} {outcome} after {self.frames_entered} voxel(s) entered"
                f" and {self.backtracks} backtrack(s)."
            )
        return segments

    # API ----------------------------------------------------------------
    def run(self) -> Optional[List[Segment]]:
        """
        Search for a road of exactly ``size`` segments.

        Returns:
            The segments in road order, or None when every shuffled option
            from the start voxel was exhausted.
        """
        self.segments = []
        root = self._enter(self.start_position(), INITIAL_ROTATION, SHAPE_NONE)
        if root is None:
            return self._finish(None)
        stack: List[_Frame] = [root]

        while stack:
            frame = stack[-1]
            if frame.next_index > 0 and len(self.segments) > len(stack) - 1:
                # The child of the previous candidate failed.
                self.segments.pop()
                self.lattice.set(frame.voxel, OCCUPIED)

            if frame.next_index >= len(frame.candidates):
                self._backtrack(frame.voxel, frame.rotation, frame.undo)
                stack.pop()
                continue

            direction = frame.candidates[frame.next_index]
            frame.next_index += 1

            segment = Segment(Voxel(frame.voxel), direction, frame.rotation)
            self.lattice.set(frame.voxel, segment)
            self.segments.append(segment)
            if len(self.segments) == self.size:
                return self._finish(list(self.segments))

            rotation = next_rotation(frame.rotation, direction.orientation)
            child = self._enter(step(frame.voxel, rotation, direction.climb), rotation, segment.shape)
            if child is None:
                self.segments.pop()
                self.lattice.set(frame.voxel, OCCUPIED)
                continue
            stack.append(child)

        return self._finish(None)


def generate(
    size: int,
    linearity: int = 1,
    altitude_variation: int = 1,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    verbose: bool = False,
) -> Optional[List[Face]]:
    """
    Run one generation attempt on a fresh lattice.

    Args:
        size: Lattice side and exact number of road segments.
        linearity: Copies of the straight option in every shuffle.
        altitude_variation: Copies of each climb option in every shuffle.
        seed: Seed for a private ``random.Random`` (ignored when ``rng`` is given).
        rng: Source of shuffles.
        verbose: Print backtracking progress.

    Returns:
        The faces of a complete road, or None when this attempt found no path.
    """
    if rng is None:
        rng = random.Random(seed)
    search = PathSearch(size, linearity, altitude_variation, rng=rng, verbose=verbose)
    segments = search.run()
    if segments is None:
        return None
    return [segment.face for segment in segments]
