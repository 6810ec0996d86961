import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from roadgen.coords import Direction, Position
from roadgen.errors import (
    ConstructionError,
    InternalInconsistencyError,
    InvalidArgumentError,
    InvalidSlopeError,
)
from roadgen.faces import Quad, Triangle, Voxel, build_face

# Voxel at (2, 3, 4): v1 = corner, v2 = +x, v3 = +x+z, v4 = +z
V1 = Position(2, 3, 4)
V2 = Position(3, 3, 4)
V3 = Position(3, 3, 5)
V4 = Position(2, 3, 5)
VOXEL = Voxel(V1)


def up(p: Position) -> Position:
    return p.decreased("y")


def down(p: Position) -> Position:
    return p.increased("y")


class TestVoxel(unittest.TestCase):

    def test_base_corners(self):
        self.assertEqual(VOXEL.base_corners(), (V1, V2, V3, V4))

    def test_requires_position(self):
        with self.assertRaises(InvalidArgumentError):
            Voxel((2, 3, 4))


class TestStraightFaces(unittest.TestCase):

    def test_level_quads_in_every_frame(self):
        for rotation in (1, 3, 5, 7):
            with self.subTest(rotation=rotation):
                face = build_face(VOXEL, Direction(1, 0), rotation)
                self.assertEqual(face, Quad(V1, V2, V3, V4))
                self.assertEqual(face.kind, "quad")

    def test_climb_raises_far_edge(self):
        expected = {
            1: Quad(V1, V2, up(V3), up(V4)),
            3: Quad(V1, up(V2), up(V3), V4),
            5: Quad(up(V1), up(V2), V3, V4),
            7: Quad(up(V1), V2, V3, up(V4)),
        }
        for rotation, quad in expected.items():
            with self.subTest(rotation=rotation):
                self.assertEqual(build_face(VOXEL, Direction(1, 1), rotation), quad)

    def test_descent_lowers_far_edge(self):
        expected = {
            1: Quad(V1, V2, down(V3), down(V4)),
            3: Quad(V1, down(V2), down(V3), V4),
            5: Quad(down(V1), down(V2), V3, V4),
            7: Quad(down(V1), V2, V3, down(V4)),
        }
        for rotation, quad in expected.items():
            with self.subTest(rotation=rotation):
                self.assertEqual(build_face(VOXEL, Direction(1, -1), rotation), quad)

    def test_frame_relative_heading(self):
        # Orientation 3 (right) in frame 7 is absolute heading 1.
        self.assertEqual(
            build_face(VOXEL, Direction(3, 1), 7),
            build_face(VOXEL, Direction(1, 1), 1),
        )

    def test_climb_from_top_layer_fails(self):
        with self.assertRaises(ConstructionError):
            build_face(Voxel(Position(0, 0, 0)), Direction(1, 1), 1)


class TestTurnFaces(unittest.TestCase):

    def test_turn_wedges(self):
        expected = {
            (2, 1): Triangle(V1, V2, V3),
            (8, 3): Triangle(V3, V4, V1),
            (2, 3): Triangle(V4, V1, V2),
            (8, 5): Triangle(V3, V4, V2),
            (2, 5): Triangle(V1, V3, V4),
            (8, 7): Triangle(V2, V3, V1),
            (2, 7): Triangle(V4, V2, V3),
            (8, 1): Triangle(V1, V4, V2),
        }
        for (orientation, rotation), triangle in expected.items():
            with self.subTest(orientation=orientation, rotation=rotation):
                face = build_face(VOXEL, Direction(orientation, 0), rotation)
                self.assertEqual(face, triangle)
                self.assertEqual(face.kind, "triangle")
                self.assertEqual(len(face.vertices), 3)

    def test_left_and_right_wedges_mirror(self):
        # A right turn in frame 1 and a left turn in frame 3 share heading 2.
        right = build_face(VOXEL, Direction(2, 0), 1)
        left = build_face(VOXEL, Direction(8, 0), 3)
        self.assertEqual(right, Triangle(V1, V2, V3))
        self.assertEqual(left, Triangle(V3, V4, V1))
        self.assertNotEqual(set(right.vertices), set(left.vertices))

    def test_unreachable_frame_pairing(self):
        # Orientation 6 in frame 5 is heading 2, which no road builds in frame 5.
        with self.assertRaises(InternalInconsistencyError):
            build_face(VOXEL, Direction(6, 0), 5)
        with self.assertRaises(InternalInconsistencyError):
            build_face(VOXEL, Direction(4, 0), 1)

    def test_sloped_turns_never_constructible(self):
        for orientation in (2, 8):
            for climb in (1, -1):
                with self.subTest(orientation=orientation, climb=climb):
                    with self.assertRaises(InvalidSlopeError):
                        build_face(VOXEL, Direction(orientation, climb), 1)

    def test_sloped_diagonal_heading_rejected_by_builder(self):
        for orientation in (4, 6):
            for climb in (1, -1):
                direction = Direction(orientation, climb)
                for rotation in (1, 3, 5, 7):
                    with self.subTest(orientation=orientation, climb=climb, rotation=rotation):
                        with self.assertRaises(InvalidSlopeError):
                            build_face(VOXEL, direction, rotation)


class TestFaceBuilderContract(unittest.TestCase):

    def test_deterministic_and_vertex_counts(self):
        for orientation in (1, 2, 8):
            for climb in ((-1, 0, 1) if orientation == 1 else (0,)):
                for rotation in (1, 3, 5, 7):
                    first = build_face(VOXEL, Direction(orientation, climb), rotation)
                    second = build_face(VOXEL, Direction(orientation, climb), rotation)
                    self.assertEqual(first, second)
                    expected = 3 if orientation != 1 else 4
                    self.assertEqual(len(first.vertices), expected)

    def test_bad_arguments(self):
        with self.assertRaises(InvalidArgumentError):
            build_face(VOXEL, Direction(1, 0), 2)
        with self.assertRaises(InvalidArgumentError):
            build_face(V1, Direction(1, 0), 1)


if __name__ == '__main__':
    unittest.main()
