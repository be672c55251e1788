import math
import unittest

import numpy as np

from hedra.config import ANGLE_TOLERANCE_DEG
from hedra.model.errors import DegenerateTriangleError, InvalidTopologyError, NotSupportedError
from hedra.model.collision import LayerMask
from hedra.model.geometry_primitives import Point, Vector
from hedra.model.geometry_utils import polar_angle, signed_area
from hedra.model.shapes.rectangle import Rectangle
from hedra.model.shapes.segment import Segment
from hedra.model.shapes.triangle import Triangle


def assert_points_close(case: unittest.TestCase, actual, expected, places: int = 7) -> None:
    np.testing.assert_array_almost_equal(
        np.array([[p.x, p.y] for p in actual]),
        np.array([[p.x, p.y] for p in expected]),
        decimal=places,
    )


class TriangleConstructionTest(unittest.TestCase):
    def test_three_points_are_ordered_counter_clockwise(self):
        tri = Triangle(Point(0.0, 0.0), Point(0.0, 3.0), Point(4.0, 0.0))
        self.assertEqual(tri.vertices[0], Point(0.0, 0.0))
        self.assertEqual(tri.vertices, [Point(0.0, 0.0), Point(4.0, 0.0), Point(0.0, 3.0)])
        self.assertGreater(signed_area(tri.vertices), 0.0)

    def test_from_points_matches_constructor(self):
        a, b, c = Point(0.0, 0.0), Point(2.0, 0.0), Point(1.0, 1.0)
        self.assertEqual(Triangle.from_points(a, b, c).vertices, Triangle(a, b, c).vertices)

    def test_center_is_mean_of_vertices(self):
        tri = Triangle(Point(0.0, 0.0), Point(3.0, 0.0), Point(0.0, 3.0))
        self.assertAlmostEqual(tri.center.x, 1.0)
        self.assertAlmostEqual(tri.center.y, 1.0)

    def test_coincident_vertices_are_rejected(self):
        with self.assertRaises(DegenerateTriangleError):
            Triangle(Point(0.0, 0.0), Point(0.0, 0.0), Point(1.0, 0.0))

    def test_collinear_vertices_are_rejected(self):
        with self.assertRaises(DegenerateTriangleError):
            Triangle(Point(0.0, 0.0), Point(1.0, 1.0), Point(2.0, 2.0))

    def test_side_angle_side_right_triangle(self):
        tri = Triangle.from_side_angle_side(Point(0.0, 0.0), ab=3.0, ac=4.0, alpha=90.0)
        self.assertAlmostEqual(tri.edges[0].length, 3.0)
        self.assertAlmostEqual(tri.edges[1].length, 5.0)
        self.assertAlmostEqual(tri.edges[2].length, 4.0)
        self.assertAlmostEqual(tri.area, 6.0)
        self.assertAlmostEqual(tri.angles_degrees[0], 90.0, delta=ANGLE_TOLERANCE_DEG)
        self.assertAlmostEqual(tri.angles_degrees[1], math.degrees(math.asin(0.8)), delta=ANGLE_TOLERANCE_DEG)

    def test_side_angle_side_obtuse_beta(self):
        ab, ac, alpha = 1.0, 3.0, 30.0
        tri = Triangle.from_side_angle_side(Point(2.0, -1.0), ab=ab, ac=ac, alpha=alpha)
        bc = math.sqrt(ab ** 2 + ac ** 2 - 2 * ab * ac * math.cos(math.radians(alpha)))
        beta = math.degrees(math.acos((ab ** 2 + bc ** 2 - ac ** 2) / (2 * ab * bc)))
        self.assertGreater(beta, 90.0)
        self.assertAlmostEqual(tri.edges[1].length, bc)
        self.assertAlmostEqual(tri.angles_degrees[1], beta, delta=ANGLE_TOLERANCE_DEG)
        self.assertEqual(tri.vertices[0], Point(2.0, -1.0))

    def test_side_angle_side_invalid_input(self):
        for ab, ac, alpha in [(0.0, 1.0, 45.0), (1.0, -2.0, 45.0), (1.0, 1.0, 0.0), (1.0, 1.0, 180.0), (1.0, 1.0, 200.0)]:
            with self.subTest(ab=ab, ac=ac, alpha=alpha):
                with self.assertRaises(DegenerateTriangleError):
                    Triangle.from_side_angle_side(Point(0.0, 0.0), ab=ab, ac=ac, alpha=alpha)

    def test_equilateral(self):
        tri = Triangle.equilateral(Point(0.0, 0.0), 1.0)
        self.assertAlmostEqual(tri.vertices[0].x, 0.0)
        self.assertAlmostEqual(tri.vertices[0].y, 1.0)
        for vertex in tri.vertices:
            self.assertAlmostEqual(vertex.distance_to(Point(0.0, 0.0)), 1.0)
        for angle in tri.angles_degrees:
            self.assertAlmostEqual(angle, 60.0, delta=ANGLE_TOLERANCE_DEG)

        directions = [math.degrees(polar_angle(tri.center, v)) for v in tri.vertices]
        for i in range(3):
            separation = (directions[(i + 1) % 3] - directions[i]) % 360.0
            self.assertAlmostEqual(separation, 120.0, delta=ANGLE_TOLERANCE_DEG)

    def test_equilateral_needs_positive_radius(self):
        with self.assertRaises(DegenerateTriangleError):
            Triangle.equilateral(Point(0.0, 0.0), 0.0)

    def test_from_segments_shared_vertex(self):
        a, b, c = Point(0.0, 0.0), Point(2.0, 0.0), Point(0.0, 2.0)
        for second in (Segment(b, c), Segment(c, b), Segment(a, c), Segment(c, a)):
            with self.subTest(second=str(second)):
                tri = Triangle.from_segments(Segment(a, b), second)
                self.assertEqual(tri.vertices, [a, b, c])

    def test_from_segments_without_shared_vertex(self):
        with self.assertRaises(InvalidTopologyError):
            Triangle.from_segments(
                Segment(Point(0.0, 0.0), Point(1.0, 0.0)),
                Segment(Point(0.0, 1.0), Point(1.0, 1.0)),
            )

    def test_from_identical_segments(self):
        with self.assertRaises(DegenerateTriangleError):
            Triangle.from_segments(
                Segment(Point(0.0, 0.0), Point(1.0, 0.0)),
                Segment(Point(1.0, 0.0), Point(0.0, 0.0)),
            )


class TriangleDerivedDataTest(unittest.TestCase):
    def setUp(self):
        self.triangles = [
            Triangle(Point(0.0, 0.0), Point(4.0, 0.0), Point(0.0, 3.0)),
            Triangle(Point(-1.0, 2.0), Point(5.0, 7.5), Point(3.0, -4.0)),
            Triangle.equilateral(Point(10.0, -3.0), 2.5),
            Triangle.from_side_angle_side(Point(1.0, 1.0), 2.0, 7.0, 150.0),
        ]

    def test_angle_sum(self):
        for tri in self.triangles:
            self.assertAlmostEqual(sum(tri.angles_degrees), 180.0, delta=ANGLE_TOLERANCE_DEG)
            self.assertAlmostEqual(sum(tri.angles), math.pi)

    def test_array_lengths_match(self):
        for tri in self.triangles:
            self.assertEqual(len(tri.vertices), 3)
            self.assertEqual(len(tri.edges), len(tri.vertices))
            self.assertEqual(len(tri.normals), len(tri.vertices))

    def test_normals_are_outward_unit_perpendiculars(self):
        for tri in self.triangles:
            for edge, normal in zip(tri.edges, tri.normals):
                self.assertAlmostEqual(normal.magnitude, 1.0)
                self.assertAlmostEqual(normal.dot(edge.to_vector().normalize()), 0.0)
                self.assertGreater(normal.dot(edge.midpoint - tri.center), 0.0)

    def test_heights_drop_onto_opposite_edges(self):
        for tri in self.triangles:
            for i, height in enumerate(tri.heights):
                opposite = tri.edges[(i + 1) % 3]
                self.assertEqual(height.point_a, tri.vertices[i])
                foot_offset = height.point_b - opposite.point_a
                self.assertAlmostEqual(foot_offset.cross(opposite.to_vector().normalize()), 0.0)
                self.assertAlmostEqual(height.to_vector().normalize().dot(opposite.to_vector().normalize()), 0.0)

    def test_area_matches_shoelace(self):
        for tri in self.triangles:
            self.assertAlmostEqual(tri.area, abs(signed_area(tri.vertices)))

    def test_str_lists_angles_and_heights(self):
        text = str(self.triangles[0])
        self.assertIn("Vertices:", text)
        self.assertIn("Angles:", text)
        self.assertIn("Heights:", text)


class TriangleTransformTest(unittest.TestCase):
    def setUp(self):
        self.tri = Triangle(Point(-1.0, 2.0), Point(5.0, 7.5), Point(3.0, -4.0))
        self.original = [p for p in self.tri.vertices]
        self.original_heights = [(h.point_a, h.point_b) for h in self.tri.heights]

    def test_translate_round_trip(self):
        d = Vector(3.25, -7.5)
        self.tri.translate(d)
        self.assertAlmostEqual(self.tri.vertices[0].x, self.original[0].x + 3.25)
        self.assertAlmostEqual(self.tri.heights[1].point_b.y, self.original_heights[1][1].y - 7.5)
        self.tri.translate(-d)
        assert_points_close(self, self.tri.vertices, self.original)
        assert_points_close(self, [h.point_b for h in self.tri.heights], [h[1] for h in self.original_heights])

    def test_translate_moves_edges_and_center(self):
        center = self.tri.center
        self.tri.translate(Vector(1.0, 1.0))
        self.assertAlmostEqual(self.tri.center.x, center.x + 1.0)
        self.assertAlmostEqual(self.tri.center.y, center.y + 1.0)
        for i, edge in enumerate(self.tri.edges):
            self.assertTrue(edge.point_a.is_close(self.tri.vertices[i]))

    def test_rotate_round_trip(self):
        self.tri.rotate(37.0)
        self.tri.rotate(-37.0)
        assert_points_close(self, self.tri.vertices, self.original)
        assert_points_close(self, [h.point_b for h in self.tri.heights], [h[1] for h in self.original_heights])

    def test_full_rotation_is_identity(self):
        self.tri.rotate(360.0)
        assert_points_close(self, self.tri.vertices, self.original)
        self.assertAlmostEqual(self.tri.rotation, 0.0)

    def test_rotation_accumulates_modulo_360(self):
        self.tri.rotate(90.0)
        self.tri.rotate(300.0)
        self.assertAlmostEqual(self.tri.rotation, 30.0)

    def test_rotate_keeps_derived_data_consistent(self):
        area = self.tri.area
        self.tri.rotate(73.0)
        self.assertAlmostEqual(self.tri.area, area)
        for i, edge in enumerate(self.tri.edges):
            self.assertTrue(edge.point_a.is_close(self.tri.vertices[i], eps=1e-9))
            self.assertAlmostEqual(self.tri.normals[i].dot(edge.to_vector().normalize()), 0.0)
            self.assertGreater(self.tri.normals[i].dot(edge.midpoint - self.tri.center), 0.0)
        for i, height in enumerate(self.tri.heights):
            self.assertTrue(height.point_a.is_close(self.tri.vertices[i], eps=1e-9))

    def test_copy_is_independent(self):
        clone = self.tri.copy()
        clone.translate(Vector(10.0, 10.0))
        clone.rotate(45.0)
        assert_points_close(self, self.tri.vertices, self.original)
        self.assertEqual(self.tri.heights[0].point_a, self.original_heights[0][0])
        self.assertIsNot(clone.edges[0], self.tri.edges[0])
        self.assertAlmostEqual(clone.area, self.tri.area)


class DeepestVertexTest(unittest.TestCase):
    def setUp(self):
        self.box = Rectangle(Point(0.0, 0.0), width=10.0, height=10.0)

    def test_single_vertex_inside(self):
        tri = Triangle(Point(0.0, 0.0), Point(6.0, 0.0), Point(0.0, 6.0))
        self.assertEqual(tri.deepest_vertex_in(self.box), Point(0.0, 0.0))

    def test_deepest_of_several(self):
        tri = Triangle(Point(1.0, 1.0), Point(4.0, 0.0), Point(0.0, 8.0))
        self.assertEqual(tri.deepest_vertex_in(self.box), Point(1.0, 1.0))

    def test_fully_inside_prefers_later_of_equally_deep(self):
        # (-1, -1) and (1, -1) are both 4 away from the box; (0, 2) only 3
        tri = Triangle(Point(-1.0, -1.0), Point(1.0, -1.0), Point(0.0, 2.0))
        self.assertEqual(len(tri.vertices_inside(self.box)), 3)
        self.assertEqual(tri.deepest_vertex_in(self.box), Point(1.0, -1.0))

    def test_tie_goes_to_later_vertex(self):
        tri = Triangle(Point(-2.0, 0.0), Point(2.0, 0.0), Point(0.0, 4.0))
        self.assertEqual(tri.vertices, [Point(-2.0, 0.0), Point(2.0, 0.0), Point(0.0, 4.0)])
        self.assertEqual(tri.deepest_vertex_in(self.box), Point(2.0, 0.0))

    def test_no_vertex_inside(self):
        tri = Triangle(Point(20.0, 20.0), Point(25.0, 20.0), Point(20.0, 25.0))
        self.assertIsNone(tri.deepest_vertex_in(self.box))
        self.assertEqual(tri.vertices_inside(self.box), [])


class TriangleCollisionTest(unittest.TestCase):
    def setUp(self):
        self.tri = Triangle.equilateral(Point(0.0, 0.0), 1.0)

    def test_collision_queries_are_not_supported(self):
        with self.assertRaises(NotSupportedError):
            self.tri.check_collisions(LayerMask.everything())
        with self.assertRaises(NotImplementedError):
            self.tri.check_collisions_at(Point(1.0, 1.0), LayerMask.from_layers(0))

    def test_collision_offset_is_zero(self):
        other = Triangle.equilateral(Point(0.5, 0.0), 1.0)
        self.assertEqual(self.tri.calculate_collision_offset(self.tri.copy(), other), Vector(0.0, 0.0))


if __name__ == "__main__":
    unittest.main()
