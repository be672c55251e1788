from __future__ import annotations

import logging
from math import asin, cos, pi, sin, sqrt
from typing import TYPE_CHECKING, Any, Optional

from hedra.config import GEOMETRY_EPS
from hedra.model.errors import DegenerateTriangleError, InvalidTopologyError, NotSupportedError
from hedra.model.geometry_primitives import Point, Vector
from hedra.model.geometry_utils import angle_between, deg2rad, rad2deg, rotate_point
from hedra.model.shapes.polygon import Polygon
from hedra.model.shapes.segment import Segment

if TYPE_CHECKING:
    from hedra.model.collision import LayerMask, OverlapQuery
    from hedra.model.shapes.rectangle import Rectangle

logger = logging.getLogger(__name__)

# Index convention: 0: A | 1: B | 2: C
# Edges: 0: AB | 1: BC | 2: CA


class Triangle(Polygon):
    """
    A triangle with its interior angles and altitudes.

    Angles are stored in radians (`angles_degrees` gives degrees). The third
    angle is derived from the other two so that the sum is exactly pi.
    """
    def __init__(
        self,
        a: Point,
        b: Point,
        c: Point,
        collision_query: Optional[OverlapQuery] = None
    ) -> None:
        """
        Build a triangle from three vertices in any winding order.

        Raises:
            DegenerateTriangleError: If two vertices coincide or all three are collinear.
        """
        super().__init__(vertices=[a, b, c], collision_query=collision_query)
        self.angles: list[float] = []
        self.heights: list[Segment] = []
        self._validate_vertices()
        self.init()

    # ------------------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------------------
    @classmethod
    def from_points(
        cls,
        a: Point,
        b: Point,
        c: Point,
        collision_query: Optional[OverlapQuery] = None
    ) -> Triangle:
        return cls(a, b, c, collision_query=collision_query)

    @classmethod
    def from_segments(
        cls,
        first: Segment,
        second: Segment,
        collision_query: Optional[OverlapQuery] = None
    ) -> Triangle:
        """
        Build a triangle from two sides sharing a vertex.

        The vertices are `first.point_a`, `first.point_b` and the endpoint of
        `second` that is not shared with `first`.

        Raises:
            InvalidTopologyError: If the segments share no endpoint.
            DegenerateTriangleError: If the segments share both endpoints.
        """
        first_ends = (first.point_a, first.point_b)
        free_ends = [
            p for p in (second.point_a, second.point_b)
            if not any(p.is_close(q) for q in first_ends)
        ]

        if len(free_ends) == 2:
            raise InvalidTopologyError(f"Segments {first} and {second} share no vertex")
        if not free_ends:
            raise DegenerateTriangleError(f"Segments {first} and {second} span the same side")

        return cls(first.point_a, first.point_b, free_ends[0], collision_query=collision_query)

    @classmethod
    def from_side_angle_side(
        cls,
        vertex: Point,
        ab: float,
        ac: float,
        alpha: float,
        collision_query: Optional[OverlapQuery] = None
    ) -> Triangle:
        """
        Solve a triangle from two sides and the included angle.

        Side BC follows from the law of cosines, beta from the law of sines and
        gamma from the angle sum. C lies on the +X axis from A; B lies `alpha`
        degrees clockwise from it, so A, B, C wind counter-clockwise and keep
        their indices through vertex sorting. The result is the mirror image
        of placing B counter-clockwise from AC.

        Args:
            vertex: Position of vertex A.
            ab: Length of side AB.
            ac: Length of side AC.
            alpha: Angle at A in degrees, in the open interval (0, 180).

        Raises:
            DegenerateTriangleError: For non-positive sides, an angle outside
                (0, 180) or a solution with a zero-length side or angle.
        """
        if ab <= GEOMETRY_EPS or ac <= GEOMETRY_EPS:
            raise DegenerateTriangleError(f"Side lengths must be positive, got ab={ab}, ac={ac}")
        if not 0.0 < alpha < 180.0:
            raise DegenerateTriangleError(f"Included angle must be in (0, 180) degrees, got {alpha}")

        alpha_rad = deg2rad(alpha)
        bc = sqrt(max(0.0, ab ** 2 + ac ** 2 - 2.0 * ab * ac * cos(alpha_rad)))
        if bc <= GEOMETRY_EPS:
            raise DegenerateTriangleError(f"Side BC collapses to zero (ab={ab}, ac={ac}, alpha={alpha})")

        sin_beta = min(1.0, max(-1.0, sin(alpha_rad) * ac / bc))
        beta = asin(sin_beta)
        # asin only returns acute angles
        if ac ** 2 > ab ** 2 + bc ** 2:
            beta = pi - beta
        gamma = pi - alpha_rad - beta
        if gamma <= 0.0:
            raise DegenerateTriangleError(f"Angle at C vanishes (alpha={alpha}, beta={rad2deg(beta)})")

        logger.debug(
            f"Side-angle-side solved: bc={bc:g}, beta={rad2deg(beta):g} deg, gamma={rad2deg(gamma):g} deg"
        )

        c = vertex + Vector(ac, 0.0)
        b = vertex + Vector(1.0, 0.0).rotate(-alpha_rad) * ab
        return cls(vertex, b, c, collision_query=collision_query)

    @classmethod
    def equilateral(
        cls,
        center: Point,
        radius: float,
        collision_query: Optional[OverlapQuery] = None
    ) -> Triangle:
        """
        Equilateral triangle inscribed in a circle, top vertex first.

        Raises:
            DegenerateTriangleError: If `radius` is not positive.
        """
        if radius <= GEOMETRY_EPS:
            raise DegenerateTriangleError(f"Radius must be positive, got {radius}")

        a = center + Vector(0.0, radius)
        b = rotate_point(center, a, 120.0)
        c = rotate_point(center, a, -120.0)
        return cls(a, b, c, collision_query=collision_query)

    def _validate_vertices(self) -> None:
        a, b, c = self.vertices
        sides = (a.distance_to(b), b.distance_to(c), c.distance_to(a))
        if min(sides) <= GEOMETRY_EPS:
            raise DegenerateTriangleError(f"Triangle has coincident vertices: {a}, {b}, {c}")

        doubled_area = abs((b - a).cross(c - a))
        if doubled_area <= GEOMETRY_EPS * max(sides) ** 2:
            raise DegenerateTriangleError(f"Triangle vertices are collinear: {a}, {b}, {c}")

    # ------------------------------------------------------------------------------
    # Init
    # ------------------------------------------------------------------------------
    def build_extras(self) -> None:
        self.store_heights()
        self.calculate_angles()

    def calculate_angles(self) -> None:
        alpha = angle_between(self.edges[0].to_vector(), -self.edges[2].to_vector())
        beta = angle_between(self.edges[1].to_vector(), -self.edges[0].to_vector())
        self.angles = [alpha, beta, pi - alpha - beta]

    def store_heights(self) -> None:
        self.heights = [
            Segment(vertex, self.edges[(i + 1) % 3].perpendicular_point(vertex))
            for i, vertex in enumerate(self.vertices)
        ]

    def calculate_area(self) -> None:
        a = self.edges[1].length
        b = self.edges[2].length
        self.area = 0.5 * a * b * sin(self.angles[2])

    @property
    def angles_degrees(self) -> list[float]:
        return [rad2deg(angle) for angle in self.angles]

    # ------------------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------------------
    def translate(self, direction: Vector) -> None:
        super().translate(direction)
        for height in self.heights:
            height.translate(direction)

    def rotate(self, degrees: float) -> None:
        super().rotate(degrees)
        for height in self.heights:
            height.rotate(self.center, degrees)

    def _describe_extras(self) -> list[str]:
        return [
            f"Angles: {', '.join(f'{angle:g}' for angle in self.angles_degrees)}",
            f"Heights: {', '.join(str(h) for h in self.heights)}",
        ]

    def deepest_vertex_in(self, other: Rectangle) -> Optional[Point]:
        """
        Returns the vertex of this triangle that lies deepest inside `other`.

        Depth is the distance to the nearest side of the rectangle. When
        several vertices are equally deep the last one wins.

        Returns:
            The deepest contained vertex, or None if no vertex is inside.
        """
        vertex: Optional[Point] = None
        greatest_distance = float("-inf")
        for point in self.vertices_inside(other):
            distance = other.distance_to_boundary(point)
            if distance >= greatest_distance:
                vertex = point
                greatest_distance = distance
        return vertex

    # ------------------------------------------------------------------------------
    # Collision
    # ------------------------------------------------------------------------------
    def calculate_collision_offset(self, past_self: Polygon, obstacle: Polygon) -> Vector:
        return Vector(0.0, 0.0)

    def check_collisions(self, mask: LayerMask) -> list[Any]:
        raise NotSupportedError("Collision queries are not supported for triangles")

    def check_collisions_at(self, position: Point, mask: LayerMask) -> list[Any]:
        raise NotSupportedError("Collision queries are not supported for triangles")
