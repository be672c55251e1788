from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from copy import deepcopy
from math import hypot
from typing import TYPE_CHECKING, Any, Optional, Sequence

import numpy as np

from hedra.config import GEOMETRY_EPS
from hedra.model.geometry_primitives import Point, Vector
from hedra.model.geometry_utils import deg2rad, points_to_array, polar_angle, rotate_point
from hedra.model.shapes.segment import Segment

if TYPE_CHECKING:
    import numpy.typing as npt
    from hedra.model.collision import LayerMask, OverlapQuery

logger = logging.getLogger(__name__)


class Polygon(ABC):
    """
    Abstract base class for closed convex shapes in the plane.

    A concrete shape fills `vertices` (directly or through `create_vertices`)
    and calls `init`, which derives every other attribute in a fixed order:

    1. `calculate_center`
    2. `sort_vertices`
    3. `create_edges`
    4. `create_normals`
    5. `build_extras` (shape-specific)
    6. `calculate_area`

    Transforms keep all derived attributes consistent with the vertices.
    """

    def __init__(
        self,
        vertices: Optional[Sequence[Point]] = None,
        collision_query: Optional[OverlapQuery] = None
    ) -> None:
        """
        Initialize the empty attribute set.

        Args:
            vertices: Raw vertices, in any winding order.
            collision_query: Scene service used by `check_collisions`.
        """
        self.vertices: list[Point] = list(vertices) if vertices is not None else []
        self.edges: list[Segment] = []
        self.normals: list[Vector] = []
        self.area: float = 0.0
        self.center: Point = Point(0.0, 0.0)
        self.rotation: float = 0.0
        self.collision_query = collision_query

    def __repr__(self) -> str:
        vertices = ", ".join(f"({v.x:g}, {v.y:g})" for v in self.vertices)
        return f"{self.__class__.__name__}(vertices=[{vertices}], area={self.area:g})"

    def __str__(self) -> str:
        lines = [
            f"Vertices: {', '.join(f'({v.x:g}, {v.y:g})' for v in self.vertices)}",
            f"Edges: {', '.join(str(e) for e in self.edges)}",
            f"Normals: {', '.join(f'({n.x:g}, {n.y:g})' for n in self.normals)}",
        ]
        return "\n".join(lines + self._describe_extras())

    def _describe_extras(self) -> list[str]:
        return []

    # ------------------------------------------------------------------------------
    # Init pipeline
    # ------------------------------------------------------------------------------
    def init(self) -> None:
        self.create_vertices()
        if len(self.vertices) < 3:
            raise ValueError(f"A polygon needs at least 3 vertices, got {len(self.vertices)}")

        self.calculate_center()
        self.sort_vertices()
        self.create_edges()
        self.create_normals()
        self.build_extras()
        self.calculate_area()
        logger.debug(f"Initialized {self!r}")

    def create_vertices(self) -> None:
        """Hook for shapes whose vertices are derived from other parameters."""
        pass

    def calculate_center(self) -> None:
        """Centroid as the arithmetic mean of the vertices."""
        self.center = Point.from_array(self.vertices_array().mean(axis=0))

    def sort_vertices(self) -> None:
        """
        Order the vertices counter-clockwise around the center.

        The first vertex keeps index 0. Vertices at the same polar angle are
        ordered by distance to the center, then by their input position.
        """
        def key(index: int) -> tuple[float, float, int]:
            vertex = self.vertices[index]
            return (
                polar_angle(self.center, vertex),
                hypot(vertex.x - self.center.x, vertex.y - self.center.y),
                index,
            )

        order = sorted(range(len(self.vertices)), key=key)
        start = order.index(0)
        order = order[start:] + order[:start]
        self.vertices = [self.vertices[i] for i in order]

    def create_edges(self) -> None:
        n = len(self.vertices)
        self.edges = [Segment(self.vertices[i], self.vertices[(i + 1) % n]) for i in range(n)]

    def create_normals(self) -> None:
        """One outward unit normal per edge."""
        normals = []
        for edge in self.edges:
            normal = edge.to_vector().perpendicular().normalize()
            if normal.dot(edge.midpoint - self.center) < 0:
                normal = -normal
            normals.append(normal)
        self.normals = normals

    def build_extras(self) -> None:
        """Hook for shape-specific derived attributes."""
        pass

    @abstractmethod
    def calculate_area(self) -> None:
        """Calculate and store the area of the shape."""
        pass

    # ------------------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------------------
    def translate(self, direction: Vector) -> None:
        self.vertices = [v + direction for v in self.vertices]
        for edge in self.edges:
            edge.translate(direction)
        self.center = self.center + direction

    def rotate(self, degrees: float) -> None:
        """Rotate the shape around its center (counter-clockwise positive)."""
        self.vertices = [rotate_point(self.center, v, degrees) for v in self.vertices]
        for edge in self.edges:
            edge.rotate(self.center, degrees)
        angle_rad = deg2rad(degrees)
        self.normals = [n.rotate(angle_rad) for n in self.normals]
        self.rotation = (self.rotation + degrees) % 360.0

    def copy(self) -> Polygon:
        """Independent deep copy. The collision backend is shared, not copied."""
        memo: dict[int, Any] = {}
        if self.collision_query is not None:
            memo[id(self.collision_query)] = self.collision_query
        return deepcopy(self, memo)

    # ------------------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------------------
    def vertices_array(self) -> npt.NDArray[np.float64]:
        return points_to_array(self.vertices)

    def contains_point(self, point: Point, eps: float = GEOMETRY_EPS) -> bool:
        """
        Whether `point` lies inside the shape or on its boundary.
        Valid for convex shapes, which all concrete shapes are.
        """
        for edge, normal in zip(self.edges, self.normals):
            if (point - edge.point_a).dot(normal) > eps:
                return False
        return True

    def vertices_inside(self, other: Polygon) -> list[Point]:
        """Vertices of this shape that lie inside `other`."""
        return [v for v in self.vertices if other.contains_point(v)]

    def closest_perpendicular_point_to(self, point: Point) -> Point:
        """Point on the boundary nearest to `point`."""
        candidates = [edge.closest_point(point) for edge in self.edges]
        return min(candidates, key=point.distance_to)

    def distance_to_boundary(self, point: Point) -> float:
        return point.distance_to(self.closest_perpendicular_point_to(point))

    # ------------------------------------------------------------------------------
    # Collision
    # ------------------------------------------------------------------------------
    @abstractmethod
    def calculate_collision_offset(self, past_self: Polygon, obstacle: Polygon) -> Vector:
        """
        Translation that resolves the overlap between this shape and `obstacle`.

        Args:
            past_self: This shape at its previous position.
            obstacle: The shape being collided with.
        """
        pass

    @abstractmethod
    def check_collisions(self, mask: LayerMask) -> list[Any]:
        """Colliders overlapping this shape on the layers in `mask`."""
        pass

    @abstractmethod
    def check_collisions_at(self, position: Point, mask: LayerMask) -> list[Any]:
        """Colliders that would overlap this shape if centered at `position`."""
        pass
