from __future__ import annotations

import logging
from dataclasses import dataclass

from hedra.config import GEOMETRY_EPS
from hedra.model.errors import DegenerateSegmentError
from hedra.model.geometry_primitives import Point, Vector
from hedra.model.geometry_utils import rotate_point

logger = logging.getLogger(__name__)


@dataclass
class Segment:
    """
    A directed straight segment from `point_a` to `point_b`.

    Translation and rotation mutate the segment in place.
    """
    point_a: Point
    point_b: Point

    def __post_init__(self) -> None:
        if self.point_a.distance_to(self.point_b) <= GEOMETRY_EPS:
            logger.debug(f"Rejected degenerate segment at {self.point_a}")
            raise DegenerateSegmentError(
                f"Segment endpoints coincide: {self.point_a} and {self.point_b}"
            )

    def __str__(self) -> str:
        return f"[({self.point_a.x:g}, {self.point_a.y:g}) -> ({self.point_b.x:g}, {self.point_b.y:g})]"

    def to_vector(self) -> Vector:
        return self.point_b - self.point_a

    @property
    def length(self) -> float:
        return self.point_a.distance_to(self.point_b)

    @property
    def midpoint(self) -> Point:
        return self.point_a + self.to_vector() / 2.0

    def reverse(self) -> Segment:
        return Segment(point_a=self.point_b, point_b=self.point_a)

    def _projection_parameter(self, point: Point) -> float:
        vector = self.to_vector()
        return (point - self.point_a).dot(vector) / vector.dot(vector)

    def perpendicular_point(self, point: Point) -> Point:
        """
        Foot of the perpendicular dropped from `point` onto the infinite line
        through this segment. The result may lie outside the segment.
        """
        return self.point_a + self.to_vector() * self._projection_parameter(point)

    def closest_point(self, point: Point) -> Point:
        """Point of this segment (endpoints included) nearest to `point`."""
        t = min(1.0, max(0.0, self._projection_parameter(point)))
        return self.point_a + self.to_vector() * t

    def contains(self, point: Point, eps: float = GEOMETRY_EPS) -> bool:
        """Whether `point` lies on the segment within `eps`."""
        return self.closest_point(point).distance_to(point) <= eps

    def translate(self, direction: Vector) -> None:
        self.point_a = self.point_a + direction
        self.point_b = self.point_b + direction

    def rotate(self, pivot: Point, degrees: float) -> None:
        """Rotate both endpoints around `pivot` (counter-clockwise positive)."""
        self.point_a = rotate_point(pivot, self.point_a, degrees)
        self.point_b = rotate_point(pivot, self.point_b, degrees)
