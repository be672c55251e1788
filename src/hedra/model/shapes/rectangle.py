from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from hedra.config import GEOMETRY_EPS
from hedra.model.errors import DegenerateRectangleError, NotSupportedError
from hedra.model.geometry_primitives import Point, Vector
from hedra.model.geometry_utils import minimum_translation_vector, rotate_point
from hedra.model.shapes.polygon import Polygon
from hedra.model.shapes.segment import Segment

if TYPE_CHECKING:
    from hedra.model.collision import LayerMask, OverlapQuery

logger = logging.getLogger(__name__)


class Rectangle(Polygon):
    """
    A rectangle given by its center, size and rotation in degrees.

    Vertices start at the bottom-left corner of the unrotated rectangle and
    run counter-clockwise.
    """
    def __init__(
        self,
        center: Point,
        width: float,
        height: float,
        rotation: float = 0.0,
        collision_query: Optional[OverlapQuery] = None
    ) -> None:
        """
        Args:
            center: Center of the rectangle.
            width: Extent along the local X axis.
            height: Extent along the local Y axis.
            rotation: Counter-clockwise rotation in degrees.
            collision_query: Scene service used by `check_collisions`.

        Raises:
            DegenerateRectangleError: If width or height is not positive.
        """
        if width <= GEOMETRY_EPS or height <= GEOMETRY_EPS:
            raise DegenerateRectangleError(f"Rectangle size must be positive, got {width} x {height}")

        super().__init__(collision_query=collision_query)
        self.width = float(width)
        self.height = float(height)
        self.center = center
        self.rotation = rotation % 360.0
        self.init()

    @classmethod
    def from_corners(
        cls,
        corner_a: Point,
        corner_c: Point,
        collision_query: Optional[OverlapQuery] = None
    ) -> Rectangle:
        """Axis-aligned rectangle spanned by two opposite corners."""
        width = abs(corner_c.x - corner_a.x)
        height = abs(corner_c.y - corner_a.y)
        center = Point((corner_a.x + corner_c.x) / 2.0, (corner_a.y + corner_c.y) / 2.0)
        return cls(center, width, height, collision_query=collision_query)

    def create_vertices(self) -> None:
        hw = self.width / 2.0
        hh = self.height / 2.0
        corners = [
            self.center + Vector(-hw, -hh),
            self.center + Vector(hw, -hh),
            self.center + Vector(hw, hh),
            self.center + Vector(-hw, hh),
        ]
        self.vertices = [rotate_point(self.center, corner, self.rotation) for corner in corners]

    def calculate_area(self) -> None:
        self.area = self.width * self.height

    @property
    def size(self) -> tuple[float, float]:
        return self.width, self.height

    @property
    def side_pairs(self) -> list[tuple[Segment, Segment]]:
        """The two pairs of opposite, parallel sides."""
        return [(self.edges[0], self.edges[2]), (self.edges[1], self.edges[3])]

    def _describe_extras(self) -> list[str]:
        return [f"Size: {self.width:g} x {self.height:g}, rotation: {self.rotation:g}"]

    # ------------------------------------------------------------------------------
    # Collision
    # ------------------------------------------------------------------------------
    def calculate_collision_offset(self, past_self: Polygon, obstacle: Polygon) -> Vector:
        """
        Minimum translation that separates this rectangle from `obstacle`.

        The offset points toward `past_self`, the side the rectangle came
        from. Returns the zero vector when the shapes do not penetrate.
        """
        mtv = minimum_translation_vector(
            self.vertices_array(), self.normals,
            obstacle.vertices_array(), obstacle.normals
        )
        if mtv is None:
            return Vector(0.0, 0.0)

        escape = past_self.center - obstacle.center
        if escape.dot(mtv) < 0:
            mtv = -mtv
        logger.debug(f"Collision offset against {obstacle!r}: ({mtv.x:g}, {mtv.y:g})")
        return mtv

    def _require_collision_query(self) -> OverlapQuery:
        if self.collision_query is None:
            logger.warning(f"No collision backend configured for {self!r}")
            raise NotSupportedError("Collision queries need a collision backend")
        return self.collision_query

    def check_collisions(self, mask: LayerMask) -> list[Any]:
        query = self._require_collision_query()
        return list(query.query_overlaps(self, mask))

    def check_collisions_at(self, position: Point, mask: LayerMask) -> list[Any]:
        query = self._require_collision_query()
        probe = self.copy()
        probe.translate(position - self.center)
        return list(query.query_overlaps(probe, mask))
