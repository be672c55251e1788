from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from math import pi, atan2
import numpy as np

from hedra.model.geometry_primitives import Point, Vector

if TYPE_CHECKING:
    from numpy import typing as npt


def deg2rad(degrees: float) -> float:
    return degrees * pi / 180

def rad2deg(radians: float) -> float:
    return radians * 180 / pi

def rotate_point(pivot: Point, point: Point, degrees: float) -> Point:
    """
    Rotate `point` around `pivot` by `degrees` (counter-clockwise positive).

    Args:
        pivot: Center of rotation.
        point: The point to rotate.
        degrees: Rotation angle in degrees.

    Returns:
        The rotated point.
    """
    return pivot + (point - pivot).rotate(deg2rad(degrees))

def angle_between(a: Vector, b: Vector) -> float:
    """Unsigned angle in radians, in the range [0, pi]."""
    return a.angle_to(b)

def polar_angle(center: Point, point: Point) -> float:
    """Direction of `point` seen from `center`, in radians (-pi, pi]."""
    return atan2(point.y - center.y, point.x - center.x)

def signed_area(points: Sequence[Point]) -> float:
    """
    Shoelace formula. Positive for counter-clockwise winding, negative for
    clockwise, zero for collinear points.
    """
    pts = points_to_array(points)
    x = pts[:, 0]
    y = pts[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))

def points_to_array(points: Sequence[Point]) -> npt.NDArray[np.float64]:
    """Stack points into an (N, 2) array."""
    return np.array([[p.x, p.y] for p in points], dtype=np.float64).reshape(-1, 2)

def project_onto_axis(
    vertices: npt.NDArray[np.float64],
    axis: Vector
) -> tuple[float, float]:
    """
    Project a vertex set onto an axis.

    Args:
        vertices: Array of shape (n, 2).
        axis: Unit axis direction.

    Returns:
        The (min, max) interval of the projection.
    """
    dots = vertices @ axis.to_array()
    return float(np.min(dots)), float(np.max(dots))

def minimum_translation_vector(
    vertices_a: npt.NDArray[np.float64],
    axes_a: Sequence[Vector],
    vertices_b: npt.NDArray[np.float64],
    axes_b: Sequence[Vector],
    eps: float = 1e-12
) -> Vector | None:
    """
    Separating axis test for two convex vertex sets.

    The candidate axes are the edge normals of both shapes. If any axis
    separates the projections, the shapes do not overlap.

    Args:
        vertices_a: (n, 2) vertices of the first shape.
        axes_a: Unit edge normals of the first shape.
        vertices_b: (m, 2) vertices of the second shape.
        axes_b: Unit edge normals of the second shape.
        eps: Overlaps up to this depth count as touching, not penetrating.

    Returns:
        The vector that moves shape A out of shape B along the axis of least
        penetration, or None when the shapes do not penetrate.

    Notes:
        The returned vector points from B's vertex mean toward A's. Callers
        that know a better escape direction may flip it.
    """
    smallest_overlap = float("inf")
    smallest_axis: Vector | None = None

    for axis in list(axes_a) + list(axes_b):
        min_a, max_a = project_onto_axis(vertices_a, axis)
        min_b, max_b = project_onto_axis(vertices_b, axis)
        overlap = min(max_a, max_b) - max(min_a, min_b)
        if overlap <= eps:
            return None
        if overlap < smallest_overlap:
            smallest_overlap = overlap
            smallest_axis = axis

    if smallest_axis is None:
        return None

    offset = Point.from_array(vertices_a.mean(axis=0)) - Point.from_array(vertices_b.mean(axis=0))
    if offset.dot(smallest_axis) < 0:
        smallest_axis = -smallest_axis
    return smallest_axis * smallest_overlap
