"""
hedra - 2D polygon geometry: segments, triangles and rectangles with
derived edges, normals, angles, heights and area.
"""
from importlib.metadata import version, PackageNotFoundError

from hedra.model.geometry_primitives import Point, Vector
from hedra.model.errors import (
    HedraError,
    DegenerateSegmentError,
    DegenerateTriangleError,
    DegenerateRectangleError,
    InvalidTopologyError,
    NotSupportedError,
)
from hedra.model.collision import LayerMask, OverlapQuery
from hedra.model.shapes import Segment, Polygon, Triangle, Rectangle
from hedra.logging_config import setup_logging

try:
    __version__ = version("hedra")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "Point", "Vector",
    "Segment", "Polygon", "Triangle", "Rectangle",
    "LayerMask", "OverlapQuery",
    "HedraError", "DegenerateSegmentError", "DegenerateTriangleError",
    "DegenerateRectangleError", "InvalidTopologyError", "NotSupportedError",
    "setup_logging", "__version__",
]
