"""Exceptions raised by the geometry model."""


class HedraError(Exception):
    """Base class for all geometry errors."""


class DegenerateSegmentError(HedraError, ValueError):
    """Raised when a segment's endpoints coincide."""


class DegenerateTriangleError(HedraError, ValueError):
    """Raised when a triangle would have a zero-length side or a zero/straight angle."""


class DegenerateRectangleError(HedraError, ValueError):
    """Raised when a rectangle would have a non-positive width or height."""


class InvalidTopologyError(HedraError, ValueError):
    """Raised when segments handed to a constructor do not share a vertex."""


class NotSupportedError(HedraError, NotImplementedError):
    """Raised by operations a shape does not implement."""
