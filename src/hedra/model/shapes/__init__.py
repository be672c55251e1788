from hedra.model.shapes.segment import Segment
from hedra.model.shapes.polygon import Polygon
from hedra.model.shapes.triangle import Triangle
from hedra.model.shapes.rectangle import Rectangle

__all__ = ["Segment", "Polygon", "Triangle", "Rectangle"]
