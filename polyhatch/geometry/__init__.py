"""Geometry kernel for polyhatch."""

from .constants import EPSILON
from .errors import (
    GeometryError,
    DegenerateArea,
    DisconnectedEdgeSet,
    SplitDidNotConverge,
)
from .types import Vector, Point, Segment, vector, point, segment, standardize_angle
from .polygon import (
    Polygon,
    polygon,
    centroid,
    signed_area,
    transform,
    translate,
    scale,
    rotate,
    reflect,
)

__all__ = [
    "EPSILON",
    "GeometryError",
    "DegenerateArea",
    "DisconnectedEdgeSet",
    "SplitDidNotConverge",
    "Vector",
    "Point",
    "Segment",
    "Polygon",
    "vector",
    "point",
    "segment",
    "polygon",
    "standardize_angle",
    "centroid",
    "signed_area",
    "transform",
    "translate",
    "scale",
    "rotate",
    "reflect",
]
