"""polyhatch: planar polygon kernel and fill patterns for pen plotter workflows."""

import logging

__version__ = "0.1.0"

from .geometry import Vector, Point, Segment, Polygon, GeometryError
from .patterns import generate_concentric_fill, generate_lines_fill

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Vector",
    "Point",
    "Segment",
    "Polygon",
    "GeometryError",
    "generate_concentric_fill",
    "generate_lines_fill",
]
