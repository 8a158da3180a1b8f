"""SVG input/output utilities for polyhatch."""

import math
import re
from typing import Dict, Iterable, List, Tuple
from xml.etree import ElementTree as ET

from svgpathtools import Line, parse_path

from .geometry import Point, Polygon, Segment

# Samples per curved path segment (arcs and beziers)
CURVE_SAMPLES = 16
ELLIPSE_SEGMENTS = 32

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
SVG_METADATA = ('viewBox', 'width', 'height')
SHAPE_TAGS = {'path', 'polygon', 'polyline', 'rect', 'circle', 'ellipse'}
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

_NUMBER = r'-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?'


def parse_path_d(d: str) -> List[List[Point]]:
    """Parse an SVG path d attribute into point loops, one per subpath.

    Straight segments contribute their endpoints; curves are sampled.
    """
    if not d or not d.strip():
        return []

    loops: List[List[Point]] = []
    for subpath in parse_path(d).continuous_subpaths():
        points: List[Point] = []
        for piece in subpath:
            if not points:
                points.append(Point(piece.start.real, piece.start.imag))
            if isinstance(piece, Line):
                samples = [piece.end]
            else:
                samples = [piece.point(k / CURVE_SAMPLES) for k in range(1, CURVE_SAMPLES + 1)]
            points.extend(Point(z.real, z.imag) for z in samples)
        loops.append(points)

    return loops


def _parse_points_attr(value: str) -> List[Point]:
    coords = [float(c) for c in re.findall(_NUMBER, value)]
    return [Point(coords[i], coords[i + 1]) for i in range(0, len(coords) - 1, 2)]


def _float_attrs(element: ET.Element, *names: str) -> List[float]:
    return [float(element.get(name, 0)) for name in names]


def _local_name(element: ET.Element) -> str:
    return element.tag.rsplit('}', 1)[-1].lower()


def element_to_polygons(element: ET.Element) -> List[Polygon]:
    """Convert an SVG shape element to polygons (empty if it is not fillable)."""
    kind = _local_name(element)
    loops: List[List[Point]] = []

    if kind == 'path':
        loops = parse_path_d(element.get('d', ''))
    elif kind in ('polygon', 'polyline'):
        # Polylines are closed by the polygon loop
        loops = [_parse_points_attr(element.get('points', ''))]
    elif kind == 'rect':
        left, top, width, height = _float_attrs(element, 'x', 'y', 'width', 'height')
        corner = Point(left, top)
        loops = [[
            corner,
            corner.translate(width, 0),
            corner.translate(width, height),
            corner.translate(0, height),
        ]]
    elif kind == 'circle':
        cx, cy, r = _float_attrs(element, 'cx', 'cy', 'r')
        if r > 0:
            loops = [Polygon.create_regular(ELLIPSE_SEGMENTS, Point(cx, cy), r).vertices]
    elif kind == 'ellipse':
        cx, cy, rx, ry = _float_attrs(element, 'cx', 'cy', 'rx', 'ry')
        step = 2 * math.pi / ELLIPSE_SEGMENTS
        loops = [[
            Point(cx + rx * math.cos(k * step), cy + ry * math.sin(k * step))
            for k in range(ELLIPSE_SEGMENTS)
        ]]

    return [polygon for polygon in map(Polygon, loops) if len(polygon) >= 3]


def extract_polygons_from_svg(svg_content: str) -> Tuple[List[Polygon], Dict[str, str]]:
    """Collect every fillable shape of an SVG document.

    Returns:
        (polygons in document order, root attributes listed in SVG_METADATA)
    """
    root = ET.fromstring(svg_content)
    metadata = {name: root.get(name, '') for name in SVG_METADATA}

    polygons: List[Polygon] = []
    for element in root.iter():
        if _local_name(element) in SHAPE_TAGS:
            polygons.extend(element_to_polygons(element))

    return polygons, metadata


def lines_to_svg_path(lines: Iterable[Segment], precision: int = 2) -> str:
    """Path data with one move/line pair per segment."""
    def fmt(p: Point) -> str:
        return f"{p.x:.{precision}f},{p.y:.{precision}f}"

    return ' '.join(f"M{fmt(line.start)} L{fmt(line.end)}" for line in lines)


def create_svg_from_lines(
    lines: Iterable[Segment],
    viewbox: str = '',
    width: str = '',
    height: str = '',
    stroke: str = 'black',
    stroke_width: str = '1',
) -> str:
    """Serialize segments as a single unfilled path in a new SVG document.

    Empty viewbox/width/height values are left off the root element.
    """
    root = ET.Element('svg', {'xmlns': SVG_NAMESPACE})
    for name, value in zip(SVG_METADATA, (viewbox, width, height)):
        if value:
            root.set(name, value)

    ET.SubElement(root, 'path', {
        'd': lines_to_svg_path(lines),
        'fill': 'none',
        'stroke': stroke,
        'stroke-width': stroke_width,
    })

    return XML_DECLARATION + ET.tostring(root, encoding='unicode')
