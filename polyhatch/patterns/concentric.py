"""Concentric fill pattern generator.

Rings are produced by repeatedly offsetting the outline inward, so a ring
that pinches apart continues as several independent rings.
"""

import logging
import math
from typing import List

from ..geometry import Polygon, Segment, GeometryError

logger = logging.getLogger(__name__)


def generate_concentric_fill(
    polygon: Polygon,
    spacing: float,
    connect_loops: bool = True
) -> List[Segment]:
    """Generate concentric fill lines (snake pattern from outside in).

    Args:
        polygon: The polygon to fill
        spacing: Distance between concentric rings
        connect_loops: If True, add connecting lines between loops for continuous path

    Returns:
        List of line segments representing the fill pattern
    """
    lines: List[Segment] = []

    if len(polygon) < 3:
        return lines

    min_area = spacing * spacing * 0.5

    min_x, min_y, max_x, max_y = polygon.bounds()
    max_dimension = max(max_x - min_x, max_y - min_y)
    max_loops = min(100, int(math.ceil(max_dimension / spacing)) + 2)

    loops: List[Polygon] = []
    current = [polygon]

    for _ in range(max_loops):
        current = [ring for ring in current if len(ring) >= 3 and ring.area() >= min_area]
        if not current:
            break

        loops.extend(current)

        following: List[Polygon] = []
        for ring in current:
            try:
                following.extend(ring.offset(-spacing))
            except GeometryError as e:
                logger.debug("stopping ring inset: %s", e)
        current = following

    # If no loops were generated, at least draw the original polygon outline
    if not loops:
        loops.append(polygon)

    for loop_idx, loop in enumerate(loops):
        lines.extend(loop.edges)

        # Connect to next loop if requested
        if connect_loops and loop_idx < len(loops) - 1:
            last_point = loop.vertices[-1]
            next_vertices = loops[loop_idx + 1].vertices
            closest = min(next_vertices, key=last_point.distance_to)
            lines.append(Segment(last_point, closest))

    return lines
