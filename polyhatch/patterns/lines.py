"""Parallel line (hatch) fill pattern generator."""

import math
import random
from typing import List, Optional

from ..geometry import Polygon, Segment


def generate_lines_fill(
    polygon: Polygon,
    spacing: float,
    angle: float = 0.0,
    jitter: float = 0.0,
    seed: Optional[int] = None,
) -> List[Segment]:
    """Generate parallel hatch lines clipped to a polygon.

    Args:
        polygon: The polygon to fill
        spacing: Distance between hatch lines
        angle: Hatch direction in degrees from the x-axis
        jitter: Random shift amplitude per line, as a fraction of spacing (0-1)
        seed: Seed for the jitter randomness, for reproducible output

    Returns:
        List of line segments representing the fill pattern
    """
    if len(polygon) < 3:
        return []

    rng = random.Random(seed)

    def shift(x: float) -> float:
        return jitter * (2 * x - 1)

    return polygon.hatch_fill(math.radians(angle), spacing, shift, rng.random)
