"""Polygon topology engine.

Loop normalization, orientation, self-intersection splitting and
orthogonal offsetting, expressed over plain vertex sequences so that
`Polygon` can stay a thin owner of the results.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .constants import MIN_SPLIT_BUDGET, SPLIT_BUDGET_FACTOR
from .errors import SplitDidNotConverge
from .types import Point, Segment

logger = logging.getLogger(__name__)

Loop = Tuple[Point, ...]


def normalize_vertices(vertices: Sequence[Point]) -> Loop:
    """Collapse runs of equivalent points and drop a duplicated closing point.

    A point survives only if it is not equivalent to its successor, and the
    last point survives only if it is not equivalent to the first. A
    non-empty input never normalizes to nothing.
    """
    if not vertices:
        return ()

    processed = [
        vertices[i]
        for i in range(len(vertices) - 1)
        if not vertices[i].is_equivalent_to(vertices[i + 1])
    ]
    if not vertices[-1].is_equivalent_to(vertices[0]):
        processed.append(vertices[-1])

    if not processed:
        processed.append(vertices[0])

    return tuple(processed)


def loop_edges(vertices: Sequence[Point]) -> Tuple[Segment, ...]:
    """Edges of the closed loop through `vertices`."""
    n = len(vertices)
    if n < 2:
        return ()
    return tuple(Segment(vertices[i], vertices[(i + 1) % n]) for i in range(n))


def turning_angle_sum(edges: Sequence[Segment]) -> float:
    """Sum of the turning angles between consecutive edges of a loop.

    Roughly -2*pi for a simple clockwise loop and +2*pi for a simple
    counter-clockwise one.
    """
    if not edges:
        return 0.0

    total = 0.0
    prior_heading = edges[-1].direction().angle()
    for edge in edges:
        total += edge.start.angle_to(edge.end, prior_heading)
        prior_heading = edge.direction().angle()
    return total


def is_clockwise(edges: Sequence[Segment]) -> bool:
    return turning_angle_sum(edges) < 0


def split_budget(vertex_count: int) -> int:
    return max(MIN_SPLIT_BUDGET, SPLIT_BUDGET_FACTOR * vertex_count * vertex_count)


def _find_split(vertices: Loop) -> Optional[Tuple[Loop, Loop]]:
    """Split a loop at its first self-intersection.

    Returns (remainder, split_off) or None if the loop is simple. Touches at
    the endpoints of the scanned edge are not intersections.
    """
    edges = loop_edges(vertices)
    n = len(edges)

    for i in range(n):
        base = edges[i]
        arc = []
        for j in range(i + 1, i + n):
            tj = j % n
            arc.append(tj)
            hit = base.intersect(edges[tj])
            if hit is None or hit.is_equivalent_to(base.start) or hit.is_equivalent_to(base.end):
                continue

            removed = set(arc)
            remainder = []
            for k, vertex in enumerate(vertices):
                if k in removed:
                    continue
                remainder.append(vertex)
                if k == i:
                    remainder.append(hit)

            split_off = [vertices[k] for k in arc]
            split_off.append(hit)
            return normalize_vertices(remainder), normalize_vertices(split_off)

    return None


def overlap_split(vertices: Sequence[Point], max_splits: Optional[int] = None) -> List[Loop]:
    """Decompose a self-intersecting loop into simple loops.

    The first unresolved loop is scanned; on a hit it is replaced in place by
    its remainder and the split-off loop is appended to the worklist. Loops
    come back in discovery order, the remainder of the input first.

    Raises:
        SplitDidNotConverge: if more than `max_splits` splits are needed.
    """
    loops: List[Loop] = [normalize_vertices(vertices)]
    vertex_count = len(loops[0])
    resolved = [False]
    budget = max_splits if max_splits is not None else split_budget(vertex_count)
    splits = 0

    while not all(resolved):
        index = resolved.index(False)
        result = _find_split(loops[index])
        if result is None:
            resolved[index] = True
            continue

        splits += 1
        if splits > budget:
            raise SplitDidNotConverge(splits, budget)

        remainder, split_off = result
        loops[index] = remainder
        loops.append(split_off)
        resolved.append(False)

    logger.debug("overlap split: %d vertices -> %d loops after %d splits",
                 vertex_count, len(loops), splits)
    return loops


def offset_loop(
    edges: Sequence[Segment],
    clockwise: bool,
    quantity: float,
    max_splits: Optional[int] = None,
) -> List[Loop]:
    """Move every edge of a loop outward by `quantity` and untangle the result.

    Each edge is shifted independently along its outward normal, so every
    corner produces two raw vertices. The raw loop is split at its
    self-intersections and only pieces wound like the original are kept.
    Negative quantities move edges inward.
    """
    raw: List[Point] = []
    for edge in edges:
        shift = edge.normal(clockwise).scale(quantity)
        raw.append(edge.start.displace(shift))
        raw.append(edge.end.displace(shift))

    pieces = overlap_split(raw, max_splits)
    kept = [piece for piece in pieces if is_clockwise(loop_edges(piece)) == clockwise]
    logger.debug("offset %g: %d pieces, %d kept", quantity, len(pieces), len(kept))
    return kept
