"""Polygon operations for polyhatch.

A `Polygon` owns a normalized loop of points and derives its edges,
winding and anchor from it. Transforms are pure functions at module level;
the same-named instance methods apply them and rebind the instance.
"""

import logging
import math
import random
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .constants import EPSILON
from .errors import DegenerateArea, DisconnectedEdgeSet
from .topology import (
    is_clockwise,
    loop_edges,
    normalize_vertices,
    offset_loop,
    overlap_split,
)
from .types import Point, Segment, Vector

logger = logging.getLogger(__name__)

PointLike = Union[Point, Tuple[float, float]]


def _as_point(value: PointLike) -> Point:
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(float(x), float(y))


def signed_area(points: Sequence[Point]) -> float:
    """Calculate the signed area of a point loop.

    Positive = counter-clockwise, negative = clockwise (y axis up).
    """
    if len(points) < 3:
        return 0.0

    area = 0.0
    n = len(points)
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def centroid(points: Sequence[Point]) -> Point:
    """Area centroid of a point loop (shoelace weighted).

    Raises:
        DegenerateArea: if the loop encloses no area.
    """
    area = signed_area(points)
    if abs(area) <= EPSILON * EPSILON:
        raise DegenerateArea(f"loop of {len(points)} points encloses no area")

    cx = 0.0
    cy = 0.0
    n = len(points)
    for i in range(n):
        p0 = points[i]
        p1 = points[(i + 1) % n]
        cross = p0.x * p1.y - p1.x * p0.y
        cx += (p0.x + p1.x) * cross
        cy += (p0.y + p1.y) * cross

    return Point(cx / (6 * area), cy / (6 * area))


def _default_anchor(vertices: Sequence[Point]) -> Point:
    if not vertices:
        return Point(0.0, 0.0)
    if len(vertices) == 1:
        return vertices[0]
    try:
        return centroid(vertices)
    except DegenerateArea:
        return Point.mean(vertices)


class Polygon:
    """A closed polygon in the plane.

    Consecutive equivalent points are collapsed on construction. `vertices`
    and `edges` return fresh lists; the points and segments in them are
    immutable, so callers can never reach the polygon's own storage.
    """

    def __init__(self, points: Iterable[PointLike] = ()):
        vertices = normalize_vertices([_as_point(p) for p in points])
        self._assign(vertices, _default_anchor(vertices))

    def _assign(self, vertices: Tuple[Point, ...], anchor: Point) -> "Polygon":
        self._vertices = vertices
        self._edges = loop_edges(vertices)
        self._clockwise = is_clockwise(self._edges)
        self._anchor = anchor
        return self

    def _adopt(self, other: "Polygon") -> "Polygon":
        return self._assign(other._vertices, other._anchor)

    @property
    def vertices(self) -> List[Point]:
        return list(self._vertices)

    @property
    def edges(self) -> List[Segment]:
        return list(self._edges)

    @property
    def clockwise(self) -> bool:
        return self._clockwise

    @property
    def anchor(self) -> Point:
        """Reference point for scale, rotate and reflect; the centroid by default."""
        return self._anchor

    @anchor.setter
    def anchor(self, value: PointLike):
        self._anchor = _as_point(value)

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self):
        return iter(self._vertices)

    def __repr__(self) -> str:
        return f"Polygon([{', '.join(f'({v.x!r}, {v.y!r})' for v in self._vertices)}])"

    def __str__(self) -> str:
        return f"({', '.join(str(v) for v in self._vertices)})"

    def copy(self) -> "Polygon":
        """Independent polygon with the same vertices and anchor."""
        return Polygon._from_loop(self._vertices, self._anchor)

    @classmethod
    def _from_loop(cls, vertices: Sequence[Point], anchor: Optional[Point] = None) -> "Polygon":
        polygon = cls.__new__(cls)
        vertices = normalize_vertices(vertices)
        return polygon._assign(vertices, anchor if anchor is not None else _default_anchor(vertices))

    def is_equivalent_to(self, other: "Polygon") -> bool:
        """True if both polygons list equivalent vertices in the same order."""
        return len(self) == len(other) and all(
            a.is_equivalent_to(b) for a, b in zip(self._vertices, other._vertices)
        )

    # Queries

    def signed_area(self) -> float:
        return signed_area(self._vertices)

    def area(self) -> float:
        return abs(signed_area(self._vertices))

    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of the vertices."""
        if not self._vertices:
            return (0.0, 0.0, 0.0, 0.0)
        xs = [v.x for v in self._vertices]
        ys = [v.y for v in self._vertices]
        return (min(xs), min(ys), max(xs), max(ys))

    def contains(self, point: PointLike) -> bool:
        """Check if a point is inside the polygon using ray casting."""
        point = _as_point(point)
        polygon = self._vertices
        if len(polygon) < 3:
            return False

        inside = False
        n = len(polygon)

        j = n - 1
        for i in range(n):
            xi, yi = polygon[i].x, polygon[i].y
            xj, yj = polygon[j].x, polygon[j].y

            if ((yi > point.y) != (yj > point.y)) and \
               (point.x < (xj - xi) * (point.y - yi) / (yj - yi) + xi):
                inside = not inside

            j = i

        return inside

    def max_anchor_distance(self) -> float:
        return max((self._anchor.distance_to(v) for v in self._vertices), default=0.0)

    def intersect(self, query: Segment) -> List[Point]:
        """Distinct points where `query` crosses the polygon boundary.

        Ordered by distance from `query.start`; only neighbouring equivalent
        hits are merged.
        """
        hits = [hit for hit in (edge.intersect(query) for edge in self._edges) if hit is not None]
        hits.sort(key=lambda hit: hit.distance_to(query.start))

        distinct: List[Point] = []
        for hit in hits:
            if not distinct or not hit.is_equivalent_to(distinct[-1]):
                distinct.append(hit)
        return distinct

    # In-place transforms

    def translate(self, dx: float = 0.0, dy: float = 0.0) -> "Polygon":
        return self._adopt(translate(self, dx, dy))

    def scale(self, factor: float, reference: Optional[Point] = None) -> "Polygon":
        return self._adopt(scale(self, factor, reference))

    def rotate(self, angle: float, reference: Optional[Point] = None) -> "Polygon":
        return self._adopt(rotate(self, angle, reference))

    def reflect(self, axis: Vector, reference: Optional[Point] = None) -> "Polygon":
        return self._adopt(reflect(self, axis, reference))

    # Topology

    def overlap_split(self, max_splits: Optional[int] = None) -> List["Polygon"]:
        """Split the polygon into simple polygons at its self-intersections.

        Raises:
            SplitDidNotConverge: if more than `max_splits` splits are needed.
        """
        return [Polygon._from_loop(loop) for loop in overlap_split(self._vertices, max_splits)]

    def offset(self, quantity: float, max_splits: Optional[int] = None) -> List["Polygon"]:
        """Offset the edges orthogonally by `quantity`.

        Positive values grow the polygon, negative values shrink it. The
        result may be empty (fully collapsed) or hold several polygons.
        """
        if quantity == 0:
            return [self.copy()]
        loops = offset_loop(self._edges, self._clockwise, quantity, max_splits)
        return [Polygon._from_loop(loop) for loop in loops]

    def hatch_fill(
        self,
        angle: float,
        spacing: float,
        jitter: Optional[Callable[[float], float]] = None,
        random_source: Optional[Callable[[], float]] = None,
    ) -> List[Segment]:
        """Generate parallel hatch lines clipped to the polygon.

        Args:
            angle: Direction of the hatch lines in radians
            spacing: Distance between neighbouring lines
            jitter: Maps a value in [0, 1] to a shift in [-1, 1], in units of spacing
            random_source: Returns values in [0, 1) fed to `jitter`

        Returns:
            Chords between consecutive boundary crossings of each scan line
        """
        if spacing <= 0:
            raise ValueError(f"hatch spacing must be positive, got {spacing}")
        if random_source is None:
            random_source = random.random if jitter is not None else _no_randomness
        if jitter is None:
            jitter = _no_jitter

        reach = self.max_anchor_distance()
        steps = math.floor(reach / spacing)
        grain = Vector.unit(angle)
        ortho = grain.rotate(math.pi / 2)
        overshoot = grain.scale(2 * reach)

        lines: List[Segment] = []
        for offset in range(-steps, steps + 1):
            shift = ortho.scale(spacing * (offset + jitter(random_source())))
            control = self._anchor.displace(shift)
            candidate = Segment(
                control.displace(overshoot.scale(-1)),
                control.displace(overshoot),
            )
            crossings = self.intersect(candidate)
            for i in range(0, len(crossings) - 1, 2):
                lines.append(Segment(crossings[i], crossings[i + 1]))

        logger.debug("hatch fill: %d scan lines, %d chords", 2 * steps + 1, len(lines))
        return lines

    # Constructors

    @classmethod
    def create_regular(
        cls,
        sides: int,
        center: Optional[PointLike] = None,
        radius: float = 1.0,
        rotation: float = 0.0,
    ) -> "Polygon":
        """Regular polygon with vertex 0 at `rotation`, placed counter-clockwise."""
        if sides < 3:
            raise ValueError(f"a regular polygon needs at least 3 sides, got {sides}")
        center = _as_point(center) if center is not None else Point(0.0, 0.0)
        step = 2 * math.pi / sides
        return cls(
            center.displace(Vector.unit(rotation + k * step).scale(radius))
            for k in range(sides)
        )

    @classmethod
    def from_unordered_edges(cls, segments: Iterable[Segment]) -> "Polygon":
        """Rebuild a polygon from its boundary edges given in any order.

        Each vertex must be shared by exactly two edges; edges may point
        either way.

        Raises:
            DisconnectedEdgeSet: if the edges do not form one closed cycle.
        """
        remaining = list(segments)
        if not remaining:
            return cls([])

        first = remaining.pop(0)
        start = first.start
        points = [start]
        current = first.end

        while not current.is_equivalent_to(start):
            following = _pop_adjacent(remaining, current)
            if following is None:
                raise DisconnectedEdgeSet(
                    f"no edge continues the boundary from {current}"
                )
            points.append(current)
            current = following

        if remaining:
            raise DisconnectedEdgeSet(
                f"{len(remaining)} edges are not part of the boundary cycle"
            )

        return cls(points)


def _no_jitter(_: float) -> float:
    return 0.0


def _no_randomness() -> float:
    return 0.0


def _pop_adjacent(segments: List[Segment], vertex: Point) -> Optional[Point]:
    """Remove the first segment touching `vertex` and return its other end."""
    for index, candidate in enumerate(segments):
        if candidate.start.is_equivalent_to(vertex):
            del segments[index]
            return candidate.end
        if candidate.end.is_equivalent_to(vertex):
            del segments[index]
            return candidate.start
    return None


def polygon(points: Iterable[PointLike] = ()) -> Polygon:
    return Polygon(points)


def transform(subject: Polygon, operation: Callable[[Point], Point]) -> Polygon:
    """Apply a point operation to every vertex of a polygon.

    Returns a new polygon with freshly derived edges and winding. The anchor
    stays where it was; `subject` is left untouched.
    """
    return Polygon._from_loop(
        [operation(v) for v in subject.vertices],
        subject.anchor,
    )


def translate(subject: Polygon, dx: float = 0.0, dy: float = 0.0) -> Polygon:
    return transform(subject, lambda v: v.translate(dx, dy))


def scale(subject: Polygon, factor: float, reference: Optional[Point] = None) -> Polygon:
    """Scale the distance of each vertex to `reference` (the anchor by default)."""
    control = reference if reference is not None else subject.anchor
    return transform(subject, lambda v: v.scale(factor, control))


def rotate(subject: Polygon, angle: float, reference: Optional[Point] = None) -> Polygon:
    control = reference if reference is not None else subject.anchor
    return transform(subject, lambda v: v.rotate(angle, control))


def reflect(subject: Polygon, axis: Vector, reference: Optional[Point] = None) -> Polygon:
    """Reflect across `axis` projected from `reference` (the anchor by default)."""
    control = reference if reference is not None else subject.anchor
    return transform(subject, lambda v: v.reflect(axis, control))
