"""Value types for polyhatch geometry: vectors, points and segments."""

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import EPSILON
from .errors import GeometryError

TWO_PI = 2 * math.pi


def standardize_angle(angle: float) -> float:
    """Map an angle in radians into [0, 2*pi)."""
    return ((angle % TWO_PI) + TWO_PI) % TWO_PI


@dataclass(frozen=True)
class Vector:
    """Free displacement in the plane."""
    x: float = 0.0
    y: float = 0.0

    def __iter__(self):
        yield self.x
        yield self.y

    def __str__(self) -> str:
        return f"<{self.x:+.3f}, {self.y:+.3f}>"

    @staticmethod
    def unit(angle: float) -> "Vector":
        """Unit vector at `angle` radians from the positive x-axis."""
        standard = standardize_angle(angle)
        return Vector(math.cos(standard), math.sin(standard))

    def to_point(self) -> "Point":
        return Point(self.x, self.y)

    def add(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def subtract(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> "Vector":
        return Vector(self.x * factor, self.y * factor)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> "Vector":
        """Scale to unit length. The zero vector is returned unchanged."""
        length = self.magnitude()
        if length == 0:
            return self
        return Vector(self.x / length, self.y / length)

    def rotate(self, angle: float) -> "Vector":
        """Rotate counter-clockwise by `angle` radians."""
        cos = math.cos(angle)
        sin = math.sin(angle)
        return Vector(self.x * cos - self.y * sin, self.x * sin + self.y * cos)

    def reflect(self, axis: "Vector") -> "Vector":
        """Reflect across the line through the origin along `axis`.

        A zero axis reflects across the x-axis; callers that want the
        identity for a zero axis must check for it (Point.reflect does).
        """
        angle = standardize_angle(2 * axis.angle())
        cos = math.cos(angle)
        sin = math.sin(angle)
        return Vector(self.x * cos + self.y * sin, self.x * sin - self.y * cos)

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector") -> float:
        """Z component of the 3D cross product of the two vectors."""
        return self.x * other.y - self.y * other.x

    def angle(self) -> float:
        """Angle with the positive x-axis, in [0, 2*pi)."""
        return standardize_angle(math.atan2(self.y, self.x))

    def angle_between(self, other: "Vector") -> float:
        """Counter-clockwise angle from this vector to `other`, in [0, 2*pi)."""
        return standardize_angle(other.angle() - self.angle())


@dataclass(frozen=True)
class Point:
    """2D point.

    `==` compares coordinates exactly; use `is_equivalent_to` for the
    tolerance-based comparison the polygon engine relies on.
    """
    x: float = 0.0
    y: float = 0.0

    def __iter__(self):
        yield self.x
        yield self.y

    def __str__(self) -> str:
        return f"({self.x:+.3f}, {self.y:+.3f})"

    def to_vector(self) -> Vector:
        return Vector(self.x, self.y)

    def vector_to(self, other: "Point") -> Vector:
        """Displacement from this point to `other`."""
        return Vector(other.x - self.x, other.y - self.y)

    def translate(self, dx: float = 0.0, dy: float = 0.0) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def displace(self, vector: Vector) -> "Point":
        return Point(self.x + vector.x, self.y + vector.y)

    def scale(self, factor: float, control: Optional["Point"] = None) -> "Point":
        """Scale the distance to `control` (the origin by default)."""
        control_vec = control.to_vector() if control is not None else Vector()
        return control_vec.add(self.to_vector().subtract(control_vec).scale(factor)).to_point()

    def rotate(self, angle: float, control: Optional["Point"] = None) -> "Point":
        """Rotate counter-clockwise around `control` (the origin by default)."""
        control_vec = control.to_vector() if control is not None else Vector()
        return control_vec.add(self.to_vector().subtract(control_vec).rotate(angle)).to_point()

    def reflect(self, axis: Vector, control: Optional["Point"] = None) -> "Point":
        """Reflect across the axis projected from `control` (the origin by default).

        A zero-length axis leaves the point where it is.
        """
        if axis.magnitude() == 0:
            return self
        control_vec = control.to_vector() if control is not None else Vector()
        return control_vec.add(self.to_vector().subtract(control_vec).reflect(axis)).to_point()

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def angle_to(self, other: "Point", heading: float = 0.0) -> float:
        """Angle from `heading` to the direction of `other`, folded into (-pi, pi].

        Polygon orientation sums these turning angles, so the fold must be
        applied the same way everywhere.
        """
        full_angle = Vector.unit(heading).angle_between(self.vector_to(other))
        if full_angle > math.pi:
            return -(math.pi - (full_angle % math.pi))
        return full_angle

    def is_equivalent_to(self, other: "Point") -> bool:
        return abs(self.x - other.x) < EPSILON and abs(self.y - other.y) < EPSILON

    @staticmethod
    def mean(points: Iterable["Point"]) -> "Point":
        """Arithmetic mean of a non-empty collection of points."""
        points = list(points)
        if not points:
            raise GeometryError("cannot take the mean of an empty point collection")
        count = len(points)
        return Point(
            sum(p.x for p in points) / count,
            sum(p.y for p in points) / count,
        )

    @staticmethod
    def lerp(start: "Point", end: "Point", proportion: float) -> "Point":
        """Linear interpolation; proportions outside [0, 1] extrapolate."""
        return Point(
            start.x + (end.x - start.x) * proportion,
            start.y + (end.y - start.y) * proportion,
        )


@dataclass(frozen=True)
class Segment:
    """A directed line segment defined by two endpoints."""
    start: Point
    end: Point

    def __str__(self) -> str:
        return f"({self.start}, {self.end})"

    @property
    def is_degenerate(self) -> bool:
        return self.start.is_equivalent_to(self.end)

    def direction(self, reverse: bool = False) -> Vector:
        """Displacement from start to end (end to start when `reverse`)."""
        if self.is_degenerate:
            return Vector()
        direction = self.start.vector_to(self.end)
        return direction.scale(-1) if reverse else direction

    def normal(self, clockwise: bool = False) -> Vector:
        """Unit normal pointing out of a polygon wound in the given direction."""
        return self.direction(clockwise).normalize().rotate(-math.pi / 2)

    def length(self) -> float:
        return self.direction().magnitude()

    def midpoint(self) -> Point:
        return Point.lerp(self.start, self.end, 0.5)

    def reversed(self) -> "Segment":
        return Segment(self.end, self.start)

    def intersect(self, other: "Segment") -> Optional[Point]:
        """Point where the two segments cross, or None.

        Parallel segments never intersect, including collinear segments
        that overlap along their length.
        """
        p = self.start.to_vector()
        q = other.start.to_vector()
        r = self.direction()
        s = other.direction()
        denominator = r.cross(s)
        if denominator == 0:
            return None

        d = q.subtract(p)
        t = d.cross(s) / denominator
        u = d.cross(r) / denominator
        if 0 <= t <= 1 and 0 <= u <= 1:
            return p.add(r.scale(t)).to_point()
        return None

    @staticmethod
    def lerp(start: "Segment", end: "Segment", proportion: float) -> "Segment":
        return Segment(
            Point.lerp(start.start, end.start, proportion),
            Point.lerp(start.end, end.end, proportion),
        )


def vector(x: float = 0.0, y: float = 0.0) -> Vector:
    return Vector(x, y)


def point(x: float = 0.0, y: float = 0.0) -> Point:
    return Point(x, y)


def segment(start: Point, end: Point) -> Segment:
    return Segment(start, end)
