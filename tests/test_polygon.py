"""Tests for polygon construction, queries and transforms."""

import math

import pytest
from polyhatch.geometry import (
    DegenerateArea,
    DisconnectedEdgeSet,
    Point,
    Polygon,
    Segment,
    Vector,
    centroid,
    reflect,
    rotate,
    scale,
    translate,
)

SQUARE = [(1, 1), (1, -1), (-1, -1), (-1, 1)]
OFFSET_SQUARE = [(1, 1), (1, 0), (0, 0), (0, 1)]
BOOMERANG = [(1, 0), (3, 5), (-2, 0), (3, -5)]


def points(coords):
    return [Point(x, y) for x, y in coords]


def assert_vertices(polygon, expected):
    assert len(polygon) == len(expected)
    for actual, (x, y) in zip(polygon.vertices, expected):
        assert actual.is_equivalent_to(Point(x, y)), f"{actual} != ({x}, {y})"


# Construction

def test_square_vertices_and_edges():
    """Edges join consecutive vertices and close the loop."""
    square = Polygon(points(SQUARE))

    assert square.vertices == points(SQUARE)
    assert square.edges == [
        Segment(Point(1, 1), Point(1, -1)),
        Segment(Point(1, -1), Point(-1, -1)),
        Segment(Point(-1, -1), Point(-1, 1)),
        Segment(Point(-1, 1), Point(1, 1)),
    ]


def test_accepts_coordinate_pairs():
    assert Polygon(SQUARE).vertices == points(SQUARE)


def test_equivalent_consecutive_points_are_combined():
    polygon = Polygon([(1, 2), (1, 2 + 1e-12), (2, -1), (-1, 0)])

    assert_vertices(polygon, [(1, 2), (2, -1), (-1, 0)])
    assert len(polygon.edges) == 3


def test_closing_duplicate_is_dropped():
    """A loop listed with its first point repeated at the end is closed once."""
    polygon = Polygon([(0, 0), (1, 0), (1, 1), (0, 0)])

    assert polygon.vertices == points([(0, 0), (1, 0), (1, 1)])


def test_repeated_single_point():
    """A polygon of one repeated point keeps a single vertex and no edges."""
    polygon = Polygon([(3, 4)] * 4)

    assert polygon.vertices == [Point(3, 4)]
    assert polygon.edges == []
    assert polygon.anchor == Point(3, 4)


def test_empty_polygon():
    polygon = Polygon()

    assert polygon.vertices == []
    assert polygon.edges == []
    assert polygon.anchor == Point(0, 0)
    assert polygon.bounds() == (0.0, 0.0, 0.0, 0.0)


def test_normalization_is_idempotent():
    polygon = Polygon([(0, 0), (0, 0), (4, 0), (4, 3), (0, 0)])

    assert Polygon(polygon.vertices).vertices == polygon.vertices


def test_accessors_return_copies():
    """Changing a returned list does not change the polygon."""
    square = Polygon(SQUARE)

    square.vertices.append(Point(9, 9))
    square.edges.clear()

    assert len(square) == 4
    assert len(square.edges) == 4


def test_copy_is_independent():
    square = Polygon(SQUARE)
    square.anchor = Point(1, 1)
    duplicate = square.copy()

    duplicate.translate(5, 5)

    assert square.vertices == points(SQUARE)
    assert duplicate.is_equivalent_to(Polygon([(6, 6), (6, 4), (4, 4), (4, 6)]))
    assert square.anchor == Point(1, 1)


# Orientation and anchor

def test_square_is_clockwise():
    assert Polygon(SQUARE).clockwise


def test_reversed_square_is_counter_clockwise():
    assert not Polygon(list(reversed(SQUARE))).clockwise


def test_orientation_agrees_with_signed_area():
    """Turning-angle orientation matches the shoelace sign for a concave loop."""
    boomerang = Polygon(BOOMERANG)

    assert boomerang.clockwise == (boomerang.signed_area() < 0)
    assert Polygon(list(reversed(BOOMERANG))).clockwise != boomerang.clockwise


def test_anchor_of_centered_square_is_origin():
    assert Polygon(SQUARE).anchor.is_equivalent_to(Point(0, 0))


def test_anchor_is_centroid():
    anchor = Polygon(OFFSET_SQUARE).anchor

    assert anchor.x == pytest.approx(0.5)
    assert anchor.y == pytest.approx(0.5)


def test_anchor_falls_back_to_mean_without_area():
    """A degenerate loop gets the mean of its points as anchor."""
    line = Polygon([(0, 0), (2, 0)])

    assert len(line.edges) == 2
    assert line.anchor == Point(1, 0)


def test_centroid_without_area_raises():
    with pytest.raises(DegenerateArea):
        centroid(points([(0, 0), (1, 1), (2, 2)]))


def test_anchor_can_be_set():
    square = Polygon(SQUARE)
    square.anchor = (1, 1)

    assert square.anchor == Point(1, 1)


# Queries

def test_area_and_bounds():
    polygon = Polygon([(0, 0), (4, 0), (4, 3), (0, 3)])

    assert polygon.area() == 12
    assert polygon.signed_area() == 12
    assert polygon.bounds() == (0, 0, 4, 3)


def test_contains():
    boomerang = Polygon(BOOMERANG)

    assert boomerang.contains((0, 0))
    assert boomerang.contains(Point(2, 3))
    assert not boomerang.contains((2, 0))
    assert not boomerang.contains((10, 10))


@pytest.mark.parametrize("start, end, expected", [
    ((0, -4), (0, 4), [(0, -2), (0, 2)]),
    ((0, -1), (0, 1), []),
    ((2, -5), (2, 5), [(2, -4), (2, -2.5), (2, 2.5), (2, 4)]),
    ((2, 5), (2, -5), [(2, 4), (2, 2.5), (2, -2.5), (2, -4)]),
    ((0, 0), (3, 5), [(3, 5)]),
    ((-2, 0), (3, 5), [(-2, 0), (3, 5)]),
    ((-1, 1), (2, 4), []),
    ((0, 0), (0, 0), []),
])
def test_intersect_boomerang(start, end, expected):
    """Boundary crossings are distinct and ordered from the query start."""
    hits = Polygon(BOOMERANG).intersect(Segment(Point(*start), Point(*end)))

    assert len(hits) == len(expected)
    for hit, (x, y) in zip(hits, expected):
        assert hit.is_equivalent_to(Point(x, y)), f"{hit} != ({x}, {y})"


def test_max_anchor_distance():
    assert Polygon(SQUARE).max_anchor_distance() == pytest.approx(math.sqrt(2))


# Transforms

def test_module_transforms_leave_subject_untouched():
    square = Polygon(SQUARE)

    moved = translate(square, 1, 1)

    assert moved is not square
    assert square.vertices == points(SQUARE)
    assert_vertices(moved, [(2, 2), (2, 0), (0, 0), (0, 2)])


def test_instance_transforms_update_in_place():
    square = Polygon(SQUARE)

    assert square.translate(1, 1) is square
    assert_vertices(square, [(2, 2), (2, 0), (0, 0), (0, 2)])
    assert square.edges[0] == Segment(Point(2, 2), Point(2, 0))


def test_anchor_stays_put_under_transforms():
    """Transforms move the vertices only; later default references use the old anchor."""
    square = Polygon(SQUARE)

    square.translate(10, 0)

    assert square.anchor.is_equivalent_to(Point(0, 0))

    square.rotate(math.pi)

    assert all(-11 - 1e-9 <= v.x <= -9 + 1e-9 for v in square)
    assert square.anchor.is_equivalent_to(Point(0, 0))


def test_module_transforms_keep_anchor():
    square = Polygon(SQUARE)
    square.anchor = Point(1, 1)

    assert translate(square, 5, 5).anchor == Point(1, 1)
    assert scale(square, 3).anchor == Point(1, 1)


def test_rotate_about_anchor():
    rotated = rotate(Polygon(SQUARE), math.pi / 2)

    assert_vertices(rotated, [(-1, 1), (1, 1), (1, -1), (-1, -1)])
    assert rotated.clockwise


def test_scale_about_reference():
    scaled = scale(Polygon(SQUARE), 2, Point(1, 1))

    assert_vertices(scaled, [(1, 1), (1, -3), (-3, -3), (-3, 1)])


def test_scale_about_anchor_by_default():
    square = Polygon(SQUARE)
    square.scale(0.5)

    assert_vertices(square, [(0.5, 0.5), (0.5, -0.5), (-0.5, -0.5), (-0.5, 0.5)])


def test_reflect_flips_orientation():
    square = Polygon(SQUARE)
    reflected = reflect(square, Vector(1, 0))

    assert_vertices(reflected, [(1, -1), (1, 1), (-1, 1), (-1, -1)])
    assert reflected.clockwise != square.clockwise


def test_reflect_across_zero_axis_is_identity():
    assert_vertices(reflect(Polygon(SQUARE), Vector(0, 0)), SQUARE)


def test_transform_collapsing_vertices_renormalizes():
    """Scaling to nothing collapses the loop to its reference point."""
    collapsed = scale(Polygon(SQUARE), 0, Point(1, 1))

    assert collapsed.vertices == [Point(1, 1)]
    assert collapsed.edges == []


# Constructors

def test_create_regular():
    square = Polygon.create_regular(4)

    assert_vertices(square, [(1, 0), (0, 1), (-1, 0), (0, -1)])
    assert not square.clockwise
    assert square.anchor.is_equivalent_to(Point(0, 0))


def test_create_regular_with_center_and_radius():
    hexagon = Polygon.create_regular(6, center=(10, 5), radius=2, rotation=math.pi / 2)

    assert len(hexagon) == 6
    assert hexagon.vertices[0].is_equivalent_to(Point(10, 7))
    for vertex in hexagon:
        assert vertex.distance_to(Point(10, 5)) == pytest.approx(2)


@pytest.mark.parametrize("sides", [0, 1, 2])
def test_create_regular_needs_three_sides(sides):
    with pytest.raises(ValueError):
        Polygon.create_regular(sides)


def test_from_unordered_edges():
    """Edges may arrive shuffled and pointing either way."""
    edges = [
        Segment(Point(1, 1), Point(1, -1)),
        Segment(Point(-1, 1), Point(-1, -1)),
        Segment(Point(1, 1), Point(-1, 1)),
        Segment(Point(1, -1), Point(-1, -1)),
    ]

    rebuilt = Polygon.from_unordered_edges(edges)

    assert rebuilt.vertices == points(SQUARE)
    assert rebuilt.clockwise


def test_from_unordered_edges_round_trip():
    boomerang = Polygon(BOOMERANG)
    edges = boomerang.edges
    shuffled = [edges[0], edges[2].reversed(), edges[3], edges[1]]

    assert Polygon.from_unordered_edges(shuffled).is_equivalent_to(boomerang)


def test_from_unordered_edges_with_gap():
    edges = Polygon(SQUARE).edges[:3]

    with pytest.raises(DisconnectedEdgeSet):
        Polygon.from_unordered_edges(edges)


def test_from_unordered_edges_with_extra_loop():
    edges = Polygon(SQUARE).edges + Polygon([(5, 5), (6, 5), (6, 6)]).edges

    with pytest.raises(DisconnectedEdgeSet):
        Polygon.from_unordered_edges(edges)


def test_from_no_edges():
    assert len(Polygon.from_unordered_edges([])) == 0
