"""Room outline model: scaling, containment and vertex editing."""
from roomlayout.polygon import (
    DEFAULT_OUTLINE,
    box_inside_polygon,
    insert_point,
    move_point,
    point_in_polygon,
    polygon_area,
    polygon_is_simple,
    rectangle,
    remove_point,
    scale_polygon,
)

ROOM = rectangle(600, 375)
# L-shaped room: the top-right quadrant is cut out
L_ROOM = [(0, 0), (300, 0), (300, 200), (600, 200), (600, 400), (0, 400)]


def _bounds(points):
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return min(xs), min(ys), max(xs), max(ys)


def test_default_outline_fills_40_by_25_foot_room():
    poly = scale_polygon(DEFAULT_OUTLINE, 40 * 15, 25 * 15)
    assert _bounds(poly) == (0, 0, 600, 375)
    assert poly == [(0, 0), (600, 0), (600, 375), (0, 375)]


def test_scale_is_idempotent_for_same_target():
    once = scale_polygon(L_ROOM, 750, 500)
    twice = scale_polygon(once, 750, 500)
    assert twice == once


def test_scale_is_non_uniform_and_moves_to_origin():
    poly = scale_polygon([(10, 10), (20, 10), (20, 30), (10, 30)], 100, 50)
    assert poly == [(0, 0), (100, 0), (100, 50), (0, 50)]


def test_scale_degenerate_source_does_not_divide_by_zero():
    poly = scale_polygon([(5, 0), (5, 10), (5, 20)], 100, 40)
    assert [p[0] for p in poly] == [0, 0, 0]
    assert [p[1] for p in poly] == [0, 20, 40]


def test_point_in_polygon_convex_and_concave():
    assert point_in_polygon((300, 187), ROOM)
    assert not point_in_polygon((700, 187), ROOM)
    assert not point_in_polygon((-1, 10), ROOM)

    assert point_in_polygon((100, 100), L_ROOM)
    assert point_in_polygon((500, 300), L_ROOM)
    assert not point_in_polygon((500, 100), L_ROOM)


def test_point_on_far_walls_counts_as_outside():
    # Parity test approximation: left/top walls are inside, right/bottom are not.
    assert point_in_polygon((0, 100), ROOM)
    assert point_in_polygon((100, 0), ROOM)
    assert not point_in_polygon((600, 100), ROOM)
    assert not point_in_polygon((100, 375), ROOM)


def test_box_inside_polygon():
    assert box_inside_polygon(100, 100, 50, 50, ROOM)
    assert not box_inside_polygon(580, 100, 50, 50, ROOM)
    assert not box_inside_polygon(280, 150, 50, 80, L_ROOM)


def test_box_inside_only_checks_corners():
    # Known approximation: a box bridging the notch of a U-shaped room passes
    # because all four of its corners sit inside the arms.
    u_room = [(0, 0), (100, 0), (100, 300), (200, 300), (200, 0), (300, 0), (300, 400), (0, 400)]
    assert box_inside_polygon(50, 10, 200, 20, u_room) is True
    assert box_inside_polygon(50, 320, 200, 20, u_room) is True
    assert box_inside_polygon(120, 10, 50, 20, u_room) is False


def test_move_point_clamps_to_room():
    moved = move_point(ROOM, 1, 700, -20, 600, 375)
    assert moved[1] == (600, 0)
    assert moved[0] == ROOM[0]
    assert ROOM[1] == (600.0, 0.0)


def test_insert_point_adds_edge_midpoint():
    out = insert_point(ROOM, 0)
    assert len(out) == 5
    assert out[1] == (300, 0)

    wrapped = insert_point(ROOM, 3)
    assert wrapped[4] == (0, 187.5)


def test_remove_point_keeps_triangle():
    tri = [(0, 0), (10, 0), (0, 10)]
    assert remove_point(tri, 1) == tri
    assert remove_point(ROOM, 2) == [(0, 0), (600, 0), (0, 375)]


def test_insert_then_remove_restores_vertex_count():
    for i in range(len(L_ROOM)):
        out = remove_point(insert_point(L_ROOM, i), i + 1)
        assert len(out) == len(L_ROOM)


def test_area_and_simplicity():
    assert polygon_area(ROOM) == 600 * 375
    assert polygon_is_simple(ROOM)
    assert not polygon_is_simple([(0, 0), (100, 100), (100, 0), (0, 100)])
    assert polygon_area([(0, 0), (1, 1)]) == 0.0
