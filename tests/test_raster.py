import math

import numpy as np
import pytest

from cgscene.nodes import Primitive
from cgscene.raster import (
    BLACK,
    BLUE,
    EDGE_TABLE_SIZE,
    ORANGE,
    RED,
    SCANLINE_TEST_POLYGON,
    WHITE,
    YELLOW,
    Canvas,
    arc,
    boundary_fill,
    bresenham_circle,
    bresenham_line,
    dda_line,
    demo_primitives,
    flood_fill,
    midpoint_circle,
    midpoint_line,
    scanline_fill,
    star_triangles,
)
from cgscene.renderstate import ShadeModel

LINE_CASES = [(0, 0, 3, 1), (0, 0, 2, 1), (5, 5, 0, 0), (0, 0, 1, 7), (10, 3, 2, 9), (4, 4, 4, 12)]


def _square_canvas():
    canvas = Canvas(10, 10)
    for segment in [(2, 2, 7, 2), (7, 2, 7, 7), (7, 7, 2, 7), (2, 7, 2, 2)]:
        canvas.plot(bresenham_line(*segment), BLACK)
    return canvas


def test_canvas_round_trip():
    canvas = Canvas(4, 3)
    canvas.set_pixel(2, 1, RED)
    assert canvas.get_pixel(2, 1) == RED
    assert canvas.get_pixel(0, 0) == WHITE


def test_canvas_get_outside_raises():
    canvas = Canvas(4, 3)
    with pytest.raises(IndexError):
        canvas.get_pixel(4, 0)
    with pytest.raises(IndexError):
        canvas.get_pixel(0, -1)


def test_canvas_set_outside_is_clipped():
    canvas = Canvas(4, 3)
    before = canvas.pixels.copy()
    canvas.set_pixel(10, 10, RED)
    canvas.set_pixel(-1, 0, RED)
    assert np.array_equal(canvas.pixels, before)


def test_canvas_rejects_bad_sizes_and_colors():
    with pytest.raises(ValueError):
        Canvas(0, 5)
    with pytest.raises(ValueError):
        Canvas(2, 2).set_pixel(0, 0, (1.0, 0.0))


def test_canvas_plot_paints_all_points():
    canvas = Canvas(8, 8)
    points = bresenham_line(0, 0, 7, 3)
    canvas.plot(points, BLUE)
    assert all(canvas.get_pixel(x, y) == BLUE for x, y in points)


@pytest.mark.parametrize("line", [midpoint_line, bresenham_line])
@pytest.mark.parametrize("case", LINE_CASES)
def test_integer_lines_connect_endpoints(line, case):
    x0, y0, x1, y1 = case
    points = line(x0, y0, x1, y1)
    assert points[0] == (x0, y0)
    assert points[-1] == (x1, y1)
    assert len(points) == max(abs(x1 - x0), abs(y1 - y0)) + 1
    for (ax, ay), (bx, by) in zip(points, points[1:]):
        assert max(abs(bx - ax), abs(by - ay)) == 1


@pytest.mark.parametrize("case", [(0, 0, 3, 1), (0, 0, 2, 1), (5, 5, 0, 0), (4, 4, 4, 12)])
def test_dda_connects_endpoints(case):
    x0, y0, x1, y1 = case
    points = dda_line(x0, y0, x1, y1)
    assert points[0] == (x0, y0)
    assert points[-1] == (x1, y1)
    assert len(points) == max(abs(x1 - x0), abs(y1 - y0)) + 1


def test_horizontal_lines_agree():
    expected = [(0, 0), (1, 0), (2, 0), (3, 0)]
    assert dda_line(0, 0, 3, 0) == expected
    assert midpoint_line(0, 0, 3, 0) == expected
    assert bresenham_line(0, 0, 3, 0) == expected


def test_zero_length_lines():
    assert dda_line(4, 5, 4, 5) == []
    assert midpoint_line(4, 5, 4, 5) == [(4, 5)]
    assert bresenham_line(4, 5, 4, 5) == [(4, 5)]


@pytest.mark.parametrize("circle", [midpoint_circle, bresenham_circle])
def test_circles_are_symmetric_and_near_radius(circle):
    cx, cy, r = 10, 20, 7
    points = set(circle(cx, cy, r))
    for x, y in points:
        assert abs(math.hypot(x - cx, y - cy) - r) <= 1.0
        dx, dy = x - cx, y - cy
        assert (cx + dy, cy + dx) in points
        assert (cx - dx, cy + dy) in points
        assert (cx + dx, cy - dy) in points
    assert {(cx + r, cy), (cx - r, cy), (cx, cy + r), (cx, cy - r)} <= points


def test_circle_emits_eight_points_per_step():
    assert len(midpoint_circle(0, 0, 5)) % 8 == 0
    assert len(bresenham_circle(0, 0, 5)) % 8 == 0


def test_arc_starts_on_start_angle_and_stays_inside_radius():
    points = arc(50, 60, 10, 0.0, 90.0)
    assert points[0] == (60, 60)
    for x, y in points:
        assert 8.0 <= math.hypot(x - 50, y - 60) <= 10.0 + 1e-9
        assert x >= 50 and y >= 60


def test_arc_with_reversed_angles_is_empty():
    assert arc(0, 0, 10, 90.0, 0.0) == []


def test_scanline_fill_square():
    points = scanline_fill([(10, 10), (10, 20), (20, 20), (20, 10)])
    assert set(points) == {(x, y) for x in range(10, 21) for y in range(10, 20)}
    assert len(points) == len(set(points))


def test_scanline_fill_triangle_points_inside():
    triangle = [(10, 10), (40, 10), (10, 40)]
    points = scanline_fill(triangle)
    assert points
    for x, y in points:
        assert x >= 10 and y >= 10 and x + y <= 50


def test_scanline_fill_concave_notch():
    points = set(scanline_fill(SCANLINE_TEST_POLYGON))
    assert (120, 150) in points
    assert (180, 150) not in points
    assert all(100 <= x <= 200 and 100 <= y <= 200 for x, y in points)


def test_scanline_fill_empty_and_out_of_range():
    assert scanline_fill([]) == []
    with pytest.raises(ValueError):
        scanline_fill([(0, -5), (10, 5), (0, 5)])
    with pytest.raises(ValueError):
        scanline_fill([(0, EDGE_TABLE_SIZE), (10, EDGE_TABLE_SIZE + 5), (0, EDGE_TABLE_SIZE + 5)])


def test_boundary_fill_fills_interior_only():
    canvas = _square_canvas()
    painted = boundary_fill(canvas, 4, 4, RED, BLACK)
    interior = {(x, y) for x in range(3, 7) for y in range(3, 7)}
    red = {(x, y) for x in range(10) for y in range(10) if canvas.get_pixel(x, y) == RED}
    assert red == interior
    assert painted == len(interior)
    assert canvas.get_pixel(2, 2) == BLACK
    assert canvas.get_pixel(0, 0) == WHITE


def test_flood_fill_replaces_connected_region():
    canvas = _square_canvas()
    painted = flood_fill(canvas, 4, 4, BLUE, WHITE)
    interior = {(x, y) for x in range(3, 7) for y in range(3, 7)}
    blue = {(x, y) for x in range(10) for y in range(10) if canvas.get_pixel(x, y) == BLUE}
    assert blue == interior
    assert painted == len(interior)


def test_flood_fill_noop_cases():
    canvas = _square_canvas()
    assert flood_fill(canvas, 4, 4, WHITE, WHITE) == 0
    assert flood_fill(canvas, 2, 2, BLUE, WHITE) == 0
    assert canvas.get_pixel(2, 2) == BLACK


def test_star_triangles_form_a_fan():
    triangles = star_triangles()
    assert len(triangles) == 10
    assert all(tri[0] == (200.0, 200.0) for tri, _ in triangles)
    assert triangles[0][0][1] == (200.0, 300.0)
    assert triangles[-1][0][2] == (200.0, 300.0)
    for (first, _), (second, _) in zip(triangles, triangles[1:]):
        assert first[2] == second[1]
    assert [color for _, color in triangles] == [YELLOW, ORANGE] * 5


def test_demo_primitives():
    demos = demo_primitives()
    points = demos["points"]
    assert points.primitive is Primitive.POINTS
    assert points.vertices == ((200.0, 200.0), (300.0, 300.0), (400.0, 400.0))
    assert points.point_size == 8.0
    strip = demos["triangle_strip"]
    assert strip.shade_model is ShadeModel.FLAT
    assert strip.colors[0] == RED and strip.colors[-1] == BLUE
    assert len(demos["quads"].vertices) % 4 == 0
    for drawing in demos.values():
        assert len(drawing.vertices) == len(drawing.colors)
        assert drawing.clear_color == WHITE