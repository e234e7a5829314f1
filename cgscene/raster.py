"""Raster algorithms: line and circle scan conversion, polygon and seed fills.

Scan-conversion functions return the pixel coordinates they produce, in the
order they are produced. Seed fills work on a :class:`Canvas`.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

import numpy as np

from .nodes import Primitive
from .renderstate import ShadeModel

Point = tuple[int, int]
Vertex = tuple[float, float]
RGB = tuple[float, float, float]

EDGE_TABLE_SIZE = 2048
"""Scan lines covered by :func:`scanline_fill`; vertices must lie below it."""

ARC_STEP = 0.01
"""Angular step of :func:`arc`, in radians."""

WHITE: RGB = (1.0, 1.0, 1.0)
BLACK: RGB = (0.0, 0.0, 0.0)
RED: RGB = (1.0, 0.0, 0.0)
GREEN: RGB = (0.0, 1.0, 0.0)
BLUE: RGB = (0.0, 0.0, 1.0)
YELLOW: RGB = (1.0, 1.0, 0.0)
ORANGE: RGB = (1.0, 0.5, 0.0)

STAR_OUTLINE_COLOR: RGB = ORANGE
STAR_OUTLINE_WIDTH = 2.0

SCANLINE_TEST_POLYGON: tuple[Point, ...] = (
    (100, 100),
    (100, 200),
    (200, 200),
    (150, 150),
    (200, 100),
)
"""A concave polygon with a notch on its right side."""

_f32 = np.float32


def _rgb(color: Iterable[float]) -> RGB:
    components = tuple(float(c) for c in color)
    if len(components) != 3:
        raise ValueError("a colour needs exactly three components (r, g, b)")
    return components  # type: ignore[return-value]


class Canvas:
    """A grid of RGB pixels addressed as (x, y), with y selecting the row."""

    def __init__(self, width: int, height: int, background: Iterable[float] = WHITE) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas dimensions must be positive")
        self.width = int(width)
        self.height = int(height)
        self.pixels = np.empty((self.height, self.width, 3), dtype=float)
        self.pixels[:] = _rgb(background)

    def __contains__(self, point: object) -> bool:
        try:
            x, y = point  # type: ignore[misc]
        except (TypeError, ValueError):
            return False
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> RGB:
        """Colour at (x, y); raises IndexError outside the canvas."""
        if (x, y) not in self:
            raise IndexError(f"pixel ({x}, {y}) is outside a {self.width}x{self.height} canvas")
        return tuple(float(c) for c in self.pixels[y, x])  # type: ignore[return-value]

    def set_pixel(self, x: int, y: int, color: Iterable[float]) -> None:
        """Paint (x, y); pixels outside the canvas are clipped away."""
        rgb = _rgb(color)
        if (x, y) in self:
            self.pixels[y, x] = rgb

    def plot(self, points: Iterable[Point], color: Iterable[float]) -> None:
        """Paint every point in ``points`` with ``color``."""
        rgb = _rgb(color)
        for x, y in points:
            self.set_pixel(x, y, rgb)


def dda_line(x_start: int, y_start: int, x_end: int, y_end: int) -> list[Point]:
    """Digital differential analyser; a zero-length line yields no points."""
    dx = x_end - x_start
    dy = y_end - y_start
    steps = max(abs(dx), abs(dy))
    if steps == 0:
        return []
    x = _f32(x_start)
    y = _f32(y_start)
    x_inc = _f32(dx) / _f32(steps)
    y_inc = _f32(dy) / _f32(steps)
    points: list[Point] = []
    for _ in range(steps + 1):
        points.append((int(float(x) + 0.5), int(float(y) + 0.5)))
        x = _f32(x + x_inc)
        y = _f32(y + y_inc)
    return points


def midpoint_line(x_start: int, y_start: int, x_end: int, y_end: int) -> list[Point]:
    """Midpoint line algorithm stepping along the major axis."""
    dx = x_end - x_start
    dy = y_end - y_start
    abs_dx, abs_dy = abs(dx), abs(dy)
    x_inc = 1 if dx > 0 else -1
    y_inc = 1 if dy > 0 else -1
    x, y = x_start, y_start
    points: list[Point] = []
    if abs_dx >= abs_dy:
        err = 2 * abs_dy - abs_dx
        for _ in range(abs_dx + 1):
            points.append((x, y))
            if err >= 0:
                y += y_inc
                err -= 2 * abs_dx
            err += 2 * abs_dy
            x += x_inc
    else:
        err = 2 * abs_dx - abs_dy
        for _ in range(abs_dy + 1):
            points.append((x, y))
            if err >= 0:
                x += x_inc
                err -= 2 * abs_dy
            err += 2 * abs_dx
            y += y_inc
    return points


def bresenham_line(x_start: int, y_start: int, x_end: int, y_end: int) -> list[Point]:
    """Integer Bresenham line from start to end, both included."""
    dx = abs(x_end - x_start)
    dy = abs(y_end - y_start)
    sx = 1 if x_start < x_end else -1
    sy = 1 if y_start < y_end else -1
    err = dx - dy
    x, y = x_start, y_start
    points: list[Point] = [(x, y)]
    while x != x_end or y != y_end:
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
        points.append((x, y))
    return points


def _octants(cx: int, cy: int, x: int, y: int) -> list[Point]:
    return [
        (cx + x, cy + y), (cx - x, cy + y), (cx + x, cy - y), (cx - x, cy - y),
        (cx + y, cy + x), (cx - y, cy + x), (cx + y, cy - x), (cx - y, cy - x),
    ]


def midpoint_circle(center_x: int, center_y: int, radius: int) -> list[Point]:
    """Midpoint circle; eight symmetric points per step, duplicates kept."""
    x, y = 0, radius
    d = 1 - radius
    points: list[Point] = []
    while x <= y:
        points.extend(_octants(center_x, center_y, x, y))
        if d < 0:
            d += 2 * x + 3
        else:
            d += 2 * (x - y) + 5
            y -= 1
        x += 1
    return points


def bresenham_circle(center_x: int, center_y: int, radius: int) -> list[Point]:
    """Bresenham circle; eight symmetric points per step, duplicates kept."""
    x, y = 0, radius
    d = 3 - 2 * radius
    points: list[Point] = []
    while x <= y:
        points.extend(_octants(center_x, center_y, x, y))
        if d < 0:
            d = d + 4 * x + 6
        else:
            d = d + 4 * (x - y) + 10
            y -= 1
        x += 1
    return points


def arc(center_x: int, center_y: int, r: float, start_angle: float, end_angle: float) -> list[Point]:
    """Arc from ``start_angle`` to ``end_angle`` (degrees) by incremental rotation."""
    radians_start = float(_f32(math.radians(start_angle)))
    radians_end = float(_f32(math.radians(end_angle)))
    delta = float(_f32(ARC_STEP))
    x = math.cos(radians_start)
    y = math.sin(radians_start)
    cos_delta = math.cos(delta)
    sin_delta = math.sin(delta)
    points: list[Point] = []
    angle = radians_start
    while angle <= radians_end:
        points.append((center_x + int(r * x), center_y + int(r * y)))
        x, y = x * cos_delta - y * sin_delta, x * sin_delta + y * cos_delta
        angle += delta
    return points


@dataclass
class _Edge:
    x: np.float32
    delta_x: np.float32
    y_max: int


def scanline_fill(vertices: Sequence[Sequence[int]]) -> list[Point]:
    """Fill a polygon with an edge table and an active edge list.

    Each scan line is filled between pairs of crossings, from the ceiling of
    the left crossing to the floor of the right one. Raises ValueError when
    an edge starts outside ``0 <= y < EDGE_TABLE_SIZE``.
    """
    polygon = [(int(x), int(y)) for x, y in vertices]
    if not polygon:
        return []
    table: dict[int, list[_Edge]] = defaultdict(list)
    for (x1, y1), (x2, y2) in zip(polygon, polygon[1:] + polygon[:1]):
        if y1 == y2:
            continue
        y_min = min(y1, y2)
        if not 0 <= y_min < EDGE_TABLE_SIZE:
            raise ValueError(f"edge starts at y={y_min}, outside 0..{EDGE_TABLE_SIZE - 1}")
        x = _f32(x1 if y1 < y2 else x2)
        delta_x = _f32(x1 - x2) / _f32(y1 - y2)
        table[y_min].append(_Edge(x, delta_x, max(y1, y2)))

    points: list[Point] = []
    active: list[_Edge] = []
    scan_y = min(table) if table else EDGE_TABLE_SIZE
    while scan_y < EDGE_TABLE_SIZE or active:
        if scan_y < EDGE_TABLE_SIZE:
            active.extend(replace(edge) for edge in table.get(scan_y, ()))
        active.sort(key=lambda edge: float(edge.x))
        for left, right in zip(active[0::2], active[1::2]):
            x_first = math.ceil(float(left.x))
            x_last = math.floor(float(right.x))
            points.extend((x, scan_y) for x in range(x_first, x_last + 1))
        scan_y += 1
        remaining = []
        for edge in active:
            if edge.y_max == scan_y:
                continue
            edge.x = _f32(edge.x + edge.delta_x)
            remaining.append(edge)
        active = remaining
    return points


def boundary_fill(canvas: Canvas, x: int, y: int, fill: Iterable[float],
                  boundary: Iterable[float]) -> int:
    """4-connected fill up to pixels of the boundary colour; returns pixels painted."""
    fill_rgb = _rgb(fill)
    boundary_rgb = _rgb(boundary)
    stack: list[Point] = [(x, y)]
    painted = 0
    while stack:
        px, py = stack.pop()
        if (px, py) not in canvas:
            continue
        current = canvas.get_pixel(px, py)
        if current == boundary_rgb or current == fill_rgb:
            continue
        canvas.set_pixel(px, py, fill_rgb)
        painted += 1
        stack.extend(((px, py + 1), (px + 1, py), (px, py - 1), (px - 1, py)))
    return painted


def flood_fill(canvas: Canvas, x: int, y: int, fill: Iterable[float],
               old: Iterable[float]) -> int:
    """4-connected replacement of the ``old`` colour by ``fill``; returns pixels painted."""
    fill_rgb = _rgb(fill)
    old_rgb = _rgb(old)
    if fill_rgb == old_rgb:
        return 0
    stack: list[Point] = [(x, y)]
    painted = 0
    while stack:
        px, py = stack.pop()
        if (px, py) not in canvas or canvas.get_pixel(px, py) != old_rgb:
            continue
        canvas.set_pixel(px, py, fill_rgb)
        painted += 1
        stack.extend(((px, py + 1), (px + 1, py), (px, py - 1), (px - 1, py)))
    return painted


def star_triangles() -> list[tuple[tuple[Vertex, Vertex, Vertex], RGB]]:
    """The ten fan triangles of a five-pointed star with alternating fill colours.

    Each triangle's outline is drawn in :data:`STAR_OUTLINE_COLOR` with
    :data:`STAR_OUTLINE_WIDTH`.
    """
    big, small = 100.0, 40.0
    a, b = 200.0, 300.0
    c, d = a, b - 100.0
    center = (200.0, 200.0)
    rim: list[Vertex] = [
        (200.0, 300.0),
        (c - 0.59 * small, d + 0.81 * small),
        (a - 0.95 * big, b - big + 0.31 * big),
        (c - 0.95 * small, d - 0.31 * small),
        (a - 0.59 * big, b - big - 0.81 * big),
        (c, d - small),
        (a + 0.59 * big, b - big - 0.81 * big),
        (c + 0.95 * small, d - 0.31 * small),
        (a + 0.95 * big, b - big + 0.31 * big),
        (c + 0.59 * small, d + 0.81 * small),
    ]
    return [
        ((center, first, second), YELLOW if k % 2 == 0 else ORANGE)
        for k, (first, second) in enumerate(zip(rim, rim[1:] + rim[:1]))
    ]


@dataclass(frozen=True)
class Drawing:
    """One batch of 2D vertices with the colour current at each vertex."""

    primitive: Primitive
    vertices: tuple[Vertex, ...]
    colors: tuple[RGB, ...]
    point_size: float = 1.0
    shade_model: ShadeModel = ShadeModel.SMOOTH
    clear_color: RGB = WHITE


def _drawing(primitive: Primitive, runs: Sequence[tuple[RGB, Sequence[Vertex]]],
             **options: object) -> Drawing:
    vertices = tuple((float(x), float(y)) for _, run in runs for x, y in run)
    colors = tuple(color for color, run in runs for _ in run)
    return Drawing(primitive, vertices, colors, **options)  # type: ignore[arg-type]


def demo_primitives() -> dict[str, Drawing]:
    """Sample drawings, one for each kind of primitive."""
    flat = {"shade_model": ShadeModel.FLAT}
    return {
        "points": _drawing(Primitive.POINTS, [(BLACK, [(200, 200), (300, 300), (400, 400)])],
                           point_size=8.0),
        "lines": _drawing(Primitive.LINES, [(BLACK, [
            (100, 300), (200, 400), (200, 300), (400, 400), (100, 400), (500, 100)])]),
        "line_strip": _drawing(Primitive.LINE_STRIP, [(BLACK, [
            (100, 400), (500, 200), (500, 400)])]),
        "line_loop": _drawing(Primitive.LINE_LOOP, [(BLACK, [
            (100, 300), (200, 400), (200, 300), (400, 400)])]),
        "triangles": _drawing(Primitive.TRIANGLES, [(BLACK, [
            (100, 300), (200, 400), (200, 300), (50, 50), (100, 100), (200, 100)])]),
        "triangle_strip": _drawing(Primitive.TRIANGLE_STRIP, [
            (RED, [(200, 200), (200, 100), (300, 200)]),
            (GREEN, [(400, 100)]),
            (BLUE, [(500, 200)]),
        ], **flat),
        "triangle_fan": _drawing(Primitive.TRIANGLE_FAN, [
            (RED, [(100, 100), (100, 200), (150, 170)]),
            (GREEN, [(170, 130)]),
            (BLUE, [(150, 70)]),
        ], **flat),
        "quads": _drawing(Primitive.QUADS, [
            (BLACK, [(100, 100), (100, 0), (0, 0), (0, 100)]),
            (RED, [(400, 400), (100, 400), (100, 100), (400, 100)]),
        ]),
        "quad_strip": _drawing(Primitive.QUAD_STRIP, [
            (RED, [(0, 0), (100, 0), (0, 100), (100, 100)]),
            (GREEN, [(100, 400), (400, 400)]),
        ], **flat),
        "polygon": _drawing(Primitive.POLYGON, [(BLACK, [
            (100, 100), (200, 130), (170, 70), (70, 40)])]),
    }