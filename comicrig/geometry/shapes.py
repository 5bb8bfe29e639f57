"""Shape boundary library: closed-form silhouettes for heads, torsos and pelvises.

Every shape is described by a ``ShapeSpec`` anchored at its horizontal center
and its top edge. ``width_at`` answers horizontal cross-section queries
relative to the top edge and ``outline_path`` returns the closed outline.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

import numpy as np

from comicrig.geometry.path import Point, SvgPath

_EPS = 1e-9


class ShapeKind(str, enum.Enum):
    ELLIPSE = "ellipse"
    CIRCLE = "circle"
    RECTANGLE = "rectangle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    INVERTED_TRIANGLE = "inverted-triangle"
    HORIZONTAL_OVAL = "horizontal-oval"

    @property
    def is_elliptic(self) -> bool:
        return self in (ShapeKind.ELLIPSE, ShapeKind.CIRCLE, ShapeKind.HORIZONTAL_OVAL)

    @property
    def is_rectangular(self) -> bool:
        return self in (ShapeKind.RECTANGLE, ShapeKind.SQUARE)

    @property
    def is_triangular(self) -> bool:
        return self in (ShapeKind.TRIANGLE, ShapeKind.INVERTED_TRIANGLE)


@dataclass(frozen=True)
class ShapeSpec:
    """One silhouette: kind, horizontal center, top edge and extent."""

    kind: ShapeKind
    center_x: float
    top_y: float
    width: float
    height: float
    corner_radius: float = 0.0

    @property
    def bottom_y(self) -> float:
        return self.top_y + self.height

    @property
    def center_y(self) -> float:
        return self.top_y + self.height / 2

    @property
    def radius(self) -> float:
        """Corner radius clamped to half the smaller dimension."""
        return max(0.0, min(self.corner_radius, self.width / 2, self.height / 2))


def make_shape(
    kind: ShapeKind | str,
    center_x: float,
    top_y: float,
    width: float,
    height: float,
    corner_radius: float = 0.0,
) -> ShapeSpec:
    """Build a ShapeSpec, squaring circles and squares and clamping negatives."""
    kind = ShapeKind(kind)
    width = max(0.0, width)
    height = max(0.0, height)
    if kind in (ShapeKind.CIRCLE, ShapeKind.SQUARE):
        height = width
    return ShapeSpec(kind, center_x, top_y, width, height, max(0.0, corner_radius))


def width_at(shape: ShapeSpec, y_offset: float) -> float:
    """Horizontal width of the silhouette at ``y_offset`` below its top edge.

    Zero outside [0, height], never negative inside. Triangles follow the
    sharp polygon even when their corners are drawn rounded.
    """
    w, h = shape.width, shape.height
    if h <= _EPS or w <= _EPS or y_offset < 0 or y_offset > h:
        return 0.0

    kind = shape.kind
    if kind.is_elliptic:
        ry = h / 2
        dy = (y_offset - ry) / ry
        return max(0.0, w * math.sqrt(max(0.0, 1.0 - dy * dy)))

    if kind == ShapeKind.TRIANGLE:
        return max(0.0, w * y_offset / h)

    if kind == ShapeKind.INVERTED_TRIANGLE:
        return max(0.0, w * (1.0 - y_offset / h))

    # Rounded rectangle / square
    r = shape.radius
    half = w / 2
    if r > _EPS and y_offset < r:
        dy = y_offset - r
        half = (w / 2 - r) + math.sqrt(max(0.0, r * r - dy * dy))
    elif r > _EPS and y_offset > h - r:
        dy = y_offset - (h - r)
        half = (w / 2 - r) + math.sqrt(max(0.0, r * r - dy * dy))
    return max(0.0, 2 * half)


def rounded_rect_path(x: float, y: float, w: float, h: float, r: float) -> SvgPath:
    """Clockwise rounded rectangle; radius clamped to half the smaller side."""
    w, h = max(0.0, w), max(0.0, h)
    r = max(0.0, min(r, w / 2, h / 2))
    path = SvgPath()
    if r <= _EPS:
        return path.move_to(x, y).line_to(x + w, y).line_to(x + w, y + h).line_to(x, y + h).close()
    path.move_to(x + r, y)
    path.line_to(x + w - r, y).arc_to(r, r, x + w, y + r)
    path.line_to(x + w, y + h - r).arc_to(r, r, x + w - r, y + h)
    path.line_to(x + r, y + h).arc_to(r, r, x, y + h - r)
    path.line_to(x, y + r).arc_to(r, r, x + r, y)
    return path.close()


def ellipse_path(cx: float, cy: float, rx: float, ry: float) -> SvgPath:
    """Full ellipse as two clockwise half arcs."""
    rx, ry = abs(rx), abs(ry)
    path = SvgPath().move_to(cx - rx, cy)
    if rx <= _EPS or ry <= _EPS:
        return path.line_to(cx + rx, cy).close()
    path.arc_to(rx, ry, cx + rx, cy).arc_to(rx, ry, cx - rx, cy)
    return path.close()


def rounded_polygon_path(points: list[Point], radius: float) -> SvgPath:
    """Closed polygon with every vertex replaced by a quadratic corner.

    The tangent distance for ``radius`` is clamped to half the shorter
    adjacent edge so neighbouring corners never cross.
    """
    path = SvgPath()
    n = len(points)
    if n == 0:
        return path
    if n < 3 or radius <= 0:
        path.move_to(*points[0])
        for p in points[1:]:
            path.line_to(*p)
        return path.close()

    pts = np.asarray(points, dtype=np.float64)
    for i in range(n):
        p0, p1, p2 = pts[i - 1], pts[i], pts[(i + 1) % n]
        to_prev = p0 - p1
        to_next = p2 - p1
        len_prev = float(np.hypot(*to_prev))
        len_next = float(np.hypot(*to_next))
        if len_prev < _EPS or len_next < _EPS:
            start = end = p1
        else:
            u_prev = to_prev / len_prev
            u_next = to_next / len_next
            angle = math.acos(float(np.clip(np.dot(u_prev, u_next), -1.0, 1.0)))
            tan_half = math.tan(angle / 2)
            dist = radius / tan_half if tan_half > _EPS else math.inf
            dist = min(dist, len_prev / 2, len_next / 2)
            start = p1 + u_prev * dist
            end = p1 + u_next * dist
        if i == 0:
            path.move_to(float(start[0]), float(start[1]))
        else:
            path.line_to(float(start[0]), float(start[1]))
        path.quad_to(float(p1[0]), float(p1[1]), float(end[0]), float(end[1]))
    return path.close()


def polygon_points(shape: ShapeSpec) -> list[Point]:
    """Vertices of a triangular silhouette, clockwise from the top."""
    cx, top, bottom, half = shape.center_x, shape.top_y, shape.bottom_y, shape.width / 2
    if shape.kind == ShapeKind.INVERTED_TRIANGLE:
        return [(cx - half, top), (cx + half, top), (cx, bottom)]
    return [(cx, top), (cx + half, bottom), (cx - half, bottom)]


def outline_path(shape: ShapeSpec) -> SvgPath:
    """Closed outline of the silhouette."""
    if shape.kind.is_elliptic:
        return ellipse_path(shape.center_x, shape.center_y, shape.width / 2, shape.height / 2)
    if shape.kind.is_triangular:
        return rounded_polygon_path(polygon_points(shape), shape.corner_radius)
    return rounded_rect_path(
        shape.center_x - shape.width / 2, shape.top_y, shape.width, shape.height, shape.radius
    )


def boundary_normal(shape: ShapeSpec, y_offset: float) -> tuple[float, float]:
    """Outward unit normal of the right-hand boundary at ``y_offset``."""
    w, h = shape.width, shape.height
    kind = shape.kind

    if kind.is_elliptic:
        rx, ry = w / 2, h / 2
        if rx < _EPS or ry < _EPS:
            return (1.0, 0.0)
        dy = y_offset - ry
        ex = rx * math.sqrt(max(0.0, 1.0 - (dy / ry) ** 2))
        nx, ny = ex / rx**2, dy / ry**2
    elif kind == ShapeKind.TRIANGLE:
        nx, ny = h, -w / 2
    elif kind == ShapeKind.INVERTED_TRIANGLE:
        nx, ny = h, w / 2
    else:
        r = shape.radius
        if r > _EPS and (y_offset < r or y_offset > h - r):
            corner_y = r if y_offset < r else h - r
            dy = y_offset - corner_y
            nx = math.sqrt(max(0.0, r * r - dy * dy))
            ny = dy
        else:
            nx, ny = 1.0, 0.0

    mag = math.hypot(nx, ny)
    if mag < _EPS:
        return (1.0, 0.0)
    return (nx / mag, ny / mag)


def attachment_point(shape: ShapeSpec, y_offset: float, inset: float, side: int = 1) -> Point:
    """Boundary point at ``y_offset`` moved inward along the normal by ``inset``.

    ``side`` is +1 for the right-hand boundary and -1 for the left.
    """
    half = width_at(shape, y_offset) / 2
    nx, ny = boundary_normal(shape, y_offset)
    x_offset = half - inset * nx
    y = shape.top_y + y_offset - inset * ny
    # Keep the point inside the silhouette at its final height
    inner_half = width_at(shape, y - shape.top_y) / 2
    if x_offset > inner_half:
        x_offset = inner_half - 2
    x_offset = max(0.0, x_offset)
    return (shape.center_x + side * x_offset, y)


def lower_boundary_y(shape: ShapeSpec, x_offset: float) -> float:
    """Height of the bottom edge ``x_offset`` away from the center line."""
    half = shape.width / 2
    x = min(abs(x_offset), half)
    if shape.kind.is_elliptic:
        rx, ry = half, shape.height / 2
        if rx < _EPS:
            return shape.center_y
        return shape.center_y + ry * math.sqrt(max(0.0, 1.0 - (x / rx) ** 2))
    if shape.kind == ShapeKind.INVERTED_TRIANGLE:
        if half < _EPS:
            return shape.top_y
        return shape.top_y + shape.height * (1.0 - x / half)
    if shape.kind == ShapeKind.TRIANGLE:
        return shape.bottom_y
    r = shape.radius
    corner_x = half - r
    if r > _EPS and x > corner_x:
        dx = x - corner_x
        return shape.bottom_y - r + math.sqrt(max(0.0, r * r - dx * dx))
    return shape.bottom_y
