"""Path model: ordered SVG drawing commands with flattening for geometric checks.

Paths are built with the fluent helpers and serialized to SVG path data with
``d()``. Curves and arcs are evaluated through svgpathtools segments;
``sample()`` flattens every command into an Nx2 numpy polyline so the
rest of the package (and the tests) can run containment and simplicity checks
through shapely.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Polygon
from svgpathtools import Arc, Line, Path, QuadraticBezier

Point = tuple[float, float]


@dataclass(frozen=True)
class MoveTo:
    to: Point


@dataclass(frozen=True)
class LineTo:
    to: Point


@dataclass(frozen=True)
class QuadTo:
    control: Point
    to: Point


@dataclass(frozen=True)
class ArcTo:
    rx: float
    ry: float
    rotation: float
    large_arc: bool
    sweep: bool
    to: Point


@dataclass(frozen=True)
class ClosePath:
    pass


Command = MoveTo | LineTo | QuadTo | ArcTo | ClosePath


def fmt(value: float) -> str:
    """Compact number formatting for path data and attributes."""
    if abs(value) < 5e-4:
        return "0"
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return text


def _pt(p: Point) -> str:
    return f"{fmt(p[0])},{fmt(p[1])}"


@dataclass
class SvgPath:
    """A single SVG path as a list of absolute commands."""

    commands: list[Command] = field(default_factory=list)

    # -- builders -----------------------------------------------------------

    def move_to(self, x: float, y: float) -> SvgPath:
        self.commands.append(MoveTo((x, y)))
        return self

    def line_to(self, x: float, y: float) -> SvgPath:
        self.commands.append(LineTo((x, y)))
        return self

    def quad_to(self, cx: float, cy: float, x: float, y: float) -> SvgPath:
        self.commands.append(QuadTo((cx, cy), (x, y)))
        return self

    def arc_to(
        self,
        rx: float,
        ry: float,
        x: float,
        y: float,
        *,
        sweep: bool = True,
        large_arc: bool = False,
        rotation: float = 0.0,
    ) -> SvgPath:
        self.commands.append(ArcTo(abs(rx), abs(ry), rotation, large_arc, sweep, (x, y)))
        return self

    def close(self) -> SvgPath:
        self.commands.append(ClosePath())
        return self

    # -- queries ------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return bool(self.commands) and isinstance(self.commands[-1], ClosePath)

    @property
    def start(self) -> Point:
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                return cmd.to
        return (0.0, 0.0)

    def d(self) -> str:
        """Serialize to SVG path data."""
        parts: list[str] = []
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                parts.append(f"M {_pt(cmd.to)}")
            elif isinstance(cmd, LineTo):
                parts.append(f"L {_pt(cmd.to)}")
            elif isinstance(cmd, QuadTo):
                parts.append(f"Q {_pt(cmd.control)} {_pt(cmd.to)}")
            elif isinstance(cmd, ArcTo):
                parts.append(
                    f"A {fmt(cmd.rx)} {fmt(cmd.ry)} {fmt(cmd.rotation)} "
                    f"{int(cmd.large_arc)} {int(cmd.sweep)} {_pt(cmd.to)}"
                )
            else:
                parts.append("Z")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.d()

    def segments(self) -> Path:
        """svgpathtools segments for every drawing command, closing segments included."""
        segs: list[Line | QuadraticBezier | Arc] = []
        current: Point = (0.0, 0.0)
        subpath_start: Point = (0.0, 0.0)
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                current = subpath_start = cmd.to
            elif isinstance(cmd, ClosePath):
                if current != subpath_start:
                    segs.append(Line(complex(*current), complex(*subpath_start)))
                current = subpath_start
            else:
                segs.append(_segment(current, cmd))
                current = cmd.to
        return Path(*segs)

    def sample(self, samples_per_curve: int = 16) -> NDArray[np.float64]:
        """Flatten to an Nx2 polyline. Closed paths repeat their start point."""
        pts: list[Point] = []
        current: Point = (0.0, 0.0)
        subpath_start: Point = (0.0, 0.0)
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                current = subpath_start = cmd.to
                pts.append(current)
            elif isinstance(cmd, ClosePath):
                if current != subpath_start:
                    pts.append(subpath_start)
                current = subpath_start
            else:
                seg = _segment(current, cmd)
                if isinstance(seg, Line):
                    pts.append(cmd.to)
                else:
                    pts.extend(_sample_segment(seg, samples_per_curve))
                    # Land exactly on the requested endpoint
                    pts[-1] = cmd.to
                current = cmd.to
        if not pts:
            return np.empty((0, 2))
        return np.asarray(pts, dtype=np.float64)

    def bbox(self) -> tuple[float, float, float, float]:
        """Compute (xmin, ymin, xmax, ymax) from the exact segment extremes."""
        path = self.segments()
        if len(path) == 0:
            pts = self.sample()
            if len(pts) == 0:
                return (0.0, 0.0, 0.0, 0.0)
            return (float(pts[:, 0].min()), float(pts[:, 1].min()), float(pts[:, 0].max()), float(pts[:, 1].max()))
        xmin, xmax, ymin, ymax = path.bbox()
        return (float(xmin), float(ymin), float(xmax), float(ymax))

    def to_polygon(self, samples_per_curve: int = 32) -> Polygon | None:
        """Shapely polygon of the flattened outline, or None when degenerate."""
        pts = self.sample(samples_per_curve)
        if len(pts) < 4:
            return None
        # Drop consecutive duplicates left by degenerate segments
        keep = np.ones(len(pts), dtype=bool)
        keep[1:] = np.any(np.abs(np.diff(pts, axis=0)) > 1e-9, axis=1)
        pts = pts[keep]
        if len(pts) < 4:
            return None
        return Polygon(pts)


def _spans(p0: Point, arc: ArcTo) -> bool:
    """False for arcs SVG renders as a straight line (zero radius) or skips (no chord)."""
    x1, y1 = p0
    x2, y2 = arc.to
    if arc.rx < 1e-12 or arc.ry < 1e-12:
        return False
    return abs(x1 - x2) >= 1e-12 or abs(y1 - y2) >= 1e-12


def _segment(current: Point, cmd: LineTo | QuadTo | ArcTo) -> Line | QuadraticBezier | Arc:
    start, end = complex(*current), complex(*cmd.to)
    if isinstance(cmd, QuadTo):
        return QuadraticBezier(start, complex(*cmd.control), end)
    if isinstance(cmd, ArcTo) and _spans(current, cmd):
        return Arc(start, complex(cmd.rx, cmd.ry), cmd.rotation, cmd.large_arc, cmd.sweep, end)
    return Line(start, end)


def _sample_segment(seg: QuadraticBezier | Arc, n: int) -> list[Point]:
    points = [seg.point(float(t)) for t in np.linspace(0.0, 1.0, max(n, 2))[1:]]
    return [(p.real, p.imag) for p in points]


def arc_center(p0: Point, arc: ArcTo) -> tuple[float, float, float, float, float, float] | None:
    """SVG endpoint-to-center conversion through ``svgpathtools.Arc``.

    Returns (cx, cy, rx, ry, theta1, dtheta) in radians with radii scaled up
    when they are too small to span the chord, or None when the arc is a
    straight line.
    """
    if not _spans(p0, arc):
        return None
    seg = _segment(p0, arc)
    return (
        seg.center.real,
        seg.center.imag,
        seg.radius.real,
        seg.radius.imag,
        math.radians(seg.theta),
        math.radians(seg.delta),
    )
