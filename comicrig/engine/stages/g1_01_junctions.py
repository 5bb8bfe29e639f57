"""G1.01: Head, neck, torso and pelvis silhouettes with their junctions.

The neck attaches at the first depth where the torso is as wide as the neck
(searching 30% of the torso height), otherwise it narrows to what is there.
The pelvis attaches at the lowest height (scanning up from the torso bottom)
where the torso is at least as wide as the pelvis; if none exists within the
search range the pelvis narrows to the widest available cross-section.
Inverted-triangle torsos end in a point, so their pelvis keeps its full width
and overlaps the tip by a fraction of its own height.
"""

from __future__ import annotations

import logging

from comicrig.engine.context import FigureContext
from comicrig.engine.registry import Phase, stage
from comicrig.geometry.shapes import ShapeKind, ShapeSpec, make_shape, width_at
from comicrig.models.params import HeadShape, ParameterSet, PelvisShape, TorsoShape

logger = logging.getLogger(__name__)

_HEAD_KINDS = {
    HeadShape.ELLIPSE: ShapeKind.ELLIPSE,
    HeadShape.CIRCLE: ShapeKind.CIRCLE,
    HeadShape.SQUARE: ShapeKind.SQUARE,
    HeadShape.TRIANGLE: ShapeKind.TRIANGLE,
    HeadShape.INVERTED_TRIANGLE: ShapeKind.INVERTED_TRIANGLE,
}

# A "circle" torso is drawn as an ellipse of the torso width and height
_TORSO_KINDS = {
    TorsoShape.RECTANGLE: ShapeKind.RECTANGLE,
    TorsoShape.SQUARE: ShapeKind.SQUARE,
    TorsoShape.CIRCLE: ShapeKind.ELLIPSE,
    TorsoShape.TRIANGLE: ShapeKind.TRIANGLE,
    TorsoShape.INVERTED_TRIANGLE: ShapeKind.INVERTED_TRIANGLE,
}

_PELVIS_CORNER = 15.0


def _corner_radius(kind: ShapeKind, p: ParameterSet, rect_radius: float) -> float:
    if kind.is_triangular:
        return p.triangle_corner_radius
    if kind.is_rectangular:
        return rect_radius
    return 0.0


def head_shape(p: ParameterSet, center_x: float, center_y: float) -> ShapeSpec:
    kind = _HEAD_KINDS[p.head_shape]
    height = p.head_width if kind in (ShapeKind.CIRCLE, ShapeKind.SQUARE) else p.head_height
    return make_shape(
        kind,
        center_x,
        center_y - height / 2,
        p.head_width,
        height,
        _corner_radius(kind, p, p.head_corner_radius),
    )


def torso_shape(p: ParameterSet, center_x: float, top_y: float) -> ShapeSpec:
    kind = _TORSO_KINDS[p.torso_shape]
    return make_shape(
        kind,
        center_x,
        top_y,
        p.torso_width,
        p.torso_height,
        _corner_radius(kind, p, p.torso_corner_radius),
    )


def neck_connection(torso: ShapeSpec, neck_width: float, search_fraction: float) -> tuple[float, float]:
    """(depth below torso top, neck width) where the neck meets the torso."""
    max_depth = torso.height * search_fraction
    depth = 0.0
    while depth <= max_depth:
        if width_at(torso, depth) >= neck_width:
            return depth, neck_width
        depth += 1.0
    return max_depth, min(neck_width, width_at(torso, max_depth))


def pelvis_junction(
    torso: ShapeSpec,
    pelvis_width: float,
    search_fraction: float,
    step: float,
    tolerance: float,
) -> tuple[float, float]:
    """(junction y, pelvis width) for a pelvis hanging below ``torso``."""
    limit = torso.top_y + torso.height * search_fraction
    y = torso.bottom_y
    best_y, best_w = y, width_at(torso, torso.height)
    while y >= limit:
        w = width_at(torso, y - torso.top_y)
        if w >= pelvis_width:
            return y, pelvis_width
        if w > best_w:
            best_y, best_w = y, w
        y -= max(step, 1e-3)
    if best_w <= 0:
        return torso.bottom_y, pelvis_width
    logger.debug("Pelvis narrowed from %.1f to fit torso (%.1f available)", pelvis_width, best_w)
    return best_y, min(pelvis_width, best_w * tolerance)


@stage(
    id="G1.01",
    phase=Phase.BODY,
    dependencies=["G0.01"],
    description="Lay out head, neck, torso and pelvis silhouettes",
)
def junctions(ctx: FigureContext) -> None:
    p = ctx.params
    cfg = ctx.config

    ctx.head = head_shape(p, ctx.center_x, cfg.head_center_y)
    ctx.neck_top_y = ctx.head.bottom_y - cfg.neck_overlap
    ctx.torso = torso_shape(p, ctx.center_x, ctx.neck_top_y + p.neck_height)

    neck_width = p.head_width * p.neck_width_ratio / 100
    depth, ctx.neck_width = neck_connection(ctx.torso, neck_width, cfg.neck_search_fraction)
    ctx.neck_bottom_y = ctx.torso.top_y + depth

    pelvis_width = ctx.torso.width * p.pelvis_width_ratio / 100
    if p.torso_shape == TorsoShape.INVERTED_TRIANGLE:
        # The torso tapers to a point: the pelvis sits over the tip at full width
        ctx.junction_y = ctx.torso.bottom_y
        pelvis_top = ctx.junction_y - p.pelvis_height * cfg.tip_pelvis_overlap
    else:
        ctx.junction_y, pelvis_width = pelvis_junction(
            ctx.torso,
            pelvis_width,
            cfg.pelvis_search_fraction,
            cfg.pelvis_search_step,
            cfg.pelvis_width_tolerance,
        )
        pelvis_top = ctx.junction_y - cfg.pelvis_overlap

    kind = ShapeKind.HORIZONTAL_OVAL if p.pelvis_shape == PelvisShape.HORIZONTAL_OVAL else ShapeKind.RECTANGLE
    ctx.pelvis = make_shape(
        kind,
        ctx.center_x,
        pelvis_top,
        pelvis_width,
        p.pelvis_height,
        _PELVIS_CORNER if kind == ShapeKind.RECTANGLE else 0.0,
    )
