"""G3.02: Eyebrows and eyelashes.

Eyebrows sit a head-height ratio above the eye line, pushed up to clear the
eye and then down to stay below the hairline. Lashes fan out along the outer
part of the upper lid and disappear once the lid covers most of the eye.
"""

from __future__ import annotations

import math

from comicrig.engine.context import FigureContext
from comicrig.engine.features import EyebrowFeature, EyeFeature, EyelashesFeature, Side
from comicrig.engine.registry import Phase, stage
from comicrig.geometry.eyes import EyeStyle, lid_heights
from comicrig.geometry.path import Point


def eyebrow_y(
    eye_y: float,
    eye_ry: float,
    offset: float,
    brow_height: float,
    gap: float,
    hairline: float,
) -> float:
    """Center height of an eyebrow, clamped above the eye and below the hairline."""
    offset = max(offset, eye_ry + brow_height / 2 + gap)
    y = eye_y - offset
    if y - brow_height / 2 < hairline:
        y = hairline + brow_height / 2
    return y


def _rotate(vx: float, vy: float, degrees: float) -> tuple[float, float]:
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    return (vx * c - vy * s, vx * s + vy * c)


def lash_strokes(
    eye: EyeFeature,
    style: EyeStyle,
    upper: float,
    lower: float,
    count: int,
    length: float,
    angle: float,
) -> tuple[tuple[Point, Point], ...]:
    """Lash segments along the outer 40% of the upper lid."""
    cx, cy = eye.center
    rx, ry = eye.rx, eye.ry
    outward = eye.side.sign
    t_start, t_end = (0.0, 0.4) if eye.side == Side.LEFT else (1.0, 0.6)
    tilt = -angle if eye.side == Side.LEFT else angle
    upper_y, _ = lid_heights(cy, ry, upper, lower)

    strokes: list[tuple[Point, Point]] = []
    for i in range(count):
        step = i / (count - 1) if count > 1 else 0.5
        t = t_start + step * (t_end - t_start)

        if style == EyeStyle.REALISTIC:
            p0, p1, p2 = (cx - rx, cy), (cx, upper_y), (cx + rx, cy)
            sx = (1 - t) ** 2 * p0[0] + 2 * (1 - t) * t * p1[0] + t**2 * p2[0]
            sy = (1 - t) ** 2 * p0[1] + 2 * (1 - t) * t * p1[1] + t**2 * p2[1]
            tx = 2 * (1 - t) * (p1[0] - p0[0]) + 2 * t * (p2[0] - p1[0])
            ty = 2 * (1 - t) * (p1[1] - p0[1]) + 2 * t * (p2[1] - p1[1])
            nx, ny = -ty, tx
            norm = math.hypot(nx, ny)
            if norm > 0:
                nx, ny = nx / norm, ny / norm
            if ny > 0:
                nx, ny = -nx, -ny
            vx, vy = nx + outward * 1.2, ny - 0.2
        else:
            ry_safe = ry if ry > 1e-9 else 1.0
            y_term = max(-1.0, min(1.0, (upper_y - cy) / ry_safe))
            half = rx * math.sqrt(max(0.0, 1 - y_term * y_term))
            sx, sy = cx - half + 2 * half * t, upper_y
            vx, vy = (t, -1.0) if outward > 0 else (-(1 - t), -1.0)

        norm = math.hypot(vx, vy)
        if norm > 0:
            vx, vy = vx / norm, vy / norm
        vx, vy = _rotate(vx, vy, tilt)
        strokes.append(((sx, sy), (sx + length * vx, sy + length * vy)))
    return tuple(strokes)


@stage(
    id="G3.02",
    phase=Phase.FACE,
    dependencies=["G3.01"],
    description="Place eyebrows and eyelashes",
)
def brows_and_lashes(ctx: FigureContext) -> None:
    p = ctx.params
    cfg = ctx.config
    head = ctx.head
    eyes = [f for f in ctx.features if isinstance(f, EyeFeature)]

    if p.eyebrows:
        brow_h = ctx.eye_ry * p.eyebrow_height_ratio / 100
        base_w = p.head_width * p.eyebrow_width_ratio / 100 * (1 - abs(ctx.view_factor) * cfg.face_foreshorten)
        y = eyebrow_y(
            ctx.eye_y,
            ctx.eye_ry,
            head.height * p.eyebrow_y_offset_ratio / 100,
            brow_h,
            cfg.eyebrow_eye_gap,
            head.top_y + cfg.outline_width / 2,
        )
        for eye in eyes:
            scale = 1.0 - eye.side.sign * ctx.view_factor * cfg.eye_perspective
            angle = p.eyebrow_angle if eye.side == Side.LEFT else -p.eyebrow_angle
            ctx.features.append(
                EyebrowFeature(
                    side=eye.side,
                    center=(eye.center[0], y),
                    width=max(0.0, base_w * scale),
                    height=brow_h,
                    angle=angle,
                )
            )

    if p.eyelashes and p.upper_eyelid_coverage < cfg.lash_threshold:
        for eye in eyes:
            strokes = lash_strokes(
                eye,
                p.eye_style,
                p.upper_eyelid_coverage,
                p.lower_eyelid_coverage,
                p.eyelash_count,
                p.eyelash_length,
                p.eyelash_angle,
            )
            ctx.features.append(EyelashesFeature(side=eye.side, strokes=strokes, stroke_width=cfg.lash_stroke))
