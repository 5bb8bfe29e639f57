"""G3.01: Eyes with clipped outline, iris, pupil and glint.

Eye size is a percentage of head height and spacing a percentage of head
width. Turning the view compresses the spacing by depth and shrinks the far
eye. With a gaze target the pupils travel toward it inside the iris, scaled
down for targets closer than a fraction of the head width.
"""

from __future__ import annotations

import math

from comicrig.engine.context import FigureContext
from comicrig.engine.features import EyeFeature, Side
from comicrig.engine.registry import Phase, stage
from comicrig.geometry.eyes import EyeStyle, eye_path
from comicrig.geometry.path import Point


def pupil_offset(
    eye_center: Point,
    target: Point,
    travel: tuple[float, float],
    falloff: float,
) -> Point:
    """Pupil displacement toward ``target``, bounded by ``travel`` on each axis."""
    dx = target[0] - eye_center[0]
    dy = target[1] - eye_center[1]
    dist = math.hypot(dx, dy)
    if dist < 1e-9:
        return (0.0, 0.0)
    angle = math.atan2(dy, dx)
    ratio = min(1.0, dist / falloff) if falloff > 1e-9 else 1.0
    return (math.cos(angle) * travel[0] * ratio, math.sin(angle) * travel[1] * ratio)


@stage(
    id="G3.01",
    phase=Phase.FACE,
    dependencies=["G1.01"],
    description="Place eyes, pupils and glints",
)
def eyes(ctx: FigureContext) -> None:
    p = ctx.params
    cfg = ctx.config
    head = ctx.head

    eye_ry = head.height * p.eye_size_ratio / 100
    spacing = p.head_width * p.eye_spacing_ratio / 100 * ctx.depth_factor
    base_rx = min(eye_ry * cfg.eye_aspect, spacing)
    eye_y = cfg.head_center_y
    ctx.eye_y = eye_y
    ctx.eye_ry = eye_ry

    pupil_ry = eye_ry * p.pupil_size_ratio / 100
    lid_shift = eye_ry * p.upper_eyelid_coverage / 100 * cfg.eyelid_compensation
    glint_flip = -1 if ctx.mirrored else 1

    for side in (Side.LEFT, Side.RIGHT):
        rx = max(0.0, base_rx * (1.0 - side.sign * ctx.view_factor * cfg.eye_perspective))
        ry = eye_ry
        if p.eye_style == EyeStyle.CIRCLE:
            rx = ry = min(rx, ry)
        cx = ctx.face_center_x + side.sign * spacing
        outline = eye_path(
            p.eye_style, (cx, eye_y), rx, ry, p.upper_eyelid_coverage, p.lower_eyelid_coverage
        )

        iris_rx, iris_ry = rx * cfg.iris_ratio, ry * cfg.iris_ratio
        pupil_rx = pupil_ry * (rx / ry) if ry > 1e-9 else pupil_ry

        offset: Point = (0.0, 0.0)
        if p.eye_tracking and ctx.gaze is not None:
            travel = (max(0.0, iris_rx - pupil_rx), max(0.0, iris_ry - pupil_ry))
            offset = pupil_offset((cx, eye_y), ctx.gaze, travel, p.head_width * cfg.gaze_falloff)

        glint_center = None
        glint_radius = 0.0
        if p.glint:
            glint_radius = eye_ry * cfg.glint_ratio
            glint_center = (
                cx + rx * cfg.glint_offset * glint_flip + offset[0] * 0.5,
                eye_y - ry * cfg.glint_offset + offset[1] * 0.5 - lid_shift,
            )

        ctx.features.append(
            EyeFeature(
                side=side,
                center=(cx, eye_y),
                rx=rx,
                ry=ry,
                outline=outline,
                iris_center=(cx + offset[0], eye_y + offset[1] - lid_shift),
                iris_rx=iris_rx,
                iris_ry=iris_ry,
                pupil_rx=pupil_rx,
                pupil_ry=pupil_ry,
                glint_center=glint_center,
                glint_radius=glint_radius,
            )
        )
