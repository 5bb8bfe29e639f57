"""G0.01: View projection.

Turns the view angle into the 2.5D factors every later stage uses:
depth = cos(angle), view = sin(angle). The body center slides sideways with
the view and the face slides further than the body.
"""

from __future__ import annotations

import math

from comicrig.engine.context import FigureContext
from comicrig.engine.registry import Phase, stage
from comicrig.models.params import MAX_VIEW_ANGLE


@stage(
    id="G0.01",
    phase=Phase.PROJECTION,
    description="Derive depth/view factors and horizontal centers",
)
def view_projection(ctx: FigureContext) -> None:
    p = ctx.params
    cfg = ctx.config

    angle = max(-MAX_VIEW_ANGLE, min(MAX_VIEW_ANGLE, ctx.view_angle))
    rad = math.radians(angle)
    ctx.view_angle = angle
    ctx.depth_factor = math.cos(rad)
    ctx.view_factor = math.sin(rad)

    ctx.center_x = cfg.canvas_width / 2 + ctx.view_factor * p.torso_width * cfg.body_offset_factor
    ctx.face_center_x = ctx.center_x + ctx.view_factor * p.head_width * cfg.face_turn
