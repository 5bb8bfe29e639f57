"""G1.02: Shoulder and hip attachment points.

A nominal point on the torso boundary is moved inward along the boundary
normal by half the arm width, so arms start inside the outline. Hips sit at
a fixed spread of the pelvis width, half a leg width above the pelvis floor.
"""

from __future__ import annotations

import math

from comicrig.engine.context import FigureContext
from comicrig.engine.registry import Phase, stage
from comicrig.geometry.shapes import ShapeKind, ShapeSpec, attachment_point, lower_boundary_y

_SIN_45 = math.sqrt(2) / 2


def shoulder_offset(torso: ShapeSpec, inset: float) -> float:
    """Nominal shoulder height below the torso top."""
    h = torso.height
    if torso.kind.is_elliptic:
        return h / 2 - 0.2 * h / 2
    if torso.kind == ShapeKind.TRIANGLE:
        return 0.3 * h
    if torso.kind == ShapeKind.INVERTED_TRIANGLE:
        return 0.15 * h
    r = torso.radius
    if r < inset:
        return inset
    # Middle of the top corner arc
    return r - r * _SIN_45


@stage(
    id="G1.02",
    phase=Phase.BODY,
    dependencies=["G1.01"],
    description="Attach shoulders to the torso and hips to the pelvis",
)
def attachments(ctx: FigureContext) -> None:
    p = ctx.params
    torso = ctx.torso
    pelvis = ctx.pelvis
    cfg = ctx.config

    arm_widths = {"l": p.l_arm_width, "r": p.r_arm_width}
    leg_widths = {"l": p.l_leg_width, "r": p.r_leg_width}
    for side, sign in (("l", -1), ("r", 1)):
        inset = arm_widths[side] / 2
        ctx.shoulders[side] = attachment_point(torso, shoulder_offset(torso, inset), inset, sign)

        x_offset = pelvis.width * cfg.hip_spread
        hip_y = lower_boundary_y(pelvis, x_offset) - leg_widths[side] / 2
        ctx.hips[side] = (pelvis.center_x + sign * x_offset, max(pelvis.top_y, hip_y))
