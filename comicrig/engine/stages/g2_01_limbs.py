"""G2.01: Arm and leg curves.

Each limb is one quadratic from its attachment point. Arms raised past
horizontal toward the back are foreshortened: length, width and hand size
shrink with how far past 90 degrees they point.
"""

from __future__ import annotations

from comicrig.engine.context import FigureContext
from comicrig.engine.kinematics import foreshorten_scale, limb_curve
from comicrig.engine.registry import Phase, stage


@stage(
    id="G2.01",
    phase=Phase.LIMBS,
    dependencies=["G1.02"],
    description="Build arm and leg curves with behind-body foreshortening",
)
def limbs(ctx: FigureContext) -> None:
    p = ctx.params
    cfg = ctx.config

    arms = {
        "l": (p.l_arm_angle, p.l_arm_bend, p.l_arm_width, p.l_hand_size, -1),
        "r": (p.r_arm_angle, p.r_arm_bend, p.r_arm_width, p.r_hand_size, 1),
    }
    for side, (angle, bend, width, hand, direction) in arms.items():
        scale = foreshorten_scale(angle, cfg)
        ctx.limbs[f"{side}_arm"] = limb_curve(
            ctx.shoulders[side], p.arm_length * scale, angle, bend, direction, width * scale
        )
        ctx.hand_sizes[side] = hand * scale

    ctx.leg_angles = (p.l_leg_angle, p.r_leg_angle)
    ctx.limbs["l_leg"] = limb_curve(ctx.hips["l"], p.leg_length, p.l_leg_angle, p.l_leg_bend, -1, p.l_leg_width)
    ctx.limbs["r_leg"] = limb_curve(ctx.hips["r"], p.leg_length, p.r_leg_angle, p.r_leg_bend, 1, p.r_leg_width)
