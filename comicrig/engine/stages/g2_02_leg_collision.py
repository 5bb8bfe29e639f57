"""G2.02: Leg collision avoidance.

If the ankles (plus half leg width and a margin) overlap, both legs spread
one degree at a time up to the angle cap. Best effort: the search may stop
with the feet still touching.
"""

from __future__ import annotations

from comicrig.engine.context import FigureContext
from comicrig.engine.kinematics import limb_curve, resolve_leg_collision
from comicrig.engine.registry import Phase, stage


@stage(
    id="G2.02",
    phase=Phase.LIMBS,
    dependencies=["G2.01"],
    description="Spread overlapping legs",
)
def leg_collision(ctx: FigureContext) -> None:
    p = ctx.params
    history = resolve_leg_collision(
        ctx.hips["l"],
        ctx.hips["r"],
        p.leg_length,
        ctx.leg_angles,
        (p.l_leg_width, p.r_leg_width),
        ctx.config,
    )
    ctx.leg_angle_history = history
    left, right = history[-1]
    if (left, right) == ctx.leg_angles:
        return
    ctx.leg_angles = (left, right)
    ctx.limbs["l_leg"] = limb_curve(ctx.hips["l"], p.leg_length, left, p.l_leg_bend, -1, p.l_leg_width)
    ctx.limbs["r_leg"] = limb_curve(ctx.hips["r"], p.leg_length, right, p.r_leg_bend, 1, p.r_leg_width)
