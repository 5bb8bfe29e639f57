"""G2.03: Feet, hands and limb draw order."""

from __future__ import annotations

from comicrig.engine.context import FigureContext
from comicrig.engine.kinematics import foot_path
from comicrig.engine.registry import Phase, stage


def far_side_first(view_factor: float) -> list[str]:
    """Sides in draw order. Turning right (positive view) pushes the right side back."""
    return ["r", "l"] if view_factor > 0 else ["l", "r"]


@stage(
    id="G2.03",
    phase=Phase.LIMBS,
    dependencies=["G2.02"],
    description="Place feet on the ground and order limbs far side first",
)
def extremities(ctx: FigureContext) -> None:
    p = ctx.params
    feet = {
        "l": (p.l_leg_width, p.l_foot_size, -1),
        "r": (p.r_leg_width, p.r_foot_size, 1),
    }
    grounds = []
    for side, (leg_width, foot_size, direction) in feet.items():
        ankle = ctx.limbs[f"{side}_leg"].end
        ctx.foot_paths[side], ground = foot_path(ankle, leg_width, foot_size, direction)
        grounds.append(ground)
    ctx.foot_ground_y = max(grounds)

    sides = far_side_first(ctx.view_factor)
    ctx.limb_order = [f"{s}_leg" for s in sides] + [f"{s}_arm" for s in sides]
