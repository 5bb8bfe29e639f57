"""G4.02: Body layers in draw order.

Feet and hip joints first, then legs and arms far side first, hands, neck,
torso, pelvis and finally the head. Limbs are stroked quadratics drawn
behind the torso so they appear to grow out of it.
"""

from __future__ import annotations

from comicrig.engine.context import FigureContext
from comicrig.engine.features import BodyPart
from comicrig.engine.kinematics import circle_path
from comicrig.engine.registry import Phase, stage
from comicrig.geometry.shapes import outline_path, rounded_rect_path


@stage(
    id="G4.02",
    phase=Phase.COMPOSITION,
    dependencies=["G2.03"],
    description="Collect body layers in draw order",
)
def body_layers(ctx: FigureContext) -> None:
    p = ctx.params
    sides = [name.split("_")[0] for name in ctx.limb_order if name.endswith("_leg")]
    leg_widths = {"l": p.l_leg_width, "r": p.r_leg_width}

    parts: list[BodyPart] = []
    for side in sides:
        parts.append(BodyPart(f"{side}_foot", ctx.foot_paths[side]))
    for side in sides:
        parts.append(BodyPart(f"{side}_hip", circle_path(ctx.hips[side], leg_widths[side] / 2)))
    for name in ctx.limb_order:
        limb = ctx.limbs[name]
        parts.append(BodyPart(name, limb.path, stroke_width=limb.width))
    for side in sides:
        wrist = ctx.limbs[f"{side}_arm"].end
        parts.append(BodyPart(f"{side}_hand", circle_path(wrist, ctx.hand_sizes[side] / 2)))

    neck_h = ctx.neck_bottom_y - ctx.neck_top_y + 2
    parts.append(
        BodyPart(
            "neck",
            rounded_rect_path(ctx.center_x - ctx.neck_width / 2, ctx.neck_top_y, ctx.neck_width, neck_h, 0),
        )
    )
    parts.append(BodyPart("torso", outline_path(ctx.torso)))
    parts.append(BodyPart("pelvis", outline_path(ctx.pelvis)))
    parts.append(BodyPart("head", outline_path(ctx.head)))
    ctx.parts = parts
