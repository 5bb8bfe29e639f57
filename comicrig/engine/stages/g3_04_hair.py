"""G3.04: Fringe and back hair.

Wide-topped heads (square, inverted triangle) raise the hair anchor and widen
the hair. The fringe is kept above the eyes; triangle heads get a triangular
fringe that follows the head edges.
"""

from __future__ import annotations

from comicrig.engine.context import FigureContext
from comicrig.engine.features import FringeFeature
from comicrig.engine.registry import Phase, stage
from comicrig.geometry.path import SvgPath
from comicrig.models.params import HeadShape

_WIDE_TOP_LIFT = 10.0
_WIDE_TOP_SPREAD = 1.1


def dome_path(cx: float, base_y: float, rx: float, ry: float) -> SvgPath:
    """Half ellipse standing on ``base_y``."""
    path = SvgPath().move_to(cx - rx, base_y)
    return path.arc_to(rx, ry, cx + rx, base_y, sweep=True).close()


@stage(
    id="G3.04",
    phase=Phase.FACE,
    dependencies=["G3.01"],
    description="Shape fringe and back hair",
)
def hair(ctx: FigureContext) -> None:
    p = ctx.params
    if not p.hair:
        return
    cfg = ctx.config
    head = ctx.head

    wide_top = p.head_shape in (HeadShape.SQUARE, HeadShape.INVERTED_TRIANGLE)
    anchor = head.top_y - _WIDE_TOP_LIFT if wide_top else head.top_y
    spread = _WIDE_TOP_SPREAD if wide_top else 1.0
    cx = ctx.center_x + ctx.view_factor * p.head_width * cfg.hair_turn

    back_rx = p.head_width * p.back_hair_width_ratio / 100 * spread / 2
    back_ry = head.height * p.back_hair_height_ratio / 100
    if back_rx > 0.1 and back_ry > 0.1:
        ctx.back_hair = dome_path(cx, anchor + back_ry, back_rx, back_ry)

    eye_top = ctx.eye_y - ctx.eye_ry
    fringe_h = min(head.height * p.fringe_height_ratio / 100, max(0.0, eye_top - cfg.hair_margin - anchor))
    if fringe_h <= 0.1:
        return

    base_y = anchor + fringe_h
    if p.head_shape == HeadShape.TRIANGLE and head.height > 0:
        half = fringe_h / head.height * head.width / 2 + cfg.outline_width / 2
        path = SvgPath().move_to(cx, anchor).line_to(cx - half, base_y).line_to(cx + half, base_y).close()
    else:
        rx = p.head_width / 2 * spread + cfg.outline_width / 2
        path = dome_path(cx, base_y, rx, fringe_h)
    ctx.features.append(FringeFeature(path=path))
