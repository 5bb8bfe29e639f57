"""G3.03: Mouth and nose.

The mouth hangs a ratio of the half head height below the head center and
is narrowed to fit inside the head silhouette at that height. The nose sits
between the eye line and the mouth; its tip leads the view turn.
"""

from __future__ import annotations

from comicrig.engine.context import FigureContext
from comicrig.engine.features import MouthFeature, NoseFeature
from comicrig.engine.registry import Phase, stage
from comicrig.geometry.path import SvgPath
from comicrig.geometry.shapes import ShapeSpec, width_at


def fitted_mouth_width(head: ShapeSpec, mouth_x: float, mouth_y: float, width: float, margin: float) -> float:
    """Mouth width clamped so both corners stay inside the head at ``mouth_y``."""
    available = width_at(head, mouth_y - head.top_y) - margin
    available -= 2 * abs(mouth_x - head.center_x)
    return max(0.0, min(width, available))


def mouth_path(x: float, y: float, width: float, bend: float) -> SvgPath:
    curvature = width * 0.4 * bend / 100
    return SvgPath().move_to(x - width / 2, y).quad_to(x, y + curvature, x + width / 2, y)


@stage(
    id="G3.03",
    phase=Phase.FACE,
    dependencies=["G3.01"],
    description="Place mouth and nose",
)
def mouth_and_nose(ctx: FigureContext) -> None:
    p = ctx.params
    cfg = ctx.config
    head = ctx.head
    foreshorten = 1 - abs(ctx.view_factor) * cfg.face_foreshorten

    x = ctx.face_center_x
    y = cfg.head_center_y + head.height / 2 * p.mouth_y_offset_ratio / 100
    width = fitted_mouth_width(head, x, y, p.head_width * p.mouth_width_ratio / 100 * foreshorten, cfg.mouth_margin)
    ctx.mouth = (x, y)
    ctx.features.append(MouthFeature(path=mouth_path(x, y, width, p.mouth_bend), center=(x, y), width=width))

    size = p.head_width * p.nose_size_ratio / 100
    if not p.nose or size <= 0:
        return
    nose_y = ctx.eye_y + (y - ctx.eye_y) * p.nose_y_offset_ratio / 100
    half = size * 0.4 * foreshorten
    tip = (x + ctx.view_factor * size * 0.5, nose_y + size * 0.3)
    path = SvgPath().move_to(x - half, nose_y).quad_to(x + ctx.view_factor * size, nose_y + size * 0.6, x + half, nose_y)
    ctx.features.append(NoseFeature(path=path, tip=tip))
