"""G4.01: Feature depth and z-order.

Each face feature gets depth = nominal offset * cos(view), minus its lateral
offset from the face center times sin(view). Sorting ascending draws the far
side first as the head turns.
"""

from __future__ import annotations

from dataclasses import replace

from comicrig.engine.context import FigureContext
from comicrig.engine.features import (
    EyebrowFeature,
    EyeFeature,
    EyelashesFeature,
    FringeFeature,
    MouthFeature,
    NoseFeature,
    RenderFeature,
)
from comicrig.engine.registry import Phase, stage


def feature_kind(feature: RenderFeature) -> str:
    match feature:
        case FringeFeature():
            return "fringe"
        case EyeFeature():
            return "eye"
        case EyebrowFeature():
            return "eyebrow"
        case EyelashesFeature():
            return "eyelashes"
        case MouthFeature():
            return "mouth"
        case NoseFeature():
            return "nose"
    raise TypeError(f"Not a render feature: {feature!r}")


def feature_x(feature: RenderFeature, face_center_x: float) -> float:
    match feature:
        case EyeFeature(center=(x, _)) | EyebrowFeature(center=(x, _)) | MouthFeature(center=(x, _)):
            return x
        case NoseFeature(tip=(x, _)):
            return x
        case EyelashesFeature(strokes=strokes) if strokes:
            return sum(start[0] for start, _ in strokes) / len(strokes)
    return face_center_x


@stage(
    id="G4.01",
    phase=Phase.COMPOSITION,
    dependencies=["G3.02", "G3.03", "G3.04"],
    description="Assign feature depths and sort back to front",
)
def depth_sort(ctx: FigureContext) -> None:
    cfg = ctx.config
    depths = cfg.feature_depths
    placed = []
    for feature in ctx.features:
        lateral = feature_x(feature, ctx.face_center_x) - ctx.face_center_x
        depth = depths[feature_kind(feature)] * ctx.depth_factor - lateral * ctx.view_factor * cfg.lateral_depth
        placed.append(replace(feature, depth=depth))
    ctx.features = sorted(placed, key=lambda f: f.depth)
