"""Turn figure geometry and panel compositions into SVG element dicts.

Face features are rendered one function per variant. Body layers share a
single group so the outline filter traces the combined silhouette instead of
every overlapping part.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from comicrig.comic.bubbles import BubblePlacement
from comicrig.comic.compose import PanelComposition, compose_panel
from comicrig.config import Settings, settings as default_settings
from comicrig.engine.builder import build_figure
from comicrig.engine.features import (
    BodyPart,
    EyebrowFeature,
    EyeFeature,
    EyelashesFeature,
    FigureGeometry,
    FringeFeature,
    MouthFeature,
    NoseFeature,
    RenderFeature,
)
from comicrig.geometry.path import fmt
from comicrig.models.comic import ComicPanel
from comicrig.models.figure import FigureInstance
from comicrig.models.params import ParameterSet
from comicrig.render.serializer import serialize_svg

logger = logging.getLogger(__name__)

Element = dict[str, Any]

LOCAL_WIDTH = 400
LOCAL_HEIGHT = 700
EYE_OUTLINE_WIDTH = 2.0
MOUTH_STROKE = 4.0
NOSE_STROKE = 2.5
BUBBLE_FILL = "#ffffff"


def outline_filter(filter_id: str, color: str, radius: float) -> Element:
    """Dilate the alpha, flood it with ``color`` and merge the source on top."""
    return {
        "tag": "filter",
        "id": filter_id,
        "x": "-20%",
        "y": "-20%",
        "width": "140%",
        "height": "140%",
        "children": [
            {"tag": "feMorphology", "in": "SourceAlpha", "result": "dilated", "operator": "dilate", "radius": fmt(radius)},
            {"tag": "feFlood", "flood-color": color, "result": "colored"},
            {"tag": "feComposite", "in": "colored", "in2": "dilated", "operator": "in", "result": "outline"},
            {
                "tag": "feMerge",
                "children": [
                    {"tag": "feMergeNode", "in": "outline"},
                    {"tag": "feMergeNode", "in": "SourceGraphic"},
                ],
            },
        ],
    }


def _ellipse(cx: float, cy: float, rx: float, ry: float, fill: str) -> Element:
    return {"tag": "ellipse", "cx": fmt(cx), "cy": fmt(cy), "rx": fmt(rx), "ry": fmt(ry), "fill": fill}


def render_fringe(feature: FringeFeature, params: ParameterSet, filter_url: str | None) -> Element:
    return {
        "tag": "g",
        "filter": filter_url,
        "children": [{"tag": "path", "d": feature.path.d(), "fill": params.hair_color}],
    }


def render_eye(feature: EyeFeature, params: ParameterSet, clip_id: str) -> Element:
    cx, cy = feature.center
    ix, iy = feature.iris_center
    clipped: list[Element] = [
        _ellipse(cx, cy, feature.rx, feature.ry, "white"),
        _ellipse(ix, iy, feature.iris_rx, feature.iris_ry, params.iris_color),
        _ellipse(ix, iy, feature.pupil_rx, feature.pupil_ry, params.pupil_color),
    ]
    if feature.glint_center is not None and feature.glint_radius > 0:
        gx, gy = feature.glint_center
        clipped.append({"tag": "circle", "cx": fmt(gx), "cy": fmt(gy), "r": fmt(feature.glint_radius), "fill": "white"})

    d = feature.outline.d()
    children: list[Element] = [
        {"tag": "clipPath", "id": clip_id, "children": [{"tag": "path", "d": d}]},
        {"tag": "g", "clip-path": f"url(#{clip_id})", "children": clipped},
    ]
    if params.eye_outlines:
        children.append(
            {
                "tag": "path",
                "d": d,
                "fill": "none",
                "stroke": params.outline_color,
                "stroke-width": fmt(EYE_OUTLINE_WIDTH),
                "stroke-linejoin": "round",
            }
        )
    return {"tag": "g", "class": f"eye eye-{feature.side.value}", "children": children}


def render_eyebrow(feature: EyebrowFeature, params: ParameterSet) -> Element:
    x, y = feature.center
    return {
        "tag": "g",
        "transform": f"translate({fmt(x)}, {fmt(y)}) rotate({fmt(feature.angle)})",
        "children": [
            {
                "tag": "rect",
                "x": fmt(-feature.width / 2),
                "y": fmt(-feature.height / 2),
                "width": fmt(feature.width),
                "height": fmt(feature.height),
                "rx": "2",
                "fill": params.outline_color,
            }
        ],
    }


def render_eyelashes(feature: EyelashesFeature, params: ParameterSet) -> Element:
    d = " ".join(f"M{fmt(a[0])},{fmt(a[1])} L{fmt(b[0])},{fmt(b[1])}" for a, b in feature.strokes)
    return {
        "tag": "path",
        "d": d,
        "fill": "none",
        "stroke": params.outline_color,
        "stroke-width": fmt(feature.stroke_width),
        "stroke-linecap": "round",
    }


def render_mouth(feature: MouthFeature, params: ParameterSet) -> Element:
    return {
        "tag": "path",
        "d": feature.path.d(),
        "fill": "none",
        "stroke": params.outline_color,
        "stroke-width": fmt(MOUTH_STROKE),
        "stroke-linecap": "round",
    }


def render_nose(feature: NoseFeature, params: ParameterSet) -> Element:
    return {
        "tag": "path",
        "d": feature.path.d(),
        "fill": "none",
        "stroke": params.outline_color,
        "stroke-width": fmt(NOSE_STROKE),
        "stroke-linecap": "round",
    }


def render_feature(feature: RenderFeature, params: ParameterSet, key: str, filter_url: str | None) -> Element:
    match feature:
        case FringeFeature():
            return render_fringe(feature, params, filter_url)
        case EyeFeature():
            return render_eye(feature, params, f"{key}-eye-{feature.side.value}")
        case EyebrowFeature():
            return render_eyebrow(feature, params)
        case EyelashesFeature():
            return render_eyelashes(feature, params)
        case MouthFeature():
            return render_mouth(feature, params)
        case NoseFeature():
            return render_nose(feature, params)
    raise TypeError(f"Unknown feature: {type(feature).__name__}")


def render_part(part: BodyPart, color: str) -> Element:
    if part.stroke_width > 0:
        return {
            "tag": "path",
            "class": part.name,
            "d": part.path.d(),
            "fill": "none",
            "stroke": color,
            "stroke-width": fmt(part.stroke_width),
            "stroke-linecap": "round",
            "stroke-linejoin": "round",
        }
    return {"tag": "path", "class": part.name, "d": part.path.d(), "fill": color, "stroke-linejoin": "round"}


def instance_transform(instance: FigureInstance) -> str:
    sx = -instance.scale if instance.is_flipped else instance.scale
    return (
        f"translate({fmt(instance.x)}, {fmt(instance.y)}) scale({fmt(sx)}, {fmt(instance.scale)}) "
        f"translate({-LOCAL_WIDTH // 2}, {-LOCAL_HEIGHT // 2})"
    )


def render_figure(
    geometry: FigureGeometry,
    instance: FigureInstance | None = None,
    key: str = "figure",
    outline_width: float = 4.0,
) -> Element:
    """One figure as a group: back hair, outlined body, then face features by depth."""
    params = geometry.params
    filter_id = f"{key}-outline"
    filter_url = f"url(#{filter_id})" if params.body_outlines else None

    children: list[Element] = [
        {"tag": "defs", "children": [outline_filter(filter_id, params.outline_color, outline_width / 2)]}
    ]
    if geometry.back_hair is not None:
        children.append(
            {
                "tag": "g",
                "filter": filter_url,
                "children": [{"tag": "path", "class": "back-hair", "d": geometry.back_hair.d(), "fill": params.hair_color}],
            }
        )
    children.append(
        {
            "tag": "g",
            "class": "body",
            "filter": filter_url,
            "children": [render_part(part, params.body_color) for part in geometry.parts],
        }
    )
    children.extend(render_feature(f, params, key, filter_url) for f in geometry.features)

    return {
        "tag": "g",
        "class": "figure",
        "transform": instance_transform(instance) if instance else None,
        "children": children,
    }


def render_bubble(placement: BubblePlacement, config: Settings) -> Element:
    x, y = placement.text_origin
    tspans = [
        {"tag": "tspan", "x": fmt(x), "dy": fmt(placement.line_height if i else 0), "text": line}
        for i, line in enumerate(placement.lines)
    ]
    return {
        "tag": "g",
        "class": "bubble",
        "children": [
            {
                "tag": "path",
                "d": placement.path.d(),
                "fill": BUBBLE_FILL,
                "stroke": config.panel_outline_color,
                "stroke-width": fmt(config.panel_outline_width / 2),
                "stroke-linejoin": "round",
            },
            {
                "tag": "text",
                "x": fmt(x),
                "y": fmt(y),
                "font-family": config.font_family,
                "font-size": fmt(placement.font_size),
                "font-weight": "bold",
                "fill": config.panel_outline_color,
                "children": tspans,
            },
        ],
    }


def render_panel(
    composition: PanelComposition,
    origin: tuple[float, float],
    config: Settings | None = None,
) -> tuple[Element, Element]:
    """Content group (background, figures, border) and dialogue group for one panel."""
    config = config or default_settings
    panel = composition.panel
    w, h = composition.width, composition.height
    translate = f"translate({fmt(origin[0])}, {fmt(origin[1])})"
    clip_id = f"clip-{panel.id}"
    radius = fmt(config.panel_corner_radius)

    background: list[Element] = [
        {"tag": "rect", "x": "0", "y": "0", "width": fmt(w), "height": fmt(h), "fill": panel.background_color}
    ]
    if panel.background_image:
        background.append(
            {
                "tag": "image",
                "href": panel.background_image,
                "x": "0",
                "y": "0",
                "width": fmt(w),
                "height": fmt(h),
                "preserveAspectRatio": "xMidYMid slice",
            }
        )
    figures = [
        render_figure(placed.geometry, placed.instance, key=f"{panel.id}-{i}")
        for i, placed in enumerate(composition.draw_order())
    ]
    content = {
        "tag": "g",
        "class": "panel",
        "transform": translate,
        "children": [
            {
                "tag": "clipPath",
                "id": clip_id,
                "children": [{"tag": "rect", "x": "0", "y": "0", "width": fmt(w), "height": fmt(h), "rx": radius}],
            },
            {
                "tag": "g",
                "clip-path": f"url(#{clip_id})",
                "children": [
                    *background,
                    {"tag": "g", "transform": composition.transform.svg(), "children": figures},
                ],
            },
            {
                "tag": "rect",
                "x": "0",
                "y": "0",
                "width": fmt(w),
                "height": fmt(h),
                "rx": radius,
                "fill": "none",
                "stroke": config.panel_outline_color,
                "stroke-width": fmt(config.panel_outline_width),
            },
        ],
    }
    dialogue = {
        "tag": "g",
        "class": "dialogue",
        "transform": translate,
        "children": [render_bubble(b, config) for b in composition.bubbles],
    }
    return content, dialogue


def render_comic(
    panels: Sequence[ComicPanel],
    width: float = 1000.0,
    height: float = 1000.0,
    config: Settings | None = None,
    title: str = "",
) -> str:
    """SVG markup for a whole comic page. Dialogue is drawn above every panel."""
    config = config or default_settings
    contents: list[Element] = []
    dialogues: list[Element] = []
    for panel in panels:
        x, y, w, h = panel.layout.to_pixels(width, height)
        composition = compose_panel(panel, w, h, config)
        content, dialogue = render_panel(composition, (x, y), config)
        contents.append(content)
        dialogues.append(dialogue)
    logger.info("Rendered comic: %d panels at %.0fx%.0f", len(panels), width, height)
    return serialize_svg(contents + dialogues, width, height, title=title)


def render_figure_svg(params: ParameterSet | None = None, view_angle: float | None = None, title: str = "") -> str:
    """Standalone figure in its 400x700 frame."""
    geometry = build_figure(params, view_angle)
    return serialize_svg([render_figure(geometry)], LOCAL_WIDTH, LOCAL_HEIGHT, title=title)
