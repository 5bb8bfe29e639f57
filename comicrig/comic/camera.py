"""Panel camera: fits a panel's characters to the panel with one uniform scale.

Figures live in a character space centered on the panel: an instance at
(x, y) puts its local frame's center (200, 350) there, scaled and optionally
mirrored. The camera maps character space to panel pixels with a single
translate + scale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from comicrig.engine.builder import FigureExtents, figure_extents
from comicrig.engine.config import BuildConfig
from comicrig.geometry.boxes import Box, union
from comicrig.geometry.path import Point
from comicrig.models.comic import ShotType
from comicrig.models.figure import FigureInstance

logger = logging.getLogger(__name__)

LOCAL_WIDTH = 400.0
LOCAL_HEIGHT = 700.0
LOCAL_ORIGIN = (LOCAL_WIDTH / 2, LOCAL_HEIGHT / 2)

SHOT_PADDING = {
    ShotType.FULL: 1.1,
    ShotType.MEDIUM: 1.15,
    ShotType.CLOSE_UP: 1.25,
}

MEDIUM_HEAD_MARGIN = 20.0
CLOSE_UP_MARGIN = 10.0


@dataclass(frozen=True)
class PanelTransform:
    """Character space -> panel pixels: ``p * scale + translate``."""

    translate_x: float
    translate_y: float
    scale: float

    def apply(self, point: Point) -> Point:
        return (point[0] * self.scale + self.translate_x, point[1] * self.scale + self.translate_y)

    def apply_box(self, box: Box) -> Box:
        x0, y0 = self.apply((box[0], box[1]))
        x1, y1 = self.apply((box[2], box[3]))
        return (x0, y0, x1, y1)

    def svg(self) -> str:
        return f"translate({self.translate_x:.3f}, {self.translate_y:.3f}) scale({self.scale:.4f})"


def default_transform(panel_w: float, panel_h: float) -> PanelTransform:
    """Whole 400x700 frame fitted to the panel, centered."""
    return PanelTransform(panel_w / 2, panel_h / 2, min(panel_w / LOCAL_WIDTH, panel_h / LOCAL_HEIGHT))


def to_character_space(instance: FigureInstance, point: Point) -> Point:
    """Map a point in the figure's local frame into character space."""
    mirror = -1 if instance.is_flipped else 1
    return (
        instance.x + (point[0] - LOCAL_ORIGIN[0]) * instance.scale * mirror,
        instance.y + (point[1] - LOCAL_ORIGIN[1]) * instance.scale,
    )


def local_extent(extents: FigureExtents, shot_type: ShotType) -> Box:
    """Vertical span for the shot, horizontal span from the wider of head and torso."""
    if shot_type == ShotType.MEDIUM:
        top, bottom = extents.head_top_y - MEDIUM_HEAD_MARGIN, extents.torso_bottom_y
    elif shot_type == ShotType.CLOSE_UP:
        top, bottom = extents.head_top_y - CLOSE_UP_MARGIN, extents.torso_top_y + CLOSE_UP_MARGIN
    else:
        top, bottom = extents.head_top_y, extents.foot_ground_y
    half = extents.half_width
    return (extents.center_x - half, top, extents.center_x + half, bottom)


def character_box(
    instance: FigureInstance,
    shot_type: ShotType,
    config: BuildConfig | None = None,
    extents: FigureExtents | None = None,
) -> Box:
    extents = extents or figure_extents(instance.params, config)
    x0, y0, x1, y1 = local_extent(extents, shot_type)
    ax, ay = to_character_space(instance, (x0, y0))
    bx, by = to_character_space(instance, (x1, y1))
    return (min(ax, bx), min(ay, by), max(ax, bx), max(ay, by))


def frame(
    characters: Sequence[FigureInstance],
    shot_type: ShotType,
    panel_w: float,
    panel_h: float,
    config: BuildConfig | None = None,
) -> PanelTransform:
    """Fit-to-panel transform for the characters under the requested shot."""
    content = union([character_box(c, shot_type, config) for c in characters])
    if content is None:
        return default_transform(panel_w, panel_h)

    x0, y0, x1, y1 = content
    pad = SHOT_PADDING.get(shot_type, SHOT_PADDING[ShotType.FULL])
    content_w = (x1 - x0) * pad
    content_h = (y1 - y0) * pad
    if content_w <= 1e-6 or content_h <= 1e-6 or panel_w <= 0 or panel_h <= 0:
        logger.debug("Degenerate panel content %.1fx%.1f, using default framing", content_w, content_h)
        return default_transform(panel_w, panel_h)

    scale = min(panel_w / content_w, panel_h / content_h)
    cx, cy = (x0 + x1) / 2, (y0 + y1) / 2
    return PanelTransform(panel_w / 2 - cx * scale, panel_h / 2 - cy * scale, scale)
