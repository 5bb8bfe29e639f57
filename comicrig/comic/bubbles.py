"""Dialogue bubble placer.

Sizing is a text-length heuristic: approximate glyph width from font size,
greedy word wrap against a panel-relative cap, font shrinking as the text
grows. Placement scans a fixed list of anchors around the speaker's head and
keeps the first one that clears every head and every bubble already placed
in the panel. When all anchors collide the first one is used anyway.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from comicrig.config import Settings, settings as default_settings
from comicrig.geometry.boxes import Box, intersects, pad
from comicrig.geometry.path import Point, SvgPath

logger = logging.getLogger(__name__)

GLYPH_WIDTH = 0.6  # average glyph advance, in font sizes
LINE_SPACING = 1.4
PADDING = 0.8
LINE_WIDTH_CAP = 0.7  # of panel width
BUBBLE_WIDTH_CAP = 0.8  # of panel width
REFERENCE_LENGTH = 20  # texts up to this many characters get the full font size

ANCHOR_GAP = 10.0
TAIL_BASE_WIDTH = 20.0
MAX_TAIL_LENGTH = 60.0

CANDIDATE_NAMES = ("above", "right", "left", "lower-right", "lower-left", "further-above")


@dataclass(frozen=True)
class TextMetrics:
    lines: tuple[str, ...]
    font_size: float
    padding: float
    line_height: float
    width: float
    height: float


@dataclass(frozen=True)
class BubblePlacement:
    rect: Box
    lines: tuple[str, ...]
    font_size: float
    padding: float
    line_height: float
    tail_target: Point
    tail_tip: Point
    path: SvgPath
    anchor: str
    collided: bool = False

    @property
    def text_origin(self) -> Point:
        """Baseline of the first line."""
        return (self.rect[0] + self.padding, self.rect[1] + self.padding + self.font_size)


def font_size_for(text: str, panel_w: float, config: Settings) -> float:
    """Font size falling off inversely with text length, clamped to the configured range."""
    base = min(config.max_font_size, panel_w / 20)
    size = base * REFERENCE_LENGTH / max(REFERENCE_LENGTH, len(text))
    return max(config.min_font_size, min(config.max_font_size, size))


def wrap_words(text: str, font_size: float, max_width: float) -> list[str]:
    words = text.split()
    if not words:
        return [""]
    advance = font_size * GLYPH_WIDTH
    lines = []
    current = words[0]
    for word in words[1:]:
        candidate = f"{current} {word}"
        if len(candidate) * advance > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    lines.append(current)
    return lines


def measure_text(text: str, panel_w: float, config: Settings | None = None) -> TextMetrics:
    config = config or default_settings
    font_size = font_size_for(text, panel_w, config)
    padding = font_size * PADDING
    line_height = font_size * LINE_SPACING
    lines = wrap_words(text, font_size, panel_w * LINE_WIDTH_CAP)
    longest = max(len(line) for line in lines)
    width = min(panel_w * BUBBLE_WIDTH_CAP, longest * font_size * GLYPH_WIDTH + padding * 2)
    height = len(lines) * line_height + padding * 2
    return TextMetrics(tuple(lines), font_size, padding, line_height, width, height)


def candidate_rects(head: Box, width: float, height: float, gap: float = ANCHOR_GAP) -> list[Box]:
    """Anchors around the head, in preference order."""
    hx0, hy0, hx1, hy1 = head
    hcx, hcy = (hx0 + hx1) / 2, (hy0 + hy1) / 2
    origins = [
        (hcx - width / 2, hy0 - gap - height),
        (hx1 + gap, hcy - height / 2),
        (hx0 - gap - width, hcy - height / 2),
        (hx1 + gap, hy1 + gap),
        (hx0 - gap - width, hy1 + gap),
        (hcx - width / 2, hy0 - 2 * (gap + height)),
    ]
    return [(x, y, x + width, y + height) for x, y in origins]


def _clamp_to_panel(rect: Box, panel_w: float, panel_h: float, margin: float) -> Box:
    x0, y0, x1, y1 = rect
    w, h = x1 - x0, y1 - y0
    x = min(max(x0, margin), panel_w - w - margin) if panel_w - w - margin >= margin else (panel_w - w) / 2
    y = min(max(y0, margin), panel_h - h - margin) if panel_h - h - margin >= margin else (panel_h - h) / 2
    return (x, y, x + w, y + h)


def is_free(rect: Box, head_boxes: list[Box], placed: list[Box], margin: float) -> bool:
    if any(intersects(rect, head) for head in head_boxes):
        return False
    return not any(intersects(rect, pad(other, margin)) for other in placed)


def _tail_geometry(rect: Box, target: Point, radius: float) -> tuple[str, float, Point]:
    """Edge facing the target, the notch center along it and the capped tip."""
    x0, y0, x1, y1 = rect
    tx, ty = target
    cx, cy = (x0 + x1) / 2, (y0 + y1) / 2
    clear_x = max(x0 - tx, tx - x1, 0.0)
    clear_y = max(y0 - ty, ty - y1, 0.0)
    if clear_y >= clear_x:
        edge = "bottom" if ty >= cy else "top"
        lo, hi = x0 + radius + TAIL_BASE_WIDTH / 2, x1 - radius - TAIL_BASE_WIDTH / 2
        along = min(max(tx, lo), hi) if lo <= hi else cx
        foot = (along, y1 if edge == "bottom" else y0)
        normal = (0.0, 1.0 if edge == "bottom" else -1.0)
    else:
        edge = "right" if tx >= cx else "left"
        lo, hi = y0 + radius + TAIL_BASE_WIDTH / 2, y1 - radius - TAIL_BASE_WIDTH / 2
        along = min(max(ty, lo), hi) if lo <= hi else cy
        foot = (x1 if edge == "right" else x0, along)
        normal = (1.0 if edge == "right" else -1.0, 0.0)

    dx, dy = tx - foot[0], ty - foot[1]
    dist = math.hypot(dx, dy)
    # Target inside or behind the edge: point straight out
    if dist < 1e-6 or dx * normal[0] + dy * normal[1] <= 0:
        dx, dy, dist = normal[0], normal[1], 1.0
        length = TAIL_BASE_WIDTH
    else:
        length = min(dist, MAX_TAIL_LENGTH)
    tip = (foot[0] + dx / dist * length, foot[1] + dy / dist * length)
    return edge, along, tip


def bubble_path(rect: Box, target: Point, corner_radius: float = 15.0) -> tuple[SvgPath, Point]:
    """Clockwise rounded-rect outline with a tail notch spliced into the edge facing ``target``."""
    x0, y0, x1, y1 = rect
    w, h = x1 - x0, y1 - y0
    r = max(0.0, min(corner_radius, w / 2, h / 2))
    edge, along, tip = _tail_geometry(rect, target, r)
    half = TAIL_BASE_WIDTH / 2

    path = SvgPath().move_to(x0 + r, y0)
    if edge == "top":
        path.line_to(along - half, y0).line_to(*tip).line_to(along + half, y0)
    path.line_to(x1 - r, y0).arc_to(r, r, x1, y0 + r)
    if edge == "right":
        path.line_to(x1, along - half).line_to(*tip).line_to(x1, along + half)
    path.line_to(x1, y1 - r).arc_to(r, r, x1 - r, y1)
    if edge == "bottom":
        path.line_to(along + half, y1).line_to(*tip).line_to(along - half, y1)
    path.line_to(x0 + r, y1).arc_to(r, r, x0, y1 - r)
    if edge == "left":
        path.line_to(x0, along + half).line_to(*tip).line_to(x0, along - half)
    path.line_to(x0, y0 + r).arc_to(r, r, x0 + r, y0)
    return path.close(), tip


def place_bubble(
    text: str,
    speaker_head: Box,
    mouth: Point,
    head_boxes: list[Box],
    placed: list[Box],
    panel_w: float,
    panel_h: float,
    config: Settings | None = None,
) -> BubblePlacement:
    """Size and place one bubble. ``placed`` is read, not modified."""
    config = config or default_settings
    metrics = measure_text(text, panel_w, config)
    candidates = [
        _clamp_to_panel(rect, panel_w, panel_h, metrics.padding)
        for rect in candidate_rects(speaker_head, metrics.width, metrics.height)
    ]

    heads = [speaker_head, *head_boxes]
    chosen = None
    for name, rect in zip(CANDIDATE_NAMES, candidates):
        if is_free(rect, heads, placed, config.bubble_margin):
            chosen = (name, rect, False)
            break
    if chosen is None:
        logger.debug("No free anchor for %d-line bubble, using the first", len(metrics.lines))
        chosen = (CANDIDATE_NAMES[0], candidates[0], True)

    name, rect, collided = chosen
    path, tip = bubble_path(rect, mouth, config.bubble_corner_radius)
    return BubblePlacement(
        rect=rect,
        lines=metrics.lines,
        font_size=metrics.font_size,
        padding=metrics.padding,
        line_height=metrics.line_height,
        tail_target=mouth,
        tail_tip=tip,
        path=path,
        anchor=name,
        collided=collided,
    )


@dataclass
class BubblePlacer:
    """Per-panel accumulator; dialogues must be placed in script order."""

    panel_w: float
    panel_h: float
    head_boxes: list[Box] = field(default_factory=list)
    config: Settings = field(default_factory=lambda: default_settings)
    placements: list[BubblePlacement] = field(default_factory=list)

    @property
    def placed_boxes(self) -> list[Box]:
        return [p.rect for p in self.placements]

    def place(self, text: str, speaker_head: Box, mouth: Point) -> BubblePlacement:
        placement = place_bubble(
            text,
            speaker_head,
            mouth,
            self.head_boxes,
            self.placed_boxes,
            self.panel_w,
            self.panel_h,
            self.config,
        )
        self.placements.append(placement)
        return placement
