"""Panel layout generator and reading-order maps.

Rectangles are in percent of the canvas. Every layout exactly fills the
margin-inset canvas: panel sizes plus gutters sum to ``100 - 2 * margin`` on
both axes.
"""

from __future__ import annotations

import math
from typing import Literal

from comicrig.config import Settings, settings as default_settings
from comicrig.models.comic import PanelLayoutRect

ReadingDirection = Literal["ltr", "rtl"]

# Script panel index -> layout rectangle index for right-to-left reading
RTL_MAPS: dict[int, list[int]] = {
    2: [1, 0],
    3: [0, 2, 1],
    4: [1, 0, 3, 2],
    5: [1, 0, 4, 3, 2],
    6: [1, 0, 3, 2, 5, 4],
}

RTL_LANGUAGES = {"ja", "zh"}

# Fixed grids as (rows, cols)
_GRIDS: dict[int, tuple[int, int]] = {
    1: (1, 1),
    2: (1, 2),
    4: (2, 2),
    6: (2, 3),
}


def _grid(rows: int, cols: int, count: int, margin: float, gutter: float) -> list[PanelLayoutRect]:
    total = 100 - 2 * margin
    w = (total - (cols - 1) * gutter) / cols
    h = (total - (rows - 1) * gutter) / rows
    rects = []
    for i in range(count):
        row, col = divmod(i, cols)
        rects.append(
            PanelLayoutRect(
                x=margin + col * (w + gutter),
                y=margin + row * (h + gutter),
                width=w,
                height=h,
            )
        )
    return rects


def _split_rows(top: int, bottom: int, margin: float, gutter: float) -> list[PanelLayoutRect]:
    """Two rows of equal height, ``top`` panels above and ``bottom`` below."""
    total = 100 - 2 * margin
    h = (total - gutter) / 2
    rects = []
    for row, cols in enumerate((top, bottom)):
        w = (total - (cols - 1) * gutter) / cols
        y = margin + row * (h + gutter)
        for col in range(cols):
            rects.append(PanelLayoutRect(x=margin + col * (w + gutter), y=y, width=w, height=h))
    return rects


def layout_panels(
    count: int,
    margin: float | None = None,
    gutter: float | None = None,
    config: Settings | None = None,
) -> list[PanelLayoutRect]:
    """Non-overlapping panel rectangles for ``count`` panels."""
    config = config or default_settings
    margin = config.panel_margin if margin is None else margin
    gutter = config.panel_gutter if gutter is None else gutter
    if count <= 0:
        return []
    if count in _GRIDS:
        rows, cols = _GRIDS[count]
        return _grid(rows, cols, count, margin, gutter)
    if count == 3:
        return _split_rows(1, 2, margin, gutter)
    if count == 5:
        return _split_rows(2, 3, margin, gutter)
    rows = math.ceil(count / 3)
    return _grid(rows, 3, count, margin, gutter)


def direction_for_language(language: str) -> ReadingDirection:
    return "rtl" if language.split("-")[0].lower() in RTL_LANGUAGES else "ltr"


def reading_order(count: int, direction: ReadingDirection = "ltr") -> list[int]:
    """Map script panel index to layout rectangle index."""
    if count <= 0:
        return []
    if direction != "rtl" or count == 1:
        return list(range(count))
    if count in RTL_MAPS:
        return list(RTL_MAPS[count])
    # Generic 3-column grid: reverse each row
    order = []
    for start in range(0, count, 3):
        row = list(range(start, min(start + 3, count)))
        order.extend(reversed(row))
    return order
