"""Eye path formulas: clipped eye outlines from eyelid coverage percentages.

Two families:
  - curved ("realistic"): fixed corners at the horizontal extremes, quadratic
    lids whose control height slides from the eye's extreme toward its center
  - blocky/circle: corners solved from the ellipse equation at each lid
    height, edges drawn as straight lids or elliptical arcs

Both collapse to a single closed horizontal segment once the lids meet
(upper + lower >= 100).
"""

from __future__ import annotations

import enum
import math

from comicrig.geometry.path import Point, SvgPath

# Below this coverage a lid edge is drawn as the eye rim instead of a straight lid
_LID_THRESHOLD = 0.1


class EyeStyle(str, enum.Enum):
    REALISTIC = "realistic"
    BLOCKY = "blocky"
    CIRCLE = "circle"


def _clamp_pct(value: float) -> float:
    return max(0.0, min(100.0, value))


def closed_eye(left: float, right: float, y: float) -> SvgPath:
    return SvgPath().move_to(left, y).line_to(right, y).close()


def lid_heights(cy: float, ry: float, upper: float, lower: float) -> tuple[float, float]:
    """Heights of the upper and lower lid lines (or control points for curved eyes)."""
    upper_y = (cy - ry) + 2 * ry * _clamp_pct(upper) / 100
    lower_y = (cy + ry) - 2 * ry * _clamp_pct(lower) / 100
    return upper_y, lower_y


def is_closed(upper: float, lower: float) -> bool:
    return _clamp_pct(upper) + _clamp_pct(lower) >= 100


def curved_eye_path(center: Point, rx: float, ry: float, upper: float, lower: float) -> SvgPath:
    cx, cy = center
    rx, ry = max(0.0, rx), max(0.0, ry)
    upper_ctrl, lower_ctrl = lid_heights(cy, ry, upper, lower)
    if upper_ctrl >= lower_ctrl:
        return closed_eye(cx - rx, cx + rx, (upper_ctrl + lower_ctrl) / 2)
    path = SvgPath().move_to(cx - rx, cy)
    path.quad_to(cx, upper_ctrl, cx + rx, cy)
    path.quad_to(cx, lower_ctrl, cx - rx, cy)
    return path.close()


def _x_span(cx: float, cy: float, rx: float, ry: float, y: float) -> tuple[float, float]:
    """Left and right ellipse x at height y (clamped onto the ellipse)."""
    if ry <= 0:
        return cx - rx, cx + rx
    y = max(cy - ry, min(cy + ry, y))
    t = (y - cy) / ry
    offset = rx * math.sqrt(max(0.0, 1.0 - t * t))
    return cx - offset, cx + offset


def blocky_eye_path(center: Point, rx: float, ry: float, upper: float, lower: float) -> SvgPath:
    cx, cy = center
    rx, ry = max(0.0, rx), max(0.0, ry)
    upper = _clamp_pct(upper)
    lower = _clamp_pct(lower)
    upper_y, lower_y = lid_heights(cy, ry, upper, lower)

    if upper_y >= lower_y:
        mid = (upper_y + lower_y) / 2
        left, right = _x_span(cx, cy, rx, ry, mid)
        return closed_eye(left, right, mid)

    up_left, up_right = _x_span(cx, cy, rx, ry, upper_y)
    low_left, low_right = _x_span(cx, cy, rx, ry, lower_y)

    # Clockwise in the y-down frame: top, right rim, bottom, left rim
    path = SvgPath().move_to(up_left, upper_y)
    if upper > _LID_THRESHOLD:
        path.line_to(up_right, upper_y)
    else:
        path.arc_to(rx, ry, up_right, upper_y, sweep=True)
    path.arc_to(rx, ry, low_right, lower_y, sweep=True)
    if lower > _LID_THRESHOLD:
        path.line_to(low_left, lower_y)
    else:
        # Keep sweep=1 here. Continuing the clockwise loop, this arc already
        # bends opposite to the top arc and runs along the rim; sweep=0 would
        # cut a dent across the bottom of the eye.
        path.arc_to(rx, ry, low_left, lower_y, sweep=True)
    path.arc_to(rx, ry, up_left, upper_y, sweep=True)
    return path.close()


def eye_path(
    style: EyeStyle | str,
    center: Point,
    rx: float,
    ry: float,
    upper: float,
    lower: float,
) -> SvgPath:
    """Closed eye outline for ``style``. Also used as the eye's clip path."""
    style = EyeStyle(style)
    if style == EyeStyle.REALISTIC:
        return curved_eye_path(center, rx, ry, upper, lower)
    if style == EyeStyle.CIRCLE:
        r = max(0.0, min(rx, ry))
        return blocky_eye_path(center, r, r, upper, lower)
    return blocky_eye_path(center, rx, ry, upper, lower)
