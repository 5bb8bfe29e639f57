"""Limb math shared by the builder stages. No context imports."""

from __future__ import annotations

import logging
import math

from comicrig.engine.config import BuildConfig
from comicrig.engine.features import LimbCurve
from comicrig.geometry.path import Point, SvgPath

logger = logging.getLogger(__name__)


def limb_end(start: Point, length: float, angle: float, direction: int) -> Point:
    """End point of a limb hanging from ``start``; angle 0 points straight down."""
    rad = math.radians(angle)
    return (start[0] + direction * length * math.sin(rad), start[1] + length * math.cos(rad))


def limb_curve(
    start: Point,
    length: float,
    angle: float,
    bend: float,
    direction: int,
    width: float,
) -> LimbCurve:
    """Quadratic limb whose control point sits ``bend`` px off the chord midpoint."""
    end = limb_end(start, length, angle, direction)
    mx, my = (start[0] + end[0]) / 2, (start[1] + end[1]) / 2
    dx, dy = end[0] - start[0], end[1] - start[1]
    dist = math.hypot(dx, dy)
    control = (mx, my)
    if dist > 1e-6:
        control = (mx - dy / dist * bend, my + dx / dist * bend)
    return LimbCurve(start=start, control=control, end=end, width=max(0.0, width))


def foreshorten_scale(angle: float, config: BuildConfig) -> float:
    """Shrink factor for an arm raised past horizontal toward the back."""
    if angle <= 90 or config.foreshorten_range <= 0:
        return 1.0
    past = min(angle - 90, config.foreshorten_range) / config.foreshorten_range
    return 1.0 - past * (1.0 - config.foreshorten_min_scale)


def resolve_leg_collision(
    left_hip: Point,
    right_hip: Point,
    length: float,
    angles: tuple[float, float],
    widths: tuple[float, float],
    config: BuildConfig,
) -> list[tuple[float, float]]:
    """Spread the legs one degree at a time until the ankles clear each other.

    Returns the history of (left, right) angles, starting with the request.
    Best effort: stops at the iteration budget or when both legs hit the cap,
    whether or not the feet still overlap.
    """
    left, right = angles
    lw, rw = widths
    cap = config.leg_angle_cap
    history = [(left, right)]

    for _ in range(config.leg_max_iterations):
        l_ankle = limb_end(left_hip, length, left, -1)
        r_ankle = limb_end(right_hip, length, right, 1)
        if l_ankle[0] + lw / 2 + config.foot_margin <= r_ankle[0] - rw / 2:
            return history
        if left >= cap and right >= cap:
            break
        left = max(left, min(cap, left + 1))
        right = max(right, min(cap, right + 1))
        history.append((left, right))

    logger.debug("Leg spread stopped at %.0f/%.0f degrees with feet overlapping", left, right)
    return history


def foot_path(ankle: Point, leg_width: float, foot_size: float, direction: int) -> tuple[SvgPath, float]:
    """Half-dome foot resting on the ground below the ankle, toes pointing outward.

    Returns the path and the ground height.
    """
    ground_y = ankle[1] + leg_width / 2
    foot_h = max(foot_size, leg_width)
    foot_w = min(foot_size * 2, leg_width * 3)
    heel_x = ankle[0] - direction * leg_width / 2
    toe_x = heel_x + direction * foot_w
    path = SvgPath().move_to(heel_x, ground_y).line_to(toe_x, ground_y)
    # Back over the top of the dome: clockwise when returning rightward
    path.arc_to(foot_w / 2, foot_h, heel_x, ground_y, sweep=direction < 0)
    return path.close(), ground_y


def circle_path(center: Point, radius: float) -> SvgPath:
    cx, cy = center
    r = max(0.0, radius)
    path = SvgPath().move_to(cx - r, cy)
    if r <= 1e-9:
        return path.close()
    return path.arc_to(r, r, cx + r, cy).arc_to(r, r, cx - r, cy).close()
