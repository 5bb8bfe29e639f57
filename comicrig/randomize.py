"""Random parameter sets and per-panel pose jitter.

Entropy comes only from an injected ``RandomSource``; a seeded
``numpy.random.Generator`` makes every draw reproducible.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Protocol, Sequence, TypeVar

import numpy as np

from comicrig.geometry.eyes import EyeStyle
from comicrig.models.params import (
    MIRRORED_FIELDS,
    NEGATED_FIELDS,
    PARAM_RANGES,
    HeadShape,
    ParameterSet,
    ParamRange,
    PelvisShape,
    TorsoShape,
    apply_symmetry,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

BODY_COLORS = [
    # Human-like
    "#ffdbac", "#f1c27d", "#e0ac69", "#c68642", "#8d5524",
    # Fantastic
    "#b2ebf2", "#c8e6c9", "#ffcdd2", "#d1c4e9", "#fff9c4", "#cfd8dc", "#a7c7e7", "#f3b993",
]
HAIR_COLORS = [
    "#090806", "#2c222b", "#41323f", "#594747", "#76665b", "#a79b82", "#d3c5aa", "#e5e2de",
    "#b86125", "#ffb32b", "#3d1c02", "#5a3a2d", "#f75b3b", "#a4303f", "#682667",
]
IRIS_COLORS = ["#744729", "#a5683a", "#0077c0", "#417192", "#3b8578", "#6a9b89", "#505050", "#888888", "#af8f53"]

FRINGE_EYE_MARGIN = 5.0
HEAD_CENTER_Y = 120.0


class RandomSource(Protocol):
    """The subset of ``numpy.random.Generator`` the generators use."""

    def random(self) -> float: ...

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float: ...

    def integers(self, low: int, high: int | None = None) -> int: ...


def make_rng(seed: int | None = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def pick(rng: RandomSource, items: Sequence[T]) -> T:
    return items[int(rng.integers(0, len(items)))]


def on_grid(rng: RandomSource, low: float, high: float, step: float = 1.0) -> float:
    """Uniform draw from ``low, low + step, ...`` up to ``high``."""
    if low > high:
        low, high = high, low
    slots = int(math.floor((high - low) / step + 1e-9))
    return low + int(rng.integers(0, slots + 1)) * step


def _fringe_cap(head_height: float, eye_size_ratio: float) -> float:
    """Largest fringe ratio that keeps the fringe above the eyes."""
    head_top = HEAD_CENTER_Y - head_height / 2
    eye_top = HEAD_CENTER_Y - head_height * eye_size_ratio / 100
    max_px = eye_top - head_top - FRINGE_EYE_MARGIN
    return max(0.0, max_px / head_height * 100) if head_height > 0 else 0.0


def _sample_range(name: str, rng_range: ParamRange, values: dict[str, Any], rng: RandomSource) -> float:
    low, high = rng_range.min, rng_range.max
    if name == "mouth_bend":
        cap = 380 - 4 * values["mouth_width_ratio"]
        low, high = -cap, cap
    elif name == "fringe_height_ratio":
        high = max(low, min(high, math.floor(_fringe_cap(values["head_height"], values["eye_size_ratio"]))))
    value = on_grid(rng, low, high, rng_range.step)
    return int(value) if rng_range.integer else value


def random_parameter_set(rng: RandomSource, base: ParameterSet | None = None) -> ParameterSet:
    """A random figure on top of ``base``; the view angle is left alone."""
    values = (base or ParameterSet()).model_dump()
    for name, rng_range in PARAM_RANGES.items():
        if name == "view_angle":
            continue
        values[name] = _sample_range(name, rng_range, values, rng)

    values.update(
        head_shape=pick(rng, list(HeadShape)),
        torso_shape=pick(rng, list(TorsoShape)),
        pelvis_shape=pick(rng, list(PelvisShape)),
        eye_style=pick(rng, list(EyeStyle)),
        eye_tracking=rng.random() < 0.5,
        eyelashes=rng.random() < 0.5,
        hair=rng.random() < 0.5,
        glint=rng.random() < 0.9,
        eyebrows=rng.random() < 0.85,
        body_outlines=True,
        eye_outlines=True,
        body_color=pick(rng, BODY_COLORS),
        hair_color=pick(rng, HAIR_COLORS),
        iris_color=pick(rng, IRIS_COLORS),
        outline_color="#000000",
        pupil_color="#000000",
    )
    params = ParameterSet.model_validate(values)

    for name in [*MIRRORED_FIELDS, *NEGATED_FIELDS]:
        if name.startswith("l_"):
            params = apply_symmetry(params, name, getattr(params, name))
    return params


def _jitter(rng: RandomSource, spread: float) -> float:
    return (rng.random() - 0.5) * spread


def pose_variation(params: ParameterSet, rng: RandomSource) -> ParameterSet:
    """Small expression and pose changes for one panel appearance."""
    choice = rng.random()
    if choice < 0.4:
        mouth_bend = rng.random() * 50
    elif choice < 0.7:
        mouth_bend = rng.random() * -50
    else:
        mouth_bend = _jitter(rng, 10)

    return params.with_changes(
        eyebrow_angle=params.eyebrow_angle + _jitter(rng, 30),
        mouth_bend=mouth_bend,
        l_arm_angle=params.l_arm_angle + _jitter(rng, 20),
        r_arm_angle=params.r_arm_angle + _jitter(rng, 20),
        l_arm_bend=params.l_arm_bend + _jitter(rng, 40),
        r_arm_bend=params.r_arm_bend + _jitter(rng, 40),
        l_leg_angle=params.l_leg_angle + _jitter(rng, 10),
        r_leg_angle=params.r_leg_angle + _jitter(rng, 10),
    )

