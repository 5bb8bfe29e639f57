"""ParameterSet: the immutable figure description consumed by the builder.

Attributes are snake_case; the wire format uses camelCase aliases
(``headWidth``, ``lArmAngle``, ...). Out-of-range input is clamped, never
rejected.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from comicrig.geometry.eyes import EyeStyle

logger = logging.getLogger(__name__)

MAX_VIEW_ANGLE = 60.0


class HeadShape(str, enum.Enum):
    ELLIPSE = "ellipse"
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    INVERTED_TRIANGLE = "inverted-triangle"


class TorsoShape(str, enum.Enum):
    RECTANGLE = "rectangle"
    SQUARE = "square"
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    INVERTED_TRIANGLE = "inverted-triangle"


class PelvisShape(str, enum.Enum):
    RECTANGLE = "rectangle"
    HORIZONTAL_OVAL = "horizontal-oval"


@dataclass(frozen=True)
class ParamRange:
    min: float
    max: float
    step: float = 1.0
    integer: bool = False

    def clamp(self, value: float) -> float:
        value = min(self.max, max(self.min, value))
        return int(round(value)) if self.integer else value


# Ratios are percentages of the base dimension named in the comment
PARAM_RANGES: dict[str, ParamRange] = {
    # Head
    "head_width": ParamRange(50, 130),
    "head_height": ParamRange(70, 150),
    "head_corner_radius": ParamRange(0, 65),
    "triangle_corner_radius": ParamRange(0, 50),
    # Eyes
    "eye_size_ratio": ParamRange(8, 25),  # head height
    "eye_spacing_ratio": ParamRange(15, 45),  # head width
    "pupil_size_ratio": ParamRange(20, 70),  # eye size
    "upper_eyelid_coverage": ParamRange(0, 100),  # eye height
    "lower_eyelid_coverage": ParamRange(0, 100),
    "eyelash_count": ParamRange(1, 8, integer=True),
    "eyelash_length": ParamRange(2, 20),
    "eyelash_angle": ParamRange(-45, 45),
    # Eyebrows
    "eyebrow_width_ratio": ParamRange(15, 40),  # head width
    "eyebrow_height_ratio": ParamRange(20, 60),  # eye size
    "eyebrow_y_offset_ratio": ParamRange(10, 35),  # head height, above the eye line
    "eyebrow_angle": ParamRange(-45, 45),
    # Mouth and nose
    "mouth_width_ratio": ParamRange(20, 70),  # head width
    "mouth_y_offset_ratio": ParamRange(20, 80),  # half head height, below center
    "mouth_bend": ParamRange(-300, 300),
    "nose_size_ratio": ParamRange(0, 20),  # head width
    "nose_y_offset_ratio": ParamRange(0, 100),  # eye line to mouth distance
    # Hair
    "back_hair_width_ratio": ParamRange(100, 160),  # head width
    "back_hair_height_ratio": ParamRange(30, 120),  # head height
    "fringe_height_ratio": ParamRange(0, 50),  # head height
    # Body
    "neck_height": ParamRange(10, 50),
    "neck_width_ratio": ParamRange(30, 50),  # head width
    "torso_height": ParamRange(80, 220),
    "torso_width": ParamRange(60, 180),
    "torso_corner_radius": ParamRange(0, 90),
    "pelvis_height": ParamRange(10, 60),
    "pelvis_width_ratio": ParamRange(50, 110),  # torso width
    # Limbs
    "arm_length": ParamRange(50, 180),
    "l_arm_width": ParamRange(8, 40),
    "r_arm_width": ParamRange(8, 40),
    "l_hand_size": ParamRange(10, 40),
    "r_hand_size": ParamRange(10, 40),
    "leg_length": ParamRange(60, 200),
    "l_leg_width": ParamRange(10, 50),
    "r_leg_width": ParamRange(10, 50),
    "l_foot_size": ParamRange(15, 50),
    "r_foot_size": ParamRange(15, 50),
    "l_arm_angle": ParamRange(-90, 180),
    "r_arm_angle": ParamRange(-90, 180),
    "l_arm_bend": ParamRange(-100, 100),
    "r_arm_bend": ParamRange(-100, 100),
    "l_leg_angle": ParamRange(-45, 45),
    "r_leg_angle": ParamRange(-45, 45),
    "l_leg_bend": ParamRange(-100, 100),
    "r_leg_bend": ParamRange(-100, 100),
    # View
    "view_angle": ParamRange(-MAX_VIEW_ANGLE, MAX_VIEW_ANGLE),
}

# Left/right pairs that always carry the same value
MIRRORED_FIELDS: dict[str, str] = {
    "l_arm_width": "r_arm_width",
    "l_hand_size": "r_hand_size",
    "l_leg_width": "r_leg_width",
    "l_foot_size": "r_foot_size",
    "l_arm_angle": "r_arm_angle",
    "l_leg_angle": "r_leg_angle",
}
# Bends mirror with the opposite sign (the perpendicular flips with the side)
NEGATED_FIELDS: dict[str, str] = {
    "l_arm_bend": "r_arm_bend",
    "l_leg_bend": "r_leg_bend",
}
MIRRORED_FIELDS.update({v: k for k, v in list(MIRRORED_FIELDS.items())})
NEGATED_FIELDS.update({v: k for k, v in list(NEGATED_FIELDS.items())})


class ParameterSet(BaseModel):
    """Flat figure description: sliders, shape enums, toggles and colors."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    # Head
    head_width: float = 95
    head_height: float = 110
    head_shape: HeadShape = HeadShape.ELLIPSE
    head_corner_radius: float = 20
    triangle_corner_radius: float = 10

    # Eyes
    eye_size_ratio: float = 11
    eye_spacing_ratio: float = 25
    pupil_size_ratio: float = 40
    upper_eyelid_coverage: float = 0
    lower_eyelid_coverage: float = 0
    eye_style: EyeStyle = EyeStyle.REALISTIC
    eye_tracking: bool = True
    eyelashes: bool = False
    eyelash_count: int = 3
    eyelash_length: float = 8
    eyelash_angle: float = 0
    glint: bool = True

    # Eyebrows
    eyebrows: bool = True
    eyebrow_width_ratio: float = 25
    eyebrow_height_ratio: float = 40
    eyebrow_y_offset_ratio: float = 18
    eyebrow_angle: float = -10

    # Mouth and nose
    mouth_width_ratio: float = 40
    mouth_y_offset_ratio: float = 45
    mouth_bend: float = 20
    nose: bool = True
    nose_size_ratio: float = 6
    nose_y_offset_ratio: float = 55

    # Hair
    hair: bool = False
    back_hair_width_ratio: float = 120
    back_hair_height_ratio: float = 60
    fringe_height_ratio: float = 20

    # Body
    neck_height: float = 20
    neck_width_ratio: float = 45
    torso_height: float = 150
    torso_width: float = 120
    torso_shape: TorsoShape = TorsoShape.RECTANGLE
    torso_corner_radius: float = 20
    pelvis_height: float = 25
    pelvis_width_ratio: float = 90
    pelvis_shape: PelvisShape = PelvisShape.RECTANGLE

    # Limbs
    arm_length: float = 120
    l_arm_width: float = 18
    r_arm_width: float = 18
    l_hand_size: float = 20
    r_hand_size: float = 20
    leg_length: float = 120
    l_leg_width: float = 22
    r_leg_width: float = 22
    l_foot_size: float = 28
    r_foot_size: float = 28
    l_arm_angle: float = 25
    r_arm_angle: float = 25
    l_arm_bend: float = 30
    r_arm_bend: float = -30
    l_leg_angle: float = 10
    r_leg_angle: float = 10
    l_leg_bend: float = -20
    r_leg_bend: float = 20

    # View
    view_angle: float = 0

    # Colors and outlines
    body_color: str = "#f5c68c"
    iris_color: str = "#3385cc"
    outline_color: str = "#5e6670"
    pupil_color: str = "#1a1a1a"
    hair_color: str = "#2c222b"
    body_outlines: bool = True
    eye_outlines: bool = True

    @model_validator(mode="before")
    @classmethod
    def _clamp_inputs(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        out = dict(data)
        for name, rng in PARAM_RANGES.items():
            for key in (name, to_camel(name)):
                if key not in out:
                    continue
                value = _as_number(out[key])
                if value is None or math.isnan(value):
                    logger.debug("Unreadable %s %r, using default", name, out[key])
                    out[key] = cls.model_fields[name].default
                    continue
                clamped = rng.clamp(value)
                if clamped != value:
                    logger.debug("Clamped %s from %s to %s", name, value, clamped)
                out[key] = clamped
        for name, enum_cls in _ENUM_FIELDS.items():
            for key in (name, to_camel(name)):
                if key not in out:
                    continue
                try:
                    enum_cls(out[key])
                except ValueError:
                    default = cls.model_fields[name].default
                    logger.debug("Unknown %s %r, using %s", name, out[key], default.value)
                    out[key] = default
        return out

    def with_changes(self, **updates: Any) -> ParameterSet:
        """Copy with ``updates`` applied and re-clamped."""
        data = self.model_dump()
        for key, value in updates.items():
            data[field_name(key)] = value
        return type(self).model_validate(data)


def _as_number(value: Any) -> float | None:
    """Numeric reading of a wire value; numeric strings count, booleans do not."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


_ENUM_FIELDS: dict[str, type[enum.Enum]] = {
    "head_shape": HeadShape,
    "torso_shape": TorsoShape,
    "pelvis_shape": PelvisShape,
    "eye_style": EyeStyle,
}

_ALIASES: dict[str, str] = {to_camel(name): name for name in ParameterSet.model_fields}


def field_name(key: str) -> str:
    """Resolve a snake_case field name or its camelCase alias."""
    if key in ParameterSet.model_fields:
        return key
    if key in _ALIASES:
        return _ALIASES[key]
    raise ValueError(f"Unknown parameter: {key}")


def apply_symmetry(params: ParameterSet, changed_field: str, value: Any) -> ParameterSet:
    """Return a new ParameterSet with ``changed_field`` set and its mirror updated.

    Width, size and angle pairs copy the value; bend pairs copy it negated.
    Every other field is set on its own.
    """
    name = field_name(changed_field)
    updates: dict[str, Any] = {name: value}
    if name in MIRRORED_FIELDS:
        updates[MIRRORED_FIELDS[name]] = value
    elif name in NEGATED_FIELDS:
        updates[NEGATED_FIELDS[name]] = -value
    return params.with_changes(**updates)
