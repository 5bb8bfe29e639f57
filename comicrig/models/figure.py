"""Placement models for rendered figure occurrences."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from comicrig.models.params import ParameterSet

MIN_SCALE = 0.05


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class FigureInstance(BaseModel):
    """A ParameterSet placed on a canvas: position, scale, z-index, gaze, mirror."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    params: ParameterSet = Field(default_factory=ParameterSet)
    x: float = 0.0
    y: float = 0.0
    scale: float = 1.0
    z_index: int = 0
    look_at: Point | None = None  # gaze target in the figure's own frame
    is_flipped: bool = False

    @field_validator("scale")
    @classmethod
    def _clamp_scale(cls, value: float) -> float:
        return max(MIN_SCALE, value)
