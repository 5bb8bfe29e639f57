"""Comic wire models: panels, dialogues and panel scripts."""

from __future__ import annotations

import enum
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from comicrig.models.figure import FigureInstance

logger = logging.getLogger(__name__)


class ShotType(str, enum.Enum):
    FULL = "full-shot"
    MEDIUM = "medium-shot"
    CLOSE_UP = "close-up"


def _coerce_shot(value: Any) -> Any:
    try:
        return ShotType(value)
    except ValueError:
        logger.debug("Unknown shot type %r, using full-shot", value)
        return ShotType.FULL


class PanelLayoutRect(BaseModel):
    """Panel rectangle in percent-of-canvas units."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_pixels(self, canvas_w: float, canvas_h: float) -> tuple[float, float, float, float]:
        """(x, y, width, height) scaled onto a canvas of the given size."""
        return (
            self.x / 100 * canvas_w,
            self.y / 100 * canvas_h,
            self.width / 100 * canvas_w,
            self.height / 100 * canvas_h,
        )


class Dialogue(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    character_id: int
    text: str


class ComicPanel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str
    layout: PanelLayoutRect
    characters: list[FigureInstance] = Field(default_factory=list)
    character_ids_in_panel: list[int] = Field(default_factory=list)
    dialogues: list[Dialogue] = Field(default_factory=list)
    shot_type: ShotType = ShotType.FULL
    background_color: str = "#ffffff"
    background_image: str | None = None

    @field_validator("shot_type", mode="before")
    @classmethod
    def _known_shot(cls, value: Any) -> Any:
        return _coerce_shot(value)


class PanelScript(BaseModel):
    """One panel of a narrative script, before figures are placed."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    characters_in_panel: list[int] = Field(default_factory=list)
    dialogues: list[Dialogue] = Field(default_factory=list)
    shot_type: ShotType = ShotType.MEDIUM
    description: str = ""
    background_color: str | None = None

    @field_validator("shot_type", mode="before")
    @classmethod
    def _known_shot(cls, value: Any) -> Any:
        return _coerce_shot(value)
