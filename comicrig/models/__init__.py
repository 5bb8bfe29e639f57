"""Wire models: figure parameters, placements and comic panels."""

from comicrig.models.comic import ComicPanel, Dialogue, PanelLayoutRect, PanelScript, ShotType
from comicrig.models.figure import FigureInstance, Point
from comicrig.models.params import (
    PARAM_RANGES,
    HeadShape,
    ParameterSet,
    PelvisShape,
    TorsoShape,
    apply_symmetry,
)

__all__ = [
    "ComicPanel",
    "Dialogue",
    "PanelLayoutRect",
    "PanelScript",
    "ShotType",
    "FigureInstance",
    "Point",
    "PARAM_RANGES",
    "HeadShape",
    "ParameterSet",
    "PelvisShape",
    "TorsoShape",
    "apply_symmetry",
]
