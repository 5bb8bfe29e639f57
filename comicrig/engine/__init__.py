"""Figure geometry builder."""

from comicrig.engine.builder import (
    FigureExtents,
    build_figure,
    build_instance,
    figure_extents,
    foot_ground_y,
)
from comicrig.engine.config import BuildConfig
from comicrig.engine.context import FigureContext
from comicrig.engine.features import FigureGeometry, RenderFeature, Side
from comicrig.engine.pipeline import FigurePipeline, StageError
from comicrig.engine.registry import Phase, get_registry, stage

__all__ = [
    "build_figure",
    "build_instance",
    "foot_ground_y",
    "figure_extents",
    "FigureExtents",
    "BuildConfig",
    "FigureContext",
    "FigureGeometry",
    "RenderFeature",
    "Side",
    "FigurePipeline",
    "StageError",
    "Phase",
    "get_registry",
    "stage",
]
