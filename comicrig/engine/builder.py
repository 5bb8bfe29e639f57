"""Figure geometry builder entry points."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from comicrig.engine.config import BuildConfig
from comicrig.engine.context import FigureContext
from comicrig.engine.features import FigureGeometry
from comicrig.engine.pipeline import FigurePipeline
from comicrig.geometry.path import Point
from comicrig.models.figure import FigureInstance
from comicrig.models.params import ParameterSet

logger = logging.getLogger(__name__)

# Last stage needed to know where the feet touch the ground
GROUND_STAGE = "G2.03"


@lru_cache(maxsize=1)
def default_pipeline() -> FigurePipeline:
    return FigurePipeline()


def _context(
    params: ParameterSet | None,
    view_angle: float | None,
    gaze: Point | None,
    mirrored: bool,
    config: BuildConfig | None,
) -> FigureContext:
    params = params or ParameterSet()
    return FigureContext(
        params=params,
        view_angle=params.view_angle if view_angle is None else view_angle,
        gaze=gaze,
        mirrored=mirrored,
        config=config or BuildConfig(),
    )


def build_figure(
    params: ParameterSet | None = None,
    view_angle: float | None = None,
    gaze: Point | None = None,
    *,
    mirrored: bool = False,
    config: BuildConfig | None = None,
) -> FigureGeometry:
    """Build absolute geometry and the depth-sorted feature list for one figure.

    ``view_angle`` overrides ``params.view_angle``; ``gaze`` is a point in the
    figure's local frame that the pupils track.
    """
    ctx = _context(params, view_angle, gaze, mirrored, config)
    default_pipeline().run(ctx)
    return ctx.to_geometry()


def build_instance(instance: FigureInstance, config: BuildConfig | None = None) -> FigureGeometry:
    gaze = instance.look_at.as_tuple() if instance.look_at else None
    return build_figure(instance.params, gaze=gaze, mirrored=instance.is_flipped, config=config)


def foot_ground_y(params: ParameterSet, config: BuildConfig | None = None) -> float:
    """Lowest foot-ground height, running only the leg geometry stages."""
    ctx = _context(params, None, None, False, config)
    default_pipeline().run(ctx, until=GROUND_STAGE)
    return ctx.foot_ground_y


@dataclass(frozen=True)
class FigureExtents:
    """Silhouette landmarks in the local frame, used for framing."""

    center_x: float
    head_top_y: float
    head_bottom_y: float
    head_width: float
    torso_top_y: float
    torso_bottom_y: float
    torso_width: float
    foot_ground_y: float

    @property
    def half_width(self) -> float:
        return max(self.head_width, self.torso_width) / 2


def figure_extents(params: ParameterSet, config: BuildConfig | None = None) -> FigureExtents:
    """Landmarks from the body and leg stages only; the face is skipped."""
    ctx = _context(params, None, None, False, config)
    default_pipeline().run(ctx, until=GROUND_STAGE)
    return FigureExtents(
        center_x=ctx.center_x,
        head_top_y=ctx.head.top_y,
        head_bottom_y=ctx.head.bottom_y,
        head_width=ctx.head.width,
        torso_top_y=ctx.torso.top_y,
        torso_bottom_y=ctx.torso.bottom_y,
        torso_width=ctx.torso.width,
        foot_ground_y=ctx.foot_ground_y,
    )
