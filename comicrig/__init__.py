"""comicrig: parametric 2.5D comic figures and auto-composed comic panels."""

from comicrig.comic import assemble_panels, compose_panel, frame, layout_panels, place_bubble
from comicrig.engine import build_figure, build_instance, foot_ground_y
from comicrig.geometry import eye_path, outline_path, width_at
from comicrig.models import ComicPanel, FigureInstance, ParameterSet, apply_symmetry
from comicrig.render import render_comic, render_figure_svg

__version__ = "0.1.0"

__all__ = [
    "assemble_panels",
    "compose_panel",
    "frame",
    "layout_panels",
    "place_bubble",
    "build_figure",
    "build_instance",
    "foot_ground_y",
    "eye_path",
    "outline_path",
    "width_at",
    "ComicPanel",
    "FigureInstance",
    "ParameterSet",
    "apply_symmetry",
    "render_comic",
    "render_figure_svg",
]
