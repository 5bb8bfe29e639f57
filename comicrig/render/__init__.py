"""SVG rendering of figures and comic pages."""

from comicrig.render.serializer import serialize_svg
from comicrig.render.svg import render_comic, render_feature, render_figure, render_figure_svg, render_panel

__all__ = [
    "serialize_svg",
    "render_comic",
    "render_feature",
    "render_figure",
    "render_figure_svg",
    "render_panel",
]
