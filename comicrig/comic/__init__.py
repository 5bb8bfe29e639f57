"""Comic composition: panel layout, camera framing, dialogue bubbles and script assembly."""

from comicrig.comic.bubbles import BubblePlacement, BubblePlacer, place_bubble
from comicrig.comic.camera import PanelTransform, frame
from comicrig.comic.compose import PanelComposition, compose_panel
from comicrig.comic.layout import direction_for_language, layout_panels, reading_order
from comicrig.comic.script import assemble_panels

__all__ = [
    "BubblePlacement",
    "BubblePlacer",
    "place_bubble",
    "PanelTransform",
    "frame",
    "PanelComposition",
    "compose_panel",
    "direction_for_language",
    "layout_panels",
    "reading_order",
    "assemble_panels",
]
