"""Per-panel composition: camera, figure geometry, then dialogue bubbles."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from comicrig.comic.bubbles import BubblePlacement, BubblePlacer
from comicrig.comic.camera import PanelTransform, frame, to_character_space
from comicrig.config import Settings, settings as default_settings
from comicrig.engine.builder import build_instance
from comicrig.engine.config import BuildConfig
from comicrig.engine.features import FigureGeometry
from comicrig.geometry.boxes import Box
from comicrig.geometry.path import Point
from comicrig.models.comic import ComicPanel
from comicrig.models.figure import FigureInstance

logger = logging.getLogger(__name__)


@dataclass
class PlacedFigure:
    instance: FigureInstance
    geometry: FigureGeometry
    head_box: Box  # panel pixels
    mouth: Point  # panel pixels


@dataclass
class PanelComposition:
    panel: ComicPanel
    width: float
    height: float
    transform: PanelTransform
    figures: list[PlacedFigure] = field(default_factory=list)
    bubbles: list[BubblePlacement] = field(default_factory=list)

    @property
    def head_boxes(self) -> list[Box]:
        return [f.head_box for f in self.figures]

    def draw_order(self) -> list[PlacedFigure]:
        return sorted(self.figures, key=lambda f: f.instance.z_index)


def to_panel(instance: FigureInstance, transform: PanelTransform, point: Point) -> Point:
    return transform.apply(to_character_space(instance, point))


def head_box_in_panel(instance: FigureInstance, transform: PanelTransform, geometry: FigureGeometry) -> Box:
    x0, y0, x1, y1 = geometry.head_box
    ax, ay = to_panel(instance, transform, (x0, y0))
    bx, by = to_panel(instance, transform, (x1, y1))
    return (min(ax, bx), min(ay, by), max(ax, bx), max(ay, by))


def compose_panel(
    panel: ComicPanel,
    width: float,
    height: float,
    config: Settings | None = None,
    build_config: BuildConfig | None = None,
) -> PanelComposition:
    """Frame the panel, build every figure under the transform, then place bubbles in dialogue order."""
    config = config or default_settings
    transform = frame(panel.characters, panel.shot_type, width, height, build_config)
    composition = PanelComposition(panel=panel, width=width, height=height, transform=transform)

    for instance in panel.characters:
        geometry = build_instance(instance, build_config)
        composition.figures.append(
            PlacedFigure(
                instance=instance,
                geometry=geometry,
                head_box=head_box_in_panel(instance, transform, geometry),
                mouth=to_panel(instance, transform, geometry.mouth),
            )
        )

    placer = BubblePlacer(width, height, head_boxes=composition.head_boxes, config=config)
    for dialogue in panel.dialogues:
        try:
            index = panel.character_ids_in_panel.index(dialogue.character_id)
            speaker = composition.figures[index]
        except (ValueError, IndexError):
            logger.warning(
                "Panel %s: dialogue references character %d not in panel, skipping",
                panel.id,
                dialogue.character_id,
            )
            continue
        composition.bubbles.append(placer.place(dialogue.text, speaker.head_box, speaker.mouth))

    logger.debug(
        "Panel %s composed: %d figures, %d bubbles",
        panel.id,
        len(composition.figures),
        len(composition.bubbles),
    )
    return composition
