"""Panel scripts -> ComicPanels.

Lays out the panels once, assigns each script panel its rectangle through the
reading-order map, spreads the panel's characters around the panel center and
gives every appearance its own pose jitter.
"""

from __future__ import annotations

import logging
from typing import Sequence

from comicrig.comic.layout import ReadingDirection, layout_panels, reading_order
from comicrig.config import Settings, settings as default_settings
from comicrig.models.comic import ComicPanel, PanelScript
from comicrig.models.figure import FigureInstance, Point
from comicrig.models.params import ParameterSet
from comicrig.randomize import RandomSource, pose_variation

logger = logging.getLogger(__name__)

CHARACTER_SPACING = 150.0
PANEL_SCALE = 0.8
MAX_Y_JITTER = 50.0
# Far enough that the pupils settle at full travel
GAZE_DISTANCE = 9999.0
GAZE_Y = 120.0


def character_x(index: int, count: int) -> float:
    """Positions spaced evenly around the panel center."""
    if count <= 1:
        return 0.0
    return index * CHARACTER_SPACING - (count - 1) * CHARACTER_SPACING / 2


def mutual_gaze(first: FigureInstance, second: FigureInstance) -> tuple[FigureInstance, FigureInstance]:
    """Point two characters at each other. Targets are in each figure's own frame."""

    def looking(instance: FigureInstance, screen_dir: int) -> FigureInstance:
        local_dir = -screen_dir if instance.is_flipped else screen_dir
        return instance.model_copy(update={"look_at": Point(x=local_dir * GAZE_DISTANCE, y=GAZE_Y)})

    left, right = (first, second) if first.x <= second.x else (second, first)
    left, right = looking(left, 1), looking(right, -1)
    return (left, right) if first.x <= second.x else (right, left)


def background_color(rng: RandomSource) -> str:
    return f"hsl({rng.random() * 360:.0f}, 50%, 95%)"


def assemble_panels(
    scripts: Sequence[PanelScript],
    cast: Sequence[ParameterSet],
    rng: RandomSource,
    direction: ReadingDirection | None = None,
    config: Settings | None = None,
) -> list[ComicPanel]:
    """Build one ComicPanel per script entry. Unknown cast ids are dropped from the panel."""
    config = config or default_settings
    direction = direction or config.reading_direction
    layouts = layout_panels(len(scripts), config=config)
    order = reading_order(len(scripts), direction)

    panels = []
    for i, script in enumerate(scripts):
        ids = [cid for cid in script.characters_in_panel if 0 <= cid < len(cast)]
        if len(ids) != len(script.characters_in_panel):
            logger.warning("Panel %d: dropping unknown cast ids %s", i, set(script.characters_in_panel) - set(ids))

        has_dialogue = bool(script.dialogues)
        characters = []
        for index, cid in enumerate(ids):
            x = character_x(index, len(ids))
            characters.append(
                FigureInstance(
                    params=pose_variation(cast[cid], rng),
                    x=x,
                    y=rng.random() * MAX_Y_JITTER,
                    scale=PANEL_SCALE,
                    z_index=index + 1,
                    is_flipped=has_dialogue and len(ids) > 1 and x > 0,
                )
            )
        if len(characters) == 2:
            characters = list(mutual_gaze(*characters))

        panels.append(
            ComicPanel(
                id=f"panel-{i}",
                layout=layouts[order[i]],
                characters=characters,
                character_ids_in_panel=ids,
                dialogues=list(script.dialogues),
                shot_type=script.shot_type,
                background_color=script.background_color or background_color(rng),
            )
        )
    logger.info("Assembled %d panels (%s)", len(panels), direction)
    return panels
