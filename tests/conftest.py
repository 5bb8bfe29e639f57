"""Shared test fixtures."""

from __future__ import annotations

import pytest

from comicrig.models.comic import ComicPanel, Dialogue, PanelLayoutRect, PanelScript
from comicrig.models.figure import FigureInstance
from comicrig.models.params import HeadShape, ParameterSet, TorsoShape

HEAD_CENTER_X = 200.0
HEAD_CENTER_Y = 120.0

SHORT_LINE = "Hi!"
LONG_LINE = "This line is much longer than the first and wraps onto more space"

# Wire-format panel as produced by the script assembler
PANEL_WIRE = {
    "id": "panel-0",
    "layout": {"x": 2.5, "y": 2.5, "width": 95, "height": 95},
    "characters": [
        {"params": {"headWidth": 95}, "x": -75, "y": 0, "scale": 0.8, "zIndex": 1},
        {"params": {}, "x": 75, "y": 0, "scale": 0.8, "zIndex": 2, "isFlipped": True},
    ],
    "characterIdsInPanel": [0, 1],
    "dialogues": [{"characterId": 0, "text": "Hello there"}],
    "shotType": "full-shot",
    "backgroundColor": "#fdf6e3",
}


@pytest.fixture
def default_params() -> ParameterSet:
    return ParameterSet()


@pytest.fixture
def round_head_params() -> ParameterSet:
    return ParameterSet(head_shape=HeadShape.CIRCLE, torso_shape=TorsoShape.TRIANGLE)


@pytest.fixture
def two_person_panel() -> ComicPanel:
    return ComicPanel(
        id="duo",
        layout=PanelLayoutRect(x=2.5, y=2.5, width=95, height=95),
        characters=[
            FigureInstance(x=-75, y=0, scale=0.8, z_index=1),
            FigureInstance(x=75, y=0, scale=0.8, z_index=2, is_flipped=True),
        ],
        character_ids_in_panel=[0, 1],
        dialogues=[
            Dialogue(character_id=0, text=SHORT_LINE),
            Dialogue(character_id=1, text=LONG_LINE),
        ],
    )


@pytest.fixture
def scripts() -> list[PanelScript]:
    return [
        PanelScript(characters_in_panel=[0], dialogues=[Dialogue(character_id=0, text="Morning.")]),
        PanelScript(
            characters_in_panel=[0, 1],
            dialogues=[Dialogue(character_id=1, text="Did you sleep at all?")],
            shot_type="close-up",
        ),
        PanelScript(characters_in_panel=[1], description="Empty street"),
    ]


@pytest.fixture
def cast() -> list[ParameterSet]:
    return [ParameterSet(), ParameterSet(head_shape=HeadShape.SQUARE, hair=True)]
