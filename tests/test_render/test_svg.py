"""Tests for SVG rendering and serialization."""

import xml.etree.ElementTree as ET

import pytest

from comicrig.engine import build_figure
from comicrig.models.comic import ComicPanel
from comicrig.models.params import ParameterSet
from comicrig.render import render_comic, render_feature, render_figure, render_figure_svg, serialize_svg
from comicrig.render.serializer import serialize_element
from tests.conftest import PANEL_WIRE

NS = "{http://www.w3.org/2000/svg}"


def _parse(svg: str) -> ET.Element:
    return ET.fromstring(svg.encode())


def _groups(root: ET.Element, cls: str) -> list[ET.Element]:
    return [g for g in root.iter(f"{NS}g") if g.get("class") == cls]


def test_serialize_drops_none_and_escapes():
    lines = serialize_element({"tag": "text", "x": "1", "fill": None, "text": "<b> & co"})
    assert lines == ['  <text x="1">&lt;b&gt; &amp; co</text>']
    assert serialize_element({"tag": "rect", "data": 'a"b'}, 0) == ['<rect data="a&quot;b" />']


def test_serialize_svg_header():
    svg = serialize_svg([{"tag": "rect", "width": "10"}], 400, 700, title="Bob & Alice")
    root = _parse(svg)
    assert root.get("viewBox") == "0 0 400 700"
    assert root.find(f"{NS}title").text == "Bob & Alice"
    assert root.find(f"{NS}rect").get("width") == "10"


def test_figure_svg_is_well_formed():
    root = _parse(render_figure_svg(title="Default"))
    assert root.get("width") == "400"
    assert root.find(f".//{NS}filter") is not None
    body = _groups(root, "body")
    assert len(body) == 1
    assert body[0].get("filter") == "url(#figure-outline)"
    assert len(_groups(root, "eye eye-left")) == 1
    assert len(_groups(root, "eye eye-right")) == 1


def test_body_outline_toggle():
    root = _parse(render_figure_svg(ParameterSet(body_outlines=False)))
    assert _groups(root, "body")[0].get("filter") is None


def test_eye_outline_toggle():
    with_outline = render_figure(build_figure(ParameterSet(eye_outlines=True)))
    without = render_figure(build_figure(ParameterSet(eye_outlines=False)))

    def eye_children(elem):
        eyes = [c for c in elem["children"] if str(c.get("class", "")).startswith("eye ")]
        return [len(e["children"]) for e in eyes]

    assert eye_children(with_outline) == [3, 3]
    assert eye_children(without) == [2, 2]


def test_feature_dispatch_tags():
    geometry = build_figure(ParameterSet(hair=True, eyelashes=True))
    tags = {type(f).__name__: render_feature(f, geometry.params, "k", None)["tag"] for f in geometry.features}
    assert tags == {
        "FringeFeature": "g",
        "EyeFeature": "g",
        "EyebrowFeature": "g",
        "EyelashesFeature": "path",
        "MouthFeature": "path",
        "NoseFeature": "path",
    }


def test_unknown_feature_rejected():
    with pytest.raises(TypeError):
        render_feature(object(), ParameterSet(), "k", None)


def test_instance_transform_applied():
    panel = ComicPanel.model_validate(PANEL_WIRE)
    elem = render_figure(build_figure(), panel.characters[1])
    assert elem["transform"].startswith("translate(75, 0) scale(-0.8, 0.8)")


def test_comic_page():
    panels = [ComicPanel.model_validate(PANEL_WIRE), ComicPanel.model_validate({**PANEL_WIRE, "id": "panel-1"})]
    root = _parse(render_comic(panels, 800, 600, title="Page"))
    assert root.get("viewBox") == "0 0 800 600"
    assert len(_groups(root, "panel")) == 2
    dialogues = _groups(root, "dialogue")
    assert len(dialogues) == 2
    # Dialogue groups come after every panel so bubbles stay on top
    children = list(root)
    classes = [c.get("class") for c in children if c.tag == f"{NS}g"]
    assert classes == ["panel", "panel", "dialogue", "dialogue"]
    texts = ["".join(t.itertext()).strip() for t in root.iter(f"{NS}text")]
    assert texts == ["Hello there", "Hello there"]
    assert len(_groups(root, "figure")) == 4


def test_background_image_included():
    panel = ComicPanel.model_validate({**PANEL_WIRE, "backgroundImage": "street.png"})
    root = _parse(render_comic([panel]))
    image = root.find(f".//{NS}image")
    assert image is not None and image.get("href") == "street.png"
