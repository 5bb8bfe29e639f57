"""Tests for dialogue bubble sizing and placement."""

import pytest

from comicrig.comic.bubbles import (
    BubblePlacer,
    bubble_path,
    candidate_rects,
    font_size_for,
    measure_text,
    place_bubble,
    wrap_words,
)
from comicrig.config import Settings
from comicrig.geometry.boxes import intersects, pad
from tests.conftest import LONG_LINE, SHORT_LINE

HEAD = (250.0, 250.0, 350.0, 350.0)
MOUTH = (300.0, 320.0)


@pytest.fixture
def config():
    return Settings()


@pytest.mark.parametrize("panel_w,short,long", [(600, 24, 10), (400, 20, 10)])
def test_font_shrinks_with_length(config, panel_w, short, long):
    assert font_size_for(SHORT_LINE, panel_w, config) == pytest.approx(short)
    assert font_size_for(LONG_LINE, panel_w, config) == pytest.approx(long)


def test_wrap_respects_width():
    lines = wrap_words(LONG_LINE, 10, 120)
    assert len(lines) > 1
    assert " ".join(lines) == LONG_LINE
    assert all(len(line) * 6 <= 120 for line in lines)


def test_wrap_keeps_overlong_word():
    assert wrap_words("supercalifragilistic", 20, 10) == ["supercalifragilistic"]
    assert wrap_words("   ", 20, 100) == [""]


def test_measure_caps_width(config):
    metrics = measure_text(LONG_LINE * 3, 300, config)
    assert metrics.width <= 300 * 0.8
    assert metrics.height == pytest.approx(len(metrics.lines) * metrics.line_height + 2 * metrics.padding)


def test_first_candidates_clear_head():
    above, right, *_ = candidate_rects(HEAD, 80, 40)
    assert not intersects(above, HEAD)
    assert not intersects(right, HEAD)
    assert above[3] <= HEAD[1]
    assert right[0] >= HEAD[2]


def test_open_panel_uses_above(config):
    placement = place_bubble(SHORT_LINE, HEAD, MOUTH, [], [], 600, 600, config)
    assert placement.anchor == "above"
    assert not placement.collided
    x0, y0, x1, y1 = placement.rect
    assert 0 <= x0 < x1 <= 600 and 0 <= y0 < y1 <= 600
    assert placement.lines == (SHORT_LINE,)


def test_second_bubble_clears_first(config):
    placer = BubblePlacer(600, 600, head_boxes=[HEAD], config=config)
    first = placer.place(SHORT_LINE, HEAD, MOUTH)
    second = placer.place("Another thing to say", HEAD, MOUTH)
    assert first.anchor == "above"
    assert second.anchor != "above"
    assert not intersects(second.rect, pad(first.rect, config.bubble_margin))
    assert not intersects(second.rect, HEAD)
    assert placer.placed_boxes == [first.rect, second.rect]


def test_crowded_panel_falls_back_to_first_anchor(config):
    head = (0.0, 0.0, 600.0, 600.0)
    placement = place_bubble(SHORT_LINE, head, (300, 300), [], [], 600, 600, config)
    assert placement.collided
    assert placement.anchor == "above"


def test_tail_points_at_mouth_with_capped_length():
    path, tip = bubble_path((100, 100, 200, 150), (150, 400))
    assert tip == pytest.approx((150, 210))
    assert path.closed
    poly = path.to_polygon()
    assert poly.is_valid
    assert poly.bounds[3] == pytest.approx(210)


def test_tail_on_side_edge():
    _, tip = bubble_path((100, 100, 200, 150), (400, 125))
    assert tip == pytest.approx((260, 125))
    _, tip = bubble_path((100, 100, 200, 150), (120, 0))
    assert tip[1] < 100


def test_target_inside_bubble_points_straight_out():
    _, tip = bubble_path((100, 100, 200, 150), (150, 125))
    assert tip == pytest.approx((150, 170))


def test_text_origin(config):
    placement = place_bubble(SHORT_LINE, HEAD, MOUTH, [], [], 600, 600, config)
    x, y = placement.text_origin
    assert x == pytest.approx(placement.rect[0] + placement.padding)
    assert y == pytest.approx(placement.rect[1] + placement.padding + placement.font_size)
