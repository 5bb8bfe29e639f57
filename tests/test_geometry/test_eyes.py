"""Tests for eye outline formulas."""

import numpy as np
import pytest
from hypothesis import assume, given, settings, strategies as st

from comicrig.geometry.eyes import EyeStyle, eye_path, is_closed, lid_heights
from comicrig.geometry.path import ArcTo, LineTo, QuadTo
from comicrig.geometry.shapes import ellipse_path

CENTER = (0.0, 0.0)
RX, RY = 40.0, 50.0
BLOCKY_STYLES = [EyeStyle.BLOCKY, EyeStyle.CIRCLE]


def test_lid_heights():
    assert lid_heights(0, 50, 0, 0) == (-50, 50)
    assert lid_heights(0, 50, 50, 50) == (0, 0)
    assert lid_heights(0, 50, 150, -10) == (50, 50)


def test_is_closed_clamps_coverages():
    assert is_closed(60, 40)
    assert not is_closed(60, 39)
    assert is_closed(200, 0)
    assert not is_closed(-50, 99)


@pytest.mark.property
@settings(max_examples=150, deadline=None)
@given(
    style=st.sampled_from(list(EyeStyle)),
    upper=st.integers(0, 100),
    lower=st.integers(0, 100),
)
def test_closed_eye_is_single_segment(style, upper, lower):
    assume(upper + lower >= 100)
    path = eye_path(style, CENTER, RX, RY, upper, lower)
    assert len(path.commands) == 3
    assert isinstance(path.commands[1], LineTo)
    assert path.closed
    (x0, y0), (x1, y1) = path.start, path.commands[1].to
    assert y0 == y1
    assert x0 <= x1


def test_open_realistic_eye_uses_quadratic_lids():
    path = eye_path(EyeStyle.REALISTIC, CENTER, RX, RY, 20, 10)
    quads = [c for c in path.commands if isinstance(c, QuadTo)]
    assert len(quads) == 2
    assert path.start == (-RX, 0)
    assert quads[0].control == (0, -30)
    assert quads[1].control == (0, 40)


@pytest.mark.parametrize("style", BLOCKY_STYLES)
@pytest.mark.parametrize(
    "upper,lower",
    [(0, 0), (30, 20), (0, 60), (60, 0), (50, 49), (0.05, 0.05)],
)
def test_blocky_eye_is_simple_and_inside_rim(style, upper, lower):
    path = eye_path(style, CENTER, RX, RY, upper, lower)
    assert path.closed
    poly = path.to_polygon()
    assert poly is not None
    assert poly.is_valid
    assert poly.area > 0

    r = min(RX, RY) if style == EyeStyle.CIRCLE else None
    rim = ellipse_path(0, 0, r or RX, r or RY).to_polygon().buffer(1.0)
    assert rim.contains(poly)


def test_blocky_lids_are_straight_above_threshold():
    path = eye_path(EyeStyle.BLOCKY, CENTER, RX, RY, 30, 20)
    kinds = [type(c) for c in path.commands[1:-1]]
    assert kinds == [LineTo, ArcTo, LineTo, ArcTo]
    assert all(c.sweep for c in path.commands if isinstance(c, ArcTo))


def test_wide_open_blocky_eye_follows_rim():
    path = eye_path(EyeStyle.BLOCKY, CENTER, RX, RY, 0, 0)
    assert all(isinstance(c, ArcTo) for c in path.commands[1:-1])
    xmin, ymin, xmax, ymax = path.bbox()
    assert (xmin, ymin, xmax, ymax) == pytest.approx((-RX, -RY, RX, RY), abs=0.5)


def test_blocky_bottom_arc_runs_along_rim():
    path = eye_path(EyeStyle.BLOCKY, CENTER, RX, RY, 30, 0.05)
    bottom = path.commands[3]
    assert isinstance(bottom, ArcTo) and bottom.sweep
    assert path.bbox()[3] == pytest.approx(RY, abs=1e-6)
    pts = path.sample(64)
    lower = pts[pts[:, 1] > 0]
    assert np.allclose((lower[:, 0] / RX) ** 2 + (lower[:, 1] / RY) ** 2, 1.0, atol=1e-3)


def test_circle_style_uses_smaller_radius():
    xmin, ymin, xmax, ymax = eye_path(EyeStyle.CIRCLE, CENTER, RX, RY, 0, 0).bbox()
    assert xmax - xmin == pytest.approx(2 * RX, abs=0.5)
    assert ymax - ymin == pytest.approx(2 * RX, abs=0.5)


def test_style_accepts_strings():
    assert eye_path("blocky", CENTER, RX, RY, 10, 10).d() == eye_path(EyeStyle.BLOCKY, CENTER, RX, RY, 10, 10).d()
    with pytest.raises(ValueError):
        eye_path("anime", CENTER, RX, RY, 10, 10)
