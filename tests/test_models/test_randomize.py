"""Tests for random parameter sets and pose jitter."""

import math

import pytest
from hypothesis import given, settings, strategies as st

from comicrig.models.params import MIRRORED_FIELDS, NEGATED_FIELDS, PARAM_RANGES, ParameterSet
from comicrig.randomize import (
    BODY_COLORS,
    HAIR_COLORS,
    IRIS_COLORS,
    make_rng,
    on_grid,
    pick,
    pose_variation,
    random_parameter_set,
)

seeds = st.integers(0, 2**32 - 1)


def test_same_seed_same_figure():
    assert random_parameter_set(make_rng(7)) == random_parameter_set(make_rng(7))
    assert random_parameter_set(make_rng(7)) != random_parameter_set(make_rng(8))


def test_view_angle_kept_from_base():
    base = ParameterSet(view_angle=25)
    assert random_parameter_set(make_rng(1), base).view_angle == 25


def test_on_grid():
    rng = make_rng(3)
    for _ in range(50):
        value = on_grid(rng, 10, 20, 2.5)
        assert 10 <= value <= 20
        assert (value - 10) / 2.5 == pytest.approx(round((value - 10) / 2.5))
    assert on_grid(rng, 5, 5) == 5


def test_pick_covers_items():
    rng = make_rng(0)
    seen = {pick(rng, ["a", "b", "c"]) for _ in range(100)}
    assert seen == {"a", "b", "c"}


@pytest.mark.property
@settings(max_examples=80, deadline=None)
@given(seed=seeds)
def test_random_figure_is_valid(seed):
    params = random_parameter_set(make_rng(seed))
    for name, rng in PARAM_RANGES.items():
        assert rng.min <= getattr(params, name) <= rng.max, name
    assert params.body_color in BODY_COLORS
    assert params.hair_color in HAIR_COLORS
    assert params.iris_color in IRIS_COLORS
    assert params.body_outlines and params.eye_outlines


@pytest.mark.property
@settings(max_examples=80, deadline=None)
@given(seed=seeds)
def test_random_figure_is_symmetric(seed):
    params = random_parameter_set(make_rng(seed))
    for a, b in MIRRORED_FIELDS.items():
        assert getattr(params, a) == getattr(params, b)
    for a, b in NEGATED_FIELDS.items():
        assert getattr(params, a) == -getattr(params, b)


@pytest.mark.property
@settings(max_examples=80, deadline=None)
@given(seed=seeds)
def test_random_mouth_and_fringe_stay_in_face(seed):
    params = random_parameter_set(make_rng(seed))
    assert abs(params.mouth_bend) <= 380 - 4 * params.mouth_width_ratio

    head_top = 120 - params.head_height / 2
    eye_top = 120 - params.head_height * params.eye_size_ratio / 100
    fringe_px = params.head_height * params.fringe_height_ratio / 100
    assert fringe_px <= max(0.0, eye_top - head_top - 5) + 1e-9


@pytest.mark.property
@settings(max_examples=80, deadline=None)
@given(seed=seeds)
def test_pose_variation_stays_near_base(seed):
    base = ParameterSet()
    varied = pose_variation(base, make_rng(seed))
    assert abs(varied.eyebrow_angle - base.eyebrow_angle) <= 15
    assert -50 <= varied.mouth_bend <= 50
    assert abs(varied.l_arm_angle - base.l_arm_angle) <= 10
    assert abs(varied.r_arm_bend - base.r_arm_bend) <= 20
    assert abs(varied.l_leg_angle - base.l_leg_angle) <= 5
    assert varied.head_width == base.head_width
    assert varied.body_color == base.body_color


def test_pose_variation_reclamps():
    base = ParameterSet(l_leg_angle=45, r_leg_angle=45)
    for seed in range(20):
        varied = pose_variation(base, make_rng(seed))
        assert varied.l_leg_angle <= 45
        assert math.isfinite(varied.mouth_bend)
