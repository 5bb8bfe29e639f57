"""End-to-end tests for the figure geometry builder."""

import math

import pytest
from hypothesis import given, settings, strategies as st
from shapely.geometry import Point

from comicrig.engine import FigureContext, FigurePipeline, Side, build_figure, figure_extents, foot_ground_y
from comicrig.engine.features import EyebrowFeature, EyeFeature, FringeFeature, MouthFeature
from comicrig.geometry.shapes import outline_path
from comicrig.models.params import HeadShape, ParameterSet, TorsoShape
from comicrig.randomize import make_rng, random_parameter_set
from tests.conftest import HEAD_CENTER_X, HEAD_CENTER_Y


def _features(geometry, kind):
    return [f for f in geometry.features if isinstance(f, kind)]


def test_full_pipeline_completes_every_stage():
    ctx = FigurePipeline().run(FigureContext())
    assert len(ctx.completed_stages) == 12
    assert all(t >= 0 for t in ctx.timings.values())


def test_default_figure_layers(default_params):
    geometry = build_figure(default_params)
    names = [p.name for p in geometry.parts]
    assert names[-4:] == ["neck", "torso", "pelvis", "head"]
    assert names.index("l_leg") < names.index("neck")
    assert geometry.back_hair is None
    assert geometry.head_box == pytest.approx((152.5, 65, 247.5, 175))
    assert _features(geometry, FringeFeature) == []


@pytest.mark.parametrize("head", [HeadShape.CIRCLE, HeadShape.TRIANGLE, HeadShape.ELLIPSE])
def test_front_view_is_symmetric(head):
    geometry = build_figure(ParameterSet(head_shape=head))
    eyes = {e.side: e for e in _features(geometry, EyeFeature)}
    left, right = eyes[Side.LEFT], eyes[Side.RIGHT]
    assert left.center[0] + right.center[0] == pytest.approx(2 * HEAD_CENTER_X)
    assert left.center[1] == right.center[1] == HEAD_CENTER_Y
    assert left.rx == pytest.approx(right.rx)

    brows = {b.side: b for b in _features(geometry, EyebrowFeature)}
    assert brows[Side.LEFT].center[0] + brows[Side.RIGHT].center[0] == pytest.approx(2 * HEAD_CENTER_X)
    assert brows[Side.LEFT].angle == -brows[Side.RIGHT].angle
    assert brows[Side.LEFT].center[1] < left.center[1] - left.ry


def test_view_angle_is_clamped():
    assert build_figure(view_angle=90).view_angle == 60
    assert build_figure(view_angle=-75).view_angle == -60


@pytest.mark.parametrize("angle,first,limbs", [
    (30, Side.RIGHT, ["r_leg", "l_leg", "r_arm", "l_arm"]),
    (-30, Side.LEFT, ["l_leg", "r_leg", "l_arm", "r_arm"]),
])
def test_far_side_draws_first(angle, first, limbs):
    geometry = build_figure(view_angle=angle)
    eyes = _features(geometry, EyeFeature)
    assert eyes[0].side == first
    assert geometry.limb_order == limbs
    depths = [f.depth for f in geometry.features]
    assert depths == sorted(depths)


def test_turning_shifts_face_and_shrinks_far_eye():
    geometry = build_figure(view_angle=30)
    eyes = {e.side: e for e in _features(geometry, EyeFeature)}
    assert eyes[Side.RIGHT].rx < eyes[Side.LEFT].rx
    mouth = _features(geometry, MouthFeature)[0]
    assert mouth.center[0] > geometry.center_x > HEAD_CENTER_X


def test_crossed_legs_are_spread():
    geometry = build_figure(ParameterSet(l_leg_angle=-45, r_leg_angle=-45))
    assert len(geometry.leg_angle_history) > 1
    assert geometry.leg_angle_history[0] == (-45, -45)
    assert geometry.leg_angles == geometry.leg_angle_history[-1]
    assert geometry.leg_angles[0] > -45


def test_default_legs_untouched(default_params):
    geometry = build_figure(default_params)
    assert geometry.leg_angle_history == [(10, 10)]


@pytest.mark.parametrize("torso", list(TorsoShape))
def test_shoulders_start_inside_torso(torso):
    ctx = FigurePipeline().run(FigureContext(params=ParameterSet(torso_shape=torso)), until="G1.02")
    outline = outline_path(ctx.torso).to_polygon()
    for side in ("l", "r"):
        assert outline.contains(Point(ctx.shoulders[side]))


def test_foot_ground_matches_full_build(default_params):
    assert foot_ground_y(default_params) == pytest.approx(build_figure(default_params).foot_ground_y)


def test_figure_extents(default_params):
    extents = figure_extents(default_params)
    assert extents.head_top_y == pytest.approx(65)
    assert extents.head_bottom_y == pytest.approx(175)
    assert extents.half_width == pytest.approx(60)
    assert extents.head_top_y < extents.torso_top_y < extents.torso_bottom_y < extents.foot_ground_y


def test_mouth_inside_head(default_params):
    geometry = build_figure(default_params)
    head = geometry.part("head").path.to_polygon()
    assert head.contains(Point(geometry.mouth))
    mouth = _features(geometry, MouthFeature)[0]
    x0, _, x1, _ = mouth.path.bbox()
    y = mouth.center[1]
    assert head.contains(Point(x0 + 1, y)) and head.contains(Point(x1 - 1, y))


def test_gaze_moves_pupils_toward_target():
    geometry = build_figure(gaze=(9999, HEAD_CENTER_Y))
    for eye in _features(geometry, EyeFeature):
        assert eye.iris_center[0] > eye.center[0]
        assert eye.iris_center[0] + eye.iris_rx <= eye.center[0] + eye.rx + 1e-6


def test_mirrored_glint_switches_side():
    plain = build_figure()
    mirrored = build_figure(mirrored=True)
    eye, eye_m = _features(plain, EyeFeature)[0], _features(mirrored, EyeFeature)[0]
    assert eye.glint_center[0] > eye.center[0]
    assert eye_m.glint_center[0] < eye_m.center[0]


def test_hair_adds_back_hair_and_fringe():
    geometry = build_figure(ParameterSet(hair=True))
    assert geometry.back_hair is not None
    fringe = _features(geometry, FringeFeature)
    assert len(fringe) == 1
    eye = _features(geometry, EyeFeature)[0]
    assert fringe[0].path.bbox()[3] <= eye.center[1] - eye.ry


def test_closed_eyes_hide_lashes():
    geometry = build_figure(ParameterSet(eyelashes=True, upper_eyelid_coverage=100))
    kinds = {type(f).__name__ for f in geometry.features}
    assert "EyelashesFeature" not in kinds


@pytest.mark.property
@settings(max_examples=40, deadline=None)
@given(seed=st.integers(0, 2**32 - 1), view=st.floats(-60, 60))
def test_random_figures_are_finite(seed, view):
    params = random_parameter_set(make_rng(seed))
    geometry = build_figure(params, view_angle=view)
    for part in geometry.parts:
        assert "nan" not in part.path.d()
        assert "inf" not in part.path.d()
    assert math.isfinite(geometry.foot_ground_y)
    assert all(math.isfinite(f.depth) for f in geometry.features)


@pytest.mark.parametrize("torso", list(TorsoShape))
def test_pelvis_keeps_configured_height(torso):
    params = ParameterSet(torso_shape=torso, pelvis_height=25)
    ctx = FigurePipeline().run(FigureContext(params=params), until="G1.01")
    assert ctx.pelvis.height == pytest.approx(25)
    assert ctx.pelvis.top_y < ctx.torso.bottom_y


def test_pelvis_over_inverted_triangle_tip():
    params = ParameterSet(torso_shape=TorsoShape.INVERTED_TRIANGLE, pelvis_height=25, pelvis_width_ratio=90)
    ctx = FigurePipeline().run(FigureContext(params=params), until="G1.01")
    assert ctx.junction_y == pytest.approx(ctx.torso.bottom_y)
    assert ctx.pelvis.top_y == pytest.approx(ctx.torso.bottom_y - 10)
    assert ctx.pelvis.width == pytest.approx(ctx.torso.width * 0.9)
