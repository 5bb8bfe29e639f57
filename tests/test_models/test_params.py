"""Tests for the wire models."""

import pytest
from pydantic import ValidationError

from comicrig.geometry.eyes import EyeStyle
from comicrig.models import (
    PARAM_RANGES,
    ComicPanel,
    FigureInstance,
    HeadShape,
    ParameterSet,
    PanelScript,
    ShotType,
    apply_symmetry,
)
from comicrig.models.params import MIRRORED_FIELDS, NEGATED_FIELDS, field_name
from tests.conftest import PANEL_WIRE


def test_defaults_inside_ranges(default_params):
    for name, rng in PARAM_RANGES.items():
        value = getattr(default_params, name)
        assert rng.min <= value <= rng.max, name


def test_out_of_range_values_are_clamped():
    params = ParameterSet(head_width=500, torso_height=-10, view_angle=80)
    assert params.head_width == 130
    assert params.torso_height == 80
    assert params.view_angle == 60


def test_camel_case_aliases():
    params = ParameterSet.model_validate({"headWidth": 120, "lArmAngle": 45, "eyeStyle": "blocky"})
    assert params.head_width == 120
    assert params.l_arm_angle == 45
    assert params.eye_style == EyeStyle.BLOCKY
    dumped = params.model_dump(by_alias=True)
    assert dumped["headWidth"] == 120
    assert "head_width" not in dumped


def test_camel_case_values_are_clamped_too():
    assert ParameterSet.model_validate({"headWidth": 9999}).head_width == 130


def test_nan_falls_back_to_default():
    assert ParameterSet(head_width=float("nan")).head_width == 95


def test_numeric_strings_are_clamped():
    params = ParameterSet.model_validate({"torsoHeight": "-50", "headWidth": "9999", "eyelashCount": "4.6"})
    assert params.torso_height == PARAM_RANGES["torso_height"].min
    assert params.head_width == 130
    assert params.eyelash_count == 5


def test_unreadable_values_fall_back_to_default():
    params = ParameterSet.model_validate({"headWidth": "wide", "torsoHeight": None, "neckHeight": True})
    assert params.head_width == 95
    assert params.torso_height == ParameterSet().torso_height
    assert params.neck_height == ParameterSet().neck_height


def test_unknown_enum_falls_back_to_default():
    params = ParameterSet.model_validate({"headShape": "hexagon", "eye_style": "anime"})
    assert params.head_shape == HeadShape.ELLIPSE
    assert params.eye_style == EyeStyle.REALISTIC


def test_integer_fields_round():
    assert ParameterSet(eyelash_count=4.6).eyelash_count == 5
    assert ParameterSet(eyelash_count=99).eyelash_count == 8


def test_parameter_sets_are_frozen(default_params):
    with pytest.raises(ValidationError):
        default_params.head_width = 100


def test_with_changes_reclamps(default_params):
    changed = default_params.with_changes(headWidth=10, mouth_bend=25)
    assert changed.head_width == 50
    assert changed.mouth_bend == 25
    assert default_params.head_width == 95


def test_field_name():
    assert field_name("lArmAngle") == "l_arm_angle"
    assert field_name("l_arm_angle") == "l_arm_angle"
    with pytest.raises(ValueError):
        field_name("tailLength")


def test_mirrored_pairs_copy_value(default_params):
    params = apply_symmetry(default_params, "rArmAngle", 70)
    assert params.l_arm_angle == params.r_arm_angle == 70


def test_bend_pairs_negate(default_params):
    params = apply_symmetry(default_params, "l_leg_bend", 40)
    assert params.l_leg_bend == 40
    assert params.r_leg_bend == -40


def test_unpaired_field_set_alone(default_params):
    params = apply_symmetry(default_params, "head_width", 80)
    assert params.head_width == 80
    assert params.model_dump(exclude={"head_width"}) == default_params.model_dump(exclude={"head_width"})


def test_symmetry_tables_are_two_way():
    for a, b in MIRRORED_FIELDS.items():
        assert MIRRORED_FIELDS[b] == a
    for a, b in NEGATED_FIELDS.items():
        assert NEGATED_FIELDS[b] == a


def test_figure_instance_wire_form():
    inst = FigureInstance.model_validate(
        {"params": {"headWidth": 100}, "x": 10, "scale": 0, "zIndex": 3, "isFlipped": True, "lookAt": {"x": 5, "y": 6}}
    )
    assert inst.params.head_width == 100
    assert inst.scale == 0.05
    assert inst.z_index == 3
    assert inst.is_flipped
    assert inst.look_at.as_tuple() == (5, 6)
    assert inst.model_dump(by_alias=True)["isFlipped"] is True


def test_figure_instance_scale_string_is_clamped():
    assert FigureInstance.model_validate({"scale": "-2"}).scale == 0.05
    assert FigureInstance.model_validate({"scale": "1.5"}).scale == 1.5


def test_comic_panel_wire_form():
    panel = ComicPanel.model_validate(PANEL_WIRE)
    assert panel.shot_type == ShotType.FULL
    assert panel.characters[0].params.head_width == 95
    assert panel.characters[1].is_flipped
    assert panel.dialogues[0].character_id == 0
    assert panel.layout.to_pixels(1000, 800) == pytest.approx((25, 20, 950, 760))
    assert panel.layout.area == pytest.approx(95 * 95)


def test_unknown_shot_type_means_full_shot():
    panel = ComicPanel.model_validate({**PANEL_WIRE, "shotType": "dutch-angle"})
    assert panel.shot_type == ShotType.FULL


def test_script_defaults_to_medium_shot():
    assert PanelScript().shot_type == ShotType.MEDIUM
    assert PanelScript(shot_type="close-up").shot_type == ShotType.CLOSE_UP
    assert PanelScript.model_validate({"shotType": "wide"}).shot_type == ShotType.FULL
