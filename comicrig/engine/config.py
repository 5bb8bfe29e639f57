"""Builder configuration: fixed layout constants and search budgets."""

from __future__ import annotations

from dataclasses import dataclass, field


def _default_depths() -> dict[str, float]:
    # Nominal forward offset of each face feature; larger draws later
    return {
        "fringe": 14.0,
        "eye": 10.0,
        "eyelashes": 11.0,
        "eyebrow": 16.0,
        "mouth": 12.0,
        "nose": 20.0,
    }


@dataclass
class BuildConfig:
    """Tunables for the figure geometry builder."""

    # Local figure frame
    canvas_width: float = 400.0
    canvas_height: float = 700.0
    head_center_y: float = 120.0
    outline_width: float = 4.0

    # View projection
    body_offset_factor: float = 0.1  # of torso width, times sin(view)
    face_turn: float = 0.25  # face shift as fraction of head width at sin(view) = 1
    hair_turn: float = 0.12
    face_foreshorten: float = 0.25  # feature width loss at sin(view) = 1
    eye_perspective: float = 0.2  # near/far eye size difference at sin(view) = 1
    lateral_depth: float = 0.5  # depth change per px of lateral offset at sin(view) = 1
    feature_depths: dict[str, float] = field(default_factory=_default_depths)

    # Junctions
    neck_overlap: float = 15.0  # neck starts this far above the head bottom
    neck_search_fraction: float = 0.3  # of torso height
    pelvis_search_fraction: float = 0.4  # search stops this far below the torso top
    pelvis_search_step: float = 2.0
    pelvis_width_tolerance: float = 1.2
    pelvis_overlap: float = 5.0
    tip_pelvis_overlap: float = 0.4  # of pelvis height, inverted-triangle torsos
    hip_spread: float = 0.35  # of pelvis width

    # Limbs
    leg_max_iterations: int = 90
    leg_angle_cap: float = 45.0
    foot_margin: float = 5.0
    foreshorten_range: float = 90.0  # degrees past 90 for full shrink
    foreshorten_min_scale: float = 0.6

    # Face
    eye_aspect: float = 0.85  # eye rx as a fraction of eye ry
    iris_ratio: float = 0.7
    gaze_falloff: float = 0.6  # of head width
    eyelid_compensation: float = 0.4
    glint_ratio: float = 0.2  # of eye size
    glint_offset: float = 0.3  # of eye radii
    eyebrow_eye_gap: float = 5.0
    mouth_margin: float = 10.0
    hair_margin: float = 5.0
    lash_threshold: float = 95.0  # upper lid coverage that hides lashes
    lash_stroke: float = 1.5
