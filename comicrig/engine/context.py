"""FigureContext: the single mutable state object flowing through all builder stages.

Stages read parameters and earlier results from the context and write their
own results back. ``FigureContext.to_geometry`` freezes the finished state
into a ``FigureGeometry``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from comicrig.engine.config import BuildConfig
from comicrig.engine.features import BodyPart, FigureGeometry, LimbCurve, RenderFeature
from comicrig.geometry.path import Point, SvgPath
from comicrig.geometry.shapes import ShapeSpec
from comicrig.models.params import ParameterSet


@dataclass
class FigureContext:
    """Shared state for one figure build."""

    params: ParameterSet = field(default_factory=ParameterSet)
    view_angle: float = 0.0
    # Gaze target in the figure frame; None keeps pupils centered
    gaze: Point | None = None
    # Mirrored figures keep highlights on the same screen side
    mirrored: bool = False
    config: BuildConfig = field(default_factory=BuildConfig)

    # Projection
    depth_factor: float = 1.0
    view_factor: float = 0.0
    center_x: float = 200.0
    face_center_x: float = 200.0

    # Silhouettes
    head: ShapeSpec | None = None
    torso: ShapeSpec | None = None
    pelvis: ShapeSpec | None = None
    neck_top_y: float = 0.0
    neck_bottom_y: float = 0.0
    neck_width: float = 0.0
    junction_y: float = 0.0

    # Attachments
    shoulders: dict[str, Point] = field(default_factory=dict)
    hips: dict[str, Point] = field(default_factory=dict)

    # Limbs, keyed "l_arm", "r_arm", "l_leg", "r_leg"
    limbs: dict[str, LimbCurve] = field(default_factory=dict)
    hand_sizes: dict[str, float] = field(default_factory=dict)
    leg_angles: tuple[float, float] = (0.0, 0.0)
    leg_angle_history: list[tuple[float, float]] = field(default_factory=list)
    foot_paths: dict[str, SvgPath] = field(default_factory=dict)
    foot_ground_y: float = 0.0
    limb_order: list[str] = field(default_factory=list)

    # Face
    eye_y: float = 0.0
    eye_ry: float = 0.0
    mouth: Point = (200.0, 0.0)
    back_hair: SvgPath | None = None
    features: list[RenderFeature] = field(default_factory=list)

    # Composition
    parts: list[BodyPart] = field(default_factory=list)

    # Bookkeeping
    completed_stages: set[str] = field(default_factory=set)
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def head_top_y(self) -> float:
        return self.head.top_y if self.head else self.config.head_center_y

    @property
    def head_width(self) -> float:
        return self.params.head_width

    def to_geometry(self) -> FigureGeometry:
        head = self.head
        head_box = (
            (head.center_x - head.width / 2, head.top_y, head.center_x + head.width / 2, head.bottom_y)
            if head
            else (0.0, 0.0, 0.0, 0.0)
        )
        return FigureGeometry(
            params=self.params,
            view_angle=self.view_angle,
            depth_factor=self.depth_factor,
            view_factor=self.view_factor,
            center_x=self.center_x,
            back_hair=self.back_hair,
            parts=list(self.parts),
            features=list(self.features),
            limb_order=list(self.limb_order),
            head_box=head_box,
            mouth=self.mouth,
            head_top_y=self.head_top_y,
            torso_top_y=self.torso.top_y if self.torso else 0.0,
            torso_bottom_y=self.torso.bottom_y if self.torso else 0.0,
            foot_ground_y=self.foot_ground_y,
            leg_angles=self.leg_angles,
            leg_angle_history=list(self.leg_angle_history),
        )
