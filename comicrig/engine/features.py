"""Builder outputs: renderable face features, body parts and the finished geometry.

Face features are a closed set of variants, each carrying its own draw data
and a depth key. They are sorted by depth before rendering and never stored.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from comicrig.geometry.boxes import Box, union
from comicrig.geometry.path import Point, SvgPath
from comicrig.models.params import ParameterSet


class Side(str, enum.Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def sign(self) -> int:
        return -1 if self == Side.LEFT else 1


@dataclass(frozen=True)
class FringeFeature:
    path: SvgPath
    depth: float = 0.0


@dataclass(frozen=True)
class EyeFeature:
    side: Side
    center: Point
    rx: float
    ry: float
    outline: SvgPath
    iris_center: Point
    iris_rx: float
    iris_ry: float
    pupil_rx: float
    pupil_ry: float
    glint_center: Point | None = None
    glint_radius: float = 0.0
    depth: float = 0.0


@dataclass(frozen=True)
class EyebrowFeature:
    side: Side
    center: Point
    width: float
    height: float
    angle: float  # degrees, positive turns clockwise on screen
    depth: float = 0.0


@dataclass(frozen=True)
class EyelashesFeature:
    side: Side
    strokes: tuple[tuple[Point, Point], ...]
    stroke_width: float = 1.5
    depth: float = 0.0


@dataclass(frozen=True)
class MouthFeature:
    path: SvgPath
    center: Point
    width: float
    depth: float = 0.0


@dataclass(frozen=True)
class NoseFeature:
    path: SvgPath
    tip: Point
    depth: float = 0.0


RenderFeature = (
    FringeFeature | EyeFeature | EyebrowFeature | EyelashesFeature | MouthFeature | NoseFeature
)


@dataclass(frozen=True)
class LimbCurve:
    """Quadratic limb from attachment point to end point."""

    start: Point
    control: Point
    end: Point
    width: float

    @property
    def path(self) -> SvgPath:
        return SvgPath().move_to(*self.start).quad_to(*self.control, *self.end)


@dataclass(frozen=True)
class BodyPart:
    """One body layer. ``stroke_width`` > 0 means the path is drawn as a thick stroke."""

    name: str
    path: SvgPath
    stroke_width: float = 0.0

    def bbox(self) -> Box:
        x0, y0, x1, y1 = self.path.bbox()
        pad = self.stroke_width / 2
        return (x0 - pad, y0 - pad, x1 + pad, y1 + pad)


@dataclass
class FigureGeometry:
    """Absolute coordinates for one figure in its local 400x700 frame."""

    params: ParameterSet
    view_angle: float
    depth_factor: float
    view_factor: float
    center_x: float
    back_hair: SvgPath | None
    parts: list[BodyPart]
    features: list[RenderFeature]
    limb_order: list[str]
    head_box: Box
    mouth: Point
    head_top_y: float
    torso_top_y: float
    torso_bottom_y: float
    foot_ground_y: float
    leg_angles: tuple[float, float]
    leg_angle_history: list[tuple[float, float]] = field(default_factory=list)

    def part(self, name: str) -> BodyPart:
        for p in self.parts:
            if p.name == name:
                return p
        raise KeyError(name)

    def bbox(self) -> Box:
        boxes = [p.bbox() for p in self.parts]
        if self.back_hair is not None:
            boxes.append(self.back_hair.bbox())
        return union(boxes) or (0.0, 0.0, 0.0, 0.0)
