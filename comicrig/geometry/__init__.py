"""Closed-form 2D geometry: paths, silhouettes, eyes and boxes."""

from comicrig.geometry.eyes import EyeStyle, eye_path
from comicrig.geometry.path import SvgPath
from comicrig.geometry.shapes import ShapeKind, ShapeSpec, make_shape, outline_path, width_at

__all__ = [
    "EyeStyle",
    "eye_path",
    "SvgPath",
    "ShapeKind",
    "ShapeSpec",
    "make_shape",
    "outline_path",
    "width_at",
]
