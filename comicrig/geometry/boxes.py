"""Leaf-node axis-aligned box helpers. No engine imports.

Boxes are (xmin, ymin, xmax, ymax) tuples, the same layout ``SvgPath.bbox``
returns.
"""

from __future__ import annotations

import numpy as np

Box = tuple[float, float, float, float]


def intersects(a: Box, b: Box) -> bool:
    """Strict overlap test. Boxes that only share an edge do not intersect."""
    return a[0] < b[2] and a[2] > b[0] and a[1] < b[3] and a[3] > b[1]


def pad(box: Box, margin: float) -> Box:
    return (box[0] - margin, box[1] - margin, box[2] + margin, box[3] + margin)


def union(boxes: list[Box]) -> Box | None:
    if not boxes:
        return None
    arr = np.asarray(boxes, dtype=np.float64)
    return (
        float(np.min(arr[:, 0])),
        float(np.min(arr[:, 1])),
        float(np.max(arr[:, 2])),
        float(np.max(arr[:, 3])),
    )
