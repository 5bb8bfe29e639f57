"""Write SVG markup from element dicts.

An element is ``{"tag": ..., <attributes>..., "children": [...], "text": ...}``.
Attribute keys are SVG attribute names; ``None`` values are dropped.
"""

from __future__ import annotations

from html import escape
from typing import Any

_RESERVED = ("tag", "children", "text")


def _attr_str(elem: dict[str, Any]) -> str:
    attrs = {k: v for k, v in elem.items() if k not in _RESERVED and v is not None}
    return " ".join(f'{k}="{escape(str(v), quote=True)}"' for k, v in attrs.items())


def serialize_element(elem: dict[str, Any], depth: int = 1) -> list[str]:
    indent = "  " * depth
    tag = elem.get("tag", "path")
    attr_str = _attr_str(elem)
    open_tag = f"<{tag} {attr_str}" if attr_str else f"<{tag}"
    children = elem.get("children") or []
    text = elem.get("text")

    if not children and text is None:
        return [f"{indent}{open_tag} />"]
    if not children:
        return [f"{indent}{open_tag}>{escape(str(text), quote=False)}</{tag}>"]

    lines = [f"{indent}{open_tag}>"]
    for child in children:
        lines.extend(serialize_element(child, depth + 1))
    lines.append(f"{indent}</{tag}>")
    return lines


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float = 400.0,
    canvas_h: float = 700.0,
    title: str = "",
    description: str = "",
    styles: dict[str, str] | None = None,
    defs: list[dict[str, Any]] | None = None,
) -> str:
    """Generate SVG markup from element definitions."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="0 0 {canvas_w:g} {canvas_h:g}" width="{canvas_w:g}" height="{canvas_h:g}"'
        f' xmlns="http://www.w3.org/2000/svg" role="img">',
    ]

    if title:
        lines.append(f"  <title>{escape(title, quote=False)}</title>")
    if description:
        lines.append(f"  <desc>{escape(description, quote=False)}</desc>")

    if styles:
        lines.append("  <style>")
        for selector, props in styles.items():
            lines.append(f"    {selector} {{ {props} }}")
        lines.append("  </style>")

    if defs:
        lines.append("  <defs>")
        for elem in defs:
            lines.extend(serialize_element(elem, 2))
        lines.append("  </defs>")

    for elem in elements:
        lines.extend(serialize_element(elem))

    lines.append("</svg>")
    return "\n".join(lines)
