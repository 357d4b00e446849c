from typing import Any, List, Mapping, Optional, Tuple

from models import BoundingBox, Color, Fill, MinimalNode, NodeStyle

TEXT_NODE_TYPE = "TEXT"
TEXT_SUMMARY_LENGTH = 100
ELLIPSIS = "..."


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def summarize_text(text: str, max_length: int = TEXT_SUMMARY_LENGTH) -> str:
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text


# ===============================
# COLOR / FILLS
# ===============================

def _normalize_color(color: Any) -> Optional[Color]:
    if not isinstance(color, Mapping):
        return None
    channels = {k: color.get(k) for k in ("r", "g", "b", "a")}
    if not all(_is_number(v) for v in channels.values()):
        return None
    return channels


def _normalize_fill(fill: Any) -> Optional[Fill]:
    if not isinstance(fill, Mapping) or not isinstance(fill.get("type"), str):
        return None

    out: Fill = {"type": fill["type"]}
    color = _normalize_color(fill.get("color"))
    if color:
        out["color"] = color
    return out


# ===============================
# BOX / STYLE
# ===============================

def _normalize_box(box: Any) -> Optional[BoundingBox]:
    if not isinstance(box, Mapping):
        return None
    out = {k: box.get(k) for k in ("x", "y", "width", "height")}
    if not all(_is_number(v) for v in out.values()):
        return None
    return out


def _normalize_line_height(line_height: Any) -> Optional[float]:
    # Either a bare number or {"value": <number>, "unit": ...}
    if _is_number(line_height):
        return line_height
    if isinstance(line_height, Mapping) and _is_number(line_height.get("value")):
        return line_height["value"]
    return None


def _normalize_style(style: Any) -> Optional[NodeStyle]:
    if not isinstance(style, Mapping):
        return None

    out: NodeStyle = {}

    for key in ("fontFamily", "textAlignHorizontal"):
        if isinstance(style.get(key), str):
            out[key] = style[key]

    for key in ("fontSize", "fontWeight", "letterSpacing"):
        if _is_number(style.get(key)):
            out[key] = style[key]

    line_height = _normalize_line_height(style.get("lineHeight"))
    if line_height is not None:
        out["lineHeight"] = line_height

    fills = style.get("fills")
    if isinstance(fills, list):
        kept = [f for f in (_normalize_fill(fill) for fill in fills) if f is not None]
        if kept:
            out["fills"] = kept

    return out or None


# ===============================
# NODE
# ===============================

def _project(raw: Any) -> MinimalNode:
    """Everything a node keeps except its children."""
    if not isinstance(raw, Mapping):
        raise TypeError(f"expected a node object, got {type(raw).__name__}")

    out: MinimalNode = {
        "id": raw.get("id"),
        "name": raw.get("name"),
        "type": raw.get("type"),
    }

    box = _normalize_box(raw.get("absoluteBoundingBox"))
    if box:
        out["absoluteBoundingBox"] = box

    style = _normalize_style(raw.get("style"))
    if style:
        out["style"] = style

    characters = raw.get("characters")
    if raw.get("type") == TEXT_NODE_TYPE and isinstance(characters, str):
        out["characters"] = summarize_text(characters)

    return out


def normalize_node(raw: Mapping[str, Any]) -> MinimalNode:
    """
    Project a raw Figma node tree onto MinimalNode.

    Walks the tree with an explicit stack instead of recursion, so depth is
    bounded only by memory. Unknown fields are dropped; malformed optional
    fields are omitted rather than raised on.
    """
    root = _project(raw)

    pending: List[Tuple[Mapping[str, Any], MinimalNode]] = [(raw, root)]
    while pending:
        source, target = pending.pop()
        children = source.get("children")
        if not isinstance(children, list):
            continue

        projected = [_project(child) for child in children]
        target["children"] = projected
        pending.extend(zip(children, projected))

    return root


def normalize_document(file: Mapping[str, Any]) -> dict:
    """Whole-file response -> file metadata plus normalized document root."""
    return {
        "name": file.get("name"),
        "version": file.get("version"),
        "lastModified": file.get("lastModified"),
        "thumbnailUrl": file.get("thumbnailUrl"),
        "document": normalize_node(file.get("document") or {}),
    }
