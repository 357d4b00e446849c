import json
from typing import Any, List

_END = object()


def _key_text(key: Any) -> str:
    # Non-string keys are written the way json.dumps writes them
    return json.dumps(key if isinstance(key, str) else json.dumps(key))


def _open(value: Any, depth: int, parts: List[str], stack: list) -> None:
    if isinstance(value, dict):
        if not value:
            parts.append("{}")
            return
        parts.append("{")
        stack.append([iter(value.items()), "}", depth + 1, True, True])
    elif isinstance(value, (list, tuple)):
        if not value:
            parts.append("[]")
            return
        parts.append("[")
        stack.append([iter(value), "]", depth + 1, True, False])
    else:
        parts.append(json.dumps(value))


def dumps_indented(value: Any, indent: int = 2) -> str:
    """
    Same text as json.dumps(value, indent=indent), built with an explicit
    stack so nesting depth is not limited by the interpreter's recursion limit.
    """
    parts: List[str] = []
    stack: list = []
    _open(value, 0, parts, stack)

    while stack:
        frame = stack[-1]
        entries, closing, depth, first, is_dict = frame
        item = next(entries, _END)
        if item is _END:
            stack.pop()
            parts.append("\n" + " " * (indent * (depth - 1)) + closing)
            continue

        parts.append(("\n" if first else ",\n") + " " * (indent * depth))
        frame[3] = False
        if is_dict:
            key, item = item
            parts.append(_key_text(key) + ": ")
        _open(item, depth, parts, stack)

    return "".join(parts)
