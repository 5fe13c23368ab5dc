"""Escape-by-default HTML string building.

Every dynamic value is either escaped text or raw markup, and the choice is
made explicitly at the call site. Raw markup must come from another builder
in this package or from a fixed literal, never from message fields.
"""

from __future__ import annotations

import html
from enum import Enum
from typing import Iterable, List, Sequence, Union

RawMarkup = Union[str, Iterable[str]]


class Mode(Enum):
    ESCAPED = "escaped"
    RAW = "raw"


def escape(value: object) -> str:
    """Escape ``& < > " '`` for use in text and attribute values."""

    return html.escape(str(value), quote=True)


def _join_raw(value: RawMarkup) -> str:
    if isinstance(value, str):
        return value
    return "".join(value)


def build(
    literal_parts: Sequence[str],
    dynamic_parts: Sequence[object],
    modes: Sequence[Mode],
) -> str:
    """Interleave literal markup with dynamic parts, escaping per mode."""

    if len(literal_parts) != len(dynamic_parts) + 1:
        raise ValueError("literal_parts must have exactly one more item than dynamic_parts")
    if len(modes) != len(dynamic_parts):
        raise ValueError("modes must have one entry per dynamic part")

    out: List[str] = [literal_parts[0]]
    for value, mode, literal in zip(dynamic_parts, modes, literal_parts[1:]):
        if mode is Mode.RAW:
            out.append(_join_raw(value))  # type: ignore[arg-type]
        elif mode is Mode.ESCAPED:
            out.append(escape(value))
        else:
            raise ValueError(f"Unsupported interpolation mode: {mode}")
        out.append(literal)
    return "".join(out)


class HtmlBuilder:
    """Accumulate literal markup, escaped text and raw markup in order."""

    def __init__(self) -> None:
        self._literals: List[str] = [""]
        self._values: List[object] = []
        self._modes: List[Mode] = []

    def literal(self, markup: str) -> "HtmlBuilder":
        self._literals[-1] += markup
        return self

    def text(self, value: object) -> "HtmlBuilder":
        return self._push(value, Mode.ESCAPED)

    def raw(self, markup: RawMarkup) -> "HtmlBuilder":
        if not isinstance(markup, str):
            markup = list(markup)
        return self._push(markup, Mode.RAW)

    def _push(self, value: object, mode: Mode) -> "HtmlBuilder":
        self._values.append(value)
        self._modes.append(mode)
        self._literals.append("")
        return self

    def build(self) -> str:
        return build(self._literals, self._values, self._modes)
