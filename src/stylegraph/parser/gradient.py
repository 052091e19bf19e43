"""Lark-based parser for CSS gradient values."""

from __future__ import annotations

import logging
import math
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer

from stylegraph.model.values import Color, GradientSpec, GradientStop
from stylegraph.parser.errors import GradientParseError
from stylegraph.parser.values import clamp01, parse_color

__all__ = ["gradient_transform", "parse_gradient", "parse_gradients"]

log = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "gradient.lark"

DEFAULT_ANGLE = 180.0

# Keyed by the sorted side pair so "to top right" and "to right top" agree.
_DIRECTION_ANGLES: dict[tuple[str, ...], float] = {
    ("top",): 0.0,
    ("right", "top"): 45.0,
    ("right",): 90.0,
    ("bottom", "right"): 135.0,
    ("bottom",): 180.0,
    ("bottom", "left"): 225.0,
    ("left",): 270.0,
    ("left", "top"): 315.0,
}

_ANGLE_UNITS: dict[str, float] = {
    "deg": 1.0,
    "grad": 0.9,
    "rad": 180.0 / math.pi,
    "turn": 360.0,
}


def _split_number(raw: str) -> tuple[float, str]:
    """Split ``"12.5px"`` into ``(12.5, "px")``."""
    i = len(raw)
    while i > 0 and not (raw[i - 1].isdigit() or raw[i - 1] == "."):
        i -= 1
    return float(raw[:i]), raw[i:].lower()


class _Orientation:
    def __init__(self, angle: float | None) -> None:
        self.angle = angle


class GradientTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a gradient parse tree into :class:`GradientSpec` objects."""

    # ---- colors ----

    def hex_color(self, items: list[Token]) -> Color | None:
        return parse_color(str(items[0]))

    def func_color(self, items: list[Token]) -> Color | None:
        return parse_color(str(items[0]))

    def named_color(self, items: list[Token]) -> Color | None:
        return parse_color(str(items[0]))

    # ---- orientation ----

    def angular(self, items: list[Token]) -> _Orientation:
        value, unit = _split_number(str(items[0]))
        return _Orientation(value * _ANGLE_UNITS.get(unit, 1.0))

    def directional(self, items: list[Token]) -> _Orientation:
        sides = tuple(sorted(str(t).lower() for t in items[1:]))
        return _Orientation(_DIRECTION_ANGLES.get(sides))

    def radial_shape(self, items: list[object]) -> _Orientation:
        return _Orientation(None)

    # ---- stops ----

    def color_stop(self, items: list[object]) -> tuple[Color | None, float | None]:
        color = items[0]
        position: float | None = None
        length = items[1] if len(items) > 1 else None
        if isinstance(length, Token):
            value, unit = _split_number(str(length))
            if unit == "%":
                position = clamp01(value / 100.0)
        return color, position  # type: ignore[return-value]

    def gradient(self, items: list[object]) -> GradientSpec | None:
        name = str(items[0]).lower()
        orientation = items[1] if isinstance(items[1], _Orientation) else None
        kind = "radial" if "radial" in name else "linear"

        raw_stops = [s for s in items[2:] if isinstance(s, tuple)]
        resolved = [(color, pos) for color, pos in raw_stops if color is not None]
        if not resolved:
            return None
        total = len(resolved) - 1 or 1
        stops = tuple(
            GradientStop(
                position=pos if pos is not None else index / total,
                color=color,
            )
            for index, (color, pos) in enumerate(resolved)
        )

        angle = DEFAULT_ANGLE
        if orientation is not None and orientation.angle is not None:
            angle = orientation.angle
        return GradientSpec(kind=kind, angle_deg=angle, stops=stops)  # type: ignore[arg-type]

    def start(self, items: list[GradientSpec | None]) -> list[GradientSpec | None]:
        return list(items)


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(),
        parser="lalr",
        start="start",
        maybe_placeholders=True,
    )


def parse_gradients(source: str) -> list[GradientSpec | None]:
    """Parse a comma-separated list of gradients.

    Raises :class:`GradientParseError` on malformed input. Entries whose stops
    resolve to no usable color come back as ``None``.
    """
    try:
        tree = _parser().parse(source)
    except Exception as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise GradientParseError(str(e), line=line, column=column) from e
    return GradientTransformer().transform(tree)


def parse_gradient(value: str | None) -> GradientSpec | None:
    """Parse the first gradient of a ``background-image`` value, or ``None``."""
    if not value:
        return None
    normalized = value.strip()
    if not normalized or normalized == "none" or "gradient" not in normalized.lower():
        return None
    try:
        gradients = parse_gradients(normalized)
    except GradientParseError as exc:
        log.debug("Unparseable gradient %r: %s", normalized, exc)
        return None
    return gradients[0] if gradients else None


def gradient_transform(
    angle_deg: float,
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """Build the 2x3 paint transform that points stops along a CSS angle."""
    radians = math.radians(angle_deg % 360)
    cos = math.cos(radians)
    sin = math.sin(radians)
    return (
        (cos, sin, 0.5 - 0.5 * cos - 0.5 * sin),
        (-sin, cos, 0.5 + 0.5 * sin - 0.5 * cos),
    )
