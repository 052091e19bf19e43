"""Parsers for raw CSS value strings.

Every function here is total: unparseable input yields ``None`` (or an
empty/zero value for the aggregate helpers) instead of raising.
"""

from __future__ import annotations

import math
import re
from typing import Mapping

from stylegraph.model.values import BorderSpec, BoxEdges, Color, ShadowSpec

__all__ = [
    "clamp01",
    "count_grid_tracks",
    "extract_image_reference",
    "hex_of",
    "parse_border",
    "parse_box_edges",
    "parse_color",
    "parse_grid_column_widths",
    "parse_length",
    "parse_number",
    "parse_shadow",
    "parse_shadows",
    "split_shadow_list",
    "strip_quotes",
]

_LENGTH_RE = re.compile(r"^(-?(?:\d+(?:\.\d*)?|\.\d+))px$", re.IGNORECASE)

_HEX_RE = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$")

# rgb(r g b) / rgb(r g b / a)
_MODERN_RGB_RE = re.compile(
    r"""
    ^rgba?\(\s*
    (?P<r>[\d.]+%?)\s+(?P<g>[\d.]+%?)\s+(?P<b>[\d.]+%?)
    (?:\s*/\s*(?P<a>[\d.]+%?))?
    \s*\)$
    """,
    re.VERBOSE,
)

# rgb(r, g, b) / rgba(r, g, b, a)
_LEGACY_RGB_RE = re.compile(
    r"""
    ^rgba?\(\s*
    (?P<r>[\d.]+%?)\s*,\s*(?P<g>[\d.]+%?)\s*,\s*(?P<b>[\d.]+%?)
    (?:\s*,\s*(?P<a>[\d.]+%?))?
    \s*\)$
    """,
    re.VERBOSE,
)

# Any color function call; used to lift colors out of shorthand values
# before whitespace tokenizing.
_COLOR_FUNC_RE = re.compile(r"(?:rgba?|hsla?)\s*\([^)]*\)", re.IGNORECASE)

_URL_RE = re.compile(r"url\((['\"]?)(.+?)\1\)", re.IGNORECASE)

_REPEAT_RE = re.compile(r"repeat\(\s*(\d+)\s*,[^)]*\)", re.IGNORECASE)

_TRACK_KEYWORDS = {"auto", "min-content", "max-content"}

NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "silver": (192, 192, 192),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "white": (255, 255, 255),
    "maroon": (128, 0, 0),
    "red": (255, 0, 0),
    "purple": (128, 0, 128),
    "fuchsia": (255, 0, 255),
    "magenta": (255, 0, 255),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "olive": (128, 128, 0),
    "yellow": (255, 255, 0),
    "navy": (0, 0, 128),
    "blue": (0, 0, 255),
    "teal": (0, 128, 128),
    "aqua": (0, 255, 255),
    "cyan": (0, 255, 255),
    "orange": (255, 165, 0),
    "pink": (255, 192, 203),
    "gold": (255, 215, 0),
    "brown": (165, 42, 42),
    "indigo": (75, 0, 130),
    "violet": (238, 130, 238),
    "coral": (255, 127, 80),
    "salmon": (250, 128, 114),
    "tomato": (255, 99, 71),
    "crimson": (220, 20, 60),
    "lightgray": (211, 211, 211),
    "lightgrey": (211, 211, 211),
    "darkgray": (169, 169, 169),
    "darkgrey": (169, 169, 169),
    "whitesmoke": (245, 245, 245),
    "rebeccapurple": (102, 51, 153),
}


def clamp01(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def strip_quotes(value: str) -> str:
    """Remove leading and trailing single/double quotes."""
    return value.lstrip("'\"").rstrip("'\"")


def parse_length(value: str | None) -> float | None:
    """Parse a ``<number>px`` length into pixels."""
    if not value:
        return None
    match = _LENGTH_RE.match(value.strip())
    if not match:
        return None
    return float(match.group(1))


def parse_number(value: str | None) -> float | None:
    """Parse a bare finite number such as an ``opacity`` value."""
    if value is None:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _channel(raw: str) -> float:
    if raw.endswith("%"):
        return float(raw[:-1]) / 100.0
    return float(raw) / 255.0


def _alpha(raw: str | None) -> float:
    if raw is None:
        return 1.0
    if raw.endswith("%"):
        return float(raw[:-1]) / 100.0
    return float(raw)


def parse_color(value: str | None) -> Color | None:
    """Parse a CSS color (hex, rgb/rgba, ``transparent`` or a named color)."""
    if not value:
        return None
    s = value.strip().lower()
    if s == "transparent":
        return Color(0.0, 0.0, 0.0, 0.0)
    if s.startswith("#"):
        if not _HEX_RE.match(s):
            return None
        digits = s[1:]
        if len(digits) in (3, 4):
            digits = "".join(c + c for c in digits)
        r, g, b = (int(digits[i : i + 2], 16) / 255.0 for i in (0, 2, 4))
        a = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
        return Color(r, g, b, a)
    for pattern in (_MODERN_RGB_RE, _LEGACY_RGB_RE):
        match = pattern.match(s)
        if match:
            try:
                return Color(
                    _channel(match.group("r")),
                    _channel(match.group("g")),
                    _channel(match.group("b")),
                    _alpha(match.group("a")),
                )
            except ValueError:
                return None
    named = NAMED_COLORS.get(s)
    if named:
        return Color(*(c / 255.0 for c in named))
    return None


def hex_of(color: Color) -> str:
    return color.hex


def parse_box_edges(style: Mapping[str, str], base: str) -> BoxEdges:
    """Resolve ``margin``/``padding`` shorthand plus per-side longhands.

    Longhands override the shorthand per side; anything unresolved is 0.
    """
    sides: list[float | None] = [None, None, None, None]  # t, r, b, l
    shorthand = style.get(base)
    if shorthand:
        vals = [parse_length(token) for token in shorthand.split()]
        if len(vals) == 1:
            sides = [vals[0]] * 4
        elif len(vals) == 2:
            sides = [vals[0], vals[1], vals[0], vals[1]]
        elif len(vals) == 3:
            sides = [vals[0], vals[1], vals[2], vals[1]]
        elif len(vals) == 4:
            sides = list(vals)
    for i, side in enumerate(("top", "right", "bottom", "left")):
        longhand = parse_length(style.get(f"{base}-{side}"))
        if longhand is not None:
            sides[i] = longhand
    top, right, bottom, left = (v or 0.0 for v in sides)
    return BoxEdges(top=top, right=right, bottom=bottom, left=left)


def _lift_color_functions(value: str) -> tuple[list[str], str]:
    """Pull color function calls out of *value*; return them and the remainder."""
    found = _COLOR_FUNC_RE.findall(value)
    return found, _COLOR_FUNC_RE.sub(" ", value)


def parse_border(style: Mapping[str, str]) -> BorderSpec | None:
    """Resolve a visible border from ``border`` / ``border-width`` / ``border-color``."""
    width = parse_length(style.get("border-width"))
    color = parse_color(style.get("border-color"))
    shorthand = style.get("border")
    if shorthand:
        functions, rest = _lift_color_functions(shorthand)
        tokens = rest.split()
        if any(t.lower() in ("none", "hidden") for t in tokens):
            return None
        if width is None:
            width = next((w for w in map(parse_length, tokens) if w is not None), None)
        if color is None:
            candidates = functions + tokens
            color = next((c for c in map(parse_color, candidates) if c is not None), None)
    if width is None or width <= 0 or color is None or color.a <= 0:
        return None
    return BorderSpec(width=width, color=color)


def split_shadow_list(value: str) -> list[str]:
    """Split a comma-separated shadow list, ignoring commas inside parentheses."""
    parts: list[str] = []
    depth = 0
    current = ""
    for char in value:
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        if char == "," and depth == 0:
            if current.strip():
                parts.append(current.strip())
            current = ""
            continue
        current += char
    if current.strip():
        parts.append(current.strip())
    return parts


def parse_shadow(entry: str) -> ShadowSpec | None:
    """Parse one ``box-shadow`` entry; fewer than two offsets drops it."""
    functions, rest = _lift_color_functions(entry)
    color = parse_color(functions[0]) if functions else None
    inset = False
    numbers: list[float] = []
    for token in rest.split():
        if token.lower() == "inset":
            inset = True
            continue
        px = parse_length(token)
        if px is None:
            px = parse_number(token)
        if px is not None:
            numbers.append(px)
            continue
        if color is None:
            color = parse_color(token)
    if len(numbers) < 2:
        return None
    offset_x, offset_y, *extra = numbers
    blur = extra[0] if len(extra) > 0 else 0.0
    spread = extra[1] if len(extra) > 1 else 0.0
    return ShadowSpec(
        inset=inset,
        offset_x=offset_x,
        offset_y=offset_y,
        blur=blur,
        spread=spread,
        color=color,
    )


def parse_shadows(value: str | None) -> list[ShadowSpec]:
    if not value or value.strip().lower() == "none":
        return []
    return [s for s in map(parse_shadow, split_shadow_list(value)) if s is not None]


def extract_image_reference(value: str | None) -> str | None:
    """Return the URL inside ``url(...)``, or ``None``."""
    if not value:
        return None
    match = _URL_RE.search(value)
    return match.group(2) if match else None


def _split_tracks(template: str) -> list[str]:
    """Whitespace split that keeps ``minmax(a, b)`` style calls whole."""
    tokens: list[str] = []
    depth = 0
    current = ""
    for char in template:
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        if char.isspace() and depth == 0:
            if current:
                tokens.append(current)
            current = ""
            continue
        current += char
    if current:
        tokens.append(current)
    return tokens


def count_grid_tracks(template: str | None) -> int:
    """Count the column tracks declared by ``grid-template-columns``."""
    if not template or template.strip() == "none":
        return 0
    count = sum(int(n) for n in _REPEAT_RE.findall(template))
    stripped = _REPEAT_RE.sub(" ", template)
    for token in _split_tracks(stripped):
        lowered = token.lower()
        if token[0].isdigit() or lowered in _TRACK_KEYWORDS or lowered.startswith("minmax("):
            count += 1
    return count


def parse_grid_column_widths(template: str | None) -> list[float]:
    """Pixel widths of every column, or ``[]`` unless all tracks are fixed."""
    if not template or template.strip() == "none":
        return []
    widths = [parse_length(token) for token in template.split()]
    if not widths or any(w is None for w in widths):
        return []
    return [w for w in widths if w is not None]
