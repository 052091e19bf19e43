"""Text run creation and CSS text styling shared by the text handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from stylegraph.model.scene import LineHeight, SolidPaint, TextRun
from stylegraph.parser.values import clamp01, parse_color, parse_length, parse_number

if TYPE_CHECKING:
    from stylegraph.engine.builder import SceneBuilder

_ALIGN = {"center": "CENTER", "right": "RIGHT", "justify": "JUSTIFIED"}
_CASE = {"uppercase": "UPPER", "lowercase": "LOWER", "capitalize": "TITLE"}


def _line_height(raw: str | None) -> LineHeight | None:
    if not raw:
        return None
    raw = raw.strip().lower()
    if raw == "normal":
        return None
    px = parse_length(raw)
    if px:
        return LineHeight("PIXELS", px)
    if raw.endswith("%"):
        percent = parse_number(raw[:-1])
        return LineHeight("PERCENT", percent) if percent and percent > 0 else None
    multiplier = parse_number(raw)
    if multiplier and multiplier > 0:
        return LineHeight("PERCENT", multiplier * 100)
    return None


def apply_text_style(run: TextRun, style: Mapping[str, str]) -> None:
    """Apply size, color, spacing, decoration, alignment, case and opacity.

    The font itself is assigned by :func:`create_text_run`, after loading.
    """
    size = parse_length(style.get("font-size"))
    if size:
        run.font_size = size

    color = parse_color(style.get("color"))
    if color is not None and color.a > 0:
        run.fills = [SolidPaint.from_color(color)]

    line_height = _line_height(style.get("line-height"))
    if line_height is not None:
        run.line_height = line_height

    spacing = parse_length(style.get("letter-spacing"))
    if spacing is not None:
        run.letter_spacing = spacing

    decoration = (style.get("text-decoration") or "").lower()
    if "underline" in decoration:
        run.text_decoration = "UNDERLINE"
    if "line-through" in decoration or "strikethrough" in decoration:
        run.text_decoration = "STRIKETHROUGH"

    align = (style.get("text-align") or "").strip().lower()
    run.text_align = _ALIGN.get(align, "LEFT")

    case = (style.get("text-transform") or "").strip().lower()
    if case in _CASE:
        run.text_case = _CASE[case]

    opacity = parse_number(style.get("opacity"))
    if opacity is not None:
        run.opacity = clamp01(opacity)


async def create_text_run(
    builder: SceneBuilder,
    characters: str,
    style: Mapping[str, str],
    *,
    font_size: float | None = None,
    name: str | None = None,
) -> TextRun:
    """Create a fully styled, not yet parented text run.

    *font_size* is a default that an explicit ``font-size`` overrides.
    """
    run = builder.canvas.create_text()
    run.font_name = await builder.ctx.fonts.font_for(style)
    run.characters = characters
    run.name = name or characters
    if font_size is not None:
        run.font_size = font_size
    apply_text_style(run, style)
    run.text_auto_resize = "WIDTH_AND_HEIGHT"
    return run
