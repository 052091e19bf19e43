"""Box styling shared by frame-producing handlers and images."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Union

from stylegraph.layout.grid import GridSpec
from stylegraph.layout.resolver import apply_explicit_sizing, configure_layout
from stylegraph.model.scene import Frame, ImageShape, ShadowEffect, SolidPaint
from stylegraph.model.values import Color
from stylegraph.parser.values import (
    clamp01,
    parse_border,
    parse_color,
    parse_length,
    parse_number,
    parse_shadows,
)

if TYPE_CHECKING:
    from stylegraph.engine.builder import SceneBuilder

DEFAULT_SHADOW_COLOR = Color(0.0, 0.0, 0.0, 0.25)

Boxed = Union[Frame, ImageShape]


def apply_border(node: Boxed, style: Mapping[str, str]) -> None:
    border = parse_border(style)
    if border is None:
        return
    node.strokes = [SolidPaint.from_color(border.color)]
    node.stroke_align = "INSIDE"
    node.stroke_weight = border.width


def apply_shadows(node: Boxed, style: Mapping[str, str]) -> None:
    effects = [
        ShadowEffect(
            inset=shadow.inset,
            offset_x=shadow.offset_x,
            offset_y=shadow.offset_y,
            radius=shadow.blur,
            spread=shadow.spread,
            color=shadow.color or DEFAULT_SHADOW_COLOR,
        )
        for shadow in parse_shadows(style.get("box-shadow"))
    ]
    if effects:
        node.effects = effects


def apply_opacity(node: Boxed, style: Mapping[str, str]) -> None:
    opacity = parse_number(style.get("opacity"))
    if opacity is not None:
        node.opacity = clamp01(opacity)


def apply_corner_radii(frame: Frame, style: Mapping[str, str]) -> None:
    uniform = parse_length(style.get("border-radius"))
    if uniform is not None:
        frame.corner_radius = uniform
    corners = [
        parse_length(style.get(f"border-{corner}-radius"))
        for corner in ("top-left", "top-right", "bottom-right", "bottom-left")
    ]
    if all(c is None for c in corners):
        return
    base = frame.corner_radius
    tl, tr, br, bl = (c if c is not None else base for c in corners)
    frame.corner_radii = (tl, tr, br, bl)


def apply_background(frame: Frame, style: Mapping[str, str], builder: SceneBuilder) -> None:
    if builder.ctx.paints.schedule_background(frame, style):
        return
    color = parse_color(style.get("background-color"))
    frame.fills = [SolidPaint.from_color(color)] if color is not None and color.a > 0 else []


def apply_frame_box_style(
    frame: Frame,
    style: Mapping[str, str],
    builder: SceneBuilder,
    *,
    auto_layout: bool,
) -> GridSpec | None:
    """Style *frame* as a CSS box and set up its layout.

    Grid containers get a packer registered with the import context; their
    geometry is returned for child sizing.
    """
    frame.clips_content = False
    apply_background(frame, style, builder)
    apply_corner_radii(frame, style)
    apply_border(frame, style)
    apply_shadows(frame, style)
    apply_opacity(frame, style)
    grid = configure_layout(frame, style, auto_layout=auto_layout)
    if grid is not None:
        builder.ctx.add_grid(frame, grid)
    apply_explicit_sizing(frame, style)
    return grid
