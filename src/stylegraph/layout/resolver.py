"""Map CSS layout (block, flex, grid) onto frame auto-layout settings."""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from stylegraph.layout.grid import GridPacker, GridSpec
from stylegraph.model.scene import AxisAlign, Frame, LayoutMode, SceneNode, SizingMode
from stylegraph.parser.values import parse_box_edges, parse_length

log = logging.getLogger(__name__)

DEFAULT_ITEM_SPACING = 6.0

_FLEX_DISPLAYS = ("flex", "inline-flex")
_GRID_DISPLAYS = ("grid", "inline-grid")
_BLOCK_LIKE_DISPLAYS = ("block", "flex", "grid", "")


def display_of(style: Mapping[str, str]) -> str:
    return (style.get("display") or "").strip().lower()


def primary_align(value: str) -> AxisAlign:
    """``justify-content`` onto the primary axis."""
    if "space-between" in value:
        return AxisAlign.SPACE_BETWEEN
    if "center" in value:
        return AxisAlign.CENTER
    if "end" in value:
        return AxisAlign.MAX
    return AxisAlign.MIN


def counter_align(value: str) -> AxisAlign:
    """``align-items`` onto the counter axis."""
    if "center" in value:
        return AxisAlign.CENTER
    if "end" in value:
        return AxisAlign.MAX
    return AxisAlign.MIN


def _configure_grid(frame: Frame, style: Mapping[str, str]) -> GridSpec:
    spec = GridSpec.from_style(style)
    frame.layout_mode = LayoutMode.VERTICAL
    frame.primary_axis_sizing = SizingMode.HUG
    total = spec.total_width
    if total is not None:
        frame.counter_axis_sizing = SizingMode.FIXED
        frame.resize(total, frame.height)
    else:
        frame.counter_axis_sizing = SizingMode.HUG
    frame.item_spacing = spec.row_gap
    frame.padding = parse_box_edges(style, "padding")
    return spec


def configure_layout(
    frame: Frame, style: Mapping[str, str], *, auto_layout: bool
) -> GridSpec | None:
    """Set the frame's layout contract from its computed display.

    Returns the grid geometry when the frame is a grid container; the caller
    owns the matching :class:`GridPacker`.
    """
    display = display_of(style)
    if display in _GRID_DISPLAYS:
        return _configure_grid(frame, style)

    is_flex = display in _FLEX_DISPLAYS
    if not (is_flex or auto_layout):
        frame.layout_mode = LayoutMode.NONE
        return None

    direction = (style.get("flex-direction") or "row").strip().lower() if is_flex else "column"
    horizontal = direction == "row"
    frame.layout_mode = LayoutMode.HORIZONTAL if horizontal else LayoutMode.VERTICAL
    frame.sizing_horizontal = SizingMode.HUG
    frame.sizing_vertical = SizingMode.HUG
    frame.padding = parse_box_edges(style, "padding")

    gap = parse_length(style.get("gap"))
    axis_gap = parse_length(style.get("column-gap" if horizontal else "row-gap"))
    if axis_gap is not None:
        frame.item_spacing = axis_gap
    elif gap is not None:
        frame.item_spacing = gap
    else:
        frame.item_spacing = DEFAULT_ITEM_SPACING

    frame.primary_axis_align = primary_align((style.get("justify-content") or "").lower())
    frame.counter_axis_align = counter_align((style.get("align-items") or "").lower())
    return None


def explicit_height(style: Mapping[str, str]) -> float | None:
    height = parse_length(style.get("height"))
    return height if height is not None else parse_length(style.get("min-height"))


def apply_explicit_sizing(frame: Frame, style: Mapping[str, str]) -> None:
    """Pin axes with an explicit ``width``/``height`` (or ``min-height``) to Fixed."""
    width = parse_length(style.get("width"))
    height = explicit_height(style)
    if width is None and height is None:
        return
    if width is not None:
        frame.sizing_horizontal = SizingMode.FIXED
    if height is not None:
        frame.sizing_vertical = SizingMode.FIXED
    new_width = width if width is not None else frame.width
    new_height = height if height is not None else frame.height
    if new_width > 0 and new_height > 0:
        frame.resize(new_width, new_height)


def apply_child_sizing(
    frame: Frame,
    style: Mapping[str, str],
    parent: Frame,
    *,
    grid: GridSpec | None = None,
) -> None:
    """Choose the frame's sizing inside its (already known) parent."""
    if not parent.is_auto_layout:
        return
    width = parse_length(style.get("width"))
    if width is not None:
        frame.sizing_horizontal = SizingMode.FIXED
        frame.resize(width, frame.height)
    elif grid is not None and grid.total_width is not None:
        frame.sizing_horizontal = SizingMode.FIXED
    elif display_of(style) in _BLOCK_LIKE_DISPLAYS:
        frame.sizing_horizontal = SizingMode.FILL
    else:
        frame.sizing_horizontal = SizingMode.HUG

    height = explicit_height(style)
    if height is not None:
        frame.sizing_vertical = SizingMode.FIXED
        frame.resize(frame.width, height)
    else:
        frame.sizing_vertical = SizingMode.HUG


def append_with_margin(
    parent: Frame,
    child: SceneNode,
    style: Mapping[str, str],
    *,
    create_frame: Callable[[], Frame],
    grid: GridPacker | None = None,
) -> None:
    """Append *child* to *parent*, honoring CSS margins.

    Grid parents hand the child to their packer. Inside auto-layout parents a
    non-zero margin becomes the padding of a transparent ``margin`` wrapper;
    elsewhere it offsets the child's position.
    """
    if grid is not None:
        grid.append(child)
        return
    margin = parse_box_edges(style, "margin")
    if margin.is_zero:
        parent.append_child(child)
        return
    if not parent.is_auto_layout:
        child.x += margin.left
        child.y += margin.top
        parent.append_child(child)
        return

    wrapper = create_frame()
    wrapper.name = "margin"
    wrapper.fills = []
    wrapper.clips_content = False
    wrapper.layout_mode = LayoutMode.VERTICAL
    wrapper.padding = margin
    wrapper.sizing_vertical = SizingMode.HUG
    parent.append_child(wrapper)
    wrapper.append_child(child)
    wrapper.sizing_horizontal = SizingMode.FILL
    if isinstance(child, Frame):
        child.sizing_horizontal = SizingMode.FILL
