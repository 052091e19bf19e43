"""Tests for flex/block layout mapping, sizing and margins."""

from stylegraph.host.memory import MemoryCanvas
from stylegraph.layout.grid import GridSpec
from stylegraph.layout.resolver import (
    DEFAULT_ITEM_SPACING,
    append_with_margin,
    apply_child_sizing,
    apply_explicit_sizing,
    configure_layout,
)
from stylegraph.model.scene import AxisAlign, Frame, LayoutMode, SizingMode
from stylegraph.model.values import BoxEdges


def _frame(canvas: MemoryCanvas | None = None) -> Frame:
    return (canvas or MemoryCanvas()).create_frame()


def _auto_parent(canvas: MemoryCanvas) -> Frame:
    parent = canvas.create_frame()
    parent.layout_mode = LayoutMode.VERTICAL
    return parent


# ---------------------------------------------------------------------------
# configure_layout
# ---------------------------------------------------------------------------


class TestConfigureLayout:
    def test_flex_row(self) -> None:
        frame = _frame()
        style = {
            "display": "flex",
            "gap": "8px",
            "padding": "4px 12px",
            "justify-content": "space-between",
            "align-items": "center",
        }
        assert configure_layout(frame, style, auto_layout=True) is None
        assert frame.layout_mode is LayoutMode.HORIZONTAL
        assert frame.item_spacing == 8
        assert frame.padding == BoxEdges(4, 12, 4, 12)
        assert frame.primary_axis_align is AxisAlign.SPACE_BETWEEN
        assert frame.counter_axis_align is AxisAlign.CENTER
        assert frame.sizing_horizontal is SizingMode.HUG
        assert frame.sizing_vertical is SizingMode.HUG

    def test_flex_column_uses_row_gap(self) -> None:
        frame = _frame()
        style = {"display": "flex", "flex-direction": "column", "gap": "8px", "row-gap": "3px"}
        configure_layout(frame, style, auto_layout=True)
        assert frame.layout_mode is LayoutMode.VERTICAL
        assert frame.item_spacing == 3

    def test_row_reverse_is_vertical(self) -> None:
        frame = _frame()
        configure_layout(frame, {"display": "flex", "flex-direction": "row-reverse"}, auto_layout=True)
        assert frame.layout_mode is LayoutMode.VERTICAL

    def test_end_alignment(self) -> None:
        frame = _frame()
        style = {"display": "flex", "justify-content": "flex-end", "align-items": "flex-end"}
        configure_layout(frame, style, auto_layout=True)
        assert frame.primary_axis_align is AxisAlign.MAX
        assert frame.counter_axis_align is AxisAlign.MAX

    def test_block_is_vertical_with_default_spacing(self) -> None:
        frame = _frame()
        configure_layout(frame, {"display": "block"}, auto_layout=True)
        assert frame.layout_mode is LayoutMode.VERTICAL
        assert frame.item_spacing == DEFAULT_ITEM_SPACING

    def test_block_without_auto_layout(self) -> None:
        frame = _frame()
        configure_layout(frame, {"display": "block"}, auto_layout=False)
        assert frame.layout_mode is LayoutMode.NONE

    def test_flex_survives_auto_layout_off(self) -> None:
        frame = _frame()
        configure_layout(frame, {"display": "flex"}, auto_layout=False)
        assert frame.layout_mode is LayoutMode.HORIZONTAL

    def test_grid_returns_spec(self) -> None:
        frame = _frame()
        style = {"display": "grid", "grid-template-columns": "100px 100px", "gap": "10px"}
        spec = configure_layout(frame, style, auto_layout=True)
        assert spec == GridSpec(columns=2, column_gap=10, row_gap=10, column_widths=(100, 100))
        assert frame.layout_mode is LayoutMode.VERTICAL
        assert frame.item_spacing == 10
        assert frame.sizing_horizontal is SizingMode.FIXED
        assert frame.width == 210

    def test_fluid_grid_hugs(self) -> None:
        frame = _frame()
        spec = configure_layout(
            frame, {"display": "grid", "grid-template-columns": "1fr 1fr 1fr"}, auto_layout=True
        )
        assert spec is not None
        assert spec.columns == 3
        assert frame.sizing_horizontal is SizingMode.HUG


# ---------------------------------------------------------------------------
# Sizing
# ---------------------------------------------------------------------------


class TestSizing:
    def test_explicit_width_and_height(self) -> None:
        frame = _frame()
        apply_explicit_sizing(frame, {"width": "240px", "height": "80px"})
        assert (frame.width, frame.height) == (240, 80)
        assert frame.sizing_horizontal is SizingMode.FIXED
        assert frame.sizing_vertical is SizingMode.FIXED

    def test_min_height_counts_as_height(self) -> None:
        frame = _frame()
        apply_explicit_sizing(frame, {"min-height": "50px"})
        assert frame.height == 50
        assert frame.sizing_vertical is SizingMode.FIXED

    def test_block_child_fills(self) -> None:
        canvas = MemoryCanvas()
        frame = canvas.create_frame()
        apply_child_sizing(frame, {"display": "block"}, _auto_parent(canvas))
        assert frame.sizing_horizontal is SizingMode.FILL
        assert frame.sizing_vertical is SizingMode.HUG

    def test_inline_block_child_hugs(self) -> None:
        canvas = MemoryCanvas()
        frame = canvas.create_frame()
        apply_child_sizing(frame, {"display": "inline-block"}, _auto_parent(canvas))
        assert frame.sizing_horizontal is SizingMode.HUG

    def test_explicit_width_wins(self) -> None:
        canvas = MemoryCanvas()
        frame = canvas.create_frame()
        apply_child_sizing(frame, {"display": "block", "width": "300px"}, _auto_parent(canvas))
        assert frame.sizing_horizontal is SizingMode.FIXED
        assert frame.width == 300

    def test_fixed_grid_stays_fixed(self) -> None:
        canvas = MemoryCanvas()
        frame = canvas.create_frame()
        grid = GridSpec(columns=2, column_widths=(50, 50))
        apply_child_sizing(frame, {"display": "grid"}, _auto_parent(canvas), grid=grid)
        assert frame.sizing_horizontal is SizingMode.FIXED

    def test_ignored_under_absolute_parent(self) -> None:
        canvas = MemoryCanvas()
        frame = canvas.create_frame()
        apply_child_sizing(frame, {"display": "block"}, canvas.create_frame())
        assert frame.sizing_horizontal is SizingMode.FIXED


# ---------------------------------------------------------------------------
# Margins
# ---------------------------------------------------------------------------


class TestMargins:
    def test_no_margin_appends_directly(self) -> None:
        canvas = MemoryCanvas()
        parent = _auto_parent(canvas)
        child = canvas.create_frame()
        append_with_margin(parent, child, {}, create_frame=canvas.create_frame)
        assert parent.children == [child]

    def test_margin_wrapper_in_auto_layout(self) -> None:
        canvas = MemoryCanvas()
        parent = _auto_parent(canvas)
        child = canvas.create_frame()
        append_with_margin(parent, child, {"margin": "16px 0px"}, create_frame=canvas.create_frame)

        (wrapper,) = parent.children
        assert isinstance(wrapper, Frame)
        assert wrapper.name == "margin"
        assert wrapper.padding == BoxEdges(16, 0, 16, 0)
        assert wrapper.fills == []
        assert wrapper.clips_content is False
        assert wrapper.layout_mode is LayoutMode.VERTICAL
        assert wrapper.sizing_horizontal is SizingMode.FILL
        assert wrapper.children == [child]
        assert child.sizing_horizontal is SizingMode.FILL

    def test_margin_offsets_under_absolute_parent(self) -> None:
        canvas = MemoryCanvas()
        parent = canvas.create_frame()
        child = canvas.create_frame()
        append_with_margin(parent, child, {"margin": "5px 0px 0px 7px"}, create_frame=canvas.create_frame)
        assert parent.children == [child]
        assert (child.x, child.y) == (7, 5)
