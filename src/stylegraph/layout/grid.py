"""Row packing for CSS grid containers.

The design-tool container model has no grid, so a grid container becomes a
vertical frame of horizontal ``row-N`` frames. Children are dealt into rows
left to right by their index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from stylegraph.model.scene import Frame, LayoutMode, SceneNode, SizingMode
from stylegraph.model.values import BoxEdges
from stylegraph.parser.values import (
    count_grid_tracks,
    parse_grid_column_widths,
    parse_length,
)

DEFAULT_GRID_COLUMNS = 2


@dataclass(frozen=True)
class GridSpec:
    columns: int
    column_gap: float = 0.0
    row_gap: float = 0.0
    column_widths: tuple[float, ...] = ()

    @property
    def total_width(self) -> float | None:
        """Sum of fixed column widths plus gaps, or ``None`` when unknown."""
        if not self.column_widths:
            return None
        gaps = self.column_gap * (len(self.column_widths) - 1)
        return sum(self.column_widths) + gaps

    @classmethod
    def from_style(cls, style: Mapping[str, str]) -> GridSpec:
        template = style.get("grid-template-columns")
        gap = parse_length(style.get("gap"))
        column_gap = parse_length(style.get("column-gap"))
        row_gap = parse_length(style.get("row-gap"))
        return cls(
            columns=max(1, count_grid_tracks(template) or DEFAULT_GRID_COLUMNS),
            column_gap=column_gap if column_gap is not None else (gap or 0.0),
            row_gap=row_gap if row_gap is not None else (gap or 0.0),
            column_widths=tuple(parse_grid_column_widths(template)),
        )


class GridPacker:
    """Deals children of one grid frame into lazily created row frames."""

    def __init__(self, frame: Frame, spec: GridSpec, create_frame: Callable[[], Frame]) -> None:
        self.frame = frame
        self.spec = spec
        self._create_frame = create_frame
        self.rows: list[Frame] = []
        self.child_count = 0

    def _new_row(self, number: int) -> Frame:
        row = self._create_frame()
        row.name = f"row-{number}"
        row.layout_mode = LayoutMode.HORIZONTAL
        row.padding = BoxEdges()
        row.item_spacing = self.spec.column_gap
        row.fills = []
        row.strokes = []
        row.clips_content = False
        total = self.spec.total_width
        if total is not None:
            row.resize(total, row.height)
            row.sizing_horizontal = SizingMode.FIXED
        else:
            row.sizing_horizontal = SizingMode.FILL
        row.sizing_vertical = SizingMode.HUG
        self.frame.append_child(row)
        return row

    def append(self, child: SceneNode) -> Frame:
        """Place *child* in its row and return that row."""
        index = self.child_count
        row_index, column = divmod(index, self.spec.columns)
        while len(self.rows) <= row_index:
            self.rows.append(self._new_row(len(self.rows) + 1))
        row = self.rows[row_index]

        widths = self.spec.column_widths
        if isinstance(child, Frame) and column < len(widths):
            child.sizing_horizontal = SizingMode.FIXED
            child.sizing_vertical = SizingMode.HUG
            child.resize(widths[column], child.height)
        else:
            child.layout_grow = 1.0
        row.append_child(child)
        self.child_count = index + 1
        return row
