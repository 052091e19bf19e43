"""GenericHandler: any other element becomes a styled container frame."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from stylegraph.handlers.box import apply_frame_box_style
from stylegraph.layout.resolver import apply_child_sizing
from stylegraph.model.scene import Frame
from stylegraph.model.style_tree import ElementNode

if TYPE_CHECKING:
    from stylegraph.engine.builder import SceneBuilder


class GenericHandler:
    """Frame named after the ``id`` attribute (or tag), laid out per its display.

    Children inherit this element's style, so bare text directly inside picks
    up its font and color.
    """

    async def render(
        self,
        node: ElementNode,
        parent: Frame,
        builder: SceneBuilder,
        inherited_style: Mapping[str, str] | None = None,
    ) -> None:
        frame = builder.canvas.create_frame()
        frame.name = node.attrs.get("id") or node.tag
        grid = apply_frame_box_style(
            frame, node.style, builder, auto_layout=builder.options.auto_layout
        )
        in_grid = builder.ctx.grid_for(parent) is not None
        builder.place(parent, frame, node.style, node)
        if not in_grid:
            # Grid cells are sized by their packer.
            apply_child_sizing(frame, node.style, parent, grid=grid)
        await builder.render_nodes(node.children, frame, node.style)
