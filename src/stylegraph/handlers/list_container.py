"""ListContainerHandler: ul/ol become stacked auto-layout frames."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from stylegraph.handlers.box import apply_frame_box_style
from stylegraph.model.scene import Frame, SizingMode
from stylegraph.model.style_tree import ElementNode

if TYPE_CHECKING:
    from stylegraph.engine.builder import SceneBuilder

LIST_ITEM_SPACING = 4.0


class ListContainerHandler:
    async def render(
        self,
        node: ElementNode,
        parent: Frame,
        builder: SceneBuilder,
        inherited_style: Mapping[str, str] | None = None,
    ) -> None:
        frame = builder.canvas.create_frame()
        frame.name = node.tag
        apply_frame_box_style(frame, node.style, builder, auto_layout=True)
        frame.item_spacing = LIST_ITEM_SPACING
        builder.place(parent, frame, node.style, node)
        if parent.is_auto_layout:
            frame.sizing_horizontal = SizingMode.FILL
        await builder.render_nodes(node.children, frame, node.style)
