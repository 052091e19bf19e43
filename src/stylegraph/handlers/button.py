"""ButtonHandler: button, input and textarea become a frame around a label."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from stylegraph.handlers.box import apply_frame_box_style
from stylegraph.handlers.text import create_text_run
from stylegraph.model.scene import Frame
from stylegraph.model.style_tree import ElementNode, text_content

if TYPE_CHECKING:
    from stylegraph.engine.builder import SceneBuilder


class ButtonHandler:
    """Auto-layout frame holding one text run from content or ``value``.

    Controls with neither content nor a value produce an empty frame.
    """

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

        label = text_content(node.children) or node.attrs.get("value", "").strip()
        if label:
            run = await create_text_run(builder, label, node.style)
            frame.append_child(run)
            builder.note_created(run)

        builder.place(parent, frame, node.style, node)
