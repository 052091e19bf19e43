"""PlainTextHandler: bare text nodes styled from their parent element."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from stylegraph.handlers.text import create_text_run
from stylegraph.model.scene import Frame
from stylegraph.model.style_tree import TextNode

if TYPE_CHECKING:
    from stylegraph.engine.builder import SceneBuilder


class PlainTextHandler:
    async def render(
        self,
        node: TextNode,
        parent: Frame,
        builder: SceneBuilder,
        inherited_style: Mapping[str, str] | None = None,
    ) -> None:
        run = await create_text_run(builder, node.text, inherited_style or {})
        # The parent's margin already applies to the parent frame.
        builder.place(parent, run, {})
