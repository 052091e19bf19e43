"""InlineTextHandler: paragraphs, spans, anchors and list items."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from stylegraph.engine.classify import effective_style
from stylegraph.handlers.text import create_text_run
from stylegraph.model.scene import Frame
from stylegraph.model.style_tree import ElementNode, text_content

if TYPE_CHECKING:
    from stylegraph.engine.builder import SceneBuilder

BULLET = "•"


class InlineTextHandler:
    """One text run holding all descendant text.

    Anchors are named ``link: <href>`` and queued as link sources when they
    point at a ``#fragment``.
    """

    async def render(
        self,
        node: ElementNode,
        parent: Frame,
        builder: SceneBuilder,
        inherited_style: Mapping[str, str] | None = None,
    ) -> None:
        text = text_content(node.children)
        if node.tag == "li" and not text:
            text = BULLET
        href = node.attrs.get("href") if node.tag == "a" else None
        name = f"link: {href}" if href else None

        style = effective_style(node)
        run = await create_text_run(builder, text, style, name=name)
        builder.place(parent, run, style, node)
        if href:
            builder.ctx.add_link_source(run, href)
