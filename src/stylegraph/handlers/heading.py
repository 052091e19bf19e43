"""HeadingHandler: h1-h6 become a single bold text run."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from stylegraph.engine.classify import effective_style
from stylegraph.handlers.text import create_text_run
from stylegraph.model.scene import Frame
from stylegraph.model.style_tree import ElementNode, text_content

if TYPE_CHECKING:
    from stylegraph.engine.builder import SceneBuilder

HEADING_SIZES: dict[str, float] = {"h1": 32, "h2": 24, "h3": 20, "h4": 18, "h5": 16, "h6": 14}


class HeadingHandler:
    """Default size per level, overridable by ``font-size``; bold unless styled."""

    async def render(
        self,
        node: ElementNode,
        parent: Frame,
        builder: SceneBuilder,
        inherited_style: Mapping[str, str] | None = None,
    ) -> None:
        style = effective_style(node)
        text = text_content(node.children) or node.tag.upper()
        run = await create_text_run(
            builder, text, style, font_size=HEADING_SIZES.get(node.tag, 16)
        )
        builder.place(parent, run, style, node)
