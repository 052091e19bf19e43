"""ImageHandler: <img> becomes a rectangle with a deferred image fill."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from stylegraph.handlers.box import apply_border, apply_opacity, apply_shadows
from stylegraph.model.scene import Frame
from stylegraph.model.style_tree import ElementNode
from stylegraph.parser.values import parse_length

if TYPE_CHECKING:
    from stylegraph.engine.builder import SceneBuilder

DEFAULT_IMAGE_WIDTH = 200.0
DEFAULT_IMAGE_HEIGHT = 120.0


class ImageHandler:
    async def render(
        self,
        node: ElementNode,
        parent: Frame,
        builder: SceneBuilder,
        inherited_style: Mapping[str, str] | None = None,
    ) -> None:
        style = node.style
        rect = builder.canvas.create_rectangle()
        alt = node.attrs.get("alt")
        rect.name = f"img: {alt}" if alt else "image"

        width = parse_length(style.get("width"))
        height = parse_length(style.get("height"))
        rect.resize(
            width if width else DEFAULT_IMAGE_WIDTH,
            height if height else DEFAULT_IMAGE_HEIGHT,
        )
        apply_border(rect, style)
        apply_shadows(rect, style)
        apply_opacity(rect, style)

        builder.place(parent, rect, style, node)
        builder.ctx.paints.schedule_image(rect, node.attrs.get("src"), style)
