"""VectorHandler: inline <svg> trees are rebuilt as markup and imported whole."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

from lxml import etree

from stylegraph.errors import VectorImportError
from stylegraph.model.scene import Frame, SceneNode, SolidPaint
from stylegraph.model.style_tree import ElementNode, TextNode
from stylegraph.model.values import Color
from stylegraph.parser.values import parse_length

if TYPE_CHECKING:
    from stylegraph.engine.builder import SceneBuilder

log = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"

_PREFIXES = {"xlink": XLINK_NAMESPACE, "xml": "http://www.w3.org/XML/1998/namespace"}

# Computed style properties copied onto elements that lack the attribute.
PAINT_PROPERTIES = (
    "fill",
    "stroke",
    "stroke-width",
    "stroke-linecap",
    "stroke-linejoin",
    "stroke-miterlimit",
    "fill-opacity",
    "stroke-opacity",
    "opacity",
)

PLACEHOLDER_SIZE = 24.0
ERROR_FILL = Color(0.9, 0.9, 0.9)


def _attribute_name(key: str) -> str | None:
    """Qualified lxml attribute name, or ``None`` for namespace declarations."""
    if key == "xmlns" or key.startswith("xmlns:"):
        return None
    prefix, sep, local = key.partition(":")
    if sep:
        namespace = _PREFIXES.get(prefix)
        if namespace is None:
            raise ValueError(f"Unknown attribute prefix {prefix!r}")
        return f"{{{namespace}}}{local}"
    return key


def _build(element: ElementNode, parent: etree._Element | None) -> etree._Element:
    tag = f"{{{SVG_NAMESPACE}}}{element.tag}"
    if parent is None:
        xml = etree.Element(tag, nsmap={None: SVG_NAMESPACE, "xlink": XLINK_NAMESPACE})
    else:
        xml = etree.SubElement(parent, tag)

    for key, value in element.attrs.items():
        if key in ("class", "style"):
            continue
        name = _attribute_name(key)
        if name is not None:
            xml.set(name, value)
    for prop in PAINT_PROPERTIES:
        value = element.style.get(prop)
        if value and prop not in element.attrs:
            xml.set(prop, value)

    for child in element.children:
        if isinstance(child, TextNode):
            if len(xml):
                xml[-1].tail = (xml[-1].tail or "") + child.text
            else:
                xml.text = (xml.text or "") + child.text
        else:
            _build(child, xml)
    return xml


def build_vector_markup(element: ElementNode) -> str:
    """Serialize an svg element tree to standalone markup.

    Raises ``ValueError`` when an attribute or tag cannot be represented.
    """
    return etree.tostring(_build(element, None), encoding="unicode")


def _dimension(style: Mapping[str, str], attrs: Mapping[str, str], key: str) -> float | None:
    value = parse_length(style.get(key))
    if value:
        return value
    raw = (attrs.get(key) or "").strip()
    return parse_length(raw if raw.endswith("px") else f"{raw}px")


class VectorHandler:
    """Imports the svg subtree as one vector node named ``icon``.

    Markup that cannot be built yields an empty ``svg`` placeholder; markup
    the host rejects yields a grey ``svg-error`` placeholder.
    """

    def _placeholder(self, builder: SceneBuilder, name: str, fills: list) -> Frame:
        frame = builder.canvas.create_frame()
        frame.name = name
        frame.resize(PLACEHOLDER_SIZE, PLACEHOLDER_SIZE)
        frame.fills = fills
        frame.clips_content = False
        return frame

    async def render(
        self,
        node: ElementNode,
        parent: Frame,
        builder: SceneBuilder,
        inherited_style: Mapping[str, str] | None = None,
    ) -> None:
        result: SceneNode
        try:
            markup = build_vector_markup(node)
        except ValueError as exc:
            log.warning("Could not serialize <svg>: %s", exc)
            result = self._placeholder(builder, "svg", [])
        else:
            try:
                result = builder.canvas.create_node_from_svg(markup)
            except VectorImportError as exc:
                log.warning("Host rejected vector markup: %s", exc)
                result = self._placeholder(builder, "svg-error", [SolidPaint(ERROR_FILL)])
            else:
                result.name = "icon"
                width = _dimension(node.style, node.attrs, "width")
                height = _dimension(node.style, node.attrs, "height")
                if width and height:
                    result.resize(width, height)
        builder.place(parent, result, node.style, node)
