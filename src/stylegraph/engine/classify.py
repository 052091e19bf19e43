"""Tag classification: every element maps to exactly one handler category."""

from __future__ import annotations

from enum import Enum

from stylegraph.model.style_tree import ElementNode, StyleTreeNode, TextNode


class TagCategory(Enum):
    PLAIN_TEXT = "plain_text"
    HEADING = "heading"
    INLINE_TEXT = "inline_text"
    LIST_CONTAINER = "list_container"
    IMAGE = "image"
    BUTTON = "button"
    VECTOR = "vector"
    VECTOR_PART = "vector_part"
    GENERIC = "generic"


HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
INLINE_TEXT_TAGS = frozenset(
    {
        "p", "span", "a", "li", "strong", "em", "u", "s", "b", "i",
        "label", "small", "mark", "code", "pre", "blockquote",
    }
)  # fmt: skip
LIST_CONTAINER_TAGS = frozenset({"ul", "ol"})
BUTTON_TAGS = frozenset({"button", "input", "textarea"})
VECTOR_PART_TAGS = frozenset(
    {
        "path", "circle", "rect", "line", "polyline", "polygon", "ellipse",
        "g", "defs", "use", "symbol", "text", "tspan",
    }
)  # fmt: skip

_BY_TAG: dict[str, TagCategory] = {
    **{tag: TagCategory.HEADING for tag in HEADING_TAGS},
    **{tag: TagCategory.INLINE_TEXT for tag in INLINE_TEXT_TAGS},
    **{tag: TagCategory.LIST_CONTAINER for tag in LIST_CONTAINER_TAGS},
    **{tag: TagCategory.BUTTON for tag in BUTTON_TAGS},
    **{tag: TagCategory.VECTOR_PART for tag in VECTOR_PART_TAGS},
    "img": TagCategory.IMAGE,
    "svg": TagCategory.VECTOR,
}


def classify(node: StyleTreeNode) -> TagCategory:
    if isinstance(node, TextNode):
        return TagCategory.PLAIN_TEXT
    return _BY_TAG.get(node.tag.lower(), TagCategory.GENERIC)


def effective_style(element: ElementNode) -> dict[str, str]:
    """The style a handler renders with, after its category defaults.

    Headings are bold unless ``font-weight`` is set; anchors with an ``href``
    are underlined unless ``text-decoration`` is set.
    """
    category = classify(element)
    if category is TagCategory.HEADING:
        return element.with_defaults(font_weight="700")
    if element.tag == "a" and element.attrs.get("href"):
        return element.with_defaults(text_decoration="underline")
    return dict(element.style)
