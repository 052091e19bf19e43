"""Input model: the captured style tree of text and element nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Union

from stylegraph.errors import StyleTreeError

NODE_ID_KEY = "--node-id"


@dataclass(frozen=True)
class TextNode:
    """A raw text node from the captured document."""

    text: str


@dataclass(frozen=True)
class ElementNode:
    """An element with its attributes and fully computed style."""

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    style: dict[str, str] = field(default_factory=dict)
    children: tuple[StyleTreeNode, ...] = ()

    def __post_init__(self) -> None:
        if not self.tag:
            raise StyleTreeError("Element tag must be a non-empty string")

    @property
    def node_id(self) -> str | None:
        """The original DOM id carried through the synthetic ``--node-id`` key."""
        raw = self.style.get(NODE_ID_KEY)
        if raw is None:
            return None
        value = str(raw).strip().strip("'\"")
        return value or None

    @property
    def has_text_children(self) -> bool:
        return any(isinstance(child, TextNode) for child in self.children)

    def with_defaults(self, **defaults: str) -> dict[str, str]:
        """Return a copy of the style with *defaults* filled in for absent keys.

        Keyword names use underscores in place of dashes.
        """
        style = dict(self.style)
        for key, value in defaults.items():
            prop = key.replace("_", "-")
            if not style.get(prop):
                style[prop] = value
        return style

    def walk(self) -> Iterator[ElementNode]:
        """Yield this element and every descendant element in document order."""
        yield self
        for child in self.children:
            if isinstance(child, ElementNode):
                yield from child.walk()


StyleTreeNode = Union[TextNode, ElementNode]


def text_content(children: tuple[StyleTreeNode, ...]) -> str:
    """Concatenate descendant text, space separated and trimmed."""
    parts: list[str] = []
    for child in children:
        if isinstance(child, TextNode):
            parts.append(child.text)
        else:
            parts.append(text_content(child.children))
    return " ".join(parts).strip()


def _string_map(raw: Any, path: str) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise StyleTreeError(f"{path}: expected an object, got {type(raw).__name__}")
    return {str(k): str(v) for k, v in raw.items()}


def _load_node(raw: Any, path: str) -> StyleTreeNode:
    if not isinstance(raw, Mapping):
        raise StyleTreeError(f"{path}: expected an object, got {type(raw).__name__}")
    kind = raw.get("kind")
    if kind == "text":
        return TextNode(text=str(raw.get("text", "")))
    if kind != "element":
        raise StyleTreeError(f"{path}: unknown node kind {kind!r}")
    tag = raw.get("tag")
    if not isinstance(tag, str) or not tag:
        raise StyleTreeError(f"{path}: element tag must be a non-empty string")
    attrs = _string_map(raw.get("attrs"), f"{path}.attrs")
    style = _string_map(raw.get("style"), f"{path}.style")
    raw_children = raw.get("children") or []
    if not isinstance(raw_children, list):
        raise StyleTreeError(f"{path}.children: expected a list, got {type(raw_children).__name__}")
    children = tuple(
        _load_node(child, f"{path}.children[{i}]") for i, child in enumerate(raw_children)
    )
    return ElementNode(tag=tag.lower(), attrs=attrs, style=style, children=children)


def load_style_tree(data: Any) -> list[StyleTreeNode]:
    """Build style tree nodes from the capture JSON (a list of node objects)."""
    if not isinstance(data, list):
        raise StyleTreeError(f"Style tree must be a list of nodes, got {type(data).__name__}")
    return [_load_node(item, f"[{i}]") for i, item in enumerate(data)]


def load_import_message(data: Any) -> tuple[list[StyleTreeNode], dict[str, Any]]:
    """Accept either a bare node list or an ``import-html`` message envelope.

    Returns the parsed nodes and the raw options mapping (possibly empty).
    """
    if isinstance(data, list):
        return load_style_tree(data), {}
    if isinstance(data, Mapping):
        msg_type = data.get("type", "import-html")
        if msg_type != "import-html":
            raise StyleTreeError(f"Unsupported message type: {msg_type!r}")
        options = data.get("options") or {}
        if not isinstance(options, Mapping):
            raise StyleTreeError("Message options must be an object")
        return load_style_tree(data.get("payload") or []), dict(options)
    raise StyleTreeError(f"Unsupported import document: {type(data).__name__}")
