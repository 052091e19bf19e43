"""Tests for loading the captured style tree and import options."""

import pytest

from stylegraph.config import DEFAULT_VIEWPORT_WIDTH, ImportOptions, Viewport
from stylegraph.errors import StyleTreeError
from stylegraph.model.style_tree import (
    ElementNode,
    TextNode,
    load_import_message,
    load_style_tree,
    text_content,
)


# ---------------------------------------------------------------------------
# Style tree
# ---------------------------------------------------------------------------


class TestLoadStyleTree:
    def test_nested_nodes(self) -> None:
        (node,) = load_style_tree(
            [
                {
                    "kind": "element",
                    "tag": "UL",
                    "attrs": {"data-x": 1},
                    "style": {"gap": "4px"},
                    "children": [{"kind": "text", "text": "hi"}],
                }
            ]
        )
        assert isinstance(node, ElementNode)
        assert node.tag == "ul"
        assert node.attrs == {"data-x": "1"}
        assert node.children == (TextNode("hi"),)

    def test_not_a_list(self) -> None:
        with pytest.raises(StyleTreeError, match="list"):
            load_style_tree({"kind": "text"})

    def test_unknown_kind_reports_path(self) -> None:
        data = [{"kind": "element", "tag": "div", "children": [{"kind": "comment"}]}]
        with pytest.raises(StyleTreeError, match=r"\[0\]\.children\[0\]"):
            load_style_tree(data)

    def test_non_object_attrs_or_style(self) -> None:
        with pytest.raises(StyleTreeError, match=r"\[0\]\.attrs"):
            load_style_tree([{"kind": "element", "tag": "div", "attrs": ["id"]}])
        with pytest.raises(StyleTreeError, match=r"\[0\]\.style"):
            load_style_tree([{"kind": "element", "tag": "div", "style": "color: red"}])

    def test_children_must_be_a_list(self) -> None:
        with pytest.raises(StyleTreeError, match="children"):
            load_style_tree([{"kind": "element", "tag": "div", "children": {"kind": "text"}}])

    def test_empty_tag(self) -> None:
        with pytest.raises(StyleTreeError):
            load_style_tree([{"kind": "element", "tag": ""}])

    def test_element_requires_tag(self) -> None:
        with pytest.raises(StyleTreeError):
            ElementNode(tag="")


class TestElementNode:
    def test_with_defaults_fills_absent_keys(self) -> None:
        node = ElementNode(tag="h1", style={"font-weight": "", "color": "red"})
        style = node.with_defaults(font_weight="700", color="blue")
        assert style == {"font-weight": "700", "color": "red"}
        assert node.style["font-weight"] == ""

    def test_walk_yields_elements_in_order(self) -> None:
        tree = ElementNode(
            tag="div",
            children=(ElementNode(tag="p", children=(TextNode("x"),)), ElementNode(tag="span")),
        )
        assert [e.tag for e in tree.walk()] == ["div", "p", "span"]

    def test_node_id(self) -> None:
        assert ElementNode(tag="div", style={"--node-id": ' "main" '}).node_id == "main"
        assert ElementNode(tag="div", style={"--node-id": "''"}).node_id is None
        assert ElementNode(tag="div").node_id is None

    def test_text_content(self) -> None:
        children = (TextNode(" Hello "), ElementNode(tag="b", children=(TextNode("you"),)))
        assert text_content(children) == "Hello  you"


class TestImportMessage:
    def test_bare_list(self) -> None:
        nodes, options = load_import_message([{"kind": "text", "text": "x"}])
        assert nodes == [TextNode("x")]
        assert options == {}

    def test_envelope(self) -> None:
        message = {
            "type": "import-html",
            "payload": [{"kind": "text", "text": "x"}],
            "options": {"autoLayout": False},
        }
        nodes, options = load_import_message(message)
        assert len(nodes) == 1
        assert options == {"autoLayout": False}

    def test_other_message_type(self) -> None:
        with pytest.raises(StyleTreeError, match="Unsupported message type"):
            load_import_message({"type": "close"})

    def test_unsupported_document(self) -> None:
        with pytest.raises(StyleTreeError):
            load_import_message("nodes")


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class TestImportOptions:
    def test_defaults(self) -> None:
        options = ImportOptions()
        assert options.auto_layout is True
        assert options.create_styles is True
        assert options.prototype_links is True
        assert options.root_width == DEFAULT_VIEWPORT_WIDTH

    def test_camel_case_message_options(self) -> None:
        options = ImportOptions.from_mapping(
            {
                "autoLayout": 0,
                "createStyles": False,
                "prototypeLinks": True,
                "viewport": {"width": 1440, "height": 900},
                "fontMap": {"Roboto": "Arial"},
                "unknown": "ignored",
            }
        )
        assert options.auto_layout is False
        assert options.create_styles is False
        assert options.viewport == Viewport(width=1440, height=900)
        assert options.root_width == 1440
        assert options.font_map == {"Roboto": "Arial"}

    def test_overrides_win(self) -> None:
        options = ImportOptions.from_mapping({"autoLayout": True}, auto_layout=False, base_url=None)
        assert options.auto_layout is False
        assert options.base_url is None

    def test_zero_width_viewport_falls_back(self) -> None:
        assert ImportOptions(viewport=Viewport(width=0)).root_width == DEFAULT_VIEWPORT_WIDTH
