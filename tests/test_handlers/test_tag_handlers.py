"""Tests for the individual tag handlers and the default registry."""

import asyncio

import pytest

from stylegraph.assets.paints import ASSET_ERROR_KEY
from stylegraph.config import ImportOptions
from stylegraph.engine.builder import HandlerRegistry, SceneBuilder
from stylegraph.engine.classify import TagCategory
from stylegraph.engine.context import ImportContext
from stylegraph.errors import AssetFetchError, VectorImportError
from stylegraph.handlers import GenericHandler, create_default_registry
from stylegraph.handlers.text import apply_text_style
from stylegraph.handlers.vector import build_vector_markup
from stylegraph.host.memory import MemoryCanvas
from stylegraph.model.scene import (
    Frame,
    ImageShape,
    LayoutMode,
    LineHeight,
    SizingMode,
    SolidPaint,
    TextRun,
    VectorShape,
)
from stylegraph.model.style_tree import ElementNode, TextNode
from stylegraph.model.values import Color


class NoFetcher:
    async def fetch(self, url: str) -> bytes:
        raise AssetFetchError(f"offline: {url}", url=url)


class RejectingCanvas(MemoryCanvas):
    def create_node_from_svg(self, markup: str) -> VectorShape:
        raise VectorImportError("rejected")


def _el(tag: str, *children, attrs: dict | None = None, **style: str) -> ElementNode:
    return ElementNode(
        tag=tag,
        attrs=attrs or {},
        style={k.replace("_", "-"): v for k, v in style.items()},
        children=tuple(children),
    )


def _render(node, canvas: MemoryCanvas | None = None, **options) -> tuple[Frame, SceneBuilder]:
    canvas = canvas or MemoryCanvas()
    ctx = ImportContext(canvas, ImportOptions(**options), NoFetcher())
    builder = SceneBuilder(ctx, create_default_registry())
    root = canvas.create_frame()
    root.layout_mode = LayoutMode.VERTICAL

    async def scenario() -> None:
        await builder.render(node, root)
        await ctx.paints.wait()

    asyncio.run(scenario())
    return root, builder


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_every_renderable_category_registered(self) -> None:
        registry = create_default_registry()
        for category in TagCategory:
            if category is TagCategory.VECTOR_PART:
                assert category not in registry
            else:
                assert category in registry

    def test_default_is_generic(self) -> None:
        registry = create_default_registry()
        assert isinstance(registry.resolve(TagCategory.VECTOR_PART), GenericHandler)

    def test_empty_registry_raises(self) -> None:
        with pytest.raises(ValueError, match="heading"):
            HandlerRegistry().resolve(TagCategory.HEADING)


# ---------------------------------------------------------------------------
# Text handlers
# ---------------------------------------------------------------------------


class TestTextHandlers:
    def test_heading_defaults(self) -> None:
        root, _ = _render(_el("h2", TextNode("Hello")))
        (run,) = root.children
        assert isinstance(run, TextRun)
        assert run.characters == "Hello"
        assert run.font_size == 24
        assert run.font_name.style == "Bold"
        assert run.text_auto_resize == "WIDTH_AND_HEIGHT"

    def test_heading_without_text_uses_tag(self) -> None:
        root, _ = _render(_el("h3"))
        assert root.children[0].characters == "H3"

    def test_heading_font_size_override(self) -> None:
        root, _ = _render(_el("h1", TextNode("Big"), font_size="48px"))
        assert root.children[0].font_size == 48

    def test_empty_list_item_gets_bullet(self) -> None:
        root, _ = _render(_el("li"))
        assert root.children[0].characters == "•"

    def test_paragraph_collects_descendant_text(self) -> None:
        root, _ = _render(_el("p", TextNode("Hello"), _el("strong", TextNode("world"))))
        (run,) = root.children
        assert run.characters == "Hello world"

    def test_anchor_named_and_underlined(self) -> None:
        root, builder = _render(_el("a", TextNode("Go"), attrs={"href": "#pricing"}))
        (run,) = root.children
        assert run.name == "link: #pricing"
        assert run.text_decoration == "UNDERLINE"
        assert [s.target_id for s in builder.ctx.link_sources] == ["pricing"]

    def test_external_anchor_is_not_a_link_source(self) -> None:
        _, builder = _render(_el("a", TextNode("Out"), attrs={"href": "https://example.com"}))
        assert builder.ctx.link_sources == []

    def test_plain_text_inherits_parent_style(self) -> None:
        root, _ = _render(_el("div", TextNode("Body"), color="rgb(255, 0, 0)", margin="10px"))
        (margin,) = root.children
        assert margin.name == "margin"
        (frame,) = margin.children
        (run,) = frame.children
        assert run.characters == "Body"
        assert run.fills[0].color.hex == "#FF0000"
        assert run.x == 0 and run.y == 0


class TestApplyTextStyle:
    def _run(self, **style: str) -> TextRun:
        run = TextRun(id="1:1")
        apply_text_style(run, {k.replace("_", "-"): v for k, v in style.items()})
        return run

    def test_line_height_pixels(self) -> None:
        assert self._run(line_height="24px").line_height == LineHeight("PIXELS", 24)

    def test_line_height_multiplier(self) -> None:
        assert self._run(line_height="1.5").line_height == LineHeight("PERCENT", 150)

    def test_line_height_percent(self) -> None:
        assert self._run(line_height="120%").line_height == LineHeight("PERCENT", 120)

    def test_line_height_normal(self) -> None:
        assert self._run(line_height="normal").line_height is None

    def test_transparent_color_leaves_fills(self) -> None:
        assert self._run(color="transparent").fills == []

    def test_semi_transparent_color(self) -> None:
        (paint,) = self._run(color="rgba(0, 0, 255, 0.5)").fills
        assert paint.opacity == 0.5
        assert paint.color.a == 1.0

    def test_alignment_case_and_decoration(self) -> None:
        run = self._run(
            text_align="justify", text_transform="uppercase", text_decoration="line-through"
        )
        assert run.text_align == "JUSTIFIED"
        assert run.text_case == "UPPER"
        assert run.text_decoration == "STRIKETHROUGH"

    def test_letter_spacing_and_opacity(self) -> None:
        run = self._run(letter_spacing="-0.5px", opacity="1.7")
        assert run.letter_spacing == -0.5
        assert run.opacity == 1.0


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


class TestContainers:
    def test_generic_frame_named_by_id(self) -> None:
        root, _ = _render(_el("section", attrs={"id": "hero"}, display="block"))
        (frame,) = root.children
        assert frame.name == "hero"
        assert frame.sizing_horizontal is SizingMode.FILL
        assert frame.clips_content is False

    def test_no_frame_clips_content(self) -> None:
        tree = _el(
            "div",
            _el("ul", _el("li", TextNode("a")), margin="8px"),
            _el("button", TextNode("Go"), margin="4px"),
            _el(
                "div",
                _el("p", TextNode("x")),
                _el("p", TextNode("y")),
                display="grid",
                grid_template_columns="1fr 1fr",
            ),
            ElementNode(tag="svg", attrs={"foo:bar": "1"}, style={"margin": "2px"}),
            display="flex",
            flex_direction="column",
        )
        root, _ = _render(tree)
        clipped = [
            node.name
            for node in root.iter_tree()
            if isinstance(node, Frame) and node is not root and node.clips_content
        ]
        assert clipped == []
        names = [node.name for node in root.iter_tree()]
        assert "margin" in names
        assert "row-1" in names
        assert "svg" in names

    def test_generic_box_styles(self) -> None:
        style = {
            "background-color": "#ffffff",
            "border": "2px solid #000000",
            "border-radius": "8px",
            "border-top-left-radius": "12px",
            "box-shadow": "0px 2px 4px rgba(0, 0, 0, 0.5)",
            "opacity": "0.8",
        }
        root, _ = _render(ElementNode(tag="div", style=style))
        (frame,) = root.children
        assert frame.fills[0].color.hex == "#FFFFFF"
        assert frame.stroke_weight == 2
        assert frame.corner_radius == 8
        assert frame.corner_radii == (12, 8, 8, 8)
        assert frame.effects[0].type == "DROP_SHADOW"
        assert frame.effects[0].radius == 4
        assert frame.opacity == 0.8

    def test_transparent_background_has_no_fill(self) -> None:
        root, _ = _render(_el("div", background_color="rgba(0, 0, 0, 0)"))
        assert root.children[0].fills == []

    def test_list_container(self) -> None:
        root, _ = _render(_el("ul", _el("li", TextNode("one")), _el("li", TextNode("two"))))
        (frame,) = root.children
        assert frame.name == "ul"
        assert frame.layout_mode is LayoutMode.VERTICAL
        assert frame.item_spacing == 4
        assert frame.sizing_horizontal is SizingMode.FILL
        assert [run.characters for run in frame.children] == ["one", "two"]

    def test_button_label_from_text(self) -> None:
        root, builder = _render(_el("button", TextNode("Buy"), display="inline-flex"))
        (frame,) = root.children
        assert frame.name == "button"
        assert frame.children[0].characters == "Buy"
        assert builder.ctx.created == 2

    def test_input_label_from_value(self) -> None:
        root, _ = _render(_el("input", attrs={"value": "  hello "}))
        assert root.children[0].children[0].characters == "hello"

    def test_empty_textarea(self) -> None:
        root, _ = _render(_el("textarea"))
        assert root.children[0].children == []

    def test_grid_cells_keep_column_widths(self) -> None:
        grid = _el(
            "div",
            *[_el("div", display="block") for _ in range(3)],
            display="grid",
            grid_template_columns="100px 50px",
        )
        root, _ = _render(grid)
        (frame,) = root.children
        first_row, second_row = frame.children
        assert [cell.width for cell in first_row.children] == [100, 50]
        assert all(cell.sizing_horizontal is SizingMode.FIXED for cell in first_row.children)
        assert len(second_row.children) == 1


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------


class TestImage:
    def test_defaults_and_failed_fetch(self) -> None:
        root, _ = _render(_el("img", attrs={"src": "https://cdn.test/a.png", "alt": "Logo"}))
        (rect,) = root.children
        assert isinstance(rect, ImageShape)
        assert rect.name == "img: Logo"
        assert (rect.width, rect.height) == (200, 120)
        assert rect.annotations[ASSET_ERROR_KEY] == "https://cdn.test/a.png"

    def test_explicit_size_without_alt(self) -> None:
        root, _ = _render(_el("img", width="64px", height="32px"))
        (rect,) = root.children
        assert rect.name == "image"
        assert (rect.width, rect.height) == (64, 32)


class TestVector:
    def _svg(self, **attrs: str) -> ElementNode:
        path = ElementNode(
            tag="path",
            attrs={"d": "M0 0L10 10", "class": "icon-path"},
            style={"fill": "rgb(255, 0, 0)", "stroke": "none"},
        )
        return ElementNode(
            tag="svg",
            attrs={"viewBox": "0 0 24 24", "xmlns": "http://www.w3.org/2000/svg", **attrs},
            children=(path,),
        )

    def test_markup_promotes_paint_properties(self) -> None:
        markup = build_vector_markup(self._svg())
        assert markup.startswith("<svg")
        assert 'xmlns="http://www.w3.org/2000/svg"' in markup
        assert 'd="M0 0L10 10"' in markup
        assert 'fill="rgb(255, 0, 0)"' in markup
        assert "icon-path" not in markup

    def test_explicit_attribute_not_overridden(self) -> None:
        svg = ElementNode(
            tag="svg",
            children=(ElementNode(tag="rect", attrs={"fill": "blue"}, style={"fill": "red"}),),
        )
        assert 'fill="blue"' in build_vector_markup(svg)

    def test_xlink_attribute(self) -> None:
        svg = ElementNode(
            tag="svg",
            children=(ElementNode(tag="use", attrs={"xlink:href": "#a"}),),
        )
        assert 'xlink:href="#a"' in build_vector_markup(svg)

    def test_unknown_prefix_raises(self) -> None:
        with pytest.raises(ValueError):
            build_vector_markup(ElementNode(tag="svg", attrs={"foo:bar": "1"}))

    def test_icon_sized_from_attributes(self) -> None:
        root, _ = _render(self._svg(width="16", height="16"))
        (icon,) = root.children
        assert isinstance(icon, VectorShape)
        assert icon.name == "icon"
        assert (icon.width, icon.height) == (16, 16)

    def test_unserializable_markup_placeholder(self) -> None:
        root, _ = _render(ElementNode(tag="svg", attrs={"foo:bar": "1"}))
        (placeholder,) = root.children
        assert placeholder.name == "svg"
        assert (placeholder.width, placeholder.height) == (24, 24)
        assert placeholder.fills == []
        assert placeholder.clips_content is False

    def test_rejected_markup_placeholder(self) -> None:
        root, _ = _render(self._svg(), canvas=RejectingCanvas())
        (placeholder,) = root.children
        assert placeholder.name == "svg-error"
        assert placeholder.fills == [SolidPaint(Color(0.9, 0.9, 0.9))]
        assert placeholder.clips_content is False

    def test_stray_vector_part_skipped(self) -> None:
        root, _ = _render(ElementNode(tag="path", attrs={"d": "M0 0"}))
        assert root.children == []
