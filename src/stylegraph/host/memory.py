"""In-memory canvas host used by the CLI and the test suite."""

from __future__ import annotations

import hashlib
import io
import itertools
import re
from typing import Iterable, Sequence

from lxml import etree
from PIL import Image, UnidentifiedImageError

from stylegraph.errors import (
    AssetDecodeError,
    FontLoadError,
    HostCapabilityError,
    VectorImportError,
)
from stylegraph.host.base import ImageHandle
from stylegraph.model.scene import (
    FontName,
    Frame,
    ImageShape,
    Page,
    PaintStyle,
    SceneNode,
    TextRun,
    TextStyle,
    VectorShape,
    export_value,
)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

FONT_STYLES = ("Regular", "Bold", "Italic", "Bold Italic")

DEFAULT_FONTS: tuple[FontName, ...] = tuple(
    FontName(family, style)
    for family in ("Inter", "Arial", "Georgia")
    for style in FONT_STYLES
)

_SIZE_RE = re.compile(r"^\s*([\d.]+)\s*(px)?\s*$")


def _svg_size(value: str | None) -> float | None:
    if not value:
        return None
    match = _SIZE_RE.match(value)
    return float(match.group(1)) if match else None


class MemoryCanvas:
    """A headless host that keeps the scene graph as plain Python objects.

    Args:
        fonts: Fonts the host can load. Defaults to Inter, Arial and Georgia in
            all four style names.
        max_nodes: Optional cap on created nodes; exceeding it raises
            :class:`HostCapabilityError`.
    """

    def __init__(
        self,
        fonts: Iterable[FontName] | None = None,
        *,
        max_nodes: int | None = None,
    ) -> None:
        self.available_fonts: set[FontName] = set(fonts if fonts is not None else DEFAULT_FONTS)
        self.loaded_fonts: set[FontName] = set()
        self.images: dict[str, bytes] = {}
        self.selection: list[SceneNode] = []
        self.viewport_focus: list[SceneNode] = []
        self.max_nodes = max_nodes
        self._page = Page()
        self._ids = itertools.count(1)
        self._node_count = 0
        self._text_styles: list[TextStyle] = []
        self._paint_styles: list[PaintStyle] = []

    @property
    def page(self) -> Page:
        return self._page

    # --- node creation --------------------------------------------------------

    def _next_id(self) -> str:
        return f"1:{next(self._ids)}"

    def _claim_node(self) -> str:
        if self.max_nodes is not None and self._node_count >= self.max_nodes:
            raise HostCapabilityError(f"Host node limit reached ({self.max_nodes})")
        self._node_count += 1
        return self._next_id()

    def create_frame(self) -> Frame:
        return Frame(id=self._claim_node(), name="Frame")

    def create_text(self) -> TextRun:
        return TextRun(id=self._claim_node(), name="Text")

    def create_rectangle(self) -> ImageShape:
        return ImageShape(id=self._claim_node(), name="Rectangle")

    def create_node_from_svg(self, markup: str) -> VectorShape:
        try:
            root = etree.fromstring(markup.encode("utf-8"))
        except etree.XMLSyntaxError as exc:
            raise VectorImportError(f"Malformed SVG markup: {exc}", cause=exc) from exc
        if root.tag != f"{{{SVG_NAMESPACE}}}svg":
            raise VectorImportError(f"Root element is not an svg element: {root.tag}")

        width = _svg_size(root.get("width"))
        height = _svg_size(root.get("height"))
        view_box = (root.get("viewBox") or "").replace(",", " ").split()
        if (width is None or height is None) and len(view_box) == 4:
            try:
                width = width if width is not None else float(view_box[2])
                height = height if height is not None else float(view_box[3])
            except ValueError:
                pass
        node = VectorShape(id=self._claim_node(), name="Vector", markup=markup)
        node.resize(width or 100.0, height or 100.0)
        return node

    # --- assets ---------------------------------------------------------------

    def create_image(self, data: bytes) -> ImageHandle:
        if not data:
            raise AssetDecodeError("Empty image data")
        try:
            with Image.open(io.BytesIO(data)) as img:
                width, height = img.size
                img.verify()
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            SyntaxError,
            ValueError,
        ) as exc:
            raise AssetDecodeError(f"Undecodable image data: {exc}", cause=exc) from exc
        digest = hashlib.sha1(data).hexdigest()
        self.images[digest] = data
        return ImageHandle(hash=digest, width=width, height=height)

    async def load_font(self, font: FontName) -> None:
        if font not in self.available_fonts:
            raise FontLoadError(font.family, font.style)
        self.loaded_fonts.add(font)

    # --- shared styles --------------------------------------------------------

    def create_text_style(self) -> TextStyle:
        style = TextStyle(id=f"S:{self._next_id()}", name="")
        self._text_styles.append(style)
        return style

    def create_paint_style(self) -> PaintStyle:
        style = PaintStyle(id=f"S:{self._next_id()}", name="")
        self._paint_styles.append(style)
        return style

    def local_text_styles(self) -> list[TextStyle]:
        return list(self._text_styles)

    def local_paint_styles(self) -> list[PaintStyle]:
        return list(self._paint_styles)

    # --- viewport -------------------------------------------------------------

    def select(self, nodes: Sequence[SceneNode]) -> None:
        self.selection = list(nodes)

    def scroll_and_zoom_into_view(self, nodes: Sequence[SceneNode]) -> None:
        self.viewport_focus = list(nodes)

    def to_dict(self) -> dict:
        """Export the page plus shared styles as JSON-friendly data."""
        return {
            "page": self._page.to_dict(),
            "text_styles": [export_value(s) for s in self._text_styles],
            "paint_styles": [export_value(s) for s in self._paint_styles],
            "images": sorted(self.images),
        }
