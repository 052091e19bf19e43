"""Host canvas contract: node creation, font loading, images and styles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

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
)


@dataclass(frozen=True)
class ImageHandle:
    """A decoded image registered with the host."""

    hash: str
    width: int = 0
    height: int = 0


class Canvas(Protocol):
    """What the import engine needs from a design-tool host.

    Creation methods raise :class:`~stylegraph.errors.HostCapabilityError` when
    the host cannot create nodes at all. ``load_font`` raises
    :class:`~stylegraph.errors.FontLoadError`, ``create_image`` raises
    :class:`~stylegraph.errors.AssetDecodeError` and ``create_node_from_svg``
    raises :class:`~stylegraph.errors.VectorImportError`.
    """

    @property
    def page(self) -> Page: ...

    def create_frame(self) -> Frame: ...

    def create_text(self) -> TextRun: ...

    def create_rectangle(self) -> ImageShape: ...

    def create_node_from_svg(self, markup: str) -> VectorShape: ...

    def create_image(self, data: bytes) -> ImageHandle: ...

    async def load_font(self, font: FontName) -> None: ...

    def create_text_style(self) -> TextStyle: ...

    def create_paint_style(self) -> PaintStyle: ...

    def local_text_styles(self) -> list[TextStyle]: ...

    def local_paint_styles(self) -> list[PaintStyle]: ...

    def select(self, nodes: Sequence[SceneNode]) -> None: ...

    def scroll_and_zoom_into_view(self, nodes: Sequence[SceneNode]) -> None: ...
