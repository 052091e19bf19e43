"""Import orchestration: font pre-pass, tree walk, paint barrier, links, styles."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from stylegraph.assets.fetcher import Fetcher, HttpFetcher
from stylegraph.config import ImportOptions
from stylegraph.engine.builder import HandlerRegistry, SceneBuilder
from stylegraph.engine.classify import effective_style
from stylegraph.engine.context import ImportContext
from stylegraph.engine.links import resolve_links
from stylegraph.engine.styles import StyleSummary, create_local_styles
from stylegraph.events import types as events
from stylegraph.events.bus import EventBus
from stylegraph.fonts.resolver import FontSubstitution, collect_font_keys
from stylegraph.host.base import Canvas
from stylegraph.model.scene import FontName, Frame, LayoutMode, SizingMode, SolidPaint
from stylegraph.model.style_tree import ElementNode, StyleTreeNode
from stylegraph.model.values import BoxEdges, Color

log = logging.getLogger(__name__)

ROOT_FRAME_NAME = "Imported HTML"
ROOT_PADDING = BoxEdges(top=32, right=40, bottom=32, left=40)
ROOT_ITEM_SPACING = 32.0
ROOT_FILL = Color(0.957, 0.969, 0.996)


@dataclass
class ImportResult:
    """Summary of one import run."""

    success: bool
    root_id: str | None = None
    node_count: int = 0
    missing_fonts: list[FontName] = field(default_factory=list)
    substitutions: list[FontSubstitution] = field(default_factory=list)
    links: int = 0
    styles: StyleSummary | None = None
    error: str | None = None


def count_nodes(nodes: Sequence[StyleTreeNode]) -> int:
    total = 0
    for node in nodes:
        total += 1
        if isinstance(node, ElementNode):
            total += count_nodes(node.children)
    return total


def create_root_frame(canvas: Canvas, options: ImportOptions) -> Frame:
    frame = canvas.create_frame()
    frame.name = ROOT_FRAME_NAME
    frame.layout_mode = LayoutMode.VERTICAL
    frame.primary_axis_sizing = SizingMode.HUG
    frame.counter_axis_sizing = SizingMode.FIXED
    frame.resize(options.root_width, 100)
    frame.padding = ROOT_PADDING
    frame.item_spacing = ROOT_ITEM_SPACING
    frame.fills = [SolidPaint(ROOT_FILL)]
    frame.clips_content = False
    canvas.page.append_child(frame)
    return frame


class Importer:
    """Runs one style tree into a canvas.

    Notifications go through *event_bus*; :meth:`run` also returns an
    :class:`ImportResult`. Only errors escaping the tree walk abort the
    import; missing fonts, unreachable images and bad vector markup degrade
    the output instead.
    """

    def __init__(
        self,
        canvas: Canvas,
        *,
        options: ImportOptions | None = None,
        fetcher: Fetcher | None = None,
        registry: HandlerRegistry | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.canvas = canvas
        self.options = options or ImportOptions()
        self._fetcher = fetcher
        self._registry = registry
        self.event_bus = event_bus or EventBus()

    def _build_registry(self) -> HandlerRegistry:
        if self._registry is not None:
            return self._registry
        from stylegraph.handlers import create_default_registry

        return create_default_registry()

    async def run(self, nodes: Sequence[StyleTreeNode]) -> ImportResult:
        owned_fetcher: HttpFetcher | None = None
        fetcher = self._fetcher
        if fetcher is None:
            owned_fetcher = HttpFetcher(timeout=self.options.fetch_timeout)
            fetcher = owned_fetcher
        try:
            return await self._run(nodes, fetcher)
        finally:
            if owned_fetcher is not None:
                await owned_fetcher.aclose()

    async def _run(self, nodes: Sequence[StyleTreeNode], fetcher: Fetcher) -> ImportResult:
        result = ImportResult(success=False)
        ctx = ImportContext(self.canvas, self.options, fetcher)
        self.event_bus.emit(events.ImportStarted(node_count=count_nodes(nodes)))

        try:
            # Step 1: Load every font the tree asks for
            report = await ctx.fonts.prepare(collect_font_keys(nodes, effective_style))
            result.missing_fonts = list(report.missing)
            result.substitutions = list(report.substitutions)
            if report.missing:
                self.event_bus.emit(events.MissingFonts(fonts=tuple(report.missing)))
            if report.substitutions:
                self.event_bus.emit(events.FontSubstitutions(items=tuple(report.substitutions)))

            # Step 2: Build the scene graph under a fresh root frame
            root = create_root_frame(self.canvas, self.options)
            result.root_id = root.id
            builder = SceneBuilder(ctx, self._build_registry())
            await builder.render_nodes(nodes, root)

            # Step 3: Settle deferred image paints
            await ctx.paints.wait()

            # Step 4: Prototype links
            if self.options.prototype_links:
                result.links = resolve_links(root, ctx.identities, ctx.link_sources)

            # Step 5: Shared styles
            if self.options.create_styles:
                result.styles = await create_local_styles(self.canvas, root)

            self.canvas.select([root])
            self.canvas.scroll_and_zoom_into_view([root])
        except Exception as exc:
            log.exception("Import failed")
            await ctx.paints.cancel()
            self.canvas.select([])
            result.error = str(exc) or type(exc).__name__
            result.node_count = ctx.created
            self.event_bus.emit(events.ImportFailed(error=result.error))
            return result

        result.success = True
        result.node_count = ctx.created
        self.event_bus.emit(events.ImportCompleted(root_id=root.id, node_count=ctx.created))
        return result
