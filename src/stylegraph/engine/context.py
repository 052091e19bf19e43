"""Per-import state: identity map, resolvers, grid packers and link sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Mapping

from stylegraph.assets.fetcher import Fetcher
from stylegraph.assets.paints import PaintResolver
from stylegraph.config import ImportOptions
from stylegraph.fonts.resolver import FontResolver
from stylegraph.host.base import Canvas
from stylegraph.layout.grid import GridPacker, GridSpec
from stylegraph.layout.resolver import append_with_margin
from stylegraph.model.scene import Frame, SceneNode, TextRun

log = logging.getLogger(__name__)


class IdentityMap:
    """Original DOM ids onto created scene nodes. First registration wins."""

    def __init__(self) -> None:
        self._nodes: dict[str, SceneNode] = {}

    def register(self, node_id: str | None, node: SceneNode) -> bool:
        if not node_id:
            return False
        existing = self._nodes.get(node_id)
        if existing is not None:
            if existing is not node:
                log.debug("Duplicate node id %r ignored (kept %s)", node_id, existing.id)
            return False
        self._nodes[node_id] = node
        return True

    def get(self, node_id: str) -> SceneNode | None:
        return self._nodes.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)


@dataclass(frozen=True)
class LinkSource:
    """An anchor run waiting for its ``#fragment`` target to be resolved."""

    node: TextRun
    target_id: str


class ImportContext:
    """Everything one import owns; created fresh and discarded afterwards."""

    def __init__(self, canvas: Canvas, options: ImportOptions, fetcher: Fetcher) -> None:
        self.canvas = canvas
        self.options = options
        self.identities = IdentityMap()
        self.fonts = FontResolver(canvas, fallbacks=options.font_map)
        self.paints = PaintResolver(canvas, fetcher, base_url=options.base_url)
        self.grids: dict[str, GridPacker] = {}
        self.link_sources: list[LinkSource] = []
        self.created = 0

    def add_grid(self, frame: Frame, spec: GridSpec) -> GridPacker:
        packer = GridPacker(frame, spec, self.canvas.create_frame)
        self.grids[frame.id] = packer
        return packer

    def grid_for(self, frame: Frame) -> GridPacker | None:
        return self.grids.get(frame.id)

    def append(self, parent: Frame, child: SceneNode, style: Mapping[str, str]) -> None:
        append_with_margin(
            parent,
            child,
            style,
            create_frame=self.canvas.create_frame,
            grid=self.grid_for(parent),
        )

    def add_link_source(self, node: TextRun, href: str | None) -> None:
        if not self.options.prototype_links or not href or not href.startswith("#"):
            return
        target = href[1:]
        if target:
            self.link_sources.append(LinkSource(node=node, target_id=target))
