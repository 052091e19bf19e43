"""Turn CSS backgrounds and image sources into scene paints.

Gradients resolve immediately. Image references resolve in the background:
the node exists right away with no image paint and gains it once the shared
fetch task for its URL completes. :meth:`PaintResolver.wait` is the single
barrier the importer awaits before linking and style extraction.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Union
from urllib.parse import urljoin

from stylegraph.assets.fetcher import Fetcher
from stylegraph.errors import AssetDecodeError, AssetFetchError
from stylegraph.host.base import Canvas
from stylegraph.model.scene import Frame, GradientPaint, ImagePaint, ImageShape, ScaleMode
from stylegraph.model.values import GradientSpec
from stylegraph.parser.gradient import gradient_transform, parse_gradient
from stylegraph.parser.values import extract_image_reference

log = logging.getLogger(__name__)

ASSET_ERROR_KEY = "asset-error"

Fillable = Union[Frame, ImageShape]


def gradient_paint(spec: GradientSpec) -> GradientPaint:
    stops = tuple((stop.position, stop.color) for stop in spec.stops)
    if spec.kind == "radial":
        return GradientPaint(kind="GRADIENT_RADIAL", stops=stops)
    return GradientPaint(
        kind="GRADIENT_LINEAR",
        stops=stops,
        transform=gradient_transform(spec.angle_deg),
    )


def scale_mode_for(style: Mapping[str, str] | None) -> ScaleMode:
    size = ((style or {}).get("background-size") or "").lower()
    if "contain" in size:
        return ScaleMode.FIT
    if "tile" in size or "repeat" in size:
        return ScaleMode.TILE
    return ScaleMode.FILL


class PaintResolver:
    """Per-import paint resolution with a URL-keyed fetch cache."""

    def __init__(self, canvas: Canvas, fetcher: Fetcher, *, base_url: str | None = None) -> None:
        self._canvas = canvas
        self._fetcher = fetcher
        self._base_url = base_url
        self._fetches: dict[str, asyncio.Future[bytes]] = {}
        self.pending: list[asyncio.Task[None]] = []

    def absolute_url(self, src: str) -> str:
        src = src.strip()
        if self._base_url and not src.startswith("data:"):
            return urljoin(self._base_url, src)
        return src

    def _fetch(self, url: str) -> asyncio.Future[bytes]:
        task = self._fetches.get(url)
        if task is None:
            task = asyncio.ensure_future(self._fetcher.fetch(url))
            self._fetches[url] = task
        return task

    async def _apply_image(self, node: Fillable, url: str, scale_mode: ScaleMode) -> None:
        try:
            data = await self._fetch(url)
            image = self._canvas.create_image(data)
        except (AssetFetchError, AssetDecodeError) as exc:
            log.warning("Image %s unavailable: %s", url[:120], exc)
            node.annotations[ASSET_ERROR_KEY] = url
            return
        node.fills = [ImagePaint(image_hash=image.hash, scale_mode=scale_mode)]

    def schedule_image(
        self, node: Fillable, src: str | None, style: Mapping[str, str] | None = None
    ) -> None:
        """Queue an image fill for *node*; empty sources are ignored."""
        if not src or not src.strip():
            return
        url = self.absolute_url(src)
        task = asyncio.ensure_future(self._apply_image(node, url, scale_mode_for(style)))
        self.pending.append(task)

    def schedule_background(self, node: Fillable, style: Mapping[str, str]) -> bool:
        """Apply a gradient or queue a ``url(...)`` image from ``background-image``.

        Returns ``False`` when the caller should fall back to ``background-color``.
        """
        value = style.get("background-image")
        spec = parse_gradient(value)
        if spec is not None:
            node.fills = [gradient_paint(spec)]
            return True
        reference = extract_image_reference(value)
        if reference:
            self.schedule_image(node, reference, style)
            return True
        return False

    async def wait(self) -> None:
        """Settle every queued paint task; failures are logged, never raised."""
        while self.pending:
            batch, self.pending = self.pending, []
            results = await asyncio.gather(*batch, return_exceptions=True)
            for result in results:
                if isinstance(result, BaseException):
                    log.warning("Paint task failed: %s", result)

    async def cancel(self) -> None:
        """Cancel queued paint tasks and in-flight fetches, then await them."""
        tasks = [*self.pending, *self._fetches.values()]
        self.pending = []
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
