"""Asset transport: fetch image bytes over HTTP or from ``data:`` URLs."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Protocol
from urllib.parse import unquote_to_bytes

import httpx

from stylegraph.errors import AssetFetchError

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0


class Fetcher(Protocol):
    """Anything that can turn an absolute URL into bytes.

    Implementations raise :class:`AssetFetchError` on any failure.
    """

    async def fetch(self, url: str) -> bytes: ...


def decode_data_url(url: str) -> bytes:
    """Decode a ``data:`` URL (base64 or percent-encoded payload)."""
    header, sep, payload = url.partition(",")
    if not sep:
        raise AssetFetchError("Malformed data URL: missing ','", url=url[:64])
    if header.lower().endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=False)
        except (binascii.Error, ValueError) as exc:
            raise AssetFetchError(f"Invalid base64 data URL: {exc}", url=url[:64], cause=exc) from exc
    return unquote_to_bytes(payload)


class HttpFetcher:
    """Thin wrapper around :class:`httpx.AsyncClient` that maps errors to ``AssetFetchError``.

    ``data:`` URLs never touch the network. Pass *client* to share a
    preconfigured client (tests hand in one built on ``httpx.MockTransport``);
    otherwise one is created lazily and closed by :meth:`aclose`.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
            )
        return self._client

    async def fetch(self, url: str) -> bytes:
        if url.startswith("data:"):
            return decode_data_url(url)
        try:
            resp = await self._get_client().get(url)
        except httpx.TimeoutException as exc:
            raise AssetFetchError(f"Timed out fetching {url}", url=url, cause=exc) from exc
        except httpx.HTTPError as exc:
            raise AssetFetchError(f"Failed to fetch {url}: {exc}", url=url, cause=exc) from exc

        if resp.status_code >= 300:
            raise AssetFetchError(f"HTTP {resp.status_code} fetching {url}", url=url)
        log.debug("Fetched %s (%d bytes)", url, len(resp.content))
        return resp.content

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
