"""Asset fetching and paint resolution."""

from stylegraph.assets.fetcher import Fetcher, HttpFetcher, decode_data_url
from stylegraph.assets.paints import (
    ASSET_ERROR_KEY,
    PaintResolver,
    gradient_paint,
    scale_mode_for,
)

__all__ = [
    "ASSET_ERROR_KEY",
    "Fetcher",
    "HttpFetcher",
    "PaintResolver",
    "decode_data_url",
    "gradient_paint",
    "scale_mode_for",
]
