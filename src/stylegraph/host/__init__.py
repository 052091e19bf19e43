"""Host canvas contract and the in-memory implementation."""

from stylegraph.host.base import Canvas, ImageHandle
from stylegraph.host.memory import DEFAULT_FONTS, MemoryCanvas

__all__ = ["Canvas", "DEFAULT_FONTS", "ImageHandle", "MemoryCanvas"]
