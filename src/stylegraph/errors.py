"""Error hierarchy for stylegraph imports."""
from __future__ import annotations


class StyleGraphError(Exception):
    """Base error for all stylegraph errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StyleTreeError(StyleGraphError):
    """The captured style tree is structurally invalid."""


class HostCapabilityError(StyleGraphError):
    """The host canvas cannot perform an operation the import requires.

    This is the only fatal error class: it aborts the whole import.
    """


class FontLoadError(StyleGraphError):
    """A single font could not be loaded by the host."""

    def __init__(self, family: str, style: str, **kwargs) -> None:
        super().__init__(f"Font not available: {family} {style}", **kwargs)
        self.family = family
        self.style = style


class AssetFetchError(StyleGraphError):
    """An image or other asset could not be fetched."""

    def __init__(self, message: str, *, url: str = "", **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.url = url


class AssetDecodeError(StyleGraphError):
    """Fetched asset bytes could not be decoded into an image."""


class VectorImportError(StyleGraphError):
    """The host rejected a reconstructed vector markup string."""
