"""Notifications emitted while an import runs."""

from dataclasses import dataclass

from stylegraph.fonts.resolver import FontSubstitution
from stylegraph.model.scene import FontName


@dataclass(frozen=True)
class ImportStarted:
    node_count: int


@dataclass(frozen=True)
class MissingFonts:
    fonts: tuple[FontName, ...]


@dataclass(frozen=True)
class FontSubstitutions:
    items: tuple[FontSubstitution, ...]


@dataclass(frozen=True)
class ImportCompleted:
    root_id: str
    node_count: int


@dataclass(frozen=True)
class ImportFailed:
    error: str
