"""Event system: bus and notification types for imports."""

from stylegraph.events.bus import EventBus
from stylegraph.events.types import (
    FontSubstitutions,
    ImportCompleted,
    ImportFailed,
    ImportStarted,
    MissingFonts,
)

__all__ = [
    "EventBus",
    "FontSubstitutions",
    "ImportCompleted",
    "ImportFailed",
    "ImportStarted",
    "MissingFonts",
]
