"""Font resolution with a fallback cascade."""

from stylegraph.fonts.resolver import (
    DEFAULT_FONT,
    FONT_FALLBACKS,
    FontReport,
    FontResolver,
    FontSubstitution,
    collect_font_keys,
    font_key,
    resolve_font_family,
    resolve_font_style_name,
)

__all__ = [
    "DEFAULT_FONT",
    "FONT_FALLBACKS",
    "FontReport",
    "FontResolver",
    "FontSubstitution",
    "collect_font_keys",
    "font_key",
    "resolve_font_family",
    "resolve_font_style_name",
]
