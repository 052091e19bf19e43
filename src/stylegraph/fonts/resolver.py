"""Font resolution: family/style extraction, fallback cascade and alias map."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping

from stylegraph.errors import FontLoadError
from stylegraph.host.base import Canvas
from stylegraph.model.scene import FontName
from stylegraph.model.style_tree import ElementNode, StyleTreeNode
from stylegraph.parser.values import strip_quotes

log = logging.getLogger(__name__)

DEFAULT_FONT = FontName("Inter", "Regular")

FONT_FALLBACKS: dict[str, str] = {
    "Roboto": "Inter",
    "Open Sans": "Inter",
    "Montserrat": "Inter",
    "Lato": "Inter",
    "Poppins": "Inter",
    "Source Sans Pro": "Inter",
    "Raleway": "Inter",
    "Nunito": "Inter",
    "Ubuntu": "Inter",
    "Mukta": "Inter",
    "PT Sans": "Arial",
    "Merriweather": "Georgia",
    "Playfair Display": "Georgia",
    "Oswald": "Arial Black",
}

# Tags rendered as text runs; their font is requested even without direct text.
TEXT_BEARING_TAGS = frozenset(
    {
        "h1", "h2", "h3", "h4", "h5", "h6",
        "p", "span", "a", "li", "strong", "em", "u", "s",
        "button", "label", "input", "textarea",
    }
)  # fmt: skip


@dataclass(frozen=True)
class FontSubstitution:
    original: str
    fallback: str


@dataclass
class FontReport:
    """Outcome of the font pre-pass."""

    missing: list[FontName] = field(default_factory=list)
    substitutions: list[FontSubstitution] = field(default_factory=list)


def resolve_font_family(style: Mapping[str, str]) -> str:
    """First family of the ``font-family`` list, or ``Inter``."""
    raw = style.get("font-family") or ""
    for candidate in raw.split(","):
        family = strip_quotes(candidate.strip())
        if family:
            return family
    return DEFAULT_FONT.family


def resolve_font_style_name(style: Mapping[str, str]) -> str:
    """Map ``font-weight``/``font-style`` onto Regular, Bold, Italic or Bold Italic."""
    weight_raw = (style.get("font-weight") or "").strip().lower()
    weight = 400
    if weight_raw.isdigit():
        weight = int(weight_raw)
    elif "bold" in weight_raw:
        weight = 700
    font_style = (style.get("font-style") or "").lower()
    italic = "italic" in font_style or "oblique" in font_style
    if weight >= 700:
        return "Bold Italic" if italic else "Bold"
    return "Italic" if italic else "Regular"


def font_key(style: Mapping[str, str]) -> FontName:
    return FontName(resolve_font_family(style), resolve_font_style_name(style))


def collect_font_keys(
    nodes: Iterable[StyleTreeNode],
    effective_style: Callable[[ElementNode], Mapping[str, str]] | None = None,
) -> list[FontName]:
    """Every font key the import will ask for, in first-seen document order.

    *effective_style* lets the caller apply handler defaults (headings are
    bold unless styled otherwise) before the key is derived.
    """
    keys: dict[FontName, None] = {}
    for node in nodes:
        if not isinstance(node, ElementNode):
            continue
        for element in node.walk():
            if element.tag in TEXT_BEARING_TAGS or element.has_text_children:
                style = effective_style(element) if effective_style else element.style
                keys.setdefault(font_key(style), None)
    if not keys:
        keys[DEFAULT_FONT] = None
    return list(keys)


class FontResolver:
    """Loads fonts through the host, walking the fallback cascade.

    The alias map records, per requested font key, the font that actually
    loaded. It lives as long as the resolver, which is one import.
    """

    def __init__(
        self,
        canvas: Canvas,
        *,
        fallbacks: Mapping[str, str] | None = None,
        default: FontName = DEFAULT_FONT,
    ) -> None:
        self._canvas = canvas
        self._fallbacks = dict(FONT_FALLBACKS)
        if fallbacks:
            self._fallbacks.update(fallbacks)
        self._default = default
        self.aliases: dict[FontName, FontName] = {}

    @property
    def default(self) -> FontName:
        return self._default

    def candidates(self, key: FontName) -> list[FontName]:
        """Exact font, fallback family (same style, then Regular), then the default."""
        attempts = [key]
        fallback_family = self._fallbacks.get(key.family)
        if fallback_family:
            attempts.append(FontName(fallback_family, key.style))
            attempts.append(FontName(fallback_family, "Regular"))
        attempts.append(self._default)
        return list(dict.fromkeys(attempts))

    async def try_load(self, font: FontName) -> bool:
        try:
            await self._canvas.load_font(font)
        except FontLoadError as exc:
            log.debug("%s", exc)
            return False
        return True

    async def resolve(self, key: FontName) -> FontName | None:
        """Load the first candidate the host accepts and remember it."""
        if key in self.aliases:
            return self.aliases[key]
        for attempt in self.candidates(key):
            if await self.try_load(attempt):
                self.aliases[key] = attempt
                return attempt
        return None

    async def prepare(self, keys: Iterable[FontName]) -> FontReport:
        """Resolve every key up front, reporting substitutions and misses."""
        report = FontReport()
        for key in dict.fromkeys(keys):
            loaded = await self.resolve(key)
            if loaded is None:
                log.warning("No font in the cascade could be loaded for %s", key.display)
                report.missing.append(key)
            elif loaded != key:
                report.substitutions.append(
                    FontSubstitution(original=key.display, fallback=loaded.display)
                )
        return report

    async def font_for(self, style: Mapping[str, str]) -> FontName:
        """The loaded font to assign for *style*; falls back to the default."""
        key = font_key(style)
        font = self.aliases.get(key, key)
        if await self.try_load(font):
            return font
        if await self.try_load(self._default):
            return self._default
        log.warning("Default font %s could not be loaded", self._default.display)
        return self._default
