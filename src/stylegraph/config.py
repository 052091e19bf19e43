from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

DEFAULT_VIEWPORT_WIDTH = 1920.0


@dataclass(frozen=True)
class Viewport:
    width: float = DEFAULT_VIEWPORT_WIDTH
    height: float = 1080.0


@dataclass(frozen=True)
class ImportOptions:
    auto_layout: bool = True
    create_styles: bool = True
    prototype_links: bool = True
    viewport: Viewport | None = None
    font_map: dict[str, str] = field(default_factory=dict)
    base_url: str | None = None
    yield_every: int = 300  # created nodes between cooperative yields
    fetch_timeout: float = 15.0

    @property
    def root_width(self) -> float:
        if self.viewport is not None and self.viewport.width > 0:
            return self.viewport.width
        return DEFAULT_VIEWPORT_WIDTH

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], **overrides: Any) -> ImportOptions:
        """Build options from a message ``options`` object.

        Accepts both the camelCase keys of the capture message (``autoLayout``,
        ``createStyles``, ``prototypeLinks``, ``fontMap``) and snake_case
        names. Keyword *overrides* win over *data*.
        """
        values: dict[str, Any] = {}
        aliases = {
            "autoLayout": "auto_layout",
            "createStyles": "create_styles",
            "prototypeLinks": "prototype_links",
            "fontMap": "font_map",
            "baseUrl": "base_url",
            "yieldEvery": "yield_every",
            "fetchTimeout": "fetch_timeout",
        }
        for key, value in data.items():
            name = aliases.get(key, key)
            if name in cls.__dataclass_fields__ and value is not None:
                values[name] = value
        values.update({k: v for k, v in overrides.items() if v is not None})

        viewport = values.get("viewport")
        if isinstance(viewport, Mapping):
            values["viewport"] = Viewport(
                width=float(viewport.get("width") or DEFAULT_VIEWPORT_WIDTH),
                height=float(viewport.get("height") or 1080.0),
            )
        if "font_map" in values:
            values["font_map"] = {str(k): str(v) for k, v in dict(values["font_map"]).items()}
        for flag in ("auto_layout", "create_styles", "prototype_links"):
            if flag in values:
                values[flag] = bool(values[flag])
        return cls(**values)
