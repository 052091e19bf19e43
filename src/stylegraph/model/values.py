"""Typed value primitives derived from CSS value strings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True)
class Color:
    """An RGBA color with every component in ``[0, 1]``."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @property
    def hex(self) -> str:
        """Uppercase ``#RRGGBB`` representation (alpha dropped)."""
        return "#" + "".join(
            f"{round(max(0.0, min(1.0, c)) * 255):02X}" for c in (self.r, self.g, self.b)
        )

    def opaque(self) -> Color:
        return Color(self.r, self.g, self.b, 1.0)


@dataclass(frozen=True)
class BoxEdges:
    """Per-side pixel values for margin and padding."""

    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @property
    def is_zero(self) -> bool:
        return not (self.top or self.right or self.bottom or self.left)


@dataclass(frozen=True)
class BorderSpec:
    width: float
    color: Color


@dataclass(frozen=True)
class GradientStop:
    position: float  # 0..1
    color: Color


@dataclass(frozen=True)
class GradientSpec:
    """A parsed CSS gradient.

    ``angle_deg`` follows the CSS convention (0 = to top, 90 = to right) and is
    only meaningful for linear gradients.
    """

    kind: Literal["linear", "radial"]
    angle_deg: float = 180.0
    stops: tuple[GradientStop, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ShadowSpec:
    inset: bool
    offset_x: float
    offset_y: float
    blur: float = 0.0
    spread: float = 0.0
    color: Color | None = None
