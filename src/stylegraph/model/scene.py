"""Output model: scene graph nodes, paints, effects and shared style records."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, ClassVar, Iterator, Literal, Union

from stylegraph.model.values import BoxEdges, Color


class LayoutMode(Enum):
    NONE = "NONE"
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class SizingMode(Enum):
    FIXED = "FIXED"
    HUG = "HUG"
    FILL = "FILL"


class AxisAlign(Enum):
    MIN = "MIN"
    CENTER = "CENTER"
    MAX = "MAX"
    SPACE_BETWEEN = "SPACE_BETWEEN"


class ScaleMode(Enum):
    FILL = "FILL"
    FIT = "FIT"
    TILE = "TILE"


@dataclass(frozen=True)
class FontName:
    """A host font identity; doubles as the font key of the alias map."""

    family: str
    style: str = "Regular"

    @property
    def display(self) -> str:
        return f"{self.family} {self.style}"


# ---------------------------------------------------------------------------
# Paints, effects, interactions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SolidPaint:
    color: Color
    opacity: float = 1.0
    type: ClassVar[str] = "SOLID"

    @classmethod
    def from_color(cls, color: Color) -> SolidPaint:
        """Split an RGBA color into an opaque paint color plus paint opacity."""
        return cls(color=color.opaque(), opacity=color.a)


@dataclass(frozen=True)
class GradientPaint:
    kind: Literal["GRADIENT_LINEAR", "GRADIENT_RADIAL"]
    stops: tuple[tuple[float, Color], ...]
    transform: tuple[tuple[float, float, float], tuple[float, float, float]] = (
        (1.0, 0.0, 0.0),
        (0.0, 1.0, 0.0),
    )

    @property
    def type(self) -> str:
        return self.kind


@dataclass(frozen=True)
class ImagePaint:
    image_hash: str
    scale_mode: ScaleMode = ScaleMode.FILL
    type: ClassVar[str] = "IMAGE"


Paint = Union[SolidPaint, GradientPaint, ImagePaint]


@dataclass(frozen=True)
class ShadowEffect:
    inset: bool
    offset_x: float
    offset_y: float
    radius: float
    spread: float
    color: Color
    visible: bool = True
    blend_mode: str = "NORMAL"

    @property
    def type(self) -> str:
        return "INNER_SHADOW" if self.inset else "DROP_SHADOW"


@dataclass(frozen=True)
class LineHeight:
    unit: Literal["PIXELS", "PERCENT"]
    value: float


@dataclass(frozen=True)
class Reaction:
    """A click-triggered navigation to another node."""

    destination_id: str
    trigger: str = "ON_CLICK"
    navigation: str = "NAVIGATE"


@dataclass
class TextStyle:
    id: str
    name: str
    font_size: float = 12.0


@dataclass
class PaintStyle:
    id: str
    name: str
    paints: list[Paint] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class SceneNode:
    """Common geometry and bookkeeping shared by every scene node."""

    id: str
    name: str = ""
    x: float = 0.0
    y: float = 0.0
    width: float = 100.0
    height: float = 100.0
    opacity: float = 1.0
    sizing_horizontal: SizingMode = SizingMode.FIXED
    sizing_vertical: SizingMode = SizingMode.FIXED
    layout_grow: float = 0.0
    reactions: list[Reaction] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)
    parent: Any = field(default=None, repr=False)

    type: ClassVar[str] = "NODE"

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def iter_tree(self) -> Iterator[SceneNode]:
        """Yield this node and all descendants in document order."""
        yield self

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        for f in fields(self):
            if f.name == "parent":
                continue
            data[f.name] = export_value(getattr(self, f.name))
        return data


class _Container:
    """Child bookkeeping shared by frames and pages."""

    children: list[SceneNode]

    def append_child(self, child: SceneNode) -> None:
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)

    def find_all(self, predicate: Callable[[SceneNode], bool] | None = None) -> list[SceneNode]:
        """Return every descendant (not self) in document order."""
        found: list[SceneNode] = []
        for child in self.children:
            for node in child.iter_tree():
                if predicate is None or predicate(node):
                    found.append(node)
        return found


@dataclass(eq=False)
class Frame(_Container, SceneNode):
    """A container with an auto-layout contract."""

    children: list[SceneNode] = field(default_factory=list)
    layout_mode: LayoutMode = LayoutMode.NONE
    padding: BoxEdges = field(default_factory=BoxEdges)
    item_spacing: float = 0.0
    primary_axis_align: AxisAlign = AxisAlign.MIN
    counter_axis_align: AxisAlign = AxisAlign.MIN
    clips_content: bool = True
    fills: list[Paint] = field(default_factory=list)
    strokes: list[Paint] = field(default_factory=list)
    stroke_weight: float = 0.0
    stroke_align: str = "INSIDE"
    effects: list[ShadowEffect] = field(default_factory=list)
    corner_radius: float = 0.0
    corner_radii: tuple[float, float, float, float] | None = None  # tl, tr, br, bl

    type: ClassVar[str] = "FRAME"

    @property
    def is_auto_layout(self) -> bool:
        return self.layout_mode is not LayoutMode.NONE

    @property
    def primary_axis_sizing(self) -> SizingMode:
        if self.layout_mode is LayoutMode.HORIZONTAL:
            return self.sizing_horizontal
        return self.sizing_vertical

    @primary_axis_sizing.setter
    def primary_axis_sizing(self, mode: SizingMode) -> None:
        if self.layout_mode is LayoutMode.HORIZONTAL:
            self.sizing_horizontal = mode
        else:
            self.sizing_vertical = mode

    @property
    def counter_axis_sizing(self) -> SizingMode:
        if self.layout_mode is LayoutMode.HORIZONTAL:
            return self.sizing_vertical
        return self.sizing_horizontal

    @counter_axis_sizing.setter
    def counter_axis_sizing(self, mode: SizingMode) -> None:
        if self.layout_mode is LayoutMode.HORIZONTAL:
            self.sizing_vertical = mode
        else:
            self.sizing_horizontal = mode

    def iter_tree(self) -> Iterator[SceneNode]:
        yield self
        for child in self.children:
            yield from child.iter_tree()


@dataclass(eq=False)
class TextRun(SceneNode):
    characters: str = ""
    font_name: FontName = field(default_factory=lambda: FontName("Inter", "Regular"))
    font_size: float = 12.0
    fills: list[Paint] = field(default_factory=list)
    line_height: LineHeight | None = None
    letter_spacing: float | None = None
    text_decoration: str = "NONE"
    text_align: str = "LEFT"
    text_case: str = "ORIGINAL"
    text_auto_resize: str = "NONE"
    text_style_id: str | None = None
    fill_style_id: str | None = None

    type: ClassVar[str] = "TEXT"


@dataclass(eq=False)
class ImageShape(SceneNode):
    fills: list[Paint] = field(default_factory=list)
    strokes: list[Paint] = field(default_factory=list)
    stroke_weight: float = 0.0
    stroke_align: str = "INSIDE"
    effects: list[ShadowEffect] = field(default_factory=list)
    corner_radius: float = 0.0

    type: ClassVar[str] = "RECTANGLE"


@dataclass(eq=False)
class VectorShape(SceneNode):
    markup: str = ""

    type: ClassVar[str] = "VECTOR"


@dataclass(eq=False)
class Page(_Container):
    """The host page that owns top-level frames."""

    id: str = "0:1"
    name: str = "Page 1"
    children: list[SceneNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "PAGE",
            "id": self.id,
            "name": self.name,
            "children": [child.to_dict() for child in self.children],
        }


def export_value(value: Any) -> Any:
    """Convert model values into JSON-friendly structures."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, SceneNode):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [export_value(v) for v in value]
    if isinstance(value, dict):
        return {k: export_value(v) for k, v in value.items()}
    if hasattr(value, "__dataclass_fields__"):
        data = {f.name: export_value(getattr(value, f.name)) for f in fields(value)}
        kind = getattr(value, "type", None)
        if isinstance(kind, str):
            data["type"] = kind
        return data
    return value
