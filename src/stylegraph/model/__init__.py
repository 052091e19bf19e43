"""stylegraph model layer -- public type re-exports."""

from stylegraph.model.scene import (
    AxisAlign,
    FontName,
    Frame,
    GradientPaint,
    ImagePaint,
    ImageShape,
    LayoutMode,
    LineHeight,
    Page,
    Paint,
    PaintStyle,
    Reaction,
    ScaleMode,
    SceneNode,
    ShadowEffect,
    SizingMode,
    SolidPaint,
    TextRun,
    TextStyle,
    VectorShape,
)
from stylegraph.model.style_tree import (
    ElementNode,
    StyleTreeNode,
    TextNode,
    load_import_message,
    load_style_tree,
    text_content,
)
from stylegraph.model.values import (
    BorderSpec,
    BoxEdges,
    Color,
    GradientSpec,
    GradientStop,
    ShadowSpec,
)

__all__ = [
    # style tree
    "ElementNode",
    "StyleTreeNode",
    "TextNode",
    "load_import_message",
    "load_style_tree",
    "text_content",
    # values
    "BorderSpec",
    "BoxEdges",
    "Color",
    "GradientSpec",
    "GradientStop",
    "ShadowSpec",
    # scene
    "AxisAlign",
    "FontName",
    "Frame",
    "GradientPaint",
    "ImagePaint",
    "ImageShape",
    "LayoutMode",
    "LineHeight",
    "Page",
    "Paint",
    "PaintStyle",
    "Reaction",
    "ScaleMode",
    "SceneNode",
    "ShadowEffect",
    "SizingMode",
    "SolidPaint",
    "TextRun",
    "TextStyle",
    "VectorShape",
]
