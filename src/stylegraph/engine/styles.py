"""Extract shared text and color styles from the imported text runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stylegraph.errors import FontLoadError
from stylegraph.host.base import Canvas
from stylegraph.model.scene import Frame, PaintStyle, SolidPaint, TextRun, TextStyle

log = logging.getLogger(__name__)


@dataclass
class StyleSummary:
    text_styles_created: int = 0
    paint_styles_created: int = 0
    runs_styled: int = 0
    runs_skipped: int = 0


def _size_label(size: float) -> str:
    return f"{size:g}"


async def create_local_styles(canvas: Canvas, root: Frame) -> StyleSummary:
    """One ``Text/<size>`` style per font size, one ``Color/<HEX>`` per solid color.

    Styles already on the canvas are reused by name, so running this twice
    creates nothing new. Runs whose font cannot be loaded are left alone.
    """
    summary = StyleSummary()
    text_styles: dict[str, TextStyle] = {s.name: s for s in canvas.local_text_styles()}
    paint_styles: dict[str, PaintStyle] = {s.name: s for s in canvas.local_paint_styles()}

    for node in root.iter_tree():
        if not isinstance(node, TextRun):
            continue
        try:
            await canvas.load_font(node.font_name)
        except FontLoadError:
            summary.runs_skipped += 1
            continue

        text_name = f"Text/{_size_label(node.font_size)}"
        text_style = text_styles.get(text_name)
        if text_style is None:
            text_style = canvas.create_text_style()
            text_style.name = text_name
            text_style.font_size = node.font_size
            text_styles[text_name] = text_style
            summary.text_styles_created += 1
        node.text_style_id = text_style.id

        solid = next((p for p in node.fills if isinstance(p, SolidPaint)), None)
        if solid is not None:
            paint_name = f"Color/{solid.color.hex}"
            paint_style = paint_styles.get(paint_name)
            if paint_style is None:
                paint_style = canvas.create_paint_style()
                paint_style.name = paint_name
                paint_style.paints = [SolidPaint(color=solid.color)]
                paint_styles[paint_name] = paint_style
                summary.paint_styles_created += 1
            node.fill_style_id = paint_style.id
        summary.runs_styled += 1

    log.debug(
        "Styles: %d text, %d color created; %d runs styled, %d skipped",
        summary.text_styles_created,
        summary.paint_styles_created,
        summary.runs_styled,
        summary.runs_skipped,
    )
    return summary
