"""CLI command: stylegraph convert -- import a style tree into an in-memory canvas."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click

from stylegraph.config import ImportOptions
from stylegraph.engine.importer import Importer
from stylegraph.errors import StyleTreeError
from stylegraph.events import types as events
from stylegraph.events.bus import EventBus
from stylegraph.host.memory import MemoryCanvas
from stylegraph.model.scene import FontName
from stylegraph.model.style_tree import StyleTreeNode, load_import_message


def load_document(path: Path) -> tuple[list[StyleTreeNode], dict[str, Any]]:
    """Read a capture file; exits with status 1 on unreadable input."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return load_import_message(data)
    except (OSError, UnicodeDecodeError) as exc:
        click.echo(f"Cannot read {path}: {exc}", err=True)
    except json.JSONDecodeError as exc:
        click.echo(f"Invalid JSON: {exc}", err=True)
    except StyleTreeError as exc:
        click.echo(f"Invalid style tree: {exc}", err=True)
    sys.exit(1)


def _parse_font(spec: str) -> FontName:
    family, _, style = spec.partition(":")
    return FontName(family.strip(), style.strip() or "Regular")


def _parse_font_map(entries: tuple[str, ...]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        family, sep, fallback = entry.partition("=")
        if not sep or not family.strip() or not fallback.strip():
            raise click.BadParameter(f"expected FAMILY=FALLBACK, got {entry!r}", param_hint="--font-map")
        mapping[family.strip()] = fallback.strip()
    return mapping


def _report(bus: EventBus) -> None:
    """Print notifications to stderr as they happen."""

    def missing(event: events.MissingFonts) -> None:
        names = ", ".join(font.display for font in event.fonts)
        click.echo(f"Missing fonts: {names}", err=True)

    def substituted(event: events.FontSubstitutions) -> None:
        for item in event.items:
            click.echo(f"Font substituted: {item.original} -> {item.fallback}", err=True)

    def failed(event: events.ImportFailed) -> None:
        click.echo(f"Import failed: {event.error}", err=True)

    def completed(event: events.ImportCompleted) -> None:
        click.echo(f"Imported {event.node_count} nodes into {event.root_id}", err=True)

    bus.subscribe(events.MissingFonts, missing)
    bus.subscribe(events.FontSubstitutions, substituted)
    bus.subscribe(events.ImportFailed, failed)
    bus.subscribe(events.ImportCompleted, completed)


@click.command()
@click.argument("tree", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None, help="Write scene JSON here instead of stdout")
@click.option("--viewport-width", type=float, default=None, help="Root frame width (default 1920)")
@click.option("--viewport-height", type=float, default=None, help="Viewport height")
@click.option("--no-auto-layout", is_flag=True, help="Keep block containers free-form")
@click.option("--no-styles", is_flag=True, help="Skip shared text/color style extraction")
@click.option("--no-links", is_flag=True, help="Skip prototype links for #anchors")
@click.option("--font", "fonts", multiple=True, help="Font the canvas provides, FAMILY[:STYLE] (repeatable)")
@click.option("--font-map", multiple=True, help="Extra fallback FAMILY=FALLBACK (repeatable)")
@click.option("--base-url", default=None, help="Base URL for relative image references")
def convert(
    tree: str,
    output: str | None,
    viewport_width: float | None,
    viewport_height: float | None,
    no_auto_layout: bool,
    no_styles: bool,
    no_links: bool,
    fonts: tuple[str, ...],
    font_map: tuple[str, ...],
    base_url: str | None,
) -> None:
    """Import a captured style tree and print the resulting scene graph as JSON.

    TREE is either a bare list of nodes or an ``import-html`` message with
    ``payload`` and ``options``; command line flags override message options.
    """
    nodes, raw_options = load_document(Path(tree))

    # Step 1: Merge message options with flags
    overrides: dict[str, Any] = {"base_url": base_url}
    if no_auto_layout:
        overrides["auto_layout"] = False
    if no_styles:
        overrides["create_styles"] = False
    if no_links:
        overrides["prototype_links"] = False
    if viewport_width is not None or viewport_height is not None:
        viewport = dict(raw_options.get("viewport") or {})
        if viewport_width is not None:
            viewport["width"] = viewport_width
        if viewport_height is not None:
            viewport["height"] = viewport_height
        overrides["viewport"] = viewport
    extra_fallbacks = _parse_font_map(font_map)
    if extra_fallbacks:
        overrides["font_map"] = {**(raw_options.get("fontMap") or {}), **extra_fallbacks}
    options = ImportOptions.from_mapping(raw_options, **overrides)

    # Step 2: Run the import
    canvas = MemoryCanvas(fonts=[_parse_font(f) for f in fonts] or None)
    bus = EventBus()
    _report(bus)
    result = asyncio.run(Importer(canvas, options=options, event_bus=bus).run(nodes))

    # Step 3: Emit the scene
    rendered = json.dumps(canvas.to_dict(), indent=2)
    if output:
        Path(output).write_text(rendered + "\n", encoding="utf-8")
        click.echo(f"Scene written to {output}", err=True)
    else:
        click.echo(rendered)

    sys.exit(0 if result.success else 1)
