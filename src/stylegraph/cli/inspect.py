"""CLI command: stylegraph inspect -- summarize a captured style tree."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

import click

from stylegraph.cli.convert import load_document
from stylegraph.engine.classify import TagCategory, classify, effective_style
from stylegraph.engine.importer import count_nodes
from stylegraph.fonts.resolver import FONT_FALLBACKS, collect_font_keys
from stylegraph.model.style_tree import ElementNode, StyleTreeNode


def _categories(nodes: list[StyleTreeNode], counts: Counter) -> None:
    for node in nodes:
        counts[classify(node)] += 1
        if isinstance(node, ElementNode):
            _categories(list(node.children), counts)


@click.command()
@click.argument("tree", type=click.Path(exists=True, dir_okay=False))
def inspect(tree: str) -> None:
    """Show node counts per tag category and the fonts an import would request."""
    nodes, options = load_document(Path(tree))

    click.echo(f"Nodes: {count_nodes(nodes)}")
    if options:
        click.echo(f"Options: {', '.join(sorted(options))}")
    click.echo()

    counts: Counter = Counter()
    _categories(nodes, counts)
    click.echo("Categories:")
    for category in TagCategory:
        if counts[category]:
            click.echo(f"  {category.value:<15} {counts[category]}")
    click.echo()

    click.echo("Fonts:")
    for key in collect_font_keys(nodes, effective_style):
        fallback = FONT_FALLBACKS.get(key.family)
        suffix = f"  (fallback {fallback})" if fallback else ""
        click.echo(f"  {key.display}{suffix}")
