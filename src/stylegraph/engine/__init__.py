"""Import engine: tag classification, tree walk, links, styles and orchestration."""

from stylegraph.engine.builder import Handler, HandlerRegistry, SceneBuilder
from stylegraph.engine.classify import TagCategory, classify, effective_style
from stylegraph.engine.context import IdentityMap, ImportContext, LinkSource
from stylegraph.engine.importer import ImportResult, Importer, create_root_frame
from stylegraph.engine.links import resolve_links
from stylegraph.engine.styles import StyleSummary, create_local_styles

__all__ = [
    "Handler",
    "HandlerRegistry",
    "IdentityMap",
    "ImportContext",
    "ImportResult",
    "Importer",
    "LinkSource",
    "SceneBuilder",
    "StyleSummary",
    "TagCategory",
    "classify",
    "create_local_styles",
    "create_root_frame",
    "effective_style",
    "resolve_links",
]
