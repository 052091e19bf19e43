"""Tag handlers for the scene graph builder."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stylegraph.handlers.button import ButtonHandler
from stylegraph.handlers.generic import GenericHandler
from stylegraph.handlers.heading import HeadingHandler
from stylegraph.handlers.image import ImageHandler
from stylegraph.handlers.inline_text import InlineTextHandler
from stylegraph.handlers.list_container import ListContainerHandler
from stylegraph.handlers.plain_text import PlainTextHandler
from stylegraph.handlers.vector import VectorHandler

if TYPE_CHECKING:
    from stylegraph.engine.builder import HandlerRegistry

__all__ = [
    "ButtonHandler",
    "GenericHandler",
    "HeadingHandler",
    "ImageHandler",
    "InlineTextHandler",
    "ListContainerHandler",
    "PlainTextHandler",
    "VectorHandler",
    "create_default_registry",
]


def create_default_registry() -> HandlerRegistry:
    """Create a HandlerRegistry with one handler per tag category.

    Vector sub-elements have no handler: the builder never visits them on
    their own. Unknown categories fall back to :class:`GenericHandler`.
    """
    from stylegraph.engine.builder import HandlerRegistry
    from stylegraph.engine.classify import TagCategory

    registry = HandlerRegistry()
    generic = GenericHandler()

    # Text
    registry.register(TagCategory.PLAIN_TEXT, PlainTextHandler())
    registry.register(TagCategory.HEADING, HeadingHandler())
    registry.register(TagCategory.INLINE_TEXT, InlineTextHandler())

    # Containers
    registry.register(TagCategory.LIST_CONTAINER, ListContainerHandler())
    registry.register(TagCategory.BUTTON, ButtonHandler())
    registry.register(TagCategory.GENERIC, generic)

    # Media
    registry.register(TagCategory.IMAGE, ImageHandler())
    registry.register(TagCategory.VECTOR, VectorHandler())

    registry.set_default(generic)
    return registry
