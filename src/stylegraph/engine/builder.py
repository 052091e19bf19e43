"""Scene graph builder: walks the style tree and dispatches to tag handlers."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Mapping, Protocol

from stylegraph.config import ImportOptions
from stylegraph.engine.classify import TagCategory, classify
from stylegraph.engine.context import ImportContext
from stylegraph.host.base import Canvas
from stylegraph.model.scene import Frame, SceneNode
from stylegraph.model.style_tree import ElementNode, StyleTreeNode

log = logging.getLogger(__name__)


class Handler(Protocol):
    """Protocol for tag handlers: must implement render()."""

    async def render(
        self,
        node: StyleTreeNode,
        parent: Frame,
        builder: SceneBuilder,
        inherited_style: Mapping[str, str] | None = None,
    ) -> None: ...


class HandlerRegistry:
    """Maps tag categories to handler implementations."""

    def __init__(self) -> None:
        self._handlers: dict[TagCategory, Handler] = {}
        self._default: Handler | None = None

    def register(self, category: TagCategory, handler: Handler) -> None:
        self._handlers[category] = handler

    def set_default(self, handler: Handler) -> None:
        """Set the fallback handler used when a category has no handler."""
        self._default = handler

    def resolve(self, category: TagCategory) -> Handler:
        handler = self._handlers.get(category)
        if handler is not None:
            return handler
        if self._default is not None:
            return self._default
        raise ValueError(f"No handler for tag category {category.value!r}")

    def __contains__(self, category: object) -> bool:
        return category in self._handlers


class SceneBuilder:
    """Recursive, cooperatively yielding tree walk.

    Sibling order is preserved: nodes are rendered one after another and the
    periodic yield happens between siblings, never inside a handler.
    """

    def __init__(self, ctx: ImportContext, registry: HandlerRegistry) -> None:
        self.ctx = ctx
        self.registry = registry
        self._last_yield_at = 0

    @property
    def canvas(self) -> Canvas:
        return self.ctx.canvas

    @property
    def options(self) -> ImportOptions:
        return self.ctx.options

    async def maybe_yield(self) -> None:
        every = self.ctx.options.yield_every
        created = self.ctx.created
        if every > 0 and created - self._last_yield_at >= every:
            self._last_yield_at = created
            await asyncio.sleep(0)

    async def render_nodes(
        self,
        nodes: Iterable[StyleTreeNode],
        parent: Frame,
        inherited_style: Mapping[str, str] | None = None,
    ) -> None:
        for node in nodes:
            await self.maybe_yield()
            await self.render(node, parent, inherited_style)

    async def render(
        self,
        node: StyleTreeNode,
        parent: Frame,
        inherited_style: Mapping[str, str] | None = None,
    ) -> None:
        category = classify(node)
        if category is TagCategory.VECTOR_PART:
            # Rendered as part of the enclosing <svg> markup.
            log.debug("Skipping stray vector element <%s>", getattr(node, "tag", "?"))
            return
        handler = self.registry.resolve(category)
        await handler.render(node, parent, self, inherited_style)

    def note_created(self, node: SceneNode, element: ElementNode | None = None) -> None:
        """Count a created node and register its DOM id, if any."""
        self.ctx.created += 1
        if element is not None:
            self.ctx.identities.register(element.node_id, node)

    def place(
        self,
        parent: Frame,
        child: SceneNode,
        style: Mapping[str, str],
        element: ElementNode | None = None,
    ) -> None:
        """Append *child* (margins and grids honored) and record it."""
        self.ctx.append(parent, child, style)
        self.note_created(child, element)
