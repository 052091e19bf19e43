"""Resolve in-page anchors into click-to-navigate reactions."""

from __future__ import annotations

import logging
from typing import Iterable

from stylegraph.engine.context import IdentityMap, LinkSource
from stylegraph.model.scene import Frame, Reaction, SceneNode

log = logging.getLogger(__name__)


def resolve_links(root: Frame, identities: IdentityMap, sources: Iterable[LinkSource]) -> int:
    """Attach a navigate reaction to each source whose target can be found.

    Targets are looked up by DOM id first, then by node name (first match in
    document order). Returns the number of links created.
    """
    by_name: dict[str, SceneNode] = {}
    for node in root.iter_tree():
        by_name.setdefault(node.name, node)

    linked = 0
    for source in sources:
        target = identities.get(source.target_id) or by_name.get(source.target_id)
        if target is None:
            log.debug("Link target #%s not found", source.target_id)
            continue
        source.node.reactions = [Reaction(destination_id=target.id)]
        linked += 1
    return linked
