"""Layout resolution: display models onto auto-layout frames, grid row packing."""

from stylegraph.layout.grid import GridPacker, GridSpec
from stylegraph.layout.resolver import (
    append_with_margin,
    apply_child_sizing,
    apply_explicit_sizing,
    configure_layout,
)

__all__ = [
    "GridPacker",
    "GridSpec",
    "append_with_margin",
    "apply_child_sizing",
    "apply_explicit_sizing",
    "configure_layout",
]
