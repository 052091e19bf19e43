"""CSS value parsing: lengths, colors, box edges, shadows, grids and gradients."""

from stylegraph.parser.errors import GradientParseError
from stylegraph.parser.gradient import gradient_transform, parse_gradient, parse_gradients
from stylegraph.parser.values import (
    count_grid_tracks,
    extract_image_reference,
    hex_of,
    parse_border,
    parse_box_edges,
    parse_color,
    parse_grid_column_widths,
    parse_length,
    parse_number,
    parse_shadow,
    parse_shadows,
    split_shadow_list,
    strip_quotes,
)

__all__ = [
    "GradientParseError",
    "count_grid_tracks",
    "extract_image_reference",
    "gradient_transform",
    "hex_of",
    "parse_border",
    "parse_box_edges",
    "parse_color",
    "parse_gradient",
    "parse_gradients",
    "parse_grid_column_widths",
    "parse_length",
    "parse_number",
    "parse_shadow",
    "parse_shadows",
    "split_shadow_list",
    "strip_quotes",
]
