"""Rendering: LSCOLORS color tables and styled entry names.

Color tables are built once at startup and only read afterwards.
"""

from __future__ import annotations

from .colors import DEFAULT_LSCOLORS, ColorTable, build_color_table
from .renderer import (
    format_long_fields,
    render_listing_name,
    select_color_category,
    write_listing_name,
)

__all__ = [
    "DEFAULT_LSCOLORS",
    "ColorTable",
    "build_color_table",
    "format_long_fields",
    "render_listing_name",
    "select_color_category",
    "write_listing_name",
]
