"""Color selection and name rendering for one display record.

Category selection is an ordered rule list; the first rule whose predicate
holds decides the color, and a category missing from the table renders
uncolored.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TextIO

from ..errors import OutputWriteError
from ..listing.types import Listing
from ..options import Options
from .colors import ColorTable

LINK_ARROW = " -> "
ORPHAN_TARGET_KEY = "link_orphan_target"


def _char_at(text: str, index: int) -> str:
    return text[index] if index < len(text) else ""


def _hard_links(record: Listing) -> int:
    try:
        return int(record.hard_link_count)
    except ValueError:
        return 0


def extension_key(name: str) -> str | None:
    """Return the ``*.ext`` glob key for ``name``'s last dot segment."""
    segments = name.split(".")
    if len(segments) < 2:
        return None
    return f"*.{segments[-1]}"


@dataclass(frozen=True)
class ColorRule:
    """Category chosen when ``matches`` holds for a record."""

    category: str
    matches: Callable[[Listing], bool]


def _perm(record: Listing, index: int, letter: str) -> bool:
    return _char_at(record.permissions, index) == letter


COLOR_RULES: tuple[ColorRule, ...] = (
    ColorRule(
        "directory_o+w_sticky",
        lambda r: _perm(r, 0, "d") and _perm(r, 8, "w") and _perm(r, 9, "t"),
    ),
    ColorRule("directory_sticky", lambda r: _perm(r, 0, "d") and _perm(r, 9, "t")),
    ColorRule("directory_o+w", lambda r: _perm(r, 0, "d") and _perm(r, 8, "w")),
    ColorRule("directory", lambda r: _perm(r, 0, "d")),
    ColorRule("multi_hardlink", lambda r: _hard_links(r) > 1),
    ColorRule("link_orphan", lambda r: _perm(r, 0, "l") and r.link_is_orphan),
    ColorRule("symlink", lambda r: _perm(r, 0, "l")),
    ColorRule("executable_suid", lambda r: _perm(r, 3, "s")),
    ColorRule("executable_sgid", lambda r: _perm(r, 6, "s")),
    ColorRule("executable", lambda r: "x" in r.permissions),
    ColorRule("socket", lambda r: r.is_socket),
    ColorRule("pipe", lambda r: r.is_pipe),
    ColorRule("block", lambda r: r.is_block_device),
    ColorRule("character", lambda r: r.is_char_device),
)


def select_color_category(record: Listing, table: Mapping[str, str]) -> str | None:
    """Return the table key that colors ``record``, or ``None`` if no rule applies.

    An extension glob wins only when the table actually defines it; every
    later rule is chosen regardless of whether its category has a color.
    """
    key = extension_key(record.name)
    if key is not None and table.get(key):
        return key
    for rule in COLOR_RULES:
        if rule.matches(record):
            return rule.category
    return None


def _wrap(text: str, color: str | None, table: ColorTable) -> str:
    if not color:
        return text
    return f"{color}{text}{table.end}"


def render_listing_name(record: Listing, table: ColorTable, options: Options) -> str:
    """Return the styled name plus, in long format, the symlink target."""
    if options.color:
        category = select_color_category(record, table)
        name = _wrap(record.name, table.get(category) if category else None, table)
    else:
        name = record.name

    if not (record.is_symlink and options.long):
        return name

    target = record.link_target
    if options.color and record.link_is_orphan:
        target = _wrap(target, table.get(ORPHAN_TARGET_KEY), table)
    return f"{name}{LINK_ARROW}{target}"


def write_listing_name(out: TextIO, record: Listing, table: ColorTable, options: Options) -> None:
    """Append the rendered name for ``record`` to ``out``."""
    text = render_listing_name(record, table, options)
    try:
        out.write(text)
    except OSError as exc:
        raise OutputWriteError(f"write failed: {exc.strerror or exc}") from exc


def format_long_fields(record: Listing) -> str:
    """Join the long-format columns that precede the name, separated by single spaces."""
    return " ".join(
        (
            record.permissions,
            record.hard_link_count,
            record.owner,
            record.group,
            record.size,
            record.month,
            record.day,
            record.time,
        )
    )


__all__ = [
    "COLOR_RULES",
    "ColorRule",
    "extension_key",
    "select_color_category",
    "render_listing_name",
    "write_listing_name",
    "format_long_fields",
]
