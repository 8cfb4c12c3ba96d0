"""BSD ``LSCOLORS`` parsing into an immutable category → escape table.

Each category consumes one two-letter code: a foreground letter followed by a
background letter. Decoding is deliberately lenient; unknown letters add
nothing and missing trailing codes simply leave categories uncolored.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..ansi import RESET, sgr

DEFAULT_LSCOLORS = "exfxcxdxbxegedabagacad"
END_KEY = "end"

# Order in which two-letter codes appear in an LSCOLORS string.
LSCOLORS_CATEGORIES: tuple[str, ...] = (
    "directory",
    "symlink",
    "socket",
    "pipe",
    "executable",
    "block",
    "character",
    "executable_suid",
    "executable_sgid",
    "directory_o+w_sticky",
    "directory_o+w",
)

# Categories the renderer consults that LSCOLORS itself cannot express.
EXTRA_CATEGORIES: tuple[str, ...] = (
    "directory_sticky",
    "multi_hardlink",
    "link_orphan",
    "link_orphan_target",
)

FOREGROUND_BASE = 30
BACKGROUND_BASE = 40
NO_COLOR_LETTER = "x"


@dataclass(frozen=True)
class _Letter:
    offset: int
    bright: bool


def _letter_table() -> dict[str, _Letter]:
    table: dict[str, _Letter] = {}
    # black, red, green, brown, blue, magenta, cyan, white
    for offset, letter in enumerate("abcdefgh"):
        table[letter] = _Letter(offset=offset, bright=False)
        table[letter.upper()] = _Letter(offset=offset, bright=True)
    return table


_LETTERS: Mapping[str, _Letter] = MappingProxyType(_letter_table())


def partial_color(letter: str, *, foreground: bool) -> str:
    """Return the SGR parameter fragment contributed by one code letter.

    Foreground fragments carry their own intensity prefix (``0;`` normal,
    ``1;`` bold) and background fragments a leading ``;`` separator. Bright
    letters only ever carry foreground color numbers, even in the background
    slot.
    """
    if letter == NO_COLOR_LETTER:
        return "0;" if foreground else ""
    decoded = _LETTERS.get(letter)
    if decoded is None:
        return ""
    if foreground:
        intensity = "1;" if decoded.bright else "0;"
        return f"{intensity}{FOREGROUND_BASE + decoded.offset}"
    base = FOREGROUND_BASE if decoded.bright else BACKGROUND_BASE
    return f";{base + decoded.offset}"


def color_from_bsd_code(code: str) -> str:
    """Convert a two-letter code like ``ex`` into ``ESC[0;34m``."""
    foreground = code[0] if len(code) > 0 else NO_COLOR_LETTER
    background = code[1] if len(code) > 1 else NO_COLOR_LETTER
    return sgr(partial_color(foreground, foreground=True) + partial_color(background, foreground=False))


@dataclass(frozen=True)
class ColorTable(Mapping[str, str]):
    """Read-only mapping of category name to escape sequence.

    ``"end"`` is always present and holds the shared reset sequence. Missing
    categories mean "render uncolored".
    """

    colors: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = dict(self.colors)
        frozen.setdefault(END_KEY, RESET)
        object.__setattr__(self, "colors", MappingProxyType(frozen))

    def __getitem__(self, key: str) -> str:
        return self.colors[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.colors)

    def __len__(self) -> int:
        return len(self.colors)

    @property
    def end(self) -> str:
        return self.colors[END_KEY]


def normalize_extension_key(key: str) -> str:
    """Normalize ``txt``, ``.txt`` and ``*.txt`` to the ``*.txt`` glob key."""
    if key.startswith("*."):
        return key
    return f"*.{key.lstrip('.')}"


def parse_lscolors(spec: str) -> dict[str, str]:
    """Map each two-letter code in ``spec`` to its category escape sequence."""
    colors: dict[str, str] = {}
    for index, category in enumerate(LSCOLORS_CATEGORIES):
        code = spec[index * 2 : index * 2 + 2]
        if len(code) < 2:
            break
        colors[category] = color_from_bsd_code(code)
    return colors


def build_color_table(spec: str, extra: Mapping[str, str] | None = None) -> ColorTable:
    """Build the process-wide color table from an LSCOLORS-style ``spec``.

    ``extra`` adds keys LSCOLORS cannot express: renderer-only categories
    (see ``EXTRA_CATEGORIES``) and file-extension globs. Any other key is
    treated as an extension.
    """
    colors = parse_lscolors(spec)
    for key, code in (extra or {}).items():
        name = key if key in EXTRA_CATEGORIES else normalize_extension_key(key)
        colors[name] = color_from_bsd_code(code)
    return ColorTable(colors)


__all__ = [
    "DEFAULT_LSCOLORS",
    "END_KEY",
    "LSCOLORS_CATEGORIES",
    "EXTRA_CATEGORIES",
    "ColorTable",
    "partial_color",
    "color_from_bsd_code",
    "normalize_extension_key",
    "parse_lscolors",
    "build_color_table",
]
