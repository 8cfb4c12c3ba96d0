"""Symbolic permission strings: raw flag-prefixed form and its normalization.

The raw form spells every type and special bit as a leading marker letter
(``dt`` for a sticky directory, ``ug`` for setuid+setgid, ``L`` for a
symlink, ...) ahead of the nine ``rwx`` characters. Normalization folds those
markers into the conventional ten-character ``ls`` rendering through an
ordered list of rules where the first match wins.
"""

from __future__ import annotations

import stat
from collections.abc import Callable
from dataclasses import dataclass

PERMISSION_WIDTH = 10
TYPE_LETTERS = frozenset("-dlcbps")

_RWX_BITS: tuple[tuple[int, str], ...] = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)


def raw_mode_string(mode: int) -> str:
    """Render ``mode`` in flag-prefixed form, e.g. ``dtrwxrwxrwx``."""
    markers = ""
    if stat.S_ISDIR(mode):
        markers += "d"
    elif stat.S_ISLNK(mode):
        markers += "L"
    elif stat.S_ISCHR(mode):
        markers += "Dc"
    elif stat.S_ISBLK(mode):
        markers += "Db"
    elif stat.S_ISFIFO(mode):
        markers += "p"
    elif stat.S_ISSOCK(mode):
        markers += "s"
    if mode & stat.S_ISUID:
        markers += "u"
    if mode & stat.S_ISGID:
        markers += "g"
    if mode & stat.S_ISVTX:
        markers += "t"
    bits = "".join(letter if mode & bit else "-" for bit, letter in _RWX_BITS)
    return (markers or "-") + bits


def _mark_special(text: str, position: int) -> str:
    return f"{text[:position]}s{text[position + 1:]}"


@dataclass(frozen=True)
class PermissionRule:
    """One normalization step: rewrite ``text`` with ``apply`` when ``matches``."""

    name: str
    matches: Callable[[str], bool]
    apply: Callable[[str], str]


PERMISSION_RULES: tuple[PermissionRule, ...] = (
    PermissionRule(
        "symlink",
        lambda text: text.startswith("L"),
        lambda text: "l" + text[1:],
    ),
    PermissionRule(
        "device",
        lambda text: text.startswith("D"),
        lambda text: text[1:],
    ),
    PermissionRule(
        "setuid_setgid",
        lambda text: text.startswith("ug"),
        lambda text: _mark_special(_mark_special("-" + text[2:], 3), 6),
    ),
    PermissionRule(
        "setuid",
        lambda text: text.startswith("u"),
        lambda text: _mark_special("-" + text[1:], 3),
    ),
    PermissionRule(
        "setgid",
        lambda text: text.startswith("g"),
        lambda text: _mark_special("-" + text[1:], 6),
    ),
    PermissionRule(
        "sticky_directory",
        lambda text: text.startswith("dt"),
        lambda text: ("d" + text[2:])[:-1] + "t",
    ),
)


def matching_rule(text: str) -> PermissionRule | None:
    """Return the first rule that applies to ``text``, if any."""
    for rule in PERMISSION_RULES:
        if rule.matches(text):
            return rule
    return None


def normalize_permissions(text: str) -> str:
    """Apply the first matching normalization rule; unmatched text is returned as-is."""
    rule = matching_rule(text)
    if rule is None:
        return text
    return rule.apply(text)


def symbolic_permissions(mode: int) -> str:
    """Return the normalized ten-character permission string for ``mode``.

    Marker combinations no rule covers (a setgid directory, a sticky regular
    file) fall back to :func:`stat.filemode`.
    """
    normalized = normalize_permissions(raw_mode_string(mode))
    if len(normalized) != PERMISSION_WIDTH or normalized[0] not in TYPE_LETTERS:
        return stat.filemode(mode)
    return normalized


__all__ = [
    "PERMISSION_WIDTH",
    "PermissionRule",
    "PERMISSION_RULES",
    "raw_mode_string",
    "matching_rule",
    "normalize_permissions",
    "symbolic_permissions",
]
