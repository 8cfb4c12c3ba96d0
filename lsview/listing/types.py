"""Domain datatypes for raw filesystem entries and their display records."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class RawEntry:
    """A path exactly as the caller supplied it, paired with its ``lstat``.

    ``path`` is not necessarily a basename; for directory listings it is the
    child name relative to the listing's base directory.
    """

    path: str
    stat: os.stat_result


@dataclass(frozen=True)
class Listing:
    """Fully formatted display record for one filesystem entry.

    All fields are pre-rendered strings except ``modified_at_ns`` (kept for
    sorting) and the boolean flags. At most one of the four special-file flags
    is set.
    """

    permissions: str
    hard_link_count: str
    owner: str
    group: str
    size: str
    modified_at_ns: int
    month: str
    day: str
    time: str
    name: str
    link_target: str = ""
    link_is_orphan: bool = False
    is_socket: bool = False
    is_pipe: bool = False
    is_block_device: bool = False
    is_char_device: bool = False

    @property
    def is_directory(self) -> bool:
        return self.permissions.startswith("d")

    @property
    def is_symlink(self) -> bool:
        return self.permissions.startswith("l")


__all__ = ["RawEntry", "Listing"]
