"""Convert one raw ``(path, lstat)`` entry into a display :class:`Listing`.

The builder is a pure function of the entry, the options and the read-only
account tables, apart from reading symlink targets. Failures raise
``ListingError`` subclasses carrying the entry path; the builder never logs.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass

from ..errors import LinkResolutionError, UnsupportedStatLayoutError
from ..options import Options
from .accounts import Accounts, resolve_group, resolve_owner
from .permissions import symbolic_permissions
from .sizes import format_size
from .timestamps import format_timestamp
from .types import Listing, RawEntry


@dataclass(frozen=True)
class _StatFields:
    mode: int
    nlink: int
    uid: int
    gid: int
    size: int
    mtime_ns: int


@dataclass(frozen=True)
class SpecialFileFlags:
    """Mutually exclusive special-file classification of a mode."""

    is_char_device: bool = False
    is_block_device: bool = False
    is_pipe: bool = False
    is_socket: bool = False


def _stat_fields(entry: RawEntry) -> _StatFields:
    try:
        return _StatFields(
            mode=int(entry.stat.st_mode),
            nlink=int(entry.stat.st_nlink),
            uid=int(entry.stat.st_uid),
            gid=int(entry.stat.st_gid),
            size=int(entry.stat.st_size),
            mtime_ns=int(entry.stat.st_mtime_ns),
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise UnsupportedStatLayoutError(entry.path, "unsupported stat structure") from exc


def join_base(base_dir: str, path: str) -> str:
    """Join ``path`` onto ``base_dir``; an empty base means the current directory."""
    if not base_dir:
        return path
    return os.path.join(base_dir, path)


def resolve_link(base_dir: str, path: str) -> tuple[str, bool]:
    """Return ``(target, is_orphan)`` for the symlink at ``base_dir``/``path``.

    The target is probed relative to the link's own directory. A target that
    does not exist is an orphan, not an error; any other failure raises
    :class:`LinkResolutionError`.
    """
    link_path = join_base(base_dir, path)
    try:
        target = os.readlink(link_path)
    except OSError as exc:
        raise LinkResolutionError(path, f"cannot read symbolic link: {exc.strerror or exc}") from exc

    probe = os.path.join(os.path.dirname(link_path), target)
    try:
        os.stat(probe)
    except (FileNotFoundError, NotADirectoryError):
        return target, True
    except OSError as exc:
        raise LinkResolutionError(path, f"cannot access link target {target!r}: {exc.strerror or exc}") from exc
    return target, False


def classify_special(mode: int) -> SpecialFileFlags:
    """Classify ``mode`` as at most one of char device, block device, pipe or socket."""
    if stat.S_ISCHR(mode):
        return SpecialFileFlags(is_char_device=True)
    if stat.S_ISBLK(mode):
        return SpecialFileFlags(is_block_device=True)
    if stat.S_ISFIFO(mode):
        return SpecialFileFlags(is_pipe=True)
    if stat.S_ISSOCK(mode):
        return SpecialFileFlags(is_socket=True)
    return SpecialFileFlags()


def build_listing(
    base_dir: str,
    entry: RawEntry,
    options: Options,
    accounts: Accounts,
    now: float | None = None,
) -> Listing:
    """Build the display record for ``entry``.

    ``base_dir`` is the directory ``entry.path`` is relative to (empty for
    paths given directly on the command line). ``now`` pins the clock used
    for the year-vs-time decision.
    """
    fields = _stat_fields(entry)

    link_target = ""
    link_is_orphan = False
    if stat.S_ISLNK(fields.mode):
        link_target, link_is_orphan = resolve_link(base_dir, entry.path)

    stamp = format_timestamp(fields.mtime_ns, now=now)
    special = classify_special(fields.mode)

    return Listing(
        permissions=symbolic_permissions(fields.mode),
        hard_link_count=str(fields.nlink),
        owner=resolve_owner(fields.uid, accounts),
        group=resolve_group(fields.gid, accounts),
        size=format_size(fields.size, options.human),
        modified_at_ns=stamp.modified_at_ns,
        month=stamp.month,
        day=stamp.day,
        time=stamp.time,
        name=entry.path,
        link_target=link_target,
        link_is_orphan=link_is_orphan,
        is_socket=special.is_socket,
        is_pipe=special.is_pipe,
        is_block_device=special.is_block_device,
        is_char_device=special.is_char_device,
    )


__all__ = [
    "SpecialFileFlags",
    "join_base",
    "resolve_link",
    "classify_special",
    "build_listing",
]
