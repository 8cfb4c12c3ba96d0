"""Filesystem scanning and ordering of raw entries for one listing target."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable

from ..options import Options
from .types import RawEntry

logger = logging.getLogger(__name__)


def is_directory_target(target: str) -> bool:
    """Return whether ``target`` should be listed by its contents (follows symlinks)."""
    try:
        return stat.S_ISDIR(os.stat(target).st_mode)
    except OSError:
        return False


def list_directory_entries(directory: str, options: Options) -> list[RawEntry]:
    """Return unsorted ``lstat`` entries for the visible children of ``directory``.

    Entry paths are child basenames. Hidden names are skipped unless
    ``options.all``; with ``options.dirs_only`` only directories are kept.
    Children that vanish or cannot be stat'ed are skipped.
    """
    entries: list[RawEntry] = []
    with os.scandir(directory) as children:
        for child in children:
            name = child.name
            if not options.all and name.startswith("."):
                continue
            try:
                child_stat = child.stat(follow_symlinks=False)
            except OSError as exc:
                logger.debug("skipping %s: %s", os.path.join(directory, name), exc)
                continue
            if options.dirs_only and not stat.S_ISDIR(child_stat.st_mode):
                continue
            entries.append(RawEntry(path=name, stat=child_stat))
    return entries


def collect_entries(target: str, options: Options) -> tuple[str, list[RawEntry]]:
    """Return ``(base_dir, entries)`` for one command-line ``target``.

    Directories yield their sorted children relative to ``target``; anything
    else yields the target itself with an empty base directory. ``OSError``
    from the initial ``lstat`` or ``scandir`` propagates to the caller.
    """
    if is_directory_target(target):
        return target, sort_entries(list_directory_entries(target, options), options)
    return "", [RawEntry(path=target, stat=os.lstat(target))]


def _is_dir(entry: RawEntry) -> bool:
    return stat.S_ISDIR(entry.stat.st_mode)


def sort_entries(entries: Iterable[RawEntry], options: Options) -> list[RawEntry]:
    """Order entries by name, modification time or size, honoring reverse and dirs-first.

    Time and size orders put the newest/largest entry first and break ties by
    name. ``dirs_first`` is applied last as a stable partition so it survives
    ``sort_reverse``.
    """
    ordered = sorted(entries, key=lambda entry: entry.path)
    if options.sort_time:
        ordered.sort(key=lambda entry: entry.stat.st_mtime_ns, reverse=True)
    elif options.sort_size:
        ordered.sort(key=lambda entry: entry.stat.st_size, reverse=True)
    if options.sort_reverse:
        ordered.reverse()
    if options.dirs_first:
        ordered.sort(key=lambda entry: not _is_dir(entry))
    return ordered


__all__ = [
    "is_directory_target",
    "list_directory_entries",
    "collect_entries",
    "sort_entries",
]
