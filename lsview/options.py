"""Resolved listing options shared by traversal, builder and renderer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Options:
    """Immutable option set resolved once from the command line.

    The listing core reads only ``human``, ``long`` and ``color``; the other
    flags drive traversal, sorting and output layout in the CLI.
    """

    all: bool = False
    long: bool = False
    human: bool = False
    one: bool = False
    dirs_only: bool = False
    color: bool = False
    sort_reverse: bool = False
    sort_time: bool = False
    sort_size: bool = False
    dirs_first: bool = False
    help: bool = False


__all__ = ["Options"]
