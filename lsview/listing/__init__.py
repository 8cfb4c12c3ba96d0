"""Listing model: raw entries, their display records and how they are built.

This package contains the non-rendering half of a listing:
- raw ``(path, lstat)`` entries and formatted ``Listing`` records
- permission, size, timestamp and account-name formatting
- directory scanning and sort order
"""

from __future__ import annotations

from .accounts import Accounts, load_accounts, resolve_group, resolve_owner
from .builder import build_listing, classify_special, resolve_link
from .fs import collect_entries, list_directory_entries, sort_entries
from .permissions import normalize_permissions, raw_mode_string, symbolic_permissions
from .sizes import format_size, human_size
from .timestamps import format_timestamp
from .types import Listing, RawEntry

__all__ = [
    "Accounts",
    "Listing",
    "RawEntry",
    "build_listing",
    "classify_special",
    "collect_entries",
    "format_size",
    "format_timestamp",
    "human_size",
    "list_directory_entries",
    "load_accounts",
    "normalize_permissions",
    "raw_mode_string",
    "resolve_group",
    "resolve_link",
    "resolve_owner",
    "sort_entries",
    "symbolic_permissions",
]
