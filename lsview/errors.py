"""Exception types raised by listing construction and rendering.

Every per-entry failure carries the path it was raised for so callers can
report it and decide whether to skip the entry or abort the listing.
"""

from __future__ import annotations


class LsviewError(Exception):
    """Base class for all lsview failures."""


class ListingError(LsviewError):
    """A single entry could not be converted into a display record."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class LinkResolutionError(ListingError):
    """Symlink target could not be read or probed (other than not existing)."""


class UnsupportedStatLayoutError(ListingError):
    """Stat payload is missing fields needed to build a record."""


class OutputWriteError(LsviewError):
    """Output stream rejected a write."""


__all__ = [
    "LsviewError",
    "ListingError",
    "LinkResolutionError",
    "UnsupportedStatLayoutError",
    "OutputWriteError",
]
