"""Byte-count formatting for the size column."""

from __future__ import annotations

SIZE_UNIT_STEP = 1024
SIZE_SUFFIXES: tuple[str, ...] = ("B", "K", "M", "G", "T", "P", "E")
UNKNOWN_SUFFIX = "?"


def size_suffix(divisions: int) -> str:
    """Return the unit letter for a value divided ``divisions`` times by 1024."""
    if 0 <= divisions < len(SIZE_SUFFIXES):
        return SIZE_SUFFIXES[divisions]
    return UNKNOWN_SUFFIX


def human_size(size_bytes: int) -> str:
    """Format ``size_bytes`` with the largest unit keeping the mantissa below 1024.

    Bytes print as an integer (``1023B``); larger units use one decimal that
    is dropped when it is ``.0`` (``1536`` → ``1.5K``, ``14336`` → ``14K``).
    The unit is picked before rounding, so a count just below the next unit
    rounds up to a mantissa of exactly 1024 (``1048575`` → ``1024K``).
    """
    value = float(size_bytes)
    divisions = 0
    while value >= 1.0:
        value /= SIZE_UNIT_STEP
        divisions += 1
    # The loop always overshoots by one unit.
    if divisions > 0:
        value *= SIZE_UNIT_STEP
        divisions -= 1

    suffix = size_suffix(divisions)
    if divisions == 0:
        text = f"{int(value)}{suffix}"
    else:
        text = f"{value:.1f}{suffix}"

    if len(text) > 3 and text[-3:-1] == ".0":
        text = text[:-3] + suffix
    return text


def format_size(size_bytes: int, human: bool) -> str:
    """Return the size column text, humanized when ``human`` is set."""
    if human:
        return human_size(size_bytes)
    return str(size_bytes)


__all__ = ["SIZE_SUFFIXES", "size_suffix", "human_size", "format_size"]
