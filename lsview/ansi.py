"""ANSI SGR helpers shared by color-table construction and rendering.

Sequences are built as plain strings; nothing here touches the terminal.
"""

from __future__ import annotations

CSI = "\x1b["
RESET = f"{CSI}0m"


def sgr(params: str) -> str:
    """Return a Select Graphic Rendition sequence for raw ``params``.

    ``params`` is inserted verbatim, so ``sgr("0;34")`` yields ``ESC[0;34m``
    and an empty string yields ``ESC[m``.
    """
    return f"{CSI}{params}m"


__all__ = ["CSI", "RESET", "sgr"]
