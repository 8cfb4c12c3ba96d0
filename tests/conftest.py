"""Make the in-repo ``lsview`` package importable when pytest runs uninstalled.

Test modules are plain ``unittest.TestCase`` classes, so no fixtures live here.
"""

from __future__ import annotations

import sys
from pathlib import Path


REPO_ROOT = str(Path(__file__).resolve().parent.parent)

if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)
