"""Persistent JSON config helpers.

Stores the default LSCOLORS string plus extension and extra-category colors.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from platformdirs import user_config_dir

from .render.colors import DEFAULT_LSCOLORS, EXTRA_CATEGORIES

APP_NAME = "lsview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LSCOLORS_ENV = "LSCOLORS"

logger = logging.getLogger(__name__)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never breaks a listing.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_lscolors() -> str | None:
    """Load the persisted LSCOLORS string, returning ``None`` when unset/invalid."""
    value = load_config().get("lscolors")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_lscolors(spec: str) -> None:
    """Persist a default LSCOLORS string."""
    stripped = str(spec).strip()
    if not stripped:
        return
    config = load_config()
    config["lscolors"] = stripped
    save_config(config)


def _string_mapping(value: object) -> dict[str, str]:
    """Keep only non-empty string keys mapped to string values."""
    if not isinstance(value, dict):
        return {}
    return {key: code for key, code in value.items() if isinstance(key, str) and key and isinstance(code, str)}


def load_extension_colors() -> dict[str, str]:
    """Load extension → two-letter color codes."""
    return _string_mapping(load_config().get("extension_colors"))


def load_category_colors() -> dict[str, str]:
    """Load colors for categories LSCOLORS cannot express.

    Unknown category names are dropped.
    """
    colors = _string_mapping(load_config().get("category_colors"))
    return {key: code for key, code in colors.items() if key in EXTRA_CATEGORIES}


def load_extra_colors() -> dict[str, str]:
    """Merge extension and category colors into one ``build_color_table`` extra map."""
    extra = load_extension_colors()
    extra.update(load_category_colors())
    return extra


def resolve_lscolors(cli_value: str | None, environ: Mapping[str, str]) -> str:
    """Pick the color spec: CLI flag, then ``LSCOLORS``, then config, then the BSD default."""
    if cli_value:
        return cli_value
    env_value = environ.get(LSCOLORS_ENV, "").strip()
    if env_value:
        return env_value
    return load_lscolors() or DEFAULT_LSCOLORS


__all__ = [
    "CONFIG_PATH",
    "LSCOLORS_ENV",
    "load_config",
    "save_config",
    "load_lscolors",
    "save_lscolors",
    "load_extension_colors",
    "load_category_colors",
    "load_extra_colors",
    "resolve_lscolors",
]
