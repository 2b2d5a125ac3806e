"""Path constants and config-location logic."""

from __future__ import annotations

import os
from pathlib import Path

METADATA_DIR = ".git"
IGNORE_FILE = ".gitignore"
IGNORE_MARKER = "# Added by git-get"
SPARSE_CHECKOUT_FILE = Path(METADATA_DIR) / "info" / "sparse-checkout"

CONFIG_DIR = Path(".config") / "gitget"
CONFIG_TOML = "config.toml"


def config_path() -> Path:
    """Return $GITGET_CONFIG if set, else ~/.config/gitget/config.toml."""
    override = os.environ.get("GITGET_CONFIG", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_DIR / CONFIG_TOML


def ignore_file(cwd: Path | None = None) -> Path:
    return (cwd or Path.cwd()) / IGNORE_FILE
