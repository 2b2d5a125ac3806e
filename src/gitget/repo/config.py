"""Repository for the user settings file (config.toml) read/write."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError

from gitget.core import paths
from gitget.core.errors import ConfigError
from gitget.core.models import DEFAULT_HOST

_TABLE = "gitget"


@dataclass
class Settings:
    """Mirrors the [gitget] table in config.toml."""

    host: str = DEFAULT_HOST
    git: str = "git"
    update_gitignore: bool = True
    workspace_prefix: str = "gitget-"


# ── Serialization ───────────────────────────────────────────────────


def dump(settings: Settings) -> str:
    """Serialize Settings to a TOML string."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("git-get configuration"))
    doc.add(tomlkit.nl())

    table = tomlkit.table()
    table.add("host", settings.host)
    table.add("git", settings.git)
    table.add("update_gitignore", settings.update_gitignore)
    table.add("workspace_prefix", settings.workspace_prefix)
    doc.add(_TABLE, table)

    return tomlkit.dumps(doc)


def load(path: Path | None = None) -> Settings:
    """Read settings from *path* (default: paths.config_path()).

    A missing file yields defaults. GITGET_HOST and GITGET_GIT override
    whatever the file says.
    """
    path = path or paths.config_path()
    settings = Settings()

    if path.is_file():
        try:
            raw = tomlkit.loads(path.read_text()).unwrap()
        except TOMLKitError as exc:
            raise ConfigError(f"Cannot parse {path}: {exc}") from exc
        table = raw.get(_TABLE, {})
        settings = Settings(
            host=str(table.get("host", settings.host)),
            git=str(table.get("git", settings.git)),
            update_gitignore=bool(table.get("update_gitignore", settings.update_gitignore)),
            workspace_prefix=str(table.get("workspace_prefix", settings.workspace_prefix)),
        )

    host = os.environ.get("GITGET_HOST", "").strip()
    if host:
        settings.host = host
    git = os.environ.get("GITGET_GIT", "").strip()
    if git:
        settings.git = git

    return settings


def save(settings: Settings, path: Path | None = None) -> None:
    """Write settings to disk, creating the parent directory."""
    path = path or paths.config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump(settings))
