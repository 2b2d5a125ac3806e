"""User env files holding GITGET_* settings.

Only keys with the GITGET_ prefix are exported. Anything else in such a
file (GIT_DIR, GIT_SSH_COMMAND, …) would leak into every git subprocess.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from gitget.core import paths

logger = logging.getLogger(__name__)

ENV_PREFIX = "GITGET_"

_loaded = False


def load_user_env() -> dict[str, str]:
    """Export GITGET_* values from the user env files, once per process.

    Variables already present in the environment win. Returns what was set.
    """
    global _loaded
    if _loaded:
        return {}
    _loaded = True

    exported: dict[str, str] = {}
    for env_file in env_files():
        for key, value in read_env_file(env_file).items():
            if not key.startswith(ENV_PREFIX):
                logger.warning("Ignoring %s in %s: only %s* keys are read", key, env_file, ENV_PREFIX)
                continue
            if key in os.environ:
                continue
            os.environ[key] = value
            exported[key] = value
    return exported


def env_files() -> list[Path]:
    """$GITGET_ENV_FILE, $GITGET_HOME/.env, then ~/.config/gitget/.env."""
    candidates = [
        os.environ.get("GITGET_ENV_FILE", "").strip(),
        os.path.join(os.environ["GITGET_HOME"].strip(), ".env")
        if os.environ.get("GITGET_HOME", "").strip() else "",
    ]
    files = [Path(c).expanduser() for c in candidates if c]
    files.append(Path.home() / paths.CONFIG_DIR / ".env")
    return [f for f in files if f.is_file()]


def read_env_file(path: Path) -> dict[str, str]:
    """Parse KEY=value lines; `export` prefixes and matching quotes are stripped."""
    values: dict[str, str] = {}
    for lineno, raw_line in enumerate(path.read_text().splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        line = line.removeprefix("export ").lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            logger.debug("%s:%d: not a KEY=value line", path, lineno)
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key] = value
    return values
