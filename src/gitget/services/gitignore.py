"""Append the destination to an existing .gitignore, once."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from gitget.core import paths

logger = logging.getLogger(__name__)


def add_entry(ignore_file: Path, destination: Path | str) -> bool:
    """Append *destination* to *ignore_file* under a marker comment.

    Returns True if a line was written. Does nothing when the file does not
    exist, the entry is already listed, or the destination lies outside the
    directory holding the ignore file. OSError propagates to the caller.
    """
    if not ignore_file.is_file():
        return False

    entry = _entry_for(ignore_file.parent, Path(destination))
    if entry is None:
        logger.debug("%s is outside %s; not adding it", destination, ignore_file.parent)
        return False

    content = ignore_file.read_text()
    if entry in _existing_entries(content):
        return False

    addition = f"\n{paths.IGNORE_MARKER}\n{entry}\n"
    if content and not content.endswith("\n"):
        addition = "\n" + addition
    with ignore_file.open("a") as fh:
        fh.write(addition)
    logger.debug("Added %s to %s", entry, ignore_file)
    return True


def normalise(line: str) -> str:
    """Reduce an ignore pattern to a bare relative path for comparison."""
    value = line.strip()
    while value.startswith("./"):
        value = value[2:]
    return value.strip("/")


def _existing_entries(content: str) -> set[str]:
    entries: set[str] = set()
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        entries.add(normalise(stripped))
    return entries


def _entry_for(base: Path, destination: Path) -> str | None:
    if not destination.is_absolute():
        entry = normalise(Path(os.path.normpath(destination)).as_posix())
        if entry in {"", ".", ".."} or entry.startswith("../"):
            return None
        return entry

    try:
        rel = os.path.relpath(destination.resolve(), base.resolve())
    except ValueError:
        return None
    if rel == os.curdir or rel == os.pardir or rel.startswith(os.pardir + os.sep):
        return None
    return Path(rel).as_posix()
