"""Metadata-free copier — copy a fetched tree, leaving out .git entries."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from gitget.core import paths
from gitget.core.errors import CopyError
from gitget.core.models import CopyResult

logger = logging.getLogger(__name__)


def copy_tree(src: Path, dest: Path) -> CopyResult:
    """Recursively copy *src* into *dest*, creating *dest* if needed.

    Symlinks are followed so nothing in the result points back into the
    scratch workspace. The copy is not transactional: on the first I/O
    failure CopyError is raised and whatever was copied stays on disk.
    """
    result = CopyResult()
    try:
        dest.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CopyError(dest, exc) from exc
    _copy_dir(src, dest, result)
    logger.debug(
        "Copied %d file(s), %d dir(s) from %s to %s (skipped %d)",
        result.files, result.directories, src, dest, result.skipped,
    )
    return result


def _copy_dir(src: Path, dest: Path, result: CopyResult) -> None:
    try:
        with os.scandir(src) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise CopyError(src, exc) from exc

    for entry in entries:
        if entry.name == paths.METADATA_DIR:
            result.skipped += 1
            continue

        src_path = Path(entry.path)
        dest_path = dest / entry.name
        if entry.is_dir():
            try:
                dest_path.mkdir(exist_ok=True)
            except OSError as exc:
                raise CopyError(dest_path, exc) from exc
            result.directories += 1
            _copy_dir(src_path, dest_path, result)
            # Permissions last, so a read-only source dir can still be filled.
            _copy_stat(src_path, dest_path)
            continue

        try:
            shutil.copy2(src_path, dest_path)
        except OSError as exc:
            raise CopyError(src_path, exc) from exc
        result.files += 1


def _copy_stat(src: Path, dest: Path) -> None:
    try:
        shutil.copystat(src, dest)
    except OSError as exc:
        raise CopyError(dest, exc) from exc
