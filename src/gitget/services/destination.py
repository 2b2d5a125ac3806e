"""Destination validator — only missing paths or empty directories are writable."""

from __future__ import annotations

import os
from pathlib import Path

from gitget.core.errors import DestinationRejectedError
from gitget.core.models import DestinationDecision, DestinationStatus


def inspect(path: Path) -> DestinationDecision:
    """Classify *path* without modifying anything."""
    if not os.path.lexists(path):
        return DestinationDecision(path, DestinationStatus.WRITABLE_MISSING)

    if not path.is_dir():
        return DestinationDecision(
            path, DestinationStatus.REJECTED, "exists and is not a directory",
        )

    try:
        with os.scandir(path) as entries:
            has_entries = any(True for _ in entries)
    except OSError as exc:
        return DestinationDecision(
            path, DestinationStatus.REJECTED, f"cannot be read ({exc.strerror})",
        )

    if has_entries:
        return DestinationDecision(
            path, DestinationStatus.REJECTED,
            "directory is not empty; git-get only writes to empty or missing directories",
        )
    return DestinationDecision(path, DestinationStatus.WRITABLE_EMPTY)


def require_writable(path: Path) -> DestinationDecision:
    """Like inspect(), but raise DestinationRejectedError on rejection."""
    decision = inspect(path)
    if not decision.writable:
        raise DestinationRejectedError(path, decision.reason)
    return decision
