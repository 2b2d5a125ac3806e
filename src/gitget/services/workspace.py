"""Scratch workspace — a private temp directory removed on every exit path."""

from __future__ import annotations

import contextlib
import logging
import shutil
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from gitget.core.errors import WorkspaceError

logger = logging.getLogger(__name__)


@dataclass
class ScratchWorkspace:
    """An exclusively owned temporary directory."""

    path: Path
    released: bool = False


def acquire(prefix: str = "gitget-") -> ScratchWorkspace:
    """Create a uniquely named directory under the system temp area."""
    try:
        path = Path(tempfile.mkdtemp(prefix=prefix))
    except OSError as exc:
        raise WorkspaceError(f"Cannot create scratch directory: {exc}") from exc
    logger.debug("Acquired scratch workspace %s", path)
    return ScratchWorkspace(path)


def release(workspace: ScratchWorkspace) -> bool:
    """Remove the workspace tree. Returns False if removal failed.

    Failures are logged, never raised: the fetch outcome is already decided
    by the time this runs. A second call is a no-op.
    """
    if workspace.released:
        return True
    workspace.released = True
    try:
        shutil.rmtree(workspace.path)
    except FileNotFoundError:
        return True
    except OSError as exc:
        logger.warning("Could not remove scratch directory %s: %s", workspace.path, exc)
        return False
    logger.debug("Released scratch workspace %s", workspace.path)
    return True


@contextlib.contextmanager
def scratch_workspace(prefix: str = "gitget-") -> Iterator[ScratchWorkspace]:
    """Yield a fresh workspace; release it however the block exits."""
    workspace = acquire(prefix)
    try:
        yield workspace
    finally:
        release(workspace)
