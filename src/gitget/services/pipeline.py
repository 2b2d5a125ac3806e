"""Fetch pipeline — implements the single `git-get` operation.

destination check → workspace → sparse fetch → copy → release → .gitignore
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from gitget.core import paths
from gitget.core.errors import IgnoreUpdateWarning
from gitget.core.models import FetchOutcome, FetchRequest
from gitget.fetchers import FetchBackend, default_backend, sparse_fetch
from gitget.services import copier, destination, gitignore, resolver, workspace

logger = logging.getLogger(__name__)


def run(
    request: FetchRequest,
    *,
    backend: FetchBackend | None = None,
    cwd: Path | None = None,
    workspace_prefix: str = "gitget-",
    on_progress: Callable[[str], None] | None = None,
) -> FetchOutcome:
    """Fetch ``request.target`` into ``request.destination``.

    Raises a GitGetError subclass for any fatal stage. The scratch
    workspace is removed before this returns or raises. A failed
    .gitignore update is reported in ``FetchOutcome.warnings``.
    """
    emit = on_progress or (lambda _msg: None)
    backend = backend or default_backend()
    target = request.target

    # Targets may be built by hand; the subpath must not reach into .git.
    resolver.normalise_subpath(target.subpath)

    emit("Checking destination…")
    destination.require_writable(request.destination)

    if request.token:
        logger.debug("Access token supplied but not used for public fetches")

    with workspace.scratch_workspace(workspace_prefix) as ws:
        source = sparse_fetch(target, ws.path, backend, on_progress=emit)

        emit(f"Copying into {request.destination}…")
        copied = copier.copy_tree(source, request.destination)

    outcome = FetchOutcome(target=target, destination=request.destination, copied=copied)

    if request.update_gitignore:
        outcome.gitignore_updated = _update_gitignore(request.destination, cwd, outcome)

    return outcome


def _update_gitignore(dest: Path, cwd: Path | None, outcome: FetchOutcome) -> bool:
    ignore_file = paths.ignore_file(cwd)
    try:
        return gitignore.add_entry(ignore_file, dest)
    except (OSError, UnicodeError) as exc:
        warning = IgnoreUpdateWarning(f"Could not update {ignore_file}: {exc}")
        logger.warning("%s", warning)
        outcome.warnings.append(warning)
        return False
