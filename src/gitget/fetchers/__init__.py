"""Sparse fetcher — materialize one subpath of one branch in a workspace.

The version-control work is split into one call per logical step so a
backend other than the git executable could satisfy the same protocol:

  init → add_remote → configure_sparse → fetch → checkout → verify
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from gitget.core.errors import FetchError, PathNotFoundError
from gitget.core.models import FetchTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepResult:
    """Outcome of one backend step."""

    step: str
    ok: bool
    diagnostic: str = ""


class FetchBackend(Protocol):
    def init(self, workdir: Path) -> StepResult: ...

    def add_remote(self, workdir: Path, url: str) -> StepResult: ...

    def configure_sparse(self, workdir: Path, subpath: str) -> StepResult: ...

    def fetch(self, workdir: Path, branch: str) -> StepResult: ...

    def checkout(self, workdir: Path, branch: str) -> StepResult: ...


def sparse_fetch(
    target: FetchTarget,
    workdir: Path,
    backend: FetchBackend,
    on_progress: Callable[[str], None] | None = None,
) -> Path:
    """Run every step against *workdir* and return the materialized subpath.

    Raises FetchError naming the first failing step, or PathNotFoundError
    when checkout succeeded but the subpath is not a directory in the tree.
    """
    emit = on_progress or (lambda _msg: None)

    steps: list[tuple[str, Callable[[], StepResult]]] = [
        ("Initialising scratch repository…", lambda: backend.init(workdir)),
        (f"Adding remote {target.clone_url}…",
         lambda: backend.add_remote(workdir, target.clone_url)),
        (f"Restricting checkout to {target.subpath}…",
         lambda: backend.configure_sparse(workdir, target.subpath)),
        (f"Fetching {target.branch} (depth 1)…", lambda: backend.fetch(workdir, target.branch)),
        (f"Checking out {target.branch}…", lambda: backend.checkout(workdir, target.branch)),
    ]
    for message, run_step in steps:
        emit(message)
        result = run_step()
        if not result.ok:
            logger.debug("Step %s failed: %s", result.step, result.diagnostic)
            raise FetchError(result.step, result.diagnostic)

    source = workdir.joinpath(*target.subpath.split("/"))
    if not source.exists():
        raise PathNotFoundError(
            target.subpath,
            f"'{target.subpath}' not found on branch '{target.branch}' of {target.repo_slug}",
        )
    if not source.is_dir():
        raise PathNotFoundError(
            target.subpath,
            f"'{target.subpath}' is a file; only directories can be fetched",
        )
    return source


def default_backend(git: str = "git") -> FetchBackend:
    from gitget.fetchers.git import GitBackend

    return GitBackend(git)
