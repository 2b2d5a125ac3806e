"""Fetch backend that drives the git executable as a subprocess.

Only exit codes and stderr are inspected; no porcelain output is parsed.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from gitget.core import paths
from gitget.fetchers import StepResult

logger = logging.getLogger(__name__)

REMOTE = "origin"
_GLOB_CHARS = frozenset("\\*?[")


class GitBackend:
    """One method per sparse-fetch step, each returning a StepResult."""

    def __init__(self, git: str = "git") -> None:
        self.git = git

    def init(self, workdir: Path) -> StepResult:
        return self._run("init", workdir, ["init", "-q"])

    def add_remote(self, workdir: Path, url: str) -> StepResult:
        return self._run("remote add", workdir, ["remote", "add", REMOTE, url])

    def configure_sparse(self, workdir: Path, subpath: str) -> StepResult:
        r = self._run(
            "sparse-checkout", workdir, ["config", "core.sparseCheckout", "true"],
        )
        if not r.ok:
            return r

        pattern_file = workdir / paths.SPARSE_CHECKOUT_FILE
        try:
            pattern_file.parent.mkdir(parents=True, exist_ok=True)
            pattern_file.write_text(sparse_pattern(subpath) + "\n")
        except OSError as exc:
            return StepResult("sparse-checkout", False, f"cannot write {pattern_file}: {exc}")
        return r

    def fetch(self, workdir: Path, branch: str) -> StepResult:
        return self._run("fetch", workdir, ["fetch", "--depth=1", REMOTE, branch])

    def checkout(self, workdir: Path, branch: str) -> StepResult:
        # FETCH_HEAD is the tip of *branch* written by the preceding fetch.
        return self._run("checkout", workdir, ["checkout", "-q", "FETCH_HEAD"])

    def _run(self, step: str, workdir: Path, args: list[str]) -> StepResult:
        cmd = [self.git, *args]
        logger.debug("Running %s in %s", " ".join(cmd), workdir)
        try:
            r = subprocess.run(
                cmd, cwd=workdir, capture_output=True, text=True, env=_git_env(),
            )
        except OSError as exc:
            return StepResult(step, False, f"cannot run {self.git}: {exc}")
        if r.returncode != 0:
            return StepResult(
                step, False, f"git {' '.join(args)} exited {r.returncode}: {r.stderr.strip()}",
            )
        return StepResult(step, True)


def sparse_pattern(subpath: str) -> str:
    """Anchored directory pattern matching exactly *subpath*.

    Glob characters are backslash-escaped. The leading "/" already keeps a
    leading "!" or "#" from being read as negation or comment.
    """
    escaped = "".join("\\" + ch if ch in _GLOB_CHARS else ch for ch in subpath)
    return f"/{escaped}/"


def _git_env() -> dict[str, str]:
    env = dict(os.environ)
    env["GIT_TERMINAL_PROMPT"] = "0"
    # Never let an enclosing repository leak into the scratch one.
    for key in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE"):
        env.pop(key, None)
    return env
