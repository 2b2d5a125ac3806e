"""Error taxonomy.

Every error carries the pipeline *stage* it came from so the CLI can
name it in the diagnostic. Only ``IgnoreUpdateWarning`` is non-fatal.
"""

from __future__ import annotations

from pathlib import Path


class GitGetError(Exception):
    """Base exception for every fatal git-get failure."""

    stage = "git-get"


class InvalidTargetError(GitGetError, ValueError):
    """Malformed URL or incomplete discrete fields."""

    stage = "resolve"


class DestinationRejectedError(GitGetError):
    """The destination exists and is a file or a non-empty directory."""

    stage = "destination"

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class WorkspaceError(GitGetError):
    """The scratch directory could not be created."""

    stage = "workspace"


class FetchError(GitGetError):
    """A version-control step failed."""

    stage = "fetch"

    def __init__(self, step: str, diagnostic: str) -> None:
        detail = diagnostic.strip() or "no diagnostic output"
        super().__init__(f"{step}: {detail}")
        self.step = step
        self.diagnostic = diagnostic


class PathNotFoundError(FetchError):
    """Checkout succeeded but the requested directory is not in the tree."""

    def __init__(self, subpath: str, diagnostic: str) -> None:
        super().__init__("verify", diagnostic)
        self.subpath = subpath


class CopyError(GitGetError):
    """I/O failure while copying into the destination."""

    stage = "copy"

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"{path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class ConfigError(GitGetError):
    """The settings file could not be parsed."""

    stage = "config"


class IgnoreUpdateWarning(UserWarning):
    """The ignore-file update failed; the fetch itself still succeeded."""
