"""Data shapes passed between the fetch-and-extract stages.

    FetchTarget ──► DestinationDecision ──► ScratchWorkspace
        ──► sparse checkout ──► CopyResult ──► FetchOutcome
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_HOST = "github.com"


# ── Target layer ────────────────────────────────────────────────────


@dataclass(frozen=True)
class FetchTarget:
    """One directory of one branch of a hosted repository."""

    owner: str
    repo: str
    branch: str
    subpath: str  # relative, "/"-separated, never contains ".."
    host: str = DEFAULT_HOST

    @property
    def repo_slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def clone_url(self) -> str:
        return f"https://{self.host}/{self.owner}/{self.repo}.git"

    @property
    def web_url(self) -> str:
        return f"https://{self.host}/{self.owner}/{self.repo}/tree/{self.branch}/{self.subpath}"


# ── Destination layer ───────────────────────────────────────────────


class DestinationStatus(enum.Enum):
    WRITABLE_MISSING = "missing"
    WRITABLE_EMPTY = "empty"
    REJECTED = "rejected"


@dataclass(frozen=True)
class DestinationDecision:
    """Snapshot verdict on whether *path* may be written to."""

    path: Path
    status: DestinationStatus
    reason: str = ""

    @property
    def writable(self) -> bool:
        return self.status is not DestinationStatus.REJECTED


# ── Copy layer ──────────────────────────────────────────────────────


@dataclass
class CopyResult:
    """Counts from a metadata-free copy."""

    files: int = 0
    directories: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.files + self.directories


# ── Pipeline layer ──────────────────────────────────────────────────


@dataclass
class FetchRequest:
    """Everything the pipeline needs for one run."""

    target: FetchTarget
    destination: Path
    token: str | None = None  # reserved for private repositories; unused
    update_gitignore: bool = True


@dataclass
class FetchOutcome:
    """Summary of a successful pipeline run."""

    target: FetchTarget
    destination: Path
    copied: CopyResult
    gitignore_updated: bool = False
    warnings: list[Warning] = field(default_factory=list)
