"""Target resolver — turn a directory URL or discrete fields into a FetchTarget.

Supports:
  https://<host>/<owner>/<repo>/tree/<branch>/<path...>
  owner/repo + branch + path   (discrete fields)
"""

from __future__ import annotations

from urllib.parse import unquote, urlparse

from gitget.core import paths
from gitget.core.errors import InvalidTargetError
from gitget.core.models import DEFAULT_HOST, FetchTarget

_TREE = "tree"
_BLOB = "blob"


def from_url(url: str) -> FetchTarget:
    """Parse a hosted-repository directory URL."""
    raw = url.strip()
    parsed = urlparse(raw)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise InvalidTargetError(
            f"Not a repository URL: {url!r}. "
            "Expected https://<host>/<owner>/<repo>/tree/<branch>/<path>"
        )

    segments = [unquote(s) for s in parsed.path.split("/") if s]
    if len(segments) < 2:
        raise InvalidTargetError(f"Cannot find owner/repo in URL: {url}")

    owner, repo = segments[0], _strip_git_suffix(segments[1])
    rest = segments[2:]

    if rest and rest[0] == _BLOB:
        raise InvalidTargetError(
            f"URL points at a single file, only directories are supported: {url}"
        )
    if len(rest) < 2 or rest[0] != _TREE:
        raise InvalidTargetError(f"URL has no '/tree/<branch>/' segment: {url}")

    branch = rest[1]
    subpath = "/".join(rest[2:])
    return _build(parsed.netloc, owner, repo, branch, subpath, source=url)


def from_fields(
    repo: str | None,
    branch: str | None,
    subpath: str | None,
    host: str = DEFAULT_HOST,
) -> FetchTarget:
    """Build a target from owner/repo, branch and subpath."""
    missing = [
        name for name, value in (("repo", repo), ("branch", branch), ("path", subpath))
        if not (value or "").strip()
    ]
    if missing:
        raise InvalidTargetError(f"Missing required field(s): {', '.join(missing)}")

    parts = repo.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidTargetError(f"Repository must be given as owner/repo, got {repo!r}")

    owner, name = parts[0], _strip_git_suffix(parts[1])
    return _build(host, owner, name, branch.strip(), subpath.strip(), source=repo)


def normalise_subpath(subpath: str) -> str:
    """Return *subpath* as a clean relative "a/b/c" string.

    Raises InvalidTargetError for empty, absolute or escaping paths, and for
    paths into repository metadata.
    """
    if "\\" in subpath:
        raise InvalidTargetError(f"Use '/' as the path separator: {subpath!r}")
    subpath = subpath.strip("/")
    if not subpath:
        raise InvalidTargetError("Subdirectory path is empty")

    segments = subpath.split("/")
    for seg in segments:
        if seg in {"", ".", ".."}:
            raise InvalidTargetError(f"Invalid path segment {seg!r} in {subpath!r}")
        if seg.lower() == paths.METADATA_DIR:
            raise InvalidTargetError(f"Repository metadata cannot be fetched: {subpath!r}")
    return "/".join(segments)


def _build(
    host: str, owner: str, repo: str, branch: str, subpath: str, *, source: str,
) -> FetchTarget:
    if not owner or not repo:
        raise InvalidTargetError(f"Cannot find owner/repo in {source!r}")
    if not branch:
        raise InvalidTargetError(f"Branch is empty in {source!r}")
    if branch.startswith("-"):
        raise InvalidTargetError(f"Branch names cannot start with '-': {branch!r}")
    if not subpath.strip("/"):
        raise InvalidTargetError(
            f"No subdirectory given in {source!r}; whole-repository downloads are not supported"
        )
    return FetchTarget(
        owner=owner,
        repo=repo,
        branch=branch,
        subpath=normalise_subpath(subpath),
        host=host,
    )


def _strip_git_suffix(name: str) -> str:
    return name[: -len(".git")] if name.endswith(".git") else name
