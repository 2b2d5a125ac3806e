"""CLI entry point — the single `git-get` Click command."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from gitget import __version__
from gitget.core.env import load_user_env
from gitget.core.errors import GitGetError
from gitget.core.models import FetchRequest, FetchTarget

load_user_env()


def _examples(root_name: str) -> str:
    lines = [
        "Examples:",
        f"  {root_name} https://github.com/owner/repo/tree/main/path/to/dir -d ./dir",
        f"  {root_name} --repo owner/repo --branch main --path path/to/dir -d ./dir",
    ]
    return "\n".join(lines)


class GitGetCommand(click.Command):
    """Click command that appends usage examples to help output."""

    def get_help(self, ctx: click.Context) -> str:
        base = super().get_help(ctx)
        return f"{base}\n\n{_examples(ctx.info_name or 'git-get')}"


@click.command(cls=GitGetCommand)
@click.argument("url", required=False)
@click.option("-r", "--repo", default=None, metavar="OWNER/REPO", help="Repository as owner/repo.")
@click.option("-b", "--branch", default=None, help="Branch to fetch.")
@click.option("-p", "--path", "subpath", default=None, help="Directory inside the repository.")
@click.option(
    "-d", "--dest", required=True,
    type=click.Path(path_type=Path),
    help="Local destination (must be missing or an empty directory).",
)
@click.option("--host", default=None, help="Hosting domain for --repo (default: github.com).")
@click.option("--token", default=None, envvar="GITGET_TOKEN", help="Access token (reserved; unused).")
@click.option("--no-gitignore", is_flag=True, help="Do not add DEST to ./.gitignore.")
@click.option("-v", "--verbose", is_flag=True, help="Log each step to stderr.")
@click.version_option(__version__, prog_name="git-get")
def cli(
    url: str | None,
    repo: str | None,
    branch: str | None,
    subpath: str | None,
    dest: Path,
    host: str | None,
    token: str | None,
    no_gitignore: bool,
    verbose: bool,
) -> None:
    """git-get — download one directory of a remote repository.

    Give either a directory URL, or all of --repo, --branch and --path.
    Nothing from .git is copied and the current repository is untouched.
    """
    from gitget.cli.ui import ProgressLine
    from gitget.fetchers import default_backend
    from gitget.repo import config
    from gitget.services import pipeline

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = config.load()
        target = _resolve_target(url, repo, branch, subpath, host or settings.host)
    except GitGetError as exc:
        raise click.ClickException(f"{exc.stage} failed: {exc}") from exc

    click.echo(f"📦 Repository: {target.clone_url}")
    click.echo(f"🌿 Branch: {target.branch}")
    click.echo(f"📁 Directory: {target.subpath}")
    click.echo(f"📍 Destination: {dest}")

    request = FetchRequest(
        target=target,
        destination=dest,
        token=token,
        update_gitignore=settings.update_gitignore and not no_gitignore,
    )
    try:
        with ProgressLine(enabled=not verbose) as status:
            outcome = pipeline.run(
                request,
                backend=default_backend(settings.git),
                workspace_prefix=settings.workspace_prefix,
                on_progress=status,
            )
    except GitGetError as exc:
        raise click.ClickException(f"{exc.stage} failed: {exc}") from exc

    for warning in outcome.warnings:
        click.echo(f"⚠ {warning}", err=True)

    copied = outcome.copied
    click.echo(
        f"✔ Copied {copied.files} file(s) in {copied.directories} dir(s) to {outcome.destination}"
    )
    if outcome.gitignore_updated:
        click.echo(f"  ↻ added {outcome.destination} to .gitignore")


def _resolve_target(
    url: str | None,
    repo: str | None,
    branch: str | None,
    subpath: str | None,
    host: str,
) -> FetchTarget:
    """Pick URL mode or discrete mode; refuse a mix of both."""
    from gitget.services import resolver

    discrete = [
        flag for flag, value in (("--repo", repo), ("--branch", branch), ("--path", subpath))
        if value
    ]
    if url and discrete:
        raise click.UsageError(f"Give either URL or {', '.join(discrete)}, not both.")
    if url:
        return resolver.from_url(url)
    if not discrete:
        raise click.UsageError("Missing URL, or --repo/--branch/--path.")
    if len(discrete) != 3:
        raise click.UsageError("--repo, --branch and --path must all be given together.")
    return resolver.from_fields(repo, branch, subpath, host=host)
