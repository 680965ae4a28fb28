"""
Command line interface for the changelog_gen tool.

This module defines the ``main`` function used as the entry point of
the ``changelog-gen`` command. It locates the repository, loads the
optional configuration, reads history through :class:`GitClient`, runs
the pipeline and writes ``CHANGELOG.md``. Every fatal condition maps to
one of the exit codes below.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from changelog_gen import __version__
from changelog_gen.config.loader import ConfigError, load_config
from changelog_gen.pipeline import collect_releases
from changelog_gen.render.markdown import render_changelog
from changelog_gen.render.writer import WriteError, write_changelog
from changelog_gen.vcs.git_client import GitClient, GitError

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests). When logging is configured by
# the CLI, root handlers will be added and messages will propagate.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 4
EXIT_SOURCE_UNAVAILABLE = 5
EXIT_WRITE_FAILURE = 6


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=False)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=False)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


def resolve_output_path(repo_root: Path, output: str) -> Path:
    """Return ``output`` as an absolute path, relative paths taken from ``repo_root``."""
    path = Path(output)
    if not path.is_absolute():
        path = repo_root / path
    return path


@click.command()
@click.option(
    "--repo",
    "repo",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory inside the repository (defaults to the current directory).",
)
@click.option("--output", "output", help="Changelog file to write, relative to the repository root.")
@click.option("--remote", "remote", help="Remote whose URL is used for release links.")
@click.option("--remote-url", "remote_url", help="Repository URL to use instead of the remote's.")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the changelog instead of writing it.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="changelog-gen")
def main(
    repo: Optional[Path],
    output: Optional[str],
    remote: Optional[str],
    remote_url: Optional[str],
    to_stdout: bool,
    verbose: bool,
) -> None:
    """Generate CHANGELOG.md from Conventional Commit history.

    Commits are grouped by release tag into Added, Changed and Fixed
    sections. The file is replaced as a whole on every run.
    """
    # Use force=True so handlers are reconfigured on repeated invocations
    # (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)

    try:
        start = repo if repo is not None else Path.cwd()
        repo_root = GitClient.find_repo_root(start)
        if repo_root is None:
            print_error(f"No Git repository found at or above: {start}")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        logger.debug("Repository root: %s", repo_root)

        try:
            config = load_config(repo_root)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        remote_name = remote or config["remote"]
        url_override = remote_url if remote_url is not None else config["remote_url"]

        try:
            source = GitClient(repo_root, tag_pattern=config["tag_pattern"])
            releases = collect_releases(source, remote=remote_name, remote_url=url_override)
        except GitError as exc:
            print_error(f"Could not read repository history: {exc}")
            raise click.exceptions.Exit(EXIT_SOURCE_UNAVAILABLE)

        document = render_changelog(releases)
        released = sum(1 for release in releases if not release.is_empty())

        if to_stdout:
            click.echo(document, nl=False)
            raise click.exceptions.Exit(EXIT_SUCCESS)

        target = resolve_output_path(repo_root, output or config["output"])
        if not released:
            print_info("No conventional commits found; the changelog will only have a title")
        try:
            write_changelog(target, document)
        except WriteError as exc:
            print_error(str(exc))
            raise click.exceptions.Exit(EXIT_WRITE_FAILURE)

        print_success(f"Wrote {target} ({released} release{'s' if released != 1 else ''})")
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
