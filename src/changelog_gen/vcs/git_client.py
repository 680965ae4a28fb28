"""
Git history reader for changelog_gen.

This module wraps the few read-only Git commands the changelog needs:
the commit log, the release tags reachable from ``HEAD`` and the URL of
a remote. All subprocess calls go through :meth:`GitClient._run` so that
unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import Iterator, List, Optional, Pattern, Tuple, Union

from changelog_gen.vcs.history import RawCommit, Tag


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# Field and record separators used in ``--format`` strings. Neither can
# appear in a commit subject or a ref name.
FIELD_SEP = "\x1f"
RECORD_SEP = "\x1e"

TAG_PREFIX = "tag: "

# Tags that name a release: ``1.2``, ``v1.2.3``, ``v2.0.0-rc.1``.
VERSION_TAG_PATTERN = r"^v?\d+(\.\d+)*(-[0-9A-Za-z.-]+)?(\+[0-9A-Za-z.-]+)?$"

_VERSION_PARTS_RE = re.compile(r"^v?(?P<release>\d+(?:\.\d+)*)(?:-(?P<pre>[0-9A-Za-z.-]+))?")


def version_key(name: str) -> Tuple:
    """Sort key ordering tag names by version precedence.

    A pre-release sorts below its release (``v1.0.0-rc1`` < ``v1.0.0``).
    Names that do not look like versions sort below all versions, by name.
    """
    match = _VERSION_PARTS_RE.match(name)
    if not match:
        return (0, (), 0, (), name)
    release = tuple(int(part) for part in match.group("release").split("."))
    pre = match.group("pre")
    if not pre:
        return (1, release, 1, (), name)
    pre_key = tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part) for part in pre.split(".")
    )
    return (1, release, 0, pre_key, name)


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Read commit history, tags and remotes from a Git repository."""

    def __init__(self, repo_root: Path, tag_pattern: Union[str, Pattern, None] = None) -> None:
        self.repo_root = repo_root
        self.tag_pattern = re.compile(tag_pattern or VERSION_TAG_PATTERN)
        self._records: Optional[List[List[str]]] = None

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` directory is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If git cannot be started, or the command exits with a non-zero
            status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            logger.error("Unable to run git: %s", e)
            raise GitError(f"Unable to run git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    def _has_head(self) -> bool:
        """Return True once the repository has at least one commit."""
        result = self._run(["rev-parse", "--verify", "--quiet", "HEAD"], check=False)
        return result.returncode == 0

    def _log_records(self) -> List[List[str]]:
        """Return ``[hash, date, refs, subject]`` records, newest first.

        History is walked once per client; later calls reuse the records.
        """
        if self._records is not None:
            return self._records
        if not self._has_head():
            logger.debug("Repository at %s has no commits yet", self.repo_root)
            self._records = []
            return self._records
        fmt = FIELD_SEP.join(["%H", "%cs", "%D", "%s"]) + RECORD_SEP
        result = self._run(["log", "--topo-order", f"--format={fmt}"], check=True)
        records = []
        for chunk in result.stdout.split(RECORD_SEP):
            chunk = chunk.strip("\n")
            if not chunk:
                continue
            # Pad short records (an empty subject drops the last field).
            records.append((chunk.split(FIELD_SEP) + ["", "", ""])[:4])
        self._records = records
        return records

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def list_commits(self) -> Iterator[RawCommit]:
        """Yield the commits reachable from ``HEAD``, newest first.

        Raises
        ------
        GitError
            If the log cannot be read.
        """
        records = self._log_records()
        logger.debug("Read %d commits from history", len(records))
        for commit_hash, date, _refs, subject in records:
            yield RawCommit(hash=commit_hash, subject=subject, date=date or None)

    def list_tags(self) -> List[Tag]:
        """Return the version tags reachable from ``HEAD``, newest first.

        Only tags matching ``tag_pattern`` are releases. Sequence indices
        follow history order: the tag closest to the root commit gets
        ``0``. Several tags on the same commit are ordered by version
        precedence, so ``v1.0.0`` ranks above ``v1.0.0-rc1``.

        Raises
        ------
        GitError
            If the log cannot be read.
        """
        tags: List[Tag] = []
        # Walk oldest first so that indices grow towards HEAD.
        for commit_hash, date, refs, _subject in reversed(self._log_records()):
            names = [
                ref[len(TAG_PREFIX):]
                for ref in (part.strip() for part in refs.split(","))
                if ref.startswith(TAG_PREFIX)
            ]
            releases = [name for name in names if self.tag_pattern.match(name)]
            if len(releases) != len(names):
                logger.debug(
                    "Ignoring non-release tags on %s: %s",
                    commit_hash[:7],
                    sorted(set(names) - set(releases)),
                )
            for name in sorted(releases, key=version_key):
                tags.append(
                    Tag(
                        name=name,
                        target_hash=commit_hash,
                        sequence_index=len(tags),
                        date=date or None,
                    )
                )
        logger.debug("Found %d release tags", len(tags))
        return list(reversed(tags))

    def remote_url(self, remote: str = "origin") -> str:
        """Return the configured URL of ``remote``.

        Raises
        ------
        GitError
            If the remote does not exist.
        """
        result = self._run(["remote", "get-url", remote], check=True)
        return result.stdout.strip()
