"""
History records consumed by the changelog pipeline.

The pipeline never talks to a version control tool directly. It asks a
:class:`HistorySource` for commits, tags and the remote URL, so that any
object providing those three methods (the :class:`GitClient`, or a
stub in tests) can drive it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol


@dataclass(frozen=True)
class RawCommit:
    """A single commit as read from history.

    Attributes
    ----------
    hash : str
        Full commit hash.
    subject : str
        First line of the commit message.
    date : Optional[str]
        Committer date in ``YYYY-MM-DD`` form, if known.
    """

    hash: str
    subject: str
    date: Optional[str] = None


@dataclass(frozen=True)
class Tag:
    """A release tag pointing at a commit.

    A larger ``sequence_index`` means a newer release.
    """

    name: str
    target_hash: str
    sequence_index: int
    date: Optional[str] = None


class HistorySource(Protocol):
    """Capability interface for reading repository history."""

    def list_commits(self) -> Iterable[RawCommit]:
        """Return commits newest first."""
        ...

    def list_tags(self) -> List[Tag]:
        """Return the release tags."""
        ...

    def remote_url(self, remote: str = "origin") -> str:
        """Return the URL of the given remote."""
        ...
