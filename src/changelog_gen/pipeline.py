"""
End-to-end changelog generation.

:func:`build_changelog` runs the whole pipeline against a
:class:`HistorySource`: read tags and the remote URL, walk the commits
into releases, deduplicate each release by category and render the
markdown document. Errors raised by the source propagate unchanged, so
nothing is rendered from partial history.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from changelog_gen.grouping.categorizer import categorize_releases
from changelog_gen.grouping.group_model import Release
from changelog_gen.grouping.tag_resolver import resolve_releases
from changelog_gen.render.markdown import render_changelog
from changelog_gen.vcs.history import HistorySource


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def collect_releases(
    source: HistorySource,
    remote: str = "origin",
    remote_url: Optional[str] = None,
) -> List[Release]:
    """Read history from ``source`` and return categorised releases, newest first."""
    tags = source.list_tags()
    if remote_url is None:
        remote_url = source.remote_url(remote)
    logger.debug("Using %d tags and remote URL %r", len(tags), remote_url)
    resolved = resolve_releases(source.list_commits(), tags, remote_url)
    return categorize_releases(resolved)


def build_changelog(
    source: HistorySource,
    remote: str = "origin",
    remote_url: Optional[str] = None,
) -> str:
    """Return the rendered changelog for ``source``.

    Parameters
    ----------
    source : HistorySource
        Provider of commits, tags and the remote URL.
    remote : str
        Name of the remote whose URL is used for links.
    remote_url : Optional[str]
        Explicit repository URL. When given, ``source`` is not asked for one.
    """
    return render_changelog(collect_releases(source, remote=remote, remote_url=remote_url))
