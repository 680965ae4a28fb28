"""
Partition history into releases bounded by tags.

History is walked once, newest commit first. Commits start in the
Unreleased bucket; when the walk reaches the commit a tag points at,
that commit and everything older belong to the tag's release until the
next (older) tag target is reached. Each release therefore owns the
range between its tag and the previous tag.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from changelog_gen.grouping.commit_parser import ClassifiedCommit, parse_commit
from changelog_gen.grouping.commit_types import Category, CommitType
from changelog_gen.grouping.group_model import Release
from changelog_gen.vcs.history import RawCommit, Tag


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# A first release with nothing to report still gets one bullet.
INITIAL_RELEASE_TAGS = ("v1.0.0", "1.0.0")
INITIAL_RELEASE_DESCRIPTION = "Initial release"

Parser = Callable[[RawCommit], Optional[ClassifiedCommit]]
ResolvedRelease = Tuple[Release, List[ClassifiedCommit]]


def sanitize_remote_url(url: str) -> str:
    """Clean a remote URL so it can be embedded in markdown links.

    Line breaks anywhere in the string are removed, along with
    surrounding whitespace, trailing slashes and a ``.git`` suffix.
    """
    cleaned = url.replace("\r", "").replace("\n", "").strip().rstrip("/")
    if cleaned.endswith(".git"):
        cleaned = cleaned[: -len(".git")]
    return cleaned.rstrip("/")


def release_url(remote_url: str, tag: Tag, previous: Optional[Tag]) -> Optional[str]:
    """Build the heading link for ``tag``.

    Returns a compare link against ``previous``, the release page when
    there is no previous tag, or None when no remote URL is known.
    """
    if not remote_url:
        return None
    if previous is None:
        return f"{remote_url}/releases/tag/{tag.name}"
    return f"{remote_url}/compare/{previous.name}...{tag.name}"


def order_tags(tags: Iterable[Tag]) -> List[Tag]:
    """Return ``tags`` newest first by sequence index."""
    return sorted(tags, key=lambda tag: tag.sequence_index, reverse=True)


def resolve_releases(
    commits: Iterable[RawCommit],
    tags: Sequence[Tag],
    remote_url: str,
    parse: Parser = parse_commit,
) -> List[ResolvedRelease]:
    """Assign classified commits to releases.

    Parameters
    ----------
    commits : Iterable[RawCommit]
        History, newest first. Consumed once.
    tags : Sequence[Tag]
        Release tags in any order.
    remote_url : str
        Repository URL used for heading links. Sanitised here.
    parse : Callable
        Classifier applied to every commit. Commits it rejects are
        dropped but still move the walk across tag boundaries.

    Returns
    -------
    List[Tuple[Release, List[ClassifiedCommit]]]
        The Unreleased bucket followed by one entry per tag, newest first.
        Releases are returned even when they hold no commits.
    """
    remote = sanitize_remote_url(remote_url)
    ordered = order_tags(tags)

    releases: List[Release] = [Release(tag=None)]
    bucket_by_hash: Dict[str, int] = {}
    for position, tag in enumerate(ordered):
        previous = ordered[position + 1] if position + 1 < len(ordered) else None
        releases.append(Release(tag=tag, compare_url=release_url(remote, tag, previous)))
        # Tags sharing a commit: the newest one takes its range.
        bucket_by_hash.setdefault(tag.target_hash, position + 1)

    buckets: List[List[ClassifiedCommit]] = [[] for _ in releases]
    current = 0
    walked = 0
    # Buckets that own a stretch of the walked history.
    reached = {0}
    for commit in commits:
        walked += 1
        current = bucket_by_hash.get(commit.hash, current)
        reached.add(current)
        classified = parse(commit)
        if classified is not None:
            buckets[current].append(classified)

    for index, (release, bucket) in enumerate(zip(releases, buckets)):
        if (
            release.tag is not None
            and release.tag.name in INITIAL_RELEASE_TAGS
            and index in reached
            and not bucket
        ):
            bucket.append(
                ClassifiedCommit(
                    hash=release.tag.target_hash,
                    category=Category.ADDED,
                    description=INITIAL_RELEASE_DESCRIPTION,
                    commit_type=CommitType.FEAT,
                )
            )

    logger.debug(
        "Resolved %d commits into %d tagged releases", walked, len(releases) - 1
    )
    return list(zip(releases, buckets))
