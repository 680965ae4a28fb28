"""
Group release commits into changelog sections without duplicates.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from changelog_gen.grouping.commit_parser import ClassifiedCommit
from changelog_gen.grouping.commit_types import Category
from changelog_gen.grouping.group_model import Release


def categorize(commits: Iterable[ClassifiedCommit]) -> Dict[Category, Dict[str, None]]:
    """Group descriptions by category.

    Within a category, descriptions keep the order they are first seen
    in and exact repeats are dropped. The result lists categories in
    Added, Changed, Fixed order and leaves out empty ones.
    """
    seen: Dict[Category, Dict[str, None]] = {category: {} for category in Category}
    for commit in commits:
        seen[commit.category].setdefault(commit.description, None)
    return {category: items for category, items in seen.items() if items}


def categorize_releases(resolved: Iterable[Tuple[Release, List[ClassifiedCommit]]]) -> List[Release]:
    """Fill in the bullets of every resolved release and return the releases."""
    releases = []
    for release, commits in resolved:
        release.bullets = categorize(commits)
        releases.append(release)
    return releases
