"""
Data models for releases.

A :class:`Release` is one section of the changelog: either a tagged
version or the synthetic Unreleased bucket, together with its bullets
grouped by :class:`Category`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from changelog_gen.grouping.commit_types import Category
from changelog_gen.vcs.history import Tag


UNRELEASED = "Unreleased"


@dataclass
class Release:
    """Representation of one changelog release.

    Attributes
    ----------
    tag : Optional[Tag]
        The release tag, or None for the Unreleased bucket.
    compare_url : Optional[str]
        Link for the release heading. None renders an unlinked heading.
    bullets : Dict[Category, Dict[str, None]]
        Category to an insertion-ordered set of unique descriptions.
        Keys follow the Added, Changed, Fixed order.
    """

    tag: Optional[Tag]
    compare_url: Optional[str] = None
    bullets: Dict[Category, Dict[str, None]] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return self.tag.name if self.tag is not None else UNRELEASED

    @property
    def is_unreleased(self) -> bool:
        return self.tag is None

    def items(self, category: Category) -> List[str]:
        """Return the bullets of ``category`` in first-seen order."""
        return list(self.bullets.get(category, {}))

    def is_empty(self) -> bool:
        return not any(self.bullets.values())
