"""
Conventional Commit types and the changelog sections they map to.

Every :class:`CommitType` maps to exactly one :class:`Category`. The
table is checked against the enum when the module is imported so that
adding a type without a category fails loudly instead of silently
dropping commits.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class Category(str, Enum):
    """Changelog section. Declaration order is the render order."""

    ADDED = "Added"
    CHANGED = "Changed"
    FIXED = "Fixed"


class CommitType(str, Enum):
    """Recognised Conventional Commit type tokens."""

    FEAT = "feat"
    FIX = "fix"
    PERF = "perf"
    REFACTOR = "refactor"
    STYLE = "style"
    REVERT = "revert"
    CHORE = "chore"
    TEST = "test"
    DOCS = "docs"
    CI = "ci"
    BUILD = "build"


CATEGORY_BY_TYPE: Dict[CommitType, Category] = {
    CommitType.FEAT: Category.ADDED,
    CommitType.FIX: Category.FIXED,
    CommitType.PERF: Category.CHANGED,
    CommitType.REFACTOR: Category.CHANGED,
    CommitType.STYLE: Category.CHANGED,
    CommitType.REVERT: Category.CHANGED,
    CommitType.CHORE: Category.CHANGED,
    CommitType.TEST: Category.CHANGED,
    CommitType.DOCS: Category.CHANGED,
    CommitType.CI: Category.CHANGED,
    CommitType.BUILD: Category.CHANGED,
}

_unmapped = set(CommitType) - set(CATEGORY_BY_TYPE)
if _unmapped:
    raise RuntimeError(f"Commit types without a category: {sorted(t.value for t in _unmapped)}")


def lookup_type(token: str) -> Optional[CommitType]:
    """Return the :class:`CommitType` for ``token`` or None if unrecognised.

    Matching is case-sensitive, so ``Feat`` is not a type.
    """
    try:
        return CommitType(token)
    except ValueError:
        return None


def category_for(commit_type: CommitType) -> Category:
    """Return the changelog section for ``commit_type``."""
    return CATEGORY_BY_TYPE[commit_type]
