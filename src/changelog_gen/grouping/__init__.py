"""
Grouping logic for the changelog.

This package classifies commit subjects into Conventional Commit types,
splits history into releases at tag boundaries and groups each release
into Added, Changed and Fixed sections. See
:mod:`changelog_gen.grouping.commit_parser`,
:mod:`changelog_gen.grouping.tag_resolver` and
:mod:`changelog_gen.grouping.categorizer` for details.
"""

from .categorizer import categorize, categorize_releases  # noqa: F401
from .commit_parser import ClassifiedCommit, parse_commit  # noqa: F401
from .commit_types import Category, CommitType  # noqa: F401
from .group_model import Release  # noqa: F401
from .tag_resolver import resolve_releases, sanitize_remote_url  # noqa: F401
