"""
Parse commit subjects in the Conventional Commit format.

A subject has the shape ``<type>(<scope>)?<!>?: <description>``.
Subjects that do not match, or whose type is not a known
:class:`CommitType`, are not errors: :func:`parse_commit` returns None
and the commit simply does not appear in the changelog.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from changelog_gen.grouping.commit_types import Category, CommitType, category_for, lookup_type
from changelog_gen.vcs.history import RawCommit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


SUBJECT_RE = re.compile(
    r"^(?P<type>[A-Za-z]+)(?:\((?P<scope>[^()]*)\))?(?P<breaking>!)?: (?P<description>.*)$"
)

_LINE_BREAKS_RE = re.compile(r"\s*[\r\n]+\s*")


@dataclass(frozen=True)
class ClassifiedCommit:
    """A commit that passed parsing, ready to be placed in a changelog section."""

    hash: str
    category: Category
    description: str
    commit_type: CommitType
    scope: Optional[str] = None
    breaking: bool = False


def capitalize_first(text: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    return text[:1].upper() + text[1:]


def normalize_description(text: str) -> str:
    """Join the description onto one line, trim it and capitalise it."""
    return capitalize_first(_LINE_BREAKS_RE.sub(" ", text).strip())


def parse_subject(commit_hash: str, subject: str) -> Optional[ClassifiedCommit]:
    """Classify a single commit subject.

    Returns
    -------
    Optional[ClassifiedCommit]
        The classified commit, or None if the subject is not a
        Conventional Commit with a recognised type.
    """
    flat = _LINE_BREAKS_RE.sub(" ", subject).strip()
    match = SUBJECT_RE.match(flat)
    if not match:
        logger.debug("Skipping non-conventional commit %s: %r", commit_hash[:7], subject)
        return None

    commit_type = lookup_type(match.group("type"))
    if commit_type is None:
        logger.debug(
            "Skipping commit %s with unknown type %r", commit_hash[:7], match.group("type")
        )
        return None

    description = normalize_description(match.group("description"))
    if not description:
        logger.debug("Skipping commit %s with empty description", commit_hash[:7])
        return None

    return ClassifiedCommit(
        hash=commit_hash,
        category=category_for(commit_type),
        description=description,
        commit_type=commit_type,
        scope=match.group("scope") or None,
        breaking=match.group("breaking") is not None,
    )


def parse_commit(commit: RawCommit) -> Optional[ClassifiedCommit]:
    """Classify a :class:`RawCommit`. See :func:`parse_subject`."""
    return parse_subject(commit.hash, commit.subject)
