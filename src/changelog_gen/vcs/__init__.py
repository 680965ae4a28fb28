"""
Version control system (VCS) integration.

This package defines the history records the changelog is built from
and a Git client that reads them. The pipeline depends only on the
:class:`HistorySource` protocol, not on Git itself.
"""

from .git_client import GitClient, GitError  # noqa: F401
from .history import HistorySource, RawCommit, Tag  # noqa: F401
