"""
Top-level package for changelog_gen.

This package builds a markdown changelog from Conventional Commit
history. The CLI entry point lives in :mod:`changelog_gen.cli` and the
pipeline in :mod:`changelog_gen.pipeline`.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
