"""
Output of the changelog document.

:mod:`changelog_gen.render.markdown` turns releases into markdown and
:mod:`changelog_gen.render.writer` writes it to disk atomically.
"""

from .markdown import render_changelog  # noqa: F401
from .writer import WriteError, write_changelog  # noqa: F401
