"""
Configuration loading for changelog_gen.

Provides a loader for the optional ``.changelog.json`` file located in
the repository root. See :mod:`changelog_gen.config.loader` for
implementation details.
"""

from .loader import ConfigError, load_config  # noqa: F401
