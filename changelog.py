#!/usr/bin/env python
"""
Thin wrapper script to invoke the changelog_gen CLI.

Running ``python changelog.py`` is equivalent to running the
``changelog-gen`` console script installed via ``pyproject.toml``.
"""

from changelog_gen.cli import main


if __name__ == "__main__":
    main(prog_name="changelog-gen")
