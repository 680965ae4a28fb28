"""
Render releases as a markdown changelog.

The output is deterministic: the same releases always produce the same
bytes, ending in exactly one newline.
"""

from __future__ import annotations

from typing import Iterable, List

from changelog_gen.grouping.commit_parser import capitalize_first
from changelog_gen.grouping.commit_types import Category
from changelog_gen.grouping.group_model import Release


TITLE = "# Changelog"
BULLET = "* "


def render_heading(release: Release) -> str:
    """Return the ``##`` heading line for ``release``."""
    if release.is_unreleased:
        return f"## {release.title}"
    heading = f"## [{release.title}]({release.compare_url})" if release.compare_url else f"## {release.title}"
    if release.tag is not None and release.tag.date:
        heading += f" - {release.tag.date}"
    return heading


def render_release(release: Release) -> List[str]:
    """Return the lines of one release, without a trailing blank line."""
    lines = [render_heading(release)]
    for category in Category:
        items = release.items(category)
        if not items:
            continue
        lines.append("")
        lines.append(f"### {category.value}")
        lines.extend(BULLET + capitalize_first(item) for item in items)
    return lines


def render_changelog(releases: Iterable[Release]) -> str:
    """Render the full document, skipping releases with no bullets."""
    lines = [TITLE]
    for release in releases:
        if release.is_empty():
            continue
        lines.append("")
        lines.extend(render_release(release))
    return "\n".join(lines).rstrip("\n") + "\n"
