import unittest

from changelog_gen.grouping.commit_types import Category
from changelog_gen.grouping.group_model import Release
from changelog_gen.render.markdown import render_changelog, render_heading
from changelog_gen.vcs.history import Tag

REMOTE = "https://github.com/acme/widget"


def bullets(**sections):
    return {Category[name.upper()]: dict.fromkeys(items) for name, items in sections.items()}


class TestRenderHeading(unittest.TestCase):
    def test_unreleased_heading_has_no_link(self) -> None:
        self.assertEqual(render_heading(Release(tag=None)), "## Unreleased")

    def test_tagged_heading_with_link_and_date(self) -> None:
        release = Release(
            tag=Tag("v1.1.0", "b", 1, date="2024-01-31"),
            compare_url=f"{REMOTE}/compare/v1.0.0...v1.1.0",
        )
        self.assertEqual(
            render_heading(release),
            f"## [v1.1.0]({REMOTE}/compare/v1.0.0...v1.1.0) - 2024-01-31",
        )

    def test_tagged_heading_without_date(self) -> None:
        release = Release(tag=Tag("v1.0.0", "a", 0), compare_url=f"{REMOTE}/releases/tag/v1.0.0")
        self.assertEqual(render_heading(release), f"## [v1.0.0]({REMOTE}/releases/tag/v1.0.0)")

    def test_tagged_heading_without_link(self) -> None:
        release = Release(tag=Tag("v1.0.0", "a", 0, date="2024-01-01"))
        self.assertEqual(render_heading(release), "## v1.0.0 - 2024-01-01")


class TestRenderChangelog(unittest.TestCase):
    def test_full_document(self) -> None:
        releases = [
            Release(tag=None, bullets=bullets(added=["New thing"])),
            Release(
                tag=Tag("v1.1.0", "b", 1, date="2024-01-31"),
                compare_url="u",
                bullets=bullets(changed=["Bump z"], fixed=["Fix y"]),
            ),
        ]
        expected = (
            "# Changelog\n"
            "\n"
            "## Unreleased\n"
            "\n"
            "### Added\n"
            "* New thing\n"
            "\n"
            "## [v1.1.0](u) - 2024-01-31\n"
            "\n"
            "### Changed\n"
            "* Bump z\n"
            "\n"
            "### Fixed\n"
            "* Fix y\n"
        )
        self.assertEqual(render_changelog(releases), expected)

    def test_sections_always_added_changed_fixed(self) -> None:
        release = Release(
            tag=Tag("v1.0.0", "a", 0),
            compare_url="u",
            bullets={
                Category.FIXED: {"Fix y": None},
                Category.ADDED: {"Add x": None},
                Category.CHANGED: {"Bump z": None},
            },
        )
        text = render_changelog([release])
        self.assertLess(text.index("### Added"), text.index("### Changed"))
        self.assertLess(text.index("### Changed"), text.index("### Fixed"))

    def test_empty_releases_are_skipped(self) -> None:
        releases = [
            Release(tag=None),
            Release(tag=Tag("v0.2.0", "b", 1), compare_url="u2"),
            Release(tag=Tag("v0.1.0", "a", 0), compare_url="u1", bullets=bullets(fixed=["Y"])),
        ]
        text = render_changelog(releases)
        self.assertNotIn("Unreleased", text)
        self.assertNotIn("v0.2.0", text)
        self.assertIn("## [v0.1.0](u1)", text)

    def test_no_releases(self) -> None:
        self.assertEqual(render_changelog([]), "# Changelog\n")

    def test_bullets_are_capitalized(self) -> None:
        release = Release(tag=None, bullets=bullets(changed=["lower case"]))
        self.assertIn("* Lower case\n", render_changelog([release]))

    def test_single_trailing_newline(self) -> None:
        release = Release(tag=None, bullets=bullets(added=["X"]))
        text = render_changelog([release])
        self.assertTrue(text.endswith("* X\n"))
        self.assertFalse(text.endswith("\n\n"))


if __name__ == "__main__":
    unittest.main()
