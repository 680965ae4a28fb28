import unittest

from changelog_gen.grouping.commit_types import Category
from changelog_gen.grouping.group_model import Release
from changelog_gen.vcs.history import Tag


class TestReleaseModel(unittest.TestCase):
    def test_unreleased_release(self) -> None:
        release = Release(tag=None)
        self.assertTrue(release.is_unreleased)
        self.assertEqual(release.title, "Unreleased")
        self.assertIsNone(release.compare_url)
        self.assertTrue(release.is_empty())

    def test_tagged_release(self) -> None:
        release = Release(
            tag=Tag(name="v1.2.0", target_hash="abc", sequence_index=3, date="2024-05-01"),
            compare_url="https://example.com/compare/v1.1.0...v1.2.0",
            bullets={Category.ADDED: {"Add x": None}},
        )
        self.assertFalse(release.is_unreleased)
        self.assertEqual(release.title, "v1.2.0")
        self.assertEqual(release.items(Category.ADDED), ["Add x"])
        self.assertEqual(release.items(Category.CHANGED), [])
        self.assertFalse(release.is_empty())

    def test_empty_category_sets_count_as_empty(self) -> None:
        release = Release(tag=None, bullets={Category.FIXED: {}})
        self.assertTrue(release.is_empty())


if __name__ == "__main__":
    unittest.main()
