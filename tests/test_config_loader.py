import json
import tempfile
import unittest
from pathlib import Path

from changelog_gen.config.loader import CONFIG_FILENAME, DEFAULTS, ConfigError, load_config


class TestConfigLoader(unittest.TestCase):
    """Tests for the configuration loader."""

    def write_config(self, root: Path, content) -> None:
        text = content if isinstance(content, str) else json.dumps(content)
        (root / CONFIG_FILENAME).write_text(text, encoding="utf-8")

    def test_missing_file_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(load_config(Path(tmp)), DEFAULTS)

    def test_load_config_success(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self.write_config(
                root,
                {"output": "docs/CHANGES.md", "remote": "upstream", "remote_url": "https://example.com/r"},
            )
            result = load_config(root)
            self.assertEqual(result["output"], "docs/CHANGES.md")
            self.assertEqual(result["remote"], "upstream")
            self.assertEqual(result["remote_url"], "https://example.com/r")

    def test_partial_config_keeps_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self.write_config(root, {"remote": "upstream", "remote_url": None})
            result = load_config(root)
            self.assertEqual(result["output"], "CHANGELOG.md")
            self.assertEqual(result["remote"], "upstream")
            self.assertIsNone(result["remote_url"])

    def test_unknown_keys_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self.write_config(root, {"categories": ["Security"]})
            self.assertEqual(load_config(root), DEFAULTS)

    def test_defaults_are_not_mutated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self.write_config(root, {"output": "OTHER.md"})
            load_config(root)
            self.assertEqual(DEFAULTS["output"], "CHANGELOG.md")

    def test_tag_pattern(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self.write_config(root, {"tag_pattern": r"^release-\d+$"})
            self.assertEqual(load_config(root)["tag_pattern"], r"^release-\d+$")
            self.assertIsNone(DEFAULTS["tag_pattern"])

    def test_invalid_documents(self) -> None:
        cases = [
            "{invalid}",
            "[1, 2]",
            {"output": 3},
            {"remote": ""},
            {"remote_url": False},
            {"tag_pattern": "("},
            {"tag_pattern": 1},
        ]
        for content in cases:
            with self.subTest(content=content):
                with tempfile.TemporaryDirectory() as tmp:
                    root = Path(tmp)
                    self.write_config(root, content)
                    with self.assertRaises(ConfigError):
                        load_config(root)


if __name__ == "__main__":
    unittest.main()
