"""
Configuration loader for changelog_gen.

The tool reads an optional JSON file named ``.changelog.json`` from the
repository root. Every key has a default, so a missing file is not an
error. A file that exists but is malformed, or holds values of the
wrong type, raises :class:`ConfigError`.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings or logging errors in
# environments where the root logger may be closed. The CLI configures
# logging explicitly, so propagation stays off until then.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


CONFIG_FILENAME = ".changelog.json"

DEFAULTS: Dict[str, Any] = {
    "output": "CHANGELOG.md",
    "remote": "origin",
    "remote_url": None,
    "tag_pattern": None,
}

# Expected type of each key; these may also be null.
_KEY_TYPES = {
    "output": str,
    "remote": str,
    "remote_url": str,
    "tag_pattern": str,
}
_NULLABLE = ("remote_url", "tag_pattern")


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or invalid."""

    pass


def load_config(repo_root: Path) -> Dict[str, Any]:
    """Load ``.changelog.json`` from ``repo_root`` merged over the defaults.

    Args:
        repo_root: Root directory of the repository.

    Returns:
        A dictionary with the keys:
        - output (str): Path of the changelog file, relative to the repo root
        - remote (str): Name of the remote used for links
        - remote_url (str|None): Explicit repository URL overriding the remote
        - tag_pattern (str|None): Regular expression selecting release tags

    Raises:
        ConfigError: If the file exists but is malformed or invalid.
    """
    config = dict(DEFAULTS)
    config_path = Path(repo_root) / CONFIG_FILENAME

    if not config_path.exists():
        logger.debug("No configuration file at %s, using defaults", config_path)
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    for key, value in data.items():
        if key not in _KEY_TYPES:
            logger.warning("Ignoring unknown configuration key '%s'", key)
            continue
        if key in _NULLABLE and value is None:
            continue
        if not isinstance(value, _KEY_TYPES[key]):
            raise ConfigError(f"'{key}' must be a string")
        if not value.strip():
            raise ConfigError(f"'{key}' must not be empty")
        if key == "tag_pattern":
            try:
                re.compile(value)
            except re.error as exc:
                raise ConfigError(f"'tag_pattern' is not a valid regular expression: {exc}") from exc
        config[key] = value

    logger.debug("Loaded configuration from: %s", config_path)
    logger.debug("Configuration data: %s", config)
    return config
