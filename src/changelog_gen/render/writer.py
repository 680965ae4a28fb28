"""
All-or-nothing file output for the rendered changelog.

The document is written to a temporary file beside the destination and
moved into place with :func:`os.replace`, so readers see either the old
file or the complete new one.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class WriteError(Exception):
    """Raised when the changelog file cannot be written."""

    pass


def _target_mode(path: Path) -> int:
    """Permission bits for the written file.

    An existing file keeps its mode; a new one gets the usual
    ``0o666`` minus the process umask.
    """
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_changelog(path: Path, text: str) -> Path:
    """Atomically replace ``path`` with ``text``.

    The permissions of an existing file are preserved.

    Returns
    -------
    Path
        The path that was written.

    Raises
    ------
    WriteError
        If the temporary file cannot be created, written or moved into
        place. The destination is left untouched in that case.
    """
    path = Path(path)
    tmp_path = None
    try:
        mode = _target_mode(path)
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
        )
        try:
            handle = os.fdopen(fd, "w", encoding="utf-8", newline="\n")
        except OSError:
            os.close(fd)
            raise
        with handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except OSError as exc:
        logger.error("Failed to write %s: %s", path, exc)
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise WriteError(f"Could not write {path}: {exc}") from exc

    logger.debug("Wrote %d bytes to %s", len(text.encode("utf-8")), path)
    return path
