"""File utility functions."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Final

logger: Final = logging.getLogger(__name__)


def ensure_directory_exists(directory: Path) -> None:
    """Create directory if it doesn't exist.

    Args:
        directory: Path to create
    """
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory: %s", directory)


def is_path_writable(file_path: Path) -> bool:
    """Check whether ``file_path`` can be written or created.

    Args:
        file_path: File that would be written

    Returns:
        True if the file (or, when missing, its nearest existing
        ancestor directory) is writable by this process
    """
    if file_path.exists():
        return os.access(file_path, os.W_OK)
    for parent in file_path.parents:
        if parent.exists():
            return os.access(parent, os.W_OK)
    return False


def atomic_write_text(file_path: Path, content: str) -> None:
    """Replace the contents of ``file_path`` in one step.

    The text is written and fsynced to a temporary file in the same
    directory, which is then renamed over the target.

    Args:
        file_path: File to write
        content: New contents

    Raises:
        OSError: If the file cannot be written
    """
    ensure_directory_exists(file_path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{file_path.name}.", dir=file_path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, file_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
