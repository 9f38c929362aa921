"""Directory creation helpers for the state directory and mountpoints."""

from __future__ import annotations

import os
from pathlib import Path

from core.errors import PersistIOError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def ensure_directory(path: Path, mode: int) -> bool:
    """Create a directory tree if it does not exist yet.

    Every directory created here, leaf and missing ancestors alike, gets
    ``mode`` regardless of the process umask. Existing directories are left
    untouched, including their permissions.

    Args:
        path: Directory to create.
        mode: Permission bits applied to each newly created directory.

    Returns:
        True when the directory was created, False when it already existed.

    Raises:
        PersistIOError: If creation fails or the path is not a directory.
    """
    try:
        if path.is_dir():
            return False
        if path.exists():
            raise PersistIOError(
                f"Cannot create directory {path}: a non-directory entry already exists there."
            )
        missing = _missing_directories(path)
        _LOGGER.debug("directory_create", path=str(path), mode=oct(mode), created=len(missing))
        for directory in missing:
            directory.mkdir(mode=mode, exist_ok=True)
            os.chmod(directory, mode)
    except (OSError, ValueError) as error:
        raise PersistIOError(
            f"Failed to create directory {path}: {error}. Check the path and its parent."
        ) from error
    return True


def _missing_directories(path: Path) -> list[Path]:
    """Return the absent directories from the outermost ancestor down to ``path``."""
    missing: list[Path] = []
    current = path
    while not current.exists() and current.parent != current:
        missing.append(current)
        current = current.parent
    return list(reversed(missing))
