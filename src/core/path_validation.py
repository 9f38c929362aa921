"""Mountpoint containment checks.

Paths are compared lexically, component by component. Symlinks are not
resolved, so the check is about the requested path shape only.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePath

from core.errors import InvalidPathError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def is_subdirectory(base: str | PurePath, target: str | PurePath) -> bool:
    """Return whether ``target`` lies strictly inside ``base``.

    Args:
        base: Candidate ancestor directory.
        target: Candidate descendant directory.

    Returns:
        True when target is below base, False when equal or outside.
    """
    base_parts = _clean_path(base).parts
    target_parts = _clean_path(target).parts
    if len(target_parts) <= len(base_parts):
        return False
    return target_parts[: len(base_parts)] == base_parts


def ensure_subdirectory(base: str | PurePath, target: str | PurePath) -> Path:
    """Validate containment and return the cleaned target path.

    Args:
        base: Data root directory.
        target: Requested mountpoint.

    Returns:
        Absolute, normalised target path.

    Raises:
        InvalidPathError: If target is the base itself or escapes it.
    """
    clean_base = _clean_path(base)
    clean_target = _clean_path(target)
    contained = is_subdirectory(clean_base, clean_target)
    _LOGGER.debug(
        "containment_checked",
        base=str(clean_base),
        target=str(clean_target),
        contained=contained,
    )
    if not contained:
        raise InvalidPathError(
            f"Target path {clean_target} is not a subdirectory of base path {clean_base}. "
            "Choose a mountpoint below the data root."
        )
    return clean_target


def _clean_path(raw_path: str | PurePath) -> Path:
    return Path(os.path.abspath(os.fspath(raw_path)))
