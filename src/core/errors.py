"""local-persist exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each registry failure class maps to one error type so the host
transport can report it without inspecting message text.
"""

from __future__ import annotations


class PersistError(Exception):
    """Base exception for all local-persist failures."""


class PersistConfigError(PersistError):
    """Raised for invalid runtime configuration."""


class PersistDependencyError(PersistError):
    """Raised when an optional runtime dependency is missing."""


class VolumeNotFoundError(PersistError):
    """Raised when a volume name is not present in the registry."""


class VolumeExistsError(PersistError):
    """Raised when creating a volume whose name is already taken."""


class InvalidPathError(PersistError):
    """Raised when a requested mountpoint escapes the data root."""


class PathMissingError(PersistError):
    """Raised when a recorded mountpoint no longer exists on disk."""


class PathIsFileError(PersistError):
    """Raised when a recorded mountpoint exists but is not a directory."""


class PersistIOError(PersistError):
    """Raised for directory creation and state-file write failures."""


class CorruptStateError(PersistError):
    """Raised when the state file exists but cannot be interpreted."""
