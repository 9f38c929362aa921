"""Public SDK surface for local-persist.

This module provides a stable import path for embedding the registry.
It re-exports the registry, its startup routine and the typed models.
"""

from __future__ import annotations

from core.config import PersistConfig
from core.errors import (
    CorruptStateError,
    InvalidPathError,
    PathIsFileError,
    PathMissingError,
    PersistConfigError,
    PersistDependencyError,
    PersistError,
    PersistIOError,
    VolumeExistsError,
    VolumeNotFoundError,
)
from core.path_validation import ensure_subdirectory, is_subdirectory
from core.types import Capabilities, CreateOptions, Volume, options_from_mapping
from plugin.handlers import PluginHandlers
from store.bootstrap import bootstrap_registry
from store.state_store import StateStore
from store.volume_registry import VolumeRegistry

__all__ = [
    "Capabilities",
    "CorruptStateError",
    "CreateOptions",
    "InvalidPathError",
    "PathIsFileError",
    "PathMissingError",
    "PersistConfig",
    "PersistConfigError",
    "PersistDependencyError",
    "PersistError",
    "PersistIOError",
    "PluginHandlers",
    "StateStore",
    "Volume",
    "VolumeExistsError",
    "VolumeNotFoundError",
    "VolumeRegistry",
    "bootstrap_registry",
    "ensure_subdirectory",
    "is_subdirectory",
    "options_from_mapping",
]
