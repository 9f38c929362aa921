"""Concurrency-safe volume registry.

This module owns the name-to-volume map, gates every new mountpoint through
the containment check and persists the whole map after each mutation.
One lock serializes all operations, reads included.
"""

from __future__ import annotations

import os
import stat
import threading
from pathlib import Path
from typing import Mapping

from core.constants import DATA_DIR_MODE
from core.errors import (
    PathIsFileError,
    PathMissingError,
    PersistIOError,
    VolumeExistsError,
    VolumeNotFoundError,
)
from core.logging_config import get_logger
from core.path_validation import ensure_subdirectory
from core.types import Capabilities, CreateOptions, Volume, utc_now_iso
from store.directories import ensure_directory
from store.state_store import StateStore

_LOGGER = get_logger(__name__)


class VolumeRegistry:
    """Persistent registry of named volumes backed by directories.

    The registry exclusively owns its records. Volumes are immutable
    values, so callers can hold them without aliasing registry state.
    """

    def __init__(
        self,
        data_path: Path,
        state_store: StateStore,
        volumes: Mapping[str, Volume] | None = None,
    ) -> None:
        """Initialize registry state.

        Args:
            data_path: Data root every mountpoint must live under.
            state_store: Store used to persist the map after mutations.
            volumes: Previously persisted volumes, keyed by name.
        """
        self._data_path = data_path
        self._state_store = state_store
        self._volumes: dict[str, Volume] = dict(volumes or {})
        self._lock = threading.Lock()

    @property
    def data_path(self) -> Path:
        """Data root of this registry."""
        return self._data_path

    def create(self, name: str, options: CreateOptions | None = None) -> Volume:
        """Register a new volume and create its directory.

        Args:
            name: Unique volume name.
            options: Optional create options with a relative mountpoint hint.

        Returns:
            The created volume.

        Raises:
            VolumeExistsError: If the name is already registered.
            InvalidPathError: If the mountpoint escapes the data root.
            PersistIOError: If the directory or state file cannot be written.
        """
        _LOGGER.debug("volume_create_called", name=name)
        with self._lock:
            if name in self._volumes:
                raise VolumeExistsError(f"The volume {name} already exists.")
            hint = options.mountpoint if options and options.mountpoint else name
            mountpoint = ensure_subdirectory(self._data_path, _join_hint(self._data_path, hint))
            ensure_directory(mountpoint, DATA_DIR_MODE)
            volume = Volume(name=name, mountpoint=str(mountpoint), created_at=utc_now_iso())
            self._volumes[name] = volume
            self._state_store.save(self._volumes)
        _LOGGER.info("volume_created", name=name, mountpoint=volume.mountpoint)
        return volume

    def get(self, name: str) -> Volume:
        """Return one volume by name.

        Raises:
            VolumeNotFoundError: If the name is unknown.
        """
        _LOGGER.debug("volume_get_called", name=name)
        with self._lock:
            return self._lookup(name)

    def list_volumes(self) -> list[Volume]:
        """Return all registered volumes in no particular order."""
        _LOGGER.debug("volume_list_called")
        with self._lock:
            volumes = list(self._volumes.values())
        _LOGGER.debug("volume_list_found", count=len(volumes))
        return volumes

    def remove(self, name: str) -> None:
        """Forget a volume. Its directory stays on disk.

        Raises:
            VolumeNotFoundError: If the name is unknown.
            PersistIOError: If the state file cannot be written.
        """
        _LOGGER.debug("volume_remove_called", name=name)
        with self._lock:
            self._lookup(name)
            del self._volumes[name]
            self._state_store.save(self._volumes)
        _LOGGER.info("volume_removed", name=name)

    def mount(self, name: str) -> str:
        """Return the mountpoint after checking it is still a directory.

        Mount never creates or recreates the directory.

        Raises:
            VolumeNotFoundError: If the name is unknown.
            PathMissingError: If the directory no longer exists.
            PathIsFileError: If the path exists but is not a directory.
            PersistIOError: If the path cannot be checked at all.
        """
        _LOGGER.debug("volume_mount_called", name=name)
        with self._lock:
            mountpoint = self._lookup(name).mountpoint
            try:
                mode = os.stat(mountpoint).st_mode
            except (FileNotFoundError, NotADirectoryError) as error:
                raise PathMissingError(
                    f"Path {mountpoint} for volume {name} not found."
                ) from error
            except (OSError, ValueError) as error:
                raise PersistIOError(
                    f"Failed to check path {mountpoint} for volume {name}: {error}."
                ) from error
            if not stat.S_ISDIR(mode):
                raise PathIsFileError(
                    f"Path {mountpoint} for volume {name} is a file, not a directory."
                )
        _LOGGER.debug("volume_mounted", name=name, mountpoint=mountpoint)
        return mountpoint

    def path(self, name: str) -> str:
        """Return the recorded mountpoint without touching the disk.

        Raises:
            VolumeNotFoundError: If the name is unknown.
        """
        _LOGGER.debug("volume_path_called", name=name)
        with self._lock:
            return self._lookup(name).mountpoint

    def unmount(self, name: str) -> None:
        """Acknowledge an unmount. Registry state never changes.

        Raises:
            VolumeNotFoundError: If the name is unknown.
        """
        _LOGGER.debug("volume_unmount_called", name=name)
        with self._lock:
            self._lookup(name)
        _LOGGER.info("volume_unmounted", name=name)

    def capabilities(self) -> Capabilities:
        """Return the registry scope descriptor."""
        _LOGGER.debug("capabilities_called")
        with self._lock:
            return Capabilities()

    def _lookup(self, name: str) -> Volume:
        volume = self._volumes.get(name)
        if volume is None:
            _LOGGER.error("volume_not_found", name=name)
            raise VolumeNotFoundError(f"No volume found with the name {name}.")
        return volume


def _join_hint(data_path: Path, hint: str) -> Path:
    """Join a mountpoint hint onto the data root.

    Hints are always relative to the data root, so leading separators are
    dropped rather than letting the hint replace the root.
    """
    return data_path / hint.lstrip("/")
