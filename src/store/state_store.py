"""Registry state-file persistence.

The state file is one JSON object carrying a schema version and the
volume records keyed by name. Writes go through a temporary file in the
same directory and an atomic rename, so readers only ever see a whole file.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Mapping

from core.constants import STATE_FILE_MODE, STATE_SCHEMA_VERSION
from core.errors import CorruptStateError, PersistIOError
from core.logging_config import get_logger
from core.types import Volume, volume_from_payload, volume_to_payload

_LOGGER = get_logger(__name__)


class StateStore:
    """Filesystem-backed store for the volume registry."""

    def __init__(self, state_file: Path) -> None:
        self._state_file = state_file

    @property
    def state_file(self) -> Path:
        """Path of the backing state file."""
        return self._state_file

    def load(self) -> dict[str, Volume]:
        """Load registry contents from the state file.

        Returns:
            Volumes keyed by name. Empty when the file does not exist.

        Raises:
            CorruptStateError: If the file exists but cannot be interpreted.
            PersistIOError: If the file exists but cannot be read.
        """
        try:
            raw_text = self._state_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            _LOGGER.debug("state_file_missing", state_file=str(self._state_file))
            return {}
        except OSError as error:
            raise PersistIOError(
                f"Failed to read state file {self._state_file}: {error}. "
                "Check file permissions and retry."
            ) from error
        try:
            payload = json.loads(raw_text)
        except json.JSONDecodeError as error:
            raise CorruptStateError(
                f"Failed to parse state file {self._state_file}: {error.msg}. "
                "Repair or remove the file before starting."
            ) from error
        return _volumes_from_state(self._state_file, payload)

    def save(self, volumes: Mapping[str, Volume]) -> None:
        """Persist the whole registry, replacing previous content.

        Args:
            volumes: Volumes keyed by name.

        Raises:
            PersistIOError: If the file cannot be written.
        """
        payload = {
            "schemaVersion": STATE_SCHEMA_VERSION,
            "volumes": {name: volume_to_payload(volume) for name, volume in volumes.items()},
        }
        serialized = json.dumps(payload, indent=2, sort_keys=True) + "\n"
        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._state_file.parent,
                prefix=f".{self._state_file.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                os.fchmod(tmp.fileno(), STATE_FILE_MODE)
                tmp.write(serialized)
                tmp.flush()
                os.fsync(tmp.fileno())
            tmp_path.replace(self._state_file)
        except OSError as error:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise PersistIOError(
                f"Failed to write state file {self._state_file}: {error}. "
                "The in-memory registry is ahead of disk until the next successful write."
            ) from error
        _LOGGER.debug("state_saved", state_file=str(self._state_file), volumes=len(volumes))


def _volumes_from_state(state_file: Path, payload: object) -> dict[str, Volume]:
    """Validate a decoded state payload and build volume records."""
    if not isinstance(payload, dict):
        raise CorruptStateError(
            f"Invalid state file {state_file}: expected JSON object at top level."
        )
    if "schemaVersion" not in payload and "state" in payload:
        raise CorruptStateError(
            f"State file {state_file} uses the legacy name-to-path layout without "
            "a schemaVersion. Migrate it to the versioned layout before starting."
        )
    schema_version = payload.get("schemaVersion")
    if schema_version != STATE_SCHEMA_VERSION:
        raise CorruptStateError(
            f"Unsupported state schemaVersion {schema_version!r} in {state_file}. "
            f"Expected {STATE_SCHEMA_VERSION}."
        )
    raw_volumes = payload.get("volumes")
    if not isinstance(raw_volumes, dict):
        raise CorruptStateError(
            f"Invalid state file {state_file}: field 'volumes' must be an object."
        )
    volumes: dict[str, Volume] = {}
    for name, record in raw_volumes.items():
        if not isinstance(record, dict):
            raise CorruptStateError(
                f"Invalid state file {state_file}: record for '{name}' must be an object."
            )
        try:
            volumes[name] = volume_from_payload(name, record)
        except ValueError as error:
            raise CorruptStateError(f"Invalid state file {state_file}: {error}.") from error
    return volumes
