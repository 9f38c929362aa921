"""Core constants used across local-persist modules.

This module centralizes paths, modes and schema constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DRIVER_NAME = "local-persist"
DEFAULT_STATE_PATH = Path("/var/lib/docker/plugin-data")
DEFAULT_DATA_PATH = Path("/data")
STATE_FILE_NAME = "local-persist.json"
STATE_SCHEMA_VERSION = 1
STATE_DIR_MODE = 0o700
DATA_DIR_MODE = 0o755
STATE_FILE_MODE = 0o600
MOUNTPOINT_OPTION = "mountpoint"
CAPABILITY_SCOPE_LOCAL = "local"
TRUE_FLAG_VALUES = ("1", "true", "yes", "on")
FALSE_FLAG_VALUES = ("", "0", "false", "no", "off")
