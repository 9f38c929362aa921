"""Registry startup.

Builds the state and data directories, loads prior state and returns a
ready registry. The caller owns the returned object and hands it to
whatever transport dispatches host requests.
"""

from __future__ import annotations

from core.config import PersistConfig
from core.constants import DATA_DIR_MODE, DRIVER_NAME, STATE_DIR_MODE
from core.logging_config import configure_logging, get_logger
from store.directories import ensure_directory
from store.state_store import StateStore
from store.volume_registry import VolumeRegistry

_LOGGER = get_logger(__name__)


def bootstrap_registry(config: PersistConfig) -> VolumeRegistry:
    """Create directories, load persisted state and build the registry.

    Args:
        config: Runtime configuration.

    Returns:
        Registry populated from the state file.

    Raises:
        PersistIOError: If a directory cannot be created.
        CorruptStateError: If the state file exists but is unreadable as state.
    """
    configure_logging(config.debug)
    _LOGGER.info(
        "registry_starting",
        driver=DRIVER_NAME,
        state_path=str(config.state_path),
        data_path=str(config.data_path),
    )
    ensure_directory(config.state_path, STATE_DIR_MODE)
    ensure_directory(config.data_path, DATA_DIR_MODE)
    state_store = StateStore(config.state_file)
    volumes = state_store.load()
    _LOGGER.info("registry_loaded", volume_count=len(volumes))
    return VolumeRegistry(config.data_path, state_store, volumes)
