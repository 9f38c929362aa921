"""Volume plugin endpoint handlers.

Each handler takes a decoded request body and returns a response body in
the host's volume plugin shape. Registry errors become ``Err`` strings;
anything else propagates to the transport.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from core.errors import PersistError
from core.logging_config import get_logger
from core.types import Volume, options_from_mapping
from store.volume_registry import VolumeRegistry

_LOGGER = get_logger(__name__)

Payload = Mapping[str, Any]
Response = dict[str, Any]


class PluginHandlers:
    """Dispatch table from plugin endpoints to registry calls."""

    def __init__(self, registry: VolumeRegistry) -> None:
        self._registry = registry
        self._routes: dict[str, Callable[[Payload], Response]] = {
            "/Plugin.Activate": self.activate,
            "/VolumeDriver.Create": self.create,
            "/VolumeDriver.Get": self.get,
            "/VolumeDriver.List": self.list_volumes,
            "/VolumeDriver.Remove": self.remove,
            "/VolumeDriver.Mount": self.mount,
            "/VolumeDriver.Unmount": self.unmount,
            "/VolumeDriver.Path": self.path,
            "/VolumeDriver.Capabilities": self.capabilities,
        }

    @property
    def endpoints(self) -> tuple[str, ...]:
        """Supported endpoint paths."""
        return tuple(self._routes)

    def dispatch(self, endpoint: str, payload: Payload | None = None) -> Response:
        """Route one request to its handler.

        Args:
            endpoint: Endpoint path such as ``/VolumeDriver.Create``.
            payload: Decoded request body, if any.

        Returns:
            Response body.

        Raises:
            PersistError: If the endpoint is not supported.
        """
        handler = self._routes.get(endpoint)
        if handler is None:
            raise PersistError(
                f"Unsupported plugin endpoint '{endpoint}'. "
                f"Use one of: {', '.join(self._routes)}."
            )
        return handler(payload or {})

    def activate(self, payload: Payload) -> Response:
        """Announce the volume driver interface."""
        return {"Implements": ["VolumeDriver"]}

    def create(self, payload: Payload) -> Response:
        """Create a volume from its name and options."""
        try:
            options = options_from_mapping(payload.get("Opts"))
            self._registry.create(_request_name(payload), options)
        except PersistError as error:
            return _error_response(error)
        return {"Err": ""}

    def get(self, payload: Payload) -> Response:
        """Return one volume in plugin shape."""
        try:
            volume = self._registry.get(_request_name(payload))
        except PersistError as error:
            return _error_response(error)
        return {"Volume": volume_response(volume), "Err": ""}

    def list_volumes(self, payload: Payload) -> Response:
        """Return every registered volume."""
        volumes = self._registry.list_volumes()
        return {"Volumes": [volume_response(volume) for volume in volumes], "Err": ""}

    def remove(self, payload: Payload) -> Response:
        """Forget a volume, keeping its directory."""
        try:
            self._registry.remove(_request_name(payload))
        except PersistError as error:
            return _error_response(error)
        return {"Err": ""}

    def mount(self, payload: Payload) -> Response:
        """Check the volume directory and return its mountpoint."""
        try:
            mountpoint = self._registry.mount(_request_name(payload))
        except PersistError as error:
            return _error_response(error)
        return {"Mountpoint": mountpoint, "Err": ""}

    def unmount(self, payload: Payload) -> Response:
        """Acknowledge an unmount for a known volume."""
        try:
            self._registry.unmount(_request_name(payload))
        except PersistError as error:
            return _error_response(error)
        return {"Err": ""}

    def path(self, payload: Payload) -> Response:
        """Return the recorded mountpoint."""
        try:
            mountpoint = self._registry.path(_request_name(payload))
        except PersistError as error:
            return _error_response(error)
        return {"Mountpoint": mountpoint, "Err": ""}

    def capabilities(self, payload: Payload) -> Response:
        """Report the registry scope."""
        capabilities = self._registry.capabilities()
        return {"Capabilities": {"Scope": capabilities.scope}}


def volume_response(volume: Volume) -> Response:
    """Render one volume in the plugin response shape."""
    response: Response = {"Name": volume.name, "Mountpoint": volume.mountpoint}
    if volume.created_at is not None:
        response["CreatedAt"] = volume.created_at
    return response


def _request_name(payload: Payload) -> str:
    name = payload.get("Name")
    return name if isinstance(name, str) else ""


def _error_response(error: PersistError) -> Response:
    _LOGGER.warning("plugin_request_failed", error_type=type(error).__name__, error=str(error))
    return {"Err": str(error)}
