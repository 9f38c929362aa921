"""Shared typed models.

This module defines immutable volume models used by the store,
plugin and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping

from core.constants import CAPABILITY_SCOPE_LOCAL, MOUNTPOINT_OPTION
from core.errors import InvalidPathError


@dataclass(frozen=True)
class Volume:
    """One registered volume.

    Attributes:
        name: Unique volume name assigned by the caller.
        mountpoint: Absolute directory path under the data root.
        created_at: ISO-8601 UTC timestamp captured at creation.
    """

    name: str
    mountpoint: str
    created_at: str | None = None


@dataclass(frozen=True)
class CreateOptions:
    """Options accepted by volume creation.

    Attributes:
        mountpoint: Optional mountpoint hint relative to the data root.
    """

    mountpoint: str | None = None


@dataclass(frozen=True)
class Capabilities:
    """Capability descriptor reported to the host."""

    scope: str = CAPABILITY_SCOPE_LOCAL


def options_from_mapping(options: Mapping[str, object] | None) -> CreateOptions:
    """Parse free-form host options into typed create options.

    Args:
        options: Raw options mapping from the create request.

    Returns:
        Typed create options. Unknown keys are ignored.

    Raises:
        InvalidPathError: If the mountpoint option is not a string.
    """
    if not options:
        return CreateOptions()
    if not isinstance(options, Mapping):
        raise InvalidPathError(
            f"Create options must be a mapping, got {type(options).__name__}."
        )
    raw_mountpoint = options.get(MOUNTPOINT_OPTION)
    if raw_mountpoint is None or raw_mountpoint == "":
        return CreateOptions()
    if not isinstance(raw_mountpoint, str):
        raise InvalidPathError(
            f"Option '{MOUNTPOINT_OPTION}' must be a string path, "
            f"got {type(raw_mountpoint).__name__}."
        )
    return CreateOptions(mountpoint=raw_mountpoint)


def volume_to_payload(volume: Volume) -> dict[str, str]:
    """Serialize one volume into its state-file record."""
    payload = {"mountpoint": volume.mountpoint}
    if volume.created_at is not None:
        payload["createdAt"] = volume.created_at
    return payload


def volume_from_payload(name: str, payload: Mapping[str, object]) -> Volume:
    """Deserialize one state-file record.

    Args:
        name: Volume name, the record key.
        payload: Record mapping.

    Returns:
        Typed volume.

    Raises:
        ValueError: If required fields are missing or mistyped.
    """
    mountpoint = payload.get("mountpoint")
    if not isinstance(mountpoint, str) or not mountpoint:
        raise ValueError(f"volume '{name}' has no string 'mountpoint'")
    created_at = payload.get("createdAt")
    if created_at is not None and not isinstance(created_at, str):
        raise ValueError(f"volume '{name}' has non-string 'createdAt'")
    return Volume(name=name, mountpoint=mountpoint, created_at=created_at)


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()
