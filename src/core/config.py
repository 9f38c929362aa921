"""Runtime configuration model for local-persist.

This module owns all environment variable and config-file parsing.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import os
from pathlib import Path
from typing import Mapping, cast

from core.constants import (
    DEFAULT_DATA_PATH,
    DEFAULT_STATE_PATH,
    FALSE_FLAG_VALUES,
    STATE_FILE_NAME,
    TRUE_FLAG_VALUES,
)
from core.errors import PersistConfigError, PersistDependencyError

_CONFIG_FILE_KEYS = ("state_path", "data_path", "debug")


@dataclass(frozen=True)
class PersistConfig:
    """Validated runtime configuration.

    Attributes:
        state_path: Directory holding the registry state file.
        data_path: Data root under which every mountpoint must live.
        debug: Whether debug-level logging is enabled.
    """

    state_path: Path
    data_path: Path
    debug: bool = False

    @property
    def state_file(self) -> Path:
        """Full path of the registry state file."""
        return self.state_path / STATE_FILE_NAME

    @classmethod
    def from_env(cls) -> "PersistConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PersistConfigError: If environment values are invalid.
        """
        state_path_value = os.getenv("LOCAL_PERSIST_STATE_PATH", str(DEFAULT_STATE_PATH))
        data_path_value = os.getenv("LOCAL_PERSIST_DATA_PATH", str(DEFAULT_DATA_PATH))
        debug = parse_flag(os.getenv("DEBUG", ""), "DEBUG")
        return cls(
            state_path=_resolve_path(state_path_value),
            data_path=_resolve_path(data_path_value),
            debug=debug,
        )

    @classmethod
    def from_file(cls, config_path: str) -> "PersistConfig":
        """Build config from a YAML file layered over environment values.

        Args:
            config_path: Path to a YAML mapping with optional
                ``state_path``, ``data_path`` and ``debug`` keys.

        Returns:
            A validated config object.

        Raises:
            PersistDependencyError: If PyYAML is unavailable.
            PersistConfigError: If the file is unreadable or invalid.
        """
        payload = _load_yaml_mapping(config_path)
        config = cls.from_env()
        if "state_path" in payload:
            config = replace(
                config, state_path=_resolve_path(_expect_string(payload, "state_path"))
            )
        if "data_path" in payload:
            config = replace(
                config, data_path=_resolve_path(_expect_string(payload, "data_path"))
            )
        if "debug" in payload:
            raw_debug = payload["debug"]
            if isinstance(raw_debug, bool):
                config = replace(config, debug=raw_debug)
            else:
                config = replace(config, debug=parse_flag(str(raw_debug), "debug"))
        return config


def parse_flag(raw_value: str, field_name: str) -> bool:
    """Parse a boolean flag value.

    Args:
        raw_value: Raw string from environment or config file.
        field_name: Field name used in error messages.

    Returns:
        Parsed boolean.

    Raises:
        PersistConfigError: If value is not a recognised boolean.
    """
    normalized = raw_value.strip().lower()
    if normalized in TRUE_FLAG_VALUES:
        return True
    if normalized in FALSE_FLAG_VALUES:
        return False
    raise PersistConfigError(
        f"Invalid {field_name} value: expected a boolean, got '{raw_value}'. "
        f"Use one of: {', '.join(TRUE_FLAG_VALUES + FALSE_FLAG_VALUES[1:])}."
    )


def _resolve_path(raw_value: str) -> Path:
    return Path(raw_value).expanduser().resolve()


def _load_yaml_mapping(config_path: str) -> Mapping[str, object]:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise PersistDependencyError(
            "YAML config support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    config_file = Path(config_path).expanduser().resolve()
    if not config_file.exists():
        raise PersistConfigError(
            f"Config file does not exist at {config_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(config_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise PersistConfigError(
            f"Failed to read config at {config_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise PersistConfigError(
            f"Failed to parse YAML config at {config_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise PersistConfigError(
            f"Invalid config at {config_file}: expected mapping, got {type(payload).__name__}."
        )
    unknown_keys = sorted(str(key) for key in payload.keys() if key not in _CONFIG_FILE_KEYS)
    if unknown_keys:
        raise PersistConfigError(
            f"Unsupported config keys at {config_file}: {', '.join(unknown_keys)}. "
            f"Supported keys: {', '.join(_CONFIG_FILE_KEYS)}."
        )
    return cast(Mapping[str, object], payload)


def _expect_string(payload: Mapping[str, object], key: str) -> str:
    value = payload[key]
    if not isinstance(value, str) or not value.strip():
        raise PersistConfigError(f"Config field '{key}' must be a non-empty string path.")
    return value
