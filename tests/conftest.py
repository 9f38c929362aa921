"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"

if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    if str(SRC_PATH) not in sys.path:
        sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def persist_config(tmp_path: Path):
    """Config with state and data directories under the test tmp dir."""
    from core.config import PersistConfig

    return PersistConfig(state_path=tmp_path / "state", data_path=tmp_path / "data")
