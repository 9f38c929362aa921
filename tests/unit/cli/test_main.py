"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from cli.main import main


@pytest.fixture(autouse=True)
def _clear_debug(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DEBUG", raising=False)


def _root_args(tmp_path: Path) -> list[str]:
    return ["--state-root", str(tmp_path / "state"), "--data-root", str(tmp_path / "data")]


def test_cli_create_prints_mountpoint(tmp_path: Path, capsys) -> None:
    """CLI create should print the new mountpoint."""
    exit_code = main(_root_args(tmp_path) + ["create", "vol1", "--mountpoint", "custom"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and output == str((tmp_path / "data" / "custom").resolve())


def test_cli_list_survives_restart(tmp_path: Path, capsys) -> None:
    """Volumes created by one invocation should be listed by the next."""
    main(_root_args(tmp_path) + ["create", "b"])
    main(_root_args(tmp_path) + ["create", "a"])
    capsys.readouterr()

    exit_code = main(_root_args(tmp_path) + ["list"])
    rows = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0 and [row.split("\t")[0] for row in rows] == ["a", "b"]


def test_cli_reports_registry_errors(tmp_path: Path, capsys) -> None:
    """Registry failures should print to stderr and exit 1."""
    exit_code = main(_root_args(tmp_path) + ["inspect", "ghost"])
    error_output = capsys.readouterr().err

    assert exit_code == 1 and "ghost" in error_output


def test_cli_rm_keeps_directory(tmp_path: Path, capsys) -> None:
    """CLI rm should drop the record but keep the directory."""
    main(_root_args(tmp_path) + ["create", "vol1"])
    exit_code = main(_root_args(tmp_path) + ["rm", "vol1"])
    main(_root_args(tmp_path) + ["path", "vol1"])
    error_output = capsys.readouterr().err

    assert exit_code == 0 and "vol1" in error_output and (tmp_path / "data" / "vol1").is_dir()


def test_cli_capabilities(tmp_path: Path, capsys) -> None:
    """CLI capabilities should print the registry scope."""
    exit_code = main(_root_args(tmp_path) + ["capabilities"])

    assert exit_code == 0 and capsys.readouterr().out.strip() == "local"


def test_cli_reads_config_file(tmp_path: Path, capsys) -> None:
    """CLI should take directories from a YAML config file."""
    config_file = tmp_path / "persist.yaml"
    config_file.write_text(
        f"state_path: {tmp_path / 'cfg-state'}\ndata_path: {tmp_path / 'cfg-data'}\n",
        encoding="utf-8",
    )

    exit_code = main(["--config", str(config_file), "create", "vol1"])
    capsys.readouterr()

    assert exit_code == 0 and (tmp_path / "cfg-data" / "vol1").is_dir()
