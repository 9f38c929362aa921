"""local-persist CLI entry points.
This module exposes operator commands for inspecting and editing the registry.
It maps argparse commands onto VolumeRegistry calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from core.config import PersistConfig
from core.errors import PersistError
from core.types import CreateOptions, Volume
from store.bootstrap import bootstrap_registry
from store.volume_registry import VolumeRegistry


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="local-persist", description="Inspect and edit the local-persist volume registry"
    )
    parser.add_argument("--config", help="YAML config file layered over environment values")
    parser.add_argument("--data-root", help="Override LOCAL_PERSIST_DATA_PATH for this command")
    parser.add_argument("--state-root", help="Override LOCAL_PERSIST_STATE_PATH for this command")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)
    create_parser = subparsers.add_parser("create", help="Create a volume")
    create_parser.add_argument("name", help="Volume name")
    create_parser.add_argument(
        "--mountpoint", help="Mountpoint relative to the data root (defaults to the name)"
    )
    subparsers.add_parser("list", help="List volumes")
    for command, help_text in (
        ("inspect", "Show one volume"),
        ("rm", "Remove a volume from the registry (its directory is kept)"),
        ("mount", "Check a volume directory and print its mountpoint"),
        ("unmount", "Acknowledge an unmount"),
        ("path", "Print a volume mountpoint"),
    ):
        command_parser = subparsers.add_parser(command, help=help_text)
        command_parser.add_argument("name", help="Volume name")
    subparsers.add_parser("capabilities", help="Print the registry scope")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the local-persist CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        registry = bootstrap_registry(_build_config(args))
        return _run_command(registry, args)
    except PersistError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1


def _build_config(args: argparse.Namespace) -> PersistConfig:
    """Build runtime config from file, environment and CLI overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Resolved config.
    """
    config = PersistConfig.from_file(args.config) if args.config else PersistConfig.from_env()
    if args.data_root:
        config = replace(config, data_path=Path(args.data_root).expanduser().resolve())
    if args.state_root:
        config = replace(config, state_path=Path(args.state_root).expanduser().resolve())
    if args.debug:
        config = replace(config, debug=True)
    return config


def _run_command(registry: VolumeRegistry, args: argparse.Namespace) -> int:
    if args.command == "create":
        volume = registry.create(args.name, CreateOptions(mountpoint=args.mountpoint))
        print(volume.mountpoint)
    elif args.command == "list":
        for volume in sorted(registry.list_volumes(), key=lambda item: item.name):
            print(_format_volume(volume))
    elif args.command == "inspect":
        print(_format_volume(registry.get(args.name)))
    elif args.command == "rm":
        registry.remove(args.name)
        print(args.name)
    elif args.command == "mount":
        print(registry.mount(args.name))
    elif args.command == "unmount":
        registry.unmount(args.name)
        print(args.name)
    elif args.command == "path":
        print(registry.path(args.name))
    else:
        print(registry.capabilities().scope)
    return 0


def _format_volume(volume: Volume) -> str:
    return f"{volume.name}\t{volume.mountpoint}\t{volume.created_at or '-'}"
