#!/usr/bin/env python3

from __future__ import annotations

import argparse
from pathlib import Path

from .cli import add_connection_args, overrides_from_args
from .commands.factory import CommandFactory
from .core.errors import TeamCityBackupError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Trigger a TeamCity backup, wait for it and purge old backups")
    add_connection_args(parser)
    return parser


def run(env_file: str | None = None, args: argparse.Namespace | None = None) -> int:
    project_root = Path(__file__).resolve().parent.parent
    overrides = overrides_from_args(args) if args is not None else None
    try:
        command = CommandFactory(project_root).create("backup", env_file, overrides)
        return command.run()
    except TeamCityBackupError as exc:
        raise SystemExit(f"ERROR: {exc}") from exc


def main() -> int:
    args = build_parser().parse_args()
    return run(args.env_file, args)


if __name__ == "__main__":
    raise SystemExit(main())
