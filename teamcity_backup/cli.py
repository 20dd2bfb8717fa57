#!/usr/bin/env python3

from __future__ import annotations

import argparse
from pathlib import Path

from .commands.factory import CommandFactory
from .core.errors import TeamCityBackupError

ACTIONS = ["backup", "purge", "status"]


def add_connection_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "env_file",
        nargs="?",
        default=None,
        help="Optional path to env file (default: config/backup.env)",
    )
    parser.add_argument("--url", dest="url", help="TeamCity server address (TEAMCITY_URL)")
    parser.add_argument(
        "--data-root",
        dest="data_root",
        help="TeamCity data directory on the server (TEAMCITY_DATA_PATH)",
    )
    parser.add_argument(
        "--backup-dir",
        dest="backup_dir",
        help="Use this backup directory instead of the server share (BACKUP_DIR)",
    )
    parser.add_argument("--username", dest="username", help="TeamCity user (TEAMCITY_USER)")
    parser.add_argument(
        "--password",
        dest="password",
        help="TeamCity password (TEAMCITY_PASSWORD; prefer the environment)",
    )
    parser.add_argument(
        "--sleep",
        dest="sleep",
        type=int,
        default=None,
        help="Seconds between status checks (default: 10)",
    )
    parser.add_argument(
        "--timeout",
        dest="timeout",
        type=int,
        default=None,
        help="Seconds to wait for the backup to finish (default: 600)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Print progress details",
    )


def overrides_from_args(args: argparse.Namespace) -> dict[str, str | None]:
    def text(value: object) -> str | None:
        return None if value is None else str(value)

    return {
        "TEAMCITY_URL": getattr(args, "url", None),
        "TEAMCITY_DATA_PATH": getattr(args, "data_root", None),
        "BACKUP_DIR": getattr(args, "backup_dir", None),
        "TEAMCITY_USER": getattr(args, "username", None),
        "TEAMCITY_PASSWORD": getattr(args, "password", None),
        "POLL_SLEEP_SECONDS": text(getattr(args, "sleep", None)),
        "POLL_TIMEOUT_SECONDS": text(getattr(args, "timeout", None)),
        "VERBOSE": "true" if getattr(args, "verbose", False) else None,
    }


class CliApplication:
    def __init__(self, project_root: Path) -> None:
        self._factory = CommandFactory(project_root)

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="teamcity-backup",
            description="TeamCity server backup and retention CLI",
        )
        parser.add_argument("action", choices=ACTIONS)
        add_connection_args(parser)
        return parser

    def run(self, argv: list[str] | None = None) -> int:
        args = self.build_parser().parse_args(argv)
        try:
            command = self._factory.create(args.action, args.env_file, overrides_from_args(args))
            return command.run()
        except TeamCityBackupError as exc:
            raise SystemExit(f"ERROR: {exc}") from exc


def main() -> int:
    project_root = Path(__file__).resolve().parent.parent
    app = CliApplication(project_root)
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
