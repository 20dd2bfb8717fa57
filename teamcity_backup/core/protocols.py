from __future__ import annotations

from datetime import date
from pathlib import Path, PurePath
from typing import Protocol

from .backup_config import BackupRequest


class BackupClientProtocol(Protocol):
    def trigger(self, request: BackupRequest) -> str:
        ...

    def get_status(self) -> str:
        ...


class FileSystemProtocol(Protocol):
    def exists(self, path: PurePath) -> bool:
        ...

    def list_backups(self, folder: PurePath, prefix: str) -> list[Path]:
        ...

    def delete(self, path: PurePath) -> None:
        ...


class ClockProtocol(Protocol):
    def now_iso(self) -> str:
        ...

    def today(self) -> date:
        ...

    def monotonic(self) -> float:
        ...

    def sleep(self, seconds: float) -> None:
        ...


class ConsoleProtocol(Protocol):
    verbose: bool

    def info(self, message: str) -> None:
        ...

    def detail(self, message: str) -> None:
        ...

    def warn(self, message: str) -> None:
        ...

    def set_parameter(self, name: str, value: str) -> None:
        ...
