from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from pathlib import Path, PurePath

from .clock import Clock
from .console import Console
from .date_codec import DateCodec
from .errors import DeleteFailed, UnparsableFilename
from .file_system import FileSystem
from .protocols import ClockProtocol, ConsoleProtocol, FileSystemProtocol

BACKUP_SUFFIX = ".zip"
DEFAULT_RETENTION_DAYS = 14


class RetentionDecision(Enum):
    KEEP = "keep"
    PURGE = "purge"


@dataclass
class PurgeResult:
    deleted: list[Path] = field(default_factory=list)
    retained: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)


class RetentionPolicy:
    """Keep the last ``retention_days`` days and every 1st of the month."""

    def __init__(
        self,
        file_system: FileSystemProtocol | None = None,
        clock: ClockProtocol | None = None,
        console: ConsoleProtocol | None = None,
        retention_days: int = DEFAULT_RETENTION_DAYS,
    ) -> None:
        self._file_system = file_system or FileSystem()
        self._clock = clock or Clock()
        self._console = console or Console()
        self._retention_days = retention_days

    def backup_date(self, filename: str, prefix: str) -> date | None:
        if not filename.startswith(prefix) or not filename.endswith(BACKUP_SUFFIX):
            return None
        stamp = filename[len(prefix):-len(BACKUP_SUFFIX)]
        parsed = DateCodec.parse(stamp)
        return parsed.date() if parsed else None

    def decide(self, filename: str, prefix: str, today: date) -> RetentionDecision:
        backup_date = self.backup_date(filename, prefix)
        if backup_date is None:
            return RetentionDecision.KEEP
        if backup_date >= today - timedelta(days=self._retention_days):
            return RetentionDecision.KEEP
        if backup_date.day == 1:
            return RetentionDecision.KEEP
        return RetentionDecision.PURGE

    def is_purge_candidate(self, filename: str, prefix: str, today: date) -> bool:
        return self.decide(filename, prefix, today) is RetentionDecision.PURGE

    def purge(self, folder: PurePath, prefix: str) -> PurgeResult:
        today = self._clock.today()
        result = PurgeResult()

        for path in self._file_system.list_backups(folder, prefix):
            if self.backup_date(path.name, prefix) is None:
                self._warn(UnparsableFilename(path.name))
                result.retained.append(path)
                continue

            if not self.is_purge_candidate(path.name, prefix, today):
                self._detail(f"Keeping {path.name}")
                result.retained.append(path)
                continue

            try:
                self._file_system.delete(path)
            except DeleteFailed as exc:
                self._warn(exc)
                result.failed.append(path)
                continue
            self._detail(f"Deleted {path.name}")
            result.deleted.append(path)

        return result

    def _detail(self, message: str) -> None:
        self._console.detail(message)

    def _warn(self, warning: Exception) -> None:
        self._console.warn(str(warning))
