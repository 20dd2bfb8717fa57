from __future__ import annotations

from pathlib import PurePath

from ..core.artifact_locator import ArtifactLocator
from ..core.backup_config import BackupConfig, purge_prefix
from ..core.protocols import ClockProtocol, ConsoleProtocol
from ..core.retention_policy import PurgeResult, RetentionPolicy
from .base import Command


def resolve_backup_dir(config: BackupConfig, locator: ArtifactLocator) -> PurePath:
    if config.backup_dir is not None:
        return config.backup_dir
    return locator.backup_dir(config.base_address, config.data_root)


def report_purge(console: ConsoleProtocol, result: PurgeResult) -> None:
    console.info(
        "Purge: "
        f"deleted={len(result.deleted)} "
        f"kept={len(result.retained)} "
        f"failed={len(result.failed)}"
    )


class PurgeCommand(Command):
    def __init__(
        self,
        config: BackupConfig,
        clock: ClockProtocol,
        console: ConsoleProtocol,
        locator: ArtifactLocator,
        retention: RetentionPolicy,
    ) -> None:
        self._config = config
        self._clock = clock
        self._console = console
        self._locator = locator
        self._retention = retention

    def run(self) -> int:
        backup_dir = resolve_backup_dir(self._config, self._locator)
        self._console.info(f"Running purge at {self._clock.now_iso()}")
        self._console.info(f"Backup directory: {backup_dir}")
        self._console.info(
            f"Policy: keep last {self._config.retention_days} days and every 1st of month"
        )

        result = self._retention.purge(backup_dir, purge_prefix(self._config.filename_prefix))
        report_purge(self._console, result)
        return 0
