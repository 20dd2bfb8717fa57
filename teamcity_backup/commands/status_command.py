from __future__ import annotations

from ..core.backup_status import BackupStatus
from ..core.backup_config import BackupConfig
from ..core.errors import NetworkError
from ..core.protocols import BackupClientProtocol, ConsoleProtocol
from .base import Command


class StatusCommand(Command):
    def __init__(
        self,
        config: BackupConfig,
        client: BackupClientProtocol,
        console: ConsoleProtocol,
    ) -> None:
        self._config = config
        self._client = client
        self._console = console

    def run(self) -> int:
        try:
            raw_status = self._client.get_status()
        except NetworkError as exc:
            self._console.warn(f"Could not read backup status: {exc}")
            return 1

        status = BackupStatus.from_text(raw_status)
        self._console.info(f"Server: {self._config.base_address}")
        self._console.info(f"Backup status: {raw_status} ({status.value})")
        return 0
