from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

from ..core.artifact_locator import ArtifactLocator
from ..core.backup_client import BackupClient
from ..core.backup_config import BackupConfig
from ..core.clock import Clock
from ..core.config_loader import ConfigLoader
from ..core.console import Console
from ..core.file_system import FileSystem
from ..core.protocols import (
    BackupClientProtocol,
    ClockProtocol,
    ConsoleProtocol,
    FileSystemProtocol,
)
from ..core.retention_policy import RetentionPolicy
from .backup_command import BackupCommand
from .base import Command
from .purge_command import PurgeCommand
from .status_command import StatusCommand


def _default_client(config: BackupConfig) -> BackupClientProtocol:
    return BackupClient(
        config.base_address,
        config.credentials,
        timeout=config.request_timeout,
    )


class CommandFactory:
    def __init__(
        self,
        project_root: Path,
        *,
        config_loader: ConfigLoader | None = None,
        clock: ClockProtocol | None = None,
        console: ConsoleProtocol | None = None,
        file_system: FileSystemProtocol | None = None,
        client_factory: Callable[[BackupConfig], BackupClientProtocol] | None = None,
    ) -> None:
        self._config_loader = config_loader or ConfigLoader(project_root)
        self._clock = clock or Clock()
        self._console = console
        self._file_system = file_system or FileSystem()
        self._client_factory = client_factory or _default_client

    def create(
        self,
        action: str,
        env_file: str | None,
        overrides: Mapping[str, str | None] | None = None,
    ) -> Command:
        config = self._config_loader.load(env_file, overrides)
        console = self._console or Console(config.verbose)
        locator = ArtifactLocator(self._file_system)

        if action == "backup":
            return BackupCommand(
                config,
                self._client_factory(config),
                self._clock,
                console,
                locator,
                self._retention(config, console),
            )
        if action == "purge":
            return PurgeCommand(
                config,
                self._clock,
                console,
                locator,
                self._retention(config, console),
            )
        if action == "status":
            return StatusCommand(config, self._client_factory(config), console)
        raise SystemExit(f"Unsupported action: {action}")

    def _retention(self, config: BackupConfig, console: ConsoleProtocol) -> RetentionPolicy:
        return RetentionPolicy(
            self._file_system,
            self._clock,
            console,
            retention_days=config.retention_days,
        )
