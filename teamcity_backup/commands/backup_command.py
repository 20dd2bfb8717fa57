from __future__ import annotations

from pathlib import PurePath

from ..core.artifact_locator import ArtifactLocator
from ..core.backup_config import BackupConfig, purge_prefix
from ..core.errors import ArtifactNotFound, BackupWarning, NetworkError, TimeoutExceeded
from ..core.poll_loop import PollLoop, PollOutcome, PollState
from ..core.protocols import BackupClientProtocol, ClockProtocol, ConsoleProtocol
from ..core.retention_policy import RetentionPolicy
from .base import Command
from .purge_command import report_purge, resolve_backup_dir


class BackupCommand(Command):
    def __init__(
        self,
        config: BackupConfig,
        client: BackupClientProtocol,
        clock: ClockProtocol,
        console: ConsoleProtocol,
        locator: ArtifactLocator,
        retention: RetentionPolicy,
    ) -> None:
        self._config = config
        self._client = client
        self._clock = clock
        self._console = console
        self._locator = locator
        self._retention = retention

    def run(self) -> int:
        backup_dir = resolve_backup_dir(self._config, self._locator)
        request = self._config.build_request()

        self._console.info(f"Starting TeamCity backup at {self._clock.now_iso()}")
        self._console.info(f"Server: {self._config.base_address}")
        self._console.detail(f"Backup directory: {backup_dir}")
        self._console.detail(
            "Include: "
            f"configs={request.include_configs} "
            f"database={request.include_database} "
            f"buildLogs={request.include_build_logs} "
            f"personalChanges={request.include_personal_changes}"
        )

        try:
            filename = self._client.trigger(request)
        except NetworkError as exc:
            self._console.warn(f"Backup could not be started: {exc}")
        else:
            self._console.info(f"Backup started: {filename or '(no file name returned)'}")
            try:
                self._wait_for_completion()
                backup_path = self._verify(backup_dir, filename)
            except (BackupWarning, NetworkError) as exc:
                self._console.warn(str(exc))
            else:
                self._console.info(f"Backup completed at {self._clock.now_iso()}")
                self._console.info(f"Backup file: {backup_path}")
                if self._config.service_message_parameter:
                    self._console.set_parameter(
                        self._config.service_message_parameter, str(backup_path)
                    )

        result = self._retention.purge(backup_dir, purge_prefix(self._config.filename_prefix))
        report_purge(self._console, result)
        return 0

    def _wait_for_completion(self) -> PollState:
        loop = PollLoop(self._clock, on_poll=self._report_progress)
        state = loop.run(
            self._client.get_status,
            self._config.sleep_seconds,
            self._config.timeout_seconds,
        )
        if state.outcome is PollOutcome.TIMED_OUT:
            raise TimeoutExceeded(self._config.timeout_seconds, state.raw_status)
        self._console.detail(f"Server idle after {state.elapsed:.0f}s")
        return state

    def _verify(self, backup_dir: PurePath, filename: str) -> PurePath:
        if not filename:
            raise ArtifactNotFound(str(backup_dir))
        backup_path = backup_dir / filename
        if not self._locator.exists(backup_path):
            raise ArtifactNotFound(str(backup_path))
        return backup_path

    def _report_progress(self, state: PollState) -> None:
        self._console.detail(f"Status: {state.raw_status} ({state.elapsed:.0f}s elapsed)")
