from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_FILENAME_PREFIX = "TeamCity_Backup"
DEFAULT_SERVICE_MESSAGE_PARAMETER = "teamcity.backup.file"


def purge_prefix(filename_prefix: str) -> str:
    # The server joins the requested name and the timestamp with "_".
    return f"{filename_prefix}_"


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class BackupRequest:
    base_address: str
    filename_prefix: str = DEFAULT_FILENAME_PREFIX
    add_timestamp: bool = True
    include_configs: bool = True
    include_database: bool = True
    include_build_logs: bool = True
    include_personal_changes: bool = True


@dataclass
class BackupConfig:
    project_root: Path
    env_file: Path | None
    base_address: str
    data_root: str
    credentials: Credentials
    backup_dir: Path | None
    filename_prefix: str
    sleep_seconds: float
    timeout_seconds: float
    request_timeout: float
    retention_days: int
    include_configs: bool
    include_database: bool
    include_build_logs: bool
    include_personal_changes: bool
    service_message_parameter: str
    verbose: bool

    def build_request(self) -> BackupRequest:
        return BackupRequest(
            base_address=self.base_address,
            filename_prefix=self.filename_prefix,
            add_timestamp=True,
            include_configs=self.include_configs,
            include_database=self.include_database,
            include_build_logs=self.include_build_logs,
            include_personal_changes=self.include_personal_changes,
        )
