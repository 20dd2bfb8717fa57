from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from teamcity_backup.core.backup_config import BackupConfig, Credentials


class FixedClock:
    def __init__(self, today: date = date(2024, 6, 15)) -> None:
        self._today = today
        self._iso = "2024-06-15T03:00:00Z"
        self._monotonic = 0.0
        self.sleeps: list[float] = []

    def now_iso(self) -> str:
        return self._iso

    def today(self) -> date:
        return self._today

    def monotonic(self) -> float:
        return self._monotonic

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self._monotonic += seconds


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def sample_config(tmp_path: Path) -> BackupConfig:
    backup_dir = tmp_path / "backup"
    backup_dir.mkdir(parents=True, exist_ok=True)

    return BackupConfig(
        project_root=tmp_path / "project",
        env_file=None,
        base_address="http://tc.example.com:8111",
        data_root="C:\\ProgramData\\TeamCity",
        credentials=Credentials("backup-bot", "s3cret"),
        backup_dir=backup_dir,
        filename_prefix="TeamCity_Backup",
        sleep_seconds=10,
        timeout_seconds=600,
        request_timeout=30,
        retention_days=14,
        include_configs=True,
        include_database=True,
        include_build_logs=False,
        include_personal_changes=True,
        service_message_parameter="teamcity.backup.file",
        verbose=False,
    )
