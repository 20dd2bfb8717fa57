from __future__ import annotations

import math
import os
from collections.abc import Mapping
from pathlib import Path

from .backup_config import (
    DEFAULT_FILENAME_PREFIX,
    DEFAULT_SERVICE_MESSAGE_PARAMETER,
    BackupConfig,
    Credentials,
)
from .errors import ConfigResolutionError

KNOWN_KEYS = (
    "TEAMCITY_URL",
    "TEAMCITY_DATA_PATH",
    "TEAMCITY_USER",
    "TEAMCITY_PASSWORD",
    "BACKUP_DIR",
    "BACKUP_FILENAME_PREFIX",
    "POLL_SLEEP_SECONDS",
    "POLL_TIMEOUT_SECONDS",
    "REQUEST_TIMEOUT_SECONDS",
    "RETENTION_DAYS",
    "BACKUP_INCLUDE_CONFIGS",
    "BACKUP_INCLUDE_DATABASE",
    "BACKUP_INCLUDE_BUILD_LOGS",
    "BACKUP_INCLUDE_PERSONAL_CHANGES",
    "SERVICE_MESSAGE_PARAMETER",
    "VERBOSE",
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigLoader:
    def __init__(
        self,
        project_root: Path,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._project_root = project_root
        self._environ = os.environ if environ is None else environ

    @property
    def default_env_file(self) -> Path:
        return self._project_root / "config" / "backup.env"

    @property
    def example_env_file(self) -> Path:
        return self._project_root / "config" / "backup.env.example"

    def load(
        self,
        env_path: str | None = None,
        overrides: Mapping[str, str | None] | None = None,
    ) -> BackupConfig:
        env_file = self._locate_env_file(env_path)
        values: dict[str, str] = {}
        if env_file is not None:
            values.update(self._parse_env_file(env_file))
        for key in KNOWN_KEYS:
            if self._environ.get(key):
                values[key] = self._environ[key]
        for key, value in (overrides or {}).items():
            if value is not None and value != "":
                values[key] = value

        self._validate_required(values)

        backup_dir = values.get("BACKUP_DIR")
        return BackupConfig(
            project_root=self._project_root,
            env_file=env_file,
            base_address=values["TEAMCITY_URL"].rstrip("/"),
            data_root=values["TEAMCITY_DATA_PATH"],
            credentials=Credentials(values["TEAMCITY_USER"], values["TEAMCITY_PASSWORD"]),
            backup_dir=Path(backup_dir).expanduser() if backup_dir else None,
            filename_prefix=values.get("BACKUP_FILENAME_PREFIX", DEFAULT_FILENAME_PREFIX),
            sleep_seconds=self._number(values, "POLL_SLEEP_SECONDS", 10),
            timeout_seconds=self._number(values, "POLL_TIMEOUT_SECONDS", 600),
            request_timeout=self._number(values, "REQUEST_TIMEOUT_SECONDS", 30),
            retention_days=self._integer(values, "RETENTION_DAYS", 14),
            include_configs=self._flag(values, "BACKUP_INCLUDE_CONFIGS", True),
            include_database=self._flag(values, "BACKUP_INCLUDE_DATABASE", True),
            include_build_logs=self._flag(values, "BACKUP_INCLUDE_BUILD_LOGS", True),
            include_personal_changes=self._flag(values, "BACKUP_INCLUDE_PERSONAL_CHANGES", True),
            service_message_parameter=values.get(
                "SERVICE_MESSAGE_PARAMETER", DEFAULT_SERVICE_MESSAGE_PARAMETER
            ),
            verbose=self._flag(values, "VERBOSE", False),
        )

    def _locate_env_file(self, env_path: str | None) -> Path | None:
        if env_path:
            env_file = Path(env_path).expanduser()
            if not env_file.is_file():
                raise ConfigResolutionError(
                    f"Missing env file: {env_file}\n"
                    f"Create it from: {self.example_env_file}"
                )
            return env_file
        if self.default_env_file.is_file():
            return self.default_env_file
        return None

    def _parse_env_file(self, env_file: Path) -> dict[str, str]:
        values: dict[str, str] = {}
        for raw_line in env_file.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            cleaned = value.strip().strip('"').strip("'")
            values[key.strip()] = os.path.expandvars(cleaned)
        return values

    def _validate_required(self, values: dict[str, str]) -> None:
        required = [
            "TEAMCITY_URL",
            "TEAMCITY_DATA_PATH",
            "TEAMCITY_USER",
            "TEAMCITY_PASSWORD",
        ]
        missing = [name for name in required if not values.get(name)]
        if missing:
            missing_str = ", ".join(missing)
            raise ConfigResolutionError(f"Missing required config values: {missing_str}")

    def _number(self, values: dict[str, str], key: str, default: float) -> float:
        raw = values.get(key)
        if raw is None or raw == "":
            return default
        try:
            number = float(raw)
        except ValueError as exc:
            raise ConfigResolutionError(f"{key} must be a number, got {raw!r}") from exc
        if not math.isfinite(number):
            raise ConfigResolutionError(f"{key} must be a finite number, got {raw!r}")
        if number < 0:
            raise ConfigResolutionError(f"{key} must not be negative, got {raw!r}")
        return number

    def _integer(self, values: dict[str, str], key: str, default: int) -> int:
        raw = values.get(key)
        if raw is None or raw == "":
            return default
        try:
            number = int(raw.strip())
        except ValueError as exc:
            raise ConfigResolutionError(f"{key} must be a whole number, got {raw!r}") from exc
        if number < 0:
            raise ConfigResolutionError(f"{key} must not be negative, got {raw!r}")
        return number

    def _flag(self, values: dict[str, str], key: str, default: bool) -> bool:
        raw = values.get(key)
        if raw is None or raw == "":
            return default
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigResolutionError(f"{key} must be true or false, got {raw!r}")
