from __future__ import annotations


class TeamCityBackupError(Exception):
    pass


class ConfigResolutionError(TeamCityBackupError):
    pass


class AuthenticationError(TeamCityBackupError):
    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(
            f"Authentication failed ({status_code}) for {url}. "
            "Check that basic HTTP authentication is enabled on the TeamCity server "
            "and that the supplied credentials are valid."
        )
        self.url = url
        self.status_code = status_code


class NetworkError(TeamCityBackupError):
    pass


class BackupWarning(TeamCityBackupError):
    pass


class TimeoutExceeded(BackupWarning):
    def __init__(self, timeout_seconds: float, last_status: str) -> None:
        super().__init__(
            f"Backup still running after {timeout_seconds:g}s "
            f"(last status: {last_status!r}); it may complete later."
        )
        self.timeout_seconds = timeout_seconds
        self.last_status = last_status


class ArtifactNotFound(BackupWarning):
    def __init__(self, path: str) -> None:
        super().__init__(f"Backup file location unknown, not found at: {path}")
        self.path = path


class UnparsableFilename(BackupWarning):
    def __init__(self, filename: str) -> None:
        super().__init__(f"Cannot determine backup date, retaining: {filename}")
        self.filename = filename


class DeleteFailed(BackupWarning):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not delete {path}: {reason}")
        self.path = path
        self.reason = reason
