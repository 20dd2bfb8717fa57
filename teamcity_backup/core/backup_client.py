from __future__ import annotations

import httpx

from .backup_config import BackupRequest, Credentials
from .errors import AuthenticationError, NetworkError

BACKUP_ENDPOINT = "/httpAuth/app/rest/server/backup"


def _flag(value: bool) -> str:
    return "true" if value else "false"


class BackupClient:
    def __init__(
        self,
        base_address: str,
        credentials: Credentials,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_address = base_address.rstrip("/")
        self._credentials = credentials
        self._timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self._base_address}{BACKUP_ENDPOINT}"

    def trigger(self, request: BackupRequest) -> str:
        params = {
            "addTimestamp": _flag(request.add_timestamp),
            "includeConfigs": _flag(request.include_configs),
            "includeDatabase": _flag(request.include_database),
            "includeBuildLogs": _flag(request.include_build_logs),
            "includePersonalChanges": _flag(request.include_personal_changes),
            "fileName": request.filename_prefix,
        }
        return self._send("POST", params).strip()

    def get_status(self) -> str:
        return self._send("GET", None).strip()

    def _send(self, method: str, params: dict[str, str] | None) -> str:
        url = self.endpoint
        try:
            with self._build_client() as client:
                response = client.request(method, url, params=params)
        except httpx.HTTPError as exc:
            raise NetworkError(f"{method} {url} failed: {exc}") from exc

        if response.status_code in (401, 403):
            raise AuthenticationError(url, response.status_code)
        if not response.is_success:
            raise NetworkError(
                f"{method} {url} returned HTTP {response.status_code}: "
                f"{response.text.strip()[:200]}"
            )
        return response.text

    def _build_client(self) -> httpx.Client:
        return httpx.Client(
            auth=httpx.BasicAuth(self._credentials.username, self._credentials.password),
            timeout=self._timeout,
            transport=self._transport,
        )
