from __future__ import annotations

from pathlib import PurePath, PureWindowsPath
from urllib.parse import urlsplit

from .errors import ConfigResolutionError
from .file_system import FileSystem
from .protocols import FileSystemProtocol

BACKUP_SUBDIR = "backup"


class ArtifactLocator:
    def __init__(self, file_system: FileSystemProtocol | None = None) -> None:
        self._file_system = file_system or FileSystem()

    @staticmethod
    def host_of(base_address: str) -> str:
        address = base_address.strip()
        if "://" not in address:
            address = f"//{address}"
        host = urlsplit(address).hostname
        if not host:
            raise ConfigResolutionError(f"Cannot determine host from server address: {base_address}")
        return host

    # C:\TeamCity on the server is reached as \\host\C$\TeamCity.
    @staticmethod
    def share_path(data_root: str) -> str:
        root = data_root.strip().replace("/", "\\")
        if len(root) >= 2 and root[1] == ":" and root[0].isalpha():
            root = f"{root[0]}${root[2:]}"
        return root.strip("\\")

    def backup_dir(self, base_address: str, data_root: str) -> PureWindowsPath:
        share = self.share_path(data_root)
        if not share:
            raise ConfigResolutionError("TeamCity data path is empty")
        return PureWindowsPath(f"\\\\{self.host_of(base_address)}\\{share}") / BACKUP_SUBDIR

    def resolve(self, base_address: str, data_root: str, filename: str) -> PureWindowsPath:
        return self.backup_dir(base_address, data_root) / filename

    def exists(self, path: PurePath) -> bool:
        return self._file_system.exists(path)
