from __future__ import annotations

import glob
from pathlib import Path, PurePath

from .errors import DeleteFailed


class FileSystem:
    def exists(self, path: PurePath) -> bool:
        try:
            return Path(str(path)).is_file()
        except OSError:
            return False

    def list_backups(self, folder: PurePath, prefix: str) -> list[Path]:
        base = Path(str(folder))
        if not base.is_dir():
            return []
        matches = [
            candidate
            for candidate in base.glob(f"{glob.escape(prefix)}*.zip")
            if candidate.is_file()
        ]
        return sorted(matches, key=lambda item: item.name)

    def delete(self, path: PurePath) -> None:
        try:
            Path(str(path)).unlink()
        except OSError as exc:
            raise DeleteFailed(str(path), exc.strerror or str(exc)) from exc
