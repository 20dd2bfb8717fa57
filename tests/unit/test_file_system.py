from __future__ import annotations

from pathlib import Path

import pytest

from teamcity_backup.core.errors import DeleteFailed
from teamcity_backup.core.file_system import FileSystem


def test_exists_reports_files_only(tmp_path: Path) -> None:
    target = tmp_path / "TeamCity_Backup_20240615_030000.zip"
    target.write_bytes(b"zip")

    file_system = FileSystem()

    assert file_system.exists(target) is True
    assert file_system.exists(tmp_path) is False
    assert file_system.exists(tmp_path / "missing.zip") is False


def test_list_backups_matches_prefix_and_suffix(tmp_path: Path) -> None:
    for name in [
        "TeamCity_Backup_20240102_030000.zip",
        "TeamCity_Backup_20240101_030000.zip",
        "TeamCity_Backup_20240101_030000.log",
        "Other_20240101_030000.zip",
    ]:
        (tmp_path / name).write_bytes(b"x")
    (tmp_path / "TeamCity_Backup_dir.zip").mkdir()

    names = [path.name for path in FileSystem().list_backups(tmp_path, "TeamCity_Backup_")]

    assert names == [
        "TeamCity_Backup_20240101_030000.zip",
        "TeamCity_Backup_20240102_030000.zip",
    ]


def test_list_backups_escapes_glob_characters(tmp_path: Path) -> None:
    (tmp_path / "[x]_1.zip").write_bytes(b"x")
    (tmp_path / "x_1.zip").write_bytes(b"x")

    names = [path.name for path in FileSystem().list_backups(tmp_path, "[x]_")]

    assert names == ["[x]_1.zip"]


def test_list_backups_missing_folder(tmp_path: Path) -> None:
    assert FileSystem().list_backups(tmp_path / "missing", "TeamCity_Backup_") == []


def test_delete_removes_file(tmp_path: Path) -> None:
    target = tmp_path / "a.zip"
    target.write_bytes(b"x")

    FileSystem().delete(target)

    assert not target.exists()


def test_delete_of_vanished_file_raises_delete_failed(tmp_path: Path) -> None:
    with pytest.raises(DeleteFailed, match="Could not delete"):
        FileSystem().delete(tmp_path / "gone.zip")
