from pathlib import Path
import runpy
import sys

import pytest

import teamcity_backup.cli as cli_module
import teamcity_backup.commands.factory as factory_module
from teamcity_backup.cli import CliApplication
from teamcity_backup.core.errors import AuthenticationError, ConfigResolutionError


def test_build_parser_accepts_all_actions(tmp_path: Path) -> None:
    app = CliApplication(tmp_path)
    parser = app.build_parser()

    for action in ["backup", "purge", "status"]:
        args = parser.parse_args([action])
        assert args.action == action
        assert args.env_file is None
        assert args.verbose is False


def test_build_parser_accepts_connection_flags(tmp_path: Path) -> None:
    parser = CliApplication(tmp_path).build_parser()

    args = parser.parse_args(
        [
            "backup",
            "/tmp/custom.env",
            "--url",
            "http://tc:8111",
            "--data-root",
            "C:\\TC",
            "--username",
            "u",
            "--password",
            "p",
            "--sleep",
            "5",
            "--timeout",
            "60",
            "-v",
        ]
    )

    assert args.env_file == "/tmp/custom.env"
    assert cli_module.overrides_from_args(args) == {
        "TEAMCITY_URL": "http://tc:8111",
        "TEAMCITY_DATA_PATH": "C:\\TC",
        "BACKUP_DIR": None,
        "TEAMCITY_USER": "u",
        "TEAMCITY_PASSWORD": "p",
        "POLL_SLEEP_SECONDS": "5",
        "POLL_TIMEOUT_SECONDS": "60",
        "VERBOSE": "true",
    }


def test_run_invokes_factory_and_command(tmp_path: Path) -> None:
    app = CliApplication(tmp_path)
    observed: dict[str, object] = {}

    class FakeCommand:
        def run(self) -> int:
            return 9

    class FakeFactory:
        def create(self, action: str, env_file: str | None, overrides: dict) -> FakeCommand:
            observed["action"] = action
            observed["env_file"] = env_file
            observed["url"] = overrides["TEAMCITY_URL"]
            return FakeCommand()

    app._factory = FakeFactory()  # type: ignore[assignment]

    result = app.run(["purge", "/tmp/integration.env", "--url", "http://tc"])

    assert result == 9
    assert observed == {"action": "purge", "env_file": "/tmp/integration.env", "url": "http://tc"}


@pytest.mark.parametrize(
    "error",
    [
        ConfigResolutionError("Missing required config values: TEAMCITY_URL"),
        AuthenticationError("http://tc/httpAuth/app/rest/server/backup", 401),
    ],
)
def test_run_turns_fatal_errors_into_exit(tmp_path: Path, error: Exception) -> None:
    app = CliApplication(tmp_path)

    class FailingFactory:
        def create(self, action: str, env_file: str | None, overrides: dict) -> object:
            raise error

    app._factory = FailingFactory()  # type: ignore[assignment]

    with pytest.raises(SystemExit) as exc:
        app.run(["backup"])

    assert str(exc.value.code).startswith("ERROR: ")
    assert str(error) in str(exc.value.code)


def test_main_uses_project_root_and_runs(monkeypatch: pytest.MonkeyPatch) -> None:
    observed: dict[str, Path] = {}

    class AppStub:
        def __init__(self, project_root: Path) -> None:
            observed["project_root"] = project_root

        def run(self) -> int:
            return 13

    monkeypatch.setattr(cli_module, "CliApplication", AppStub)

    result = cli_module.main()

    assert result == 13
    assert observed["project_root"] == Path(
        cli_module.__file__).resolve().parent.parent


def test_cli_module_main_guard_executes(monkeypatch: pytest.MonkeyPatch) -> None:
    observed: dict[str, str | None] = {}

    class FakeCommand:
        def run(self) -> int:
            return 0

    class FactorySpy:
        def __init__(self, project_root: Path) -> None:
            _ = project_root

        def create(self, action: str, env_file: str | None, overrides: dict) -> FakeCommand:
            observed["action"] = action
            observed["env_file"] = env_file
            return FakeCommand()

    monkeypatch.setattr(factory_module, "CommandFactory", FactorySpy)
    monkeypatch.setattr(sys, "argv", ["teamcity-backup", "status"])
    monkeypatch.delitem(sys.modules, "teamcity_backup.cli", raising=False)

    with pytest.raises(SystemExit) as exc:
        runpy.run_module("teamcity_backup.cli", run_name="__main__")

    assert exc.value.code == 0
    assert observed == {"action": "status", "env_file": None}
