from __future__ import annotations

import re
import time
from datetime import date

import pytest

from teamcity_backup.core.clock import Clock


def test_now_iso_returns_iso8601_with_timezone() -> None:
    value = Clock().now_iso()

    assert "T" in value
    assert re.search(r"[+-]\d{2}:\d{2}$", value) is not None


def test_today_returns_date() -> None:
    assert isinstance(Clock().today(), date)


def test_monotonic_does_not_go_backwards() -> None:
    clock = Clock()
    first = clock.monotonic()
    assert clock.monotonic() >= first


def test_sleep_delegates_to_time_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    observed: list[float] = []
    monkeypatch.setattr(time, "sleep", observed.append)

    Clock().sleep(2.5)

    assert observed == [2.5]
