from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .backup_status import BackupStatus
from .clock import Clock
from .protocols import ClockProtocol


class PollOutcome(Enum):
    POLLING = "polling"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class PollState:
    status: BackupStatus
    raw_status: str
    elapsed: float
    outcome: PollOutcome


class PollLoop:
    def __init__(
        self,
        clock: ClockProtocol | None = None,
        on_poll: Callable[[PollState], None] | None = None,
    ) -> None:
        self._clock = clock or Clock()
        self._on_poll = on_poll

    def run(
        self,
        status_fn: Callable[[], str],
        sleep_seconds: float,
        timeout_seconds: float,
    ) -> PollState:
        started = self._clock.monotonic()
        while True:
            raw_status = status_fn()
            status = BackupStatus.from_text(raw_status)
            elapsed = self._clock.monotonic() - started

            if status is BackupStatus.IDLE:
                return PollState(status, raw_status, elapsed, PollOutcome.COMPLETED)
            if elapsed >= timeout_seconds:
                return PollState(status, raw_status, elapsed, PollOutcome.TIMED_OUT)

            if self._on_poll is not None:
                self._on_poll(PollState(status, raw_status, elapsed, PollOutcome.POLLING))
            # Never sleep past the deadline.
            self._clock.sleep(min(sleep_seconds, max(0.0, timeout_seconds - elapsed)))
