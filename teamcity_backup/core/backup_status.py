from __future__ import annotations

from enum import Enum

IDLE_STATUS_TEXT = "Idle"


class BackupStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"

    @classmethod
    def from_text(cls, text: str) -> BackupStatus:
        # Anything other than "Idle", including unknown values, counts as running.
        if text.strip() == IDLE_STATUS_TEXT:
            return cls.IDLE
        return cls.RUNNING
