import time
from dataclasses import dataclass
from typing import MutableMapping

SUCCESS_TTL = 3.0
ERROR_TTL = 5.0
EVENT_TTL = 5.0

_SLOT = "notification"


@dataclass(frozen=True)
class Notification:
    kind: str
    message: str
    expires_at: float
    record_id: str | None = None


class Notifier:
    """Single transient notification; a new one replaces the current one."""

    def __init__(self, state: MutableMapping, clock=time.monotonic):
        self.state = state
        self.clock = clock

    def notify(self, kind: str, message: str, ttl: float | None = None, record_id: str | None = None) -> Notification:
        if ttl is None:
            ttl = SUCCESS_TTL if kind == "success" else ERROR_TTL
        note = Notification(kind=kind, message=message, expires_at=self.clock() + ttl, record_id=record_id)
        self.state[_SLOT] = note
        return note

    def success(self, message: str) -> Notification:
        return self.notify("success", message, SUCCESS_TTL)

    def error(self, message: str) -> Notification:
        return self.notify("error", message, ERROR_TTL)

    def current(self) -> Notification | None:
        note = self.state.get(_SLOT)
        if note is None:
            return None
        if self.clock() >= note.expires_at:
            self.state[_SLOT] = None
            return None
        return note

    def dismiss(self) -> None:
        self.state[_SLOT] = None
