"""Per-connector session state."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class SessionState(enum.Enum):
    CONNECTING = "connecting"
    AWAITING_SEND = "awaiting_send"
    STREAMING = "streaming"
    CLOSING_REQUESTED = "closing_requested"
    CLOSED = "closed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.CLOSED, SessionState.FAILED)


@dataclass(slots=True)
class SessionHandle:
    state: SessionState = SessionState.CONNECTING
    close_requested_by_client: bool = False
    close_code: int | None = None
    close_reason: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal


__all__ = ["SessionHandle", "SessionState"]
