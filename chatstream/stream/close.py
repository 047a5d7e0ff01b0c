"""Close classification and transport-state descriptions."""

from __future__ import annotations

from typing import Any

from websockets.protocol import State

from chatstream.config.websocket import WS_CLOSE_NORMAL_CODE

_STATE_DESCRIPTIONS = {
    State.CONNECTING: "Failed to establish WebSocket connection. Check if the server is accessible.",
    State.OPEN: "WebSocket connection error occurred during communication.",
    State.CLOSING: "WebSocket connection error while closing.",
    State.CLOSED: "WebSocket connection closed unexpectedly.",
}
_UNKNOWN_STATE_DESCRIPTION = "WebSocket connection failed"


def describe_transport_state(state: Any) -> str:
    return _STATE_DESCRIPTIONS.get(state, _UNKNOWN_STATE_DESCRIPTION)


def state_name(state: Any) -> str:
    return getattr(state, "name", None) or "UNKNOWN"


def is_clean_close(code: int | None, *, close_requested: bool) -> bool:
    if code == WS_CLOSE_NORMAL_CODE:
        return True
    # Once the client asked to close after [complete], whatever code comes back
    # is clean; this covers 1006 when the peer drops instead of answering.
    return close_requested


__all__ = ["describe_transport_state", "is_clean_close", "state_name"]
