"""Inbound frame classification for the in-band sentinel convention.

The server frames its reply with ad-hoc markers rather than a typed envelope:

- any text containing ``[error]`` is a server-side failure,
- the exact text ``[complete]`` ends the stream,
- a JSON object with ``current_session_id`` announces the conversation id,
- everything else is assistant output to display verbatim.

Keeping the rules here lets the connector stay ignorant of the wire convention.
"""

from __future__ import annotations

from typing import Any

import orjson

from chatstream.state.frames import ErrorNotice, InboundFrame, TextFragment, SessionIdNotice, CompletionSentinel
from chatstream.config.websocket import WS_ERROR_MARKER, WS_COMPLETE_SENTINEL, WS_KEY_CURRENT_SESSION_ID


def _decode(raw: str) -> tuple[bool, Any]:
    try:
        return True, orjson.loads(raw)
    except orjson.JSONDecodeError:
        return False, None


def _canonical_text(value: Any, raw: str) -> str:
    try:
        return orjson.dumps(value).decode("utf-8")
    except orjson.JSONEncodeError:
        return raw


def classify_frame(message: str | bytes | bytearray | memoryview) -> InboundFrame:
    if not isinstance(message, str):
        return TextFragment(bytes(message).decode("utf-8", errors="replace"))

    if WS_ERROR_MARKER in message:
        return ErrorNotice(message)

    if message == WS_COMPLETE_SENTINEL:
        return CompletionSentinel()

    ok, decoded = _decode(message)
    if not ok:
        return TextFragment(message)

    if isinstance(decoded, dict):
        session_id = decoded.get(WS_KEY_CURRENT_SESSION_ID)
        if session_id:
            return SessionIdNotice(str(session_id))

    # Structured payloads without a session id are shown as their canonical JSON text.
    return TextFragment(_canonical_text(decoded, message))


__all__ = ["classify_frame"]
