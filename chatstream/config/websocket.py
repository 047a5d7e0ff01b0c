"""Streaming WebSocket protocol configuration and constants."""

from __future__ import annotations

# Endpoint (appended to the API prefix)
WS_MESSAGES_PATH = "/ws/messages"

# Outgoing request keys
WS_KEY_TOKEN = "token"
WS_KEY_MESSAGE = "message"
WS_KEY_ATTACHMENT_IDS = "attachmentIds"
WS_KEY_CHAT_ID = "chatId"

# Inbound in-band conventions
WS_COMPLETE_SENTINEL = "[complete]"
WS_ERROR_MARKER = "[error]"
WS_KEY_CURRENT_SESSION_ID = "current_session_id"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_GOING_AWAY_CODE = 1001
WS_CLOSE_ABNORMAL_CODE = 1006
WS_CLOSE_ERROR_CODE = 1011

WS_CLOSE_COMPLETE_REASON = "complete"
WS_CLOSE_SERVER_ERROR_REASON = "server-error"
WS_CLOSE_CLIENT_ERROR_REASON = "client-error"
WS_CLOSE_SEND_ERROR_REASON = "send-error"
WS_CLOSE_DISCARDED_REASON = "client-discarded"

# Connection settings (env names + defaults, resolved in runtime.settings_loader)
ENV_WS_CONNECT_TIMEOUT_S = "CHAT_WS_CONNECT_TIMEOUT_S"
ENV_WS_PING_INTERVAL_S = "CHAT_WS_PING_INTERVAL_S"
ENV_WS_PING_TIMEOUT_S = "CHAT_WS_PING_TIMEOUT_S"
ENV_WS_MAX_MESSAGE_BYTES = "CHAT_WS_MAX_MESSAGE_BYTES"

DEFAULT_WS_CONNECT_TIMEOUT_S = 15.0
DEFAULT_WS_PING_INTERVAL_S: float | None = 20.0
DEFAULT_WS_PING_TIMEOUT_S: float | None = 20.0
DEFAULT_WS_MAX_MESSAGE_BYTES = 16 * 1024 * 1024

__all__ = [
    "WS_MESSAGES_PATH",
    "WS_KEY_TOKEN",
    "WS_KEY_MESSAGE",
    "WS_KEY_ATTACHMENT_IDS",
    "WS_KEY_CHAT_ID",
    "WS_COMPLETE_SENTINEL",
    "WS_ERROR_MARKER",
    "WS_KEY_CURRENT_SESSION_ID",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_GOING_AWAY_CODE",
    "WS_CLOSE_ABNORMAL_CODE",
    "WS_CLOSE_ERROR_CODE",
    "WS_CLOSE_COMPLETE_REASON",
    "WS_CLOSE_SERVER_ERROR_REASON",
    "WS_CLOSE_CLIENT_ERROR_REASON",
    "WS_CLOSE_SEND_ERROR_REASON",
    "WS_CLOSE_DISCARDED_REASON",
    "ENV_WS_CONNECT_TIMEOUT_S",
    "ENV_WS_PING_INTERVAL_S",
    "ENV_WS_PING_TIMEOUT_S",
    "ENV_WS_MAX_MESSAGE_BYTES",
    "DEFAULT_WS_CONNECT_TIMEOUT_S",
    "DEFAULT_WS_PING_INTERVAL_S",
    "DEFAULT_WS_PING_TIMEOUT_S",
    "DEFAULT_WS_MAX_MESSAGE_BYTES",
]
