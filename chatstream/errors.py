"""Error taxonomy for the streaming chat client."""

from __future__ import annotations


class ChatStreamError(Exception):
    """Base class for every failure the streaming connector reports."""


class ConfigurationError(ChatStreamError):
    """Required endpoint configuration is missing; nothing was opened."""


class EncodingError(ChatStreamError):
    """The outgoing request could not be serialized; nothing was opened."""


class ConnectTimeoutError(ChatStreamError, TimeoutError):
    """The transport did not become ready within the connection window."""


class SendError(ChatStreamError):
    """The transport became ready but the request frame could not be sent."""


class ServerReportedError(ChatStreamError):
    """The server embedded an error marker in the stream."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Server error: {raw}")
        self.raw = raw


class TransportError(ChatStreamError):
    """The underlying transport failed; the message names the lifecycle state."""


class AbnormalCloseError(ChatStreamError):
    """The transport closed with a non-clean code the client never asked for."""

    def __init__(self, code: int, reason: str = "") -> None:
        super().__init__(f"WebSocket closed abnormally ({code}): {reason or 'no reason'}")
        self.code = code
        self.reason = reason


__all__ = [
    "AbnormalCloseError",
    "ChatStreamError",
    "ConfigurationError",
    "ConnectTimeoutError",
    "EncodingError",
    "SendError",
    "ServerReportedError",
    "TransportError",
]
