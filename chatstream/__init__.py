"""Streaming chat client: WebSocket session connector, REST collaborators, orchestrator."""

from __future__ import annotations

from .chat import ChatSession
from .stream import StreamConnector, classify_frame
from .state import (
    ChatMessage,
    ErrorNotice,
    TextFragment,
    SessionState,
    StreamRequest,
    ClientSettings,
    AttachmentAsset,
    SessionIdNotice,
    CompletionSentinel,
)
from .errors import (
    SendError,
    EncodingError,
    TransportError,
    ChatStreamError,
    AbnormalCloseError,
    ConfigurationError,
    ConnectTimeoutError,
    ServerReportedError,
)

__version__ = "0.1.0"

__all__ = [
    "AbnormalCloseError",
    "AttachmentAsset",
    "ChatMessage",
    "ChatSession",
    "ChatStreamError",
    "ClientSettings",
    "CompletionSentinel",
    "ConfigurationError",
    "ConnectTimeoutError",
    "EncodingError",
    "ErrorNotice",
    "SendError",
    "ServerReportedError",
    "SessionIdNotice",
    "SessionState",
    "StreamConnector",
    "StreamRequest",
    "TextFragment",
    "TransportError",
    "classify_frame",
]
