from .request import StreamRequest
from .session import SessionState, SessionHandle
from .settings import ApiSettings, ClientSettings, WebSocketSettings
from .messages import ChatMessage, HistoryPage, UploadResult, AttachmentAsset
from .frames import (
    Fragment,
    ErrorNotice,
    InboundFrame,
    TextFragment,
    SessionIdNotice,
    CompletionSentinel,
)

__all__ = [
    "ApiSettings",
    "AttachmentAsset",
    "ChatMessage",
    "ClientSettings",
    "CompletionSentinel",
    "ErrorNotice",
    "Fragment",
    "HistoryPage",
    "InboundFrame",
    "SessionHandle",
    "SessionIdNotice",
    "SessionState",
    "StreamRequest",
    "TextFragment",
    "UploadResult",
    "WebSocketSettings",
]
