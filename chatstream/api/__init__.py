"""REST collaborators: attachment upload and history pagination."""

from __future__ import annotations

from .history import fetch_recent_messages
from .mime import get_extension, get_mime_type
from .attachments import upload_attachment
from .client import auth_headers, build_http_client
from .errors import format_detail, extract_error_message

__all__ = [
    "auth_headers",
    "build_http_client",
    "extract_error_message",
    "fetch_recent_messages",
    "format_detail",
    "get_extension",
    "get_mime_type",
    "upload_attachment",
]
