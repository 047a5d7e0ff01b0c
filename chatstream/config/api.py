"""REST API configuration and constants."""

from __future__ import annotations

API_PREFIX = "/api/v1"
API_UPLOAD_PATH = "attachments/upload"
API_MESSAGES_PATH = "messages"

API_UPLOAD_FIELD = "file"
API_KEY_ATTACHMENT_ID = "attachment_id"
API_KEY_MESSAGES = "messages"
API_KEY_DETAIL = "detail"

# Ids with this prefix live only on the client and still need uploading.
LOCAL_ATTACHMENT_PREFIX = "temp_"

DEFAULT_MIME_TYPE = "application/octet-stream"
MIME_TYPES_BY_EXTENSION = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "heic": "image/heic",
    "gif": "image/gif",
    "webp": "image/webp",
}

UPLOAD_FAILED_MESSAGE = "Upload failed"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"
VALIDATION_ERROR_MESSAGE = "Validation error"

ENV_API_URL = "CHAT_API_URL"
ENV_API_SECURE = "CHAT_API_SECURE"
ENV_API_TIMEOUT_S = "CHAT_API_TIMEOUT_S"
ENV_HISTORY_PAGE_SIZE = "CHAT_HISTORY_PAGE_SIZE"

DEFAULT_API_SECURE = False
DEFAULT_API_TIMEOUT_S = 30.0
DEFAULT_HISTORY_PAGE_SIZE = 20

__all__ = [
    "API_PREFIX",
    "API_UPLOAD_PATH",
    "API_MESSAGES_PATH",
    "API_UPLOAD_FIELD",
    "API_KEY_ATTACHMENT_ID",
    "API_KEY_MESSAGES",
    "API_KEY_DETAIL",
    "LOCAL_ATTACHMENT_PREFIX",
    "DEFAULT_MIME_TYPE",
    "MIME_TYPES_BY_EXTENSION",
    "UPLOAD_FAILED_MESSAGE",
    "UNEXPECTED_ERROR_MESSAGE",
    "VALIDATION_ERROR_MESSAGE",
    "ENV_API_URL",
    "ENV_API_SECURE",
    "ENV_API_TIMEOUT_S",
    "ENV_HISTORY_PAGE_SIZE",
    "DEFAULT_API_SECURE",
    "DEFAULT_API_TIMEOUT_S",
    "DEFAULT_HISTORY_PAGE_SIZE",
]
