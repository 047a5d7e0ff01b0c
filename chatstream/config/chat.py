"""Chat orchestration constants (user-visible fallbacks)."""

from __future__ import annotations

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

STREAM_ERROR_CONTENT = "Sorry, an error occurred while connecting to the AI service."
CONNECT_FAILED_CONTENT = "Sorry, failed to connect to the AI service."

__all__ = [
    "ROLE_USER",
    "ROLE_ASSISTANT",
    "STREAM_ERROR_CONTENT",
    "CONNECT_FAILED_CONTENT",
]
