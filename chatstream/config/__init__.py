"""Configuration module exports (constants only)."""

from .websocket import WS_ERROR_MARKER, WS_COMPLETE_SENTINEL, DEFAULT_WS_CONNECT_TIMEOUT_S

__all__ = [
    "DEFAULT_WS_CONNECT_TIMEOUT_S",
    "WS_COMPLETE_SENTINEL",
    "WS_ERROR_MARKER",
]
