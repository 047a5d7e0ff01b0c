"""Environment parsing for client settings."""

from __future__ import annotations

import os

from chatstream.config.secrets import get_api_token
from chatstream.state.settings import ApiSettings, ClientSettings, WebSocketSettings
from chatstream.config.api import (
    ENV_API_URL,
    ENV_API_SECURE,
    ENV_API_TIMEOUT_S,
    DEFAULT_API_SECURE,
    DEFAULT_API_TIMEOUT_S,
    ENV_HISTORY_PAGE_SIZE,
    DEFAULT_HISTORY_PAGE_SIZE,
)
from chatstream.config.websocket import (
    ENV_WS_PING_TIMEOUT_S,
    ENV_WS_PING_INTERVAL_S,
    ENV_WS_CONNECT_TIMEOUT_S,
    ENV_WS_MAX_MESSAGE_BYTES,
    DEFAULT_WS_PING_TIMEOUT_S,
    DEFAULT_WS_PING_INTERVAL_S,
    DEFAULT_WS_CONNECT_TIMEOUT_S,
    DEFAULT_WS_MAX_MESSAGE_BYTES,
)

_DISABLED_VALUES = {"0", "none", "null", "disabled", "disable", "off"}


def _optional_str_env(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    v = raw.strip()
    return v or None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _optional_float_env(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    if raw.strip().lower() in _DISABLED_VALUES:
        return None
    try:
        value = float(raw)
    except Exception:
        return default
    return value if value > 0 else None


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _load_api_settings() -> ApiSettings:
    timeout = _float_env(ENV_API_TIMEOUT_S, DEFAULT_API_TIMEOUT_S)
    if timeout <= 0:
        timeout = DEFAULT_API_TIMEOUT_S
    page_size = _int_env(ENV_HISTORY_PAGE_SIZE, DEFAULT_HISTORY_PAGE_SIZE)
    if page_size <= 0:
        page_size = DEFAULT_HISTORY_PAGE_SIZE

    return ApiSettings(
        base_url=_optional_str_env(ENV_API_URL),
        secure=_bool_env(ENV_API_SECURE, DEFAULT_API_SECURE),
        token=get_api_token(),
        request_timeout_s=timeout,
        history_page_size=page_size,
    )


def _load_websocket_settings() -> WebSocketSettings:
    connect_timeout = _float_env(ENV_WS_CONNECT_TIMEOUT_S, DEFAULT_WS_CONNECT_TIMEOUT_S)
    if connect_timeout <= 0:
        connect_timeout = DEFAULT_WS_CONNECT_TIMEOUT_S
    max_bytes = _int_env(ENV_WS_MAX_MESSAGE_BYTES, DEFAULT_WS_MAX_MESSAGE_BYTES)
    if max_bytes <= 0:
        max_bytes = DEFAULT_WS_MAX_MESSAGE_BYTES

    return WebSocketSettings(
        connect_timeout_s=connect_timeout,
        ping_interval_s=_optional_float_env(ENV_WS_PING_INTERVAL_S, DEFAULT_WS_PING_INTERVAL_S),
        ping_timeout_s=_optional_float_env(ENV_WS_PING_TIMEOUT_S, DEFAULT_WS_PING_TIMEOUT_S),
        max_message_bytes=max_bytes,
    )


def load_settings() -> ClientSettings:
    return ClientSettings(
        api=_load_api_settings(),
        websocket=_load_websocket_settings(),
    )


__all__ = ["load_settings"]
