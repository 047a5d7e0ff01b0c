"""Client settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ApiSettings:
    base_url: str | None
    secure: bool
    token: str | None
    request_timeout_s: float
    history_page_size: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    connect_timeout_s: float
    ping_interval_s: float | None
    ping_timeout_s: float | None
    max_message_bytes: int


@dataclass(frozen=True, slots=True)
class ClientSettings:
    api: ApiSettings
    websocket: WebSocketSettings


__all__ = [
    "ApiSettings",
    "ClientSettings",
    "WebSocketSettings",
]
