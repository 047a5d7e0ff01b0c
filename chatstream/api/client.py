"""HTTP client construction for the REST collaborators."""

from __future__ import annotations

import httpx

from chatstream.errors import ConfigurationError
from chatstream.state.settings import ApiSettings
from chatstream.stream.endpoint import build_api_url


def auth_headers(token: str | None) -> dict[str, str]:
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


def build_http_client(settings: ApiSettings, *, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    if not settings.base_url:
        raise ConfigurationError("API base URL is not configured (set CHAT_API_URL)")
    try:
        base_url = build_api_url(settings.base_url, secure=settings.secure)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=settings.request_timeout_s,
        transport=transport,
    )


__all__ = ["auth_headers", "build_http_client"]
