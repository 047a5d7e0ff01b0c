"""Endpoint URL helpers for the streaming socket and the REST API."""

from __future__ import annotations

from urllib.parse import urlparse, urlunparse

from chatstream.config.api import API_PREFIX
from chatstream.config.websocket import WS_MESSAGES_PATH

_SECURE_SCHEMES = {"https", "wss"}
_KNOWN_SCHEMES = {"http", "https", "ws", "wss"}


def _split_base(base_url: str, secure: bool) -> tuple[bool, str, str]:
    """Return (secure, netloc, base_path) for a base URL or bare host."""
    base = (base_url or "").strip()
    if not base:
        raise ValueError("base URL must be a non-empty string")

    if "://" in base:
        parsed = urlparse(base)
        scheme = parsed.scheme.lower()
        if scheme not in _KNOWN_SCHEMES:
            raise ValueError(f"unsupported URL scheme: {parsed.scheme!r}")
        if not parsed.netloc:
            raise ValueError(f"base URL has no host: {base_url!r}")
        return scheme in _SECURE_SCHEMES, parsed.netloc, parsed.path.rstrip("/")

    host, _, path = base.partition("/")
    path = f"/{path}".rstrip("/") if path else ""
    return secure, host, path


def _with_prefix(base_path: str) -> str:
    if base_path.endswith(API_PREFIX):
        return base_path
    return f"{base_path}{API_PREFIX}"


def build_ws_url(base_url: str, *, secure: bool = False) -> str:
    """Streaming endpoint URL; ``https`` bases map to ``wss`` and ``http`` to ``ws``."""
    is_secure, netloc, base_path = _split_base(base_url, secure)
    path = f"{_with_prefix(base_path)}{WS_MESSAGES_PATH}"
    return urlunparse(("wss" if is_secure else "ws", netloc, path, "", "", ""))


def build_api_url(base_url: str, path: str = "", *, secure: bool = False) -> str:
    """REST URL under the API prefix; a trailing slash is kept when ``path`` is empty."""
    is_secure, netloc, base_path = _split_base(base_url, secure)
    full_path = f"{_with_prefix(base_path)}/{path.lstrip('/')}"
    return urlunparse(("https" if is_secure else "http", netloc, full_path, "", "", ""))


__all__ = ["build_api_url", "build_ws_url"]
