from __future__ import annotations

import pytest

from chatstream.stream.endpoint import build_api_url, build_ws_url


@pytest.mark.parametrize(
    ("base", "secure", "expected"),
    [
        ("https://chat.example.com", False, "wss://chat.example.com/api/v1/ws/messages"),
        ("http://localhost:8000/", False, "ws://localhost:8000/api/v1/ws/messages"),
        ("localhost:8000", False, "ws://localhost:8000/api/v1/ws/messages"),
        ("chat.example.com", True, "wss://chat.example.com/api/v1/ws/messages"),
        ("https://example.com/proxy", False, "wss://example.com/proxy/api/v1/ws/messages"),
        ("https://example.com/api/v1", False, "wss://example.com/api/v1/ws/messages"),
        ("wss://example.com", False, "wss://example.com/api/v1/ws/messages"),
    ],
)
def test_build_ws_url(base: str, secure: bool, expected: str) -> None:
    assert build_ws_url(base, secure=secure) == expected


def test_build_api_url() -> None:
    assert build_api_url("https://example.com") == "https://example.com/api/v1/"
    assert build_api_url("example.com:9000", "messages") == "http://example.com:9000/api/v1/messages"
    assert build_api_url("ws://example.com", "/attachments/upload") == "http://example.com/api/v1/attachments/upload"


@pytest.mark.parametrize("base", ["", "   ", "ftp://example.com", "https://"])
def test_build_ws_url_invalid(base: str) -> None:
    with pytest.raises(ValueError):
        build_ws_url(base)
