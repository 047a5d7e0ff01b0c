from __future__ import annotations

import io
import sys
import json
import asyncio

import httpx
import pytest

from chatstream import cli
from chatstream.config.chat import STREAM_ERROR_CONTENT
from tests.utils import FakeConnection


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CHAT_API_URL", "CHAT_API_SECURE", "CHAT_API_TOKEN", "CHAT_WS_CONNECT_TIMEOUT_S"):
        monkeypatch.delenv(name, raising=False)


def test_flags_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHAT_API_URL", "http://from-env")
    monkeypatch.setenv("CHAT_API_TOKEN", "env-token")
    args = cli.parse_args(["hello", "--base-url", "chat.example.com:8443", "--secure", "--timeout", "3"])

    settings = cli.build_settings(args)

    assert args.message == "hello"
    assert settings.api.base_url == "chat.example.com:8443"
    assert settings.api.secure is True
    assert settings.api.token == "env-token"
    assert settings.websocket.connect_timeout_s == 3.0


def test_defaults_come_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHAT_API_URL", "http://from-env")
    args = cli.parse_args([])

    settings = cli.build_settings(args)

    assert args.message is None
    assert args.attach == []
    assert settings.api.base_url == "http://from-env"
    assert settings.websocket.connect_timeout_s == 15.0


def test_missing_base_url_exits_with_config_code(capsys: pytest.CaptureFixture[str]) -> None:
    code = asyncio.run(cli.run(cli.parse_args(["hi"])))

    assert code == cli.EXIT_CONFIG
    assert "CHAT_API_URL" in capsys.readouterr().err


class _ConnectSequence:
    """Hand out one prepared connection per turn."""

    def __init__(self, *conns: FakeConnection) -> None:
        self.conns = list(conns)

    async def __call__(self, url: str, **kwargs) -> FakeConnection:
        return self.conns.pop(0)


def _http(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url="http://chat.test/api/v1/", transport=httpx.MockTransport(handler))


def _no_http(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected HTTP call: {request.url}")


@pytest.mark.asyncio
async def test_one_shot_turn_streams_reply(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("CHAT_API_URL", "http://chat.test")
    conn = FakeConnection()
    conn.feed('{"current_session_id":"abc"}', "Hel", "lo!", "[complete]")

    async with _http(_no_http) as http:
        code = await cli.run(cli.parse_args(["hi"]), http_client=http, connect_fn=_ConnectSequence(conn))

    assert code == cli.EXIT_OK
    assert capsys.readouterr().out == "Hello!\n"
    assert json.loads(conn.sent[0])["message"] == "hi"


@pytest.mark.asyncio
async def test_server_error_turn_exits_with_failure(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("CHAT_API_URL", "http://chat.test")
    conn = FakeConnection()
    conn.feed("[error] model unavailable")

    async with _http(_no_http) as http:
        code = await cli.run(cli.parse_args(["hi"]), http_client=http, connect_fn=_ConnectSequence(conn))

    assert code == cli.EXIT_TURN_FAILED
    assert STREAM_ERROR_CONTENT in capsys.readouterr().err


@pytest.mark.asyncio
async def test_repl_commands_and_first_turn_attachment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path
) -> None:
    monkeypatch.setenv("CHAT_API_URL", "http://chat.test")
    photo = tmp_path / "photo.png"
    photo.write_bytes(b"png-bytes")
    monkeypatch.setattr(sys, "stdin", io.StringIO("/more\nhello\n/clear\nagain\n/quit\nnever sent\n"))

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/attachments/upload"):
            return httpx.Response(200, json={"attachment_id": "att-1"})
        return httpx.Response(200, json={"messages": [{"id": "m0", "role": "assistant", "content": "earlier"}]})

    first = FakeConnection()
    first.feed('{"current_session_id":"abc"}', "Hi there", "[complete]")
    second = FakeConnection()
    second.feed("Fresh start", "[complete]")

    async with _http(handler) as http:
        code = await cli.run(
            cli.parse_args(["--attach", str(photo)]),
            http_client=http,
            connect_fn=_ConnectSequence(first, second),
        )

    out = capsys.readouterr().out
    assert code == cli.EXIT_OK
    assert "[assistant] earlier" in out
    assert "(loaded 1 older messages)" in out
    assert "Hi there" in out
    assert "(new conversation)" in out
    assert "Fresh start" in out

    first_body = json.loads(first.sent[0])
    second_body = json.loads(second.sent[0])
    assert first_body["attachmentIds"] == ["att-1"]
    assert second_body["attachmentIds"] == []
    assert second_body["chatId"] == ""
    assert second_body["message"] == "again"
