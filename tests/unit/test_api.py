from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from chatstream.state.messages import AttachmentAsset
from chatstream.api.history import fetch_recent_messages
from chatstream.api.attachments import upload_attachment
from chatstream.api.errors import format_detail, extract_error_message

BASE_URL = "http://chat.test/api/v1/"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_upload_in_memory_content() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = request.read()
        return httpx.Response(200, json={"attachment_id": "att-1"})

    async with _client(handler) as client:
        result = await upload_attachment(
            client,
            "tok",
            AttachmentAsset(id="temp_1", file_name="cat.png", content=b"\x89PNG"),
        )

    assert result.error is None
    assert result.attachment_id == "att-1"
    assert seen["url"] == "http://chat.test/api/v1/attachments/upload"
    assert seen["auth"] == "Bearer tok"
    assert b'name="file"; filename="cat.png"' in seen["body"]
    assert b"Content-Type: image/png" in seen["body"]


@pytest.mark.asyncio
async def test_upload_reads_local_file(tmp_path: Path) -> None:
    photo = tmp_path / "holiday.jpeg"
    photo.write_bytes(b"jpeg-bytes")
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = request.read()
        return httpx.Response(200, json={"attachment_id": 99})

    async with _client(handler) as client:
        result = await upload_attachment(client, None, AttachmentAsset(id="temp_2", uri=photo.as_uri()))

    assert result.attachment_id == "99"
    assert seen["auth"] is None
    assert b'filename="holiday.jpeg"' in seen["body"]
    assert b"Content-Type: image/jpeg" in seen["body"]
    assert b"jpeg-bytes" in seen["body"]


@pytest.mark.asyncio
async def test_upload_reports_server_detail() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(413, json={"detail": "File too large"})

    async with _client(handler) as client:
        result = await upload_attachment(client, "tok", AttachmentAsset(id="temp_3", content=b"x"))

    assert result.attachment_id is None
    assert result.error == "File too large"


@pytest.mark.asyncio
async def test_upload_without_file_or_uri_fails() -> None:
    async with _client(lambda request: httpx.Response(200, json={})) as client:
        result = await upload_attachment(client, "tok", AttachmentAsset(id="temp_4"))

    assert result.error == "Invalid asset: no file or URI provided"


@pytest.mark.asyncio
async def test_upload_missing_local_file_fails(tmp_path: Path) -> None:
    async with _client(lambda request: httpx.Response(200, json={})) as client:
        result = await upload_attachment(client, "tok", AttachmentAsset(id="temp_5", uri=str(tmp_path / "gone.png")))

    assert result.attachment_id is None
    assert result.error


@pytest.mark.asyncio
async def test_fetch_recent_messages_with_cursor() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(
            200,
            json={
                "messages": [
                    {"id": "m1", "role": "user", "content": "hello"},
                    {
                        "id": "m2",
                        "role": "assistant",
                        "content": "hi there",
                        "attachments": [{"id": "a1", "url": "https://cdn/a1.png", "mimeType": "image/png"}],
                    },
                ]
            },
        )

    async with _client(handler) as client:
        page = await fetch_recent_messages(client, "tok", before="m9", limit=2)

    assert seen["path"] == "/api/v1/messages"
    assert seen["params"] == {"before": "m9", "limit": "2"}
    assert seen["auth"] == "Bearer tok"
    assert page.error is None
    assert [m.id for m in page.messages] == ["m1", "m2"]
    assert page.messages[1].attachments[0].uri == "https://cdn/a1.png"
    assert page.messages[1].is_streaming is False


@pytest.mark.asyncio
async def test_fetch_recent_messages_omits_missing_cursor() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"messages": []})

    async with _client(handler) as client:
        page = await fetch_recent_messages(client, None)

    assert seen["params"] == {"limit": "20"}
    assert page.messages == []


@pytest.mark.asyncio
async def test_fetch_recent_messages_validation_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            422,
            json={
                "detail": [
                    {"loc": ["query", "limit"], "msg": "must be positive"},
                    {"loc": ["query", "before"], "msg": "unknown message"},
                ]
            },
        )

    async with _client(handler) as client:
        page = await fetch_recent_messages(client, "tok", limit=-1)

    assert page.messages == []
    assert page.error == "limit: must be positive, before: unknown message"


@pytest.mark.asyncio
async def test_fetch_recent_messages_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        page = await fetch_recent_messages(client, "tok")

    assert page.error == "connection refused"


@pytest.mark.parametrize(
    ("detail", "expected"),
    [
        ("Not authenticated", "Not authenticated"),
        ([{"msg": "bad", "loc": ["body", "file"]}], "file: bad"),
        ([{"msg": "only msg"}, {}], "only msg, Validation error"),
        ({"code": "x"}, '{"code":"x"}'),
        (None, None),
        ("", None),
    ],
)
def test_format_detail(detail, expected) -> None:
    assert format_detail(detail) == expected


def test_extract_error_message_fallbacks() -> None:
    assert extract_error_message(RuntimeError("boom")) == "boom"
    assert extract_error_message(RuntimeError()) == "An unexpected error occurred"
    assert extract_error_message(RuntimeError(), fallback="Upload failed") == "Upload failed"
