"""Outgoing request serialization."""

from __future__ import annotations

from typing import Any

import orjson

from chatstream.errors import EncodingError
from chatstream.state.request import StreamRequest
from chatstream.config.websocket import WS_KEY_TOKEN, WS_KEY_CHAT_ID, WS_KEY_MESSAGE, WS_KEY_ATTACHMENT_IDS


def build_request_body(request: StreamRequest) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if request.token is not None:
        body[WS_KEY_TOKEN] = request.token
    body[WS_KEY_MESSAGE] = request.message
    body[WS_KEY_ATTACHMENT_IDS] = list(request.attachment_ids)
    body[WS_KEY_CHAT_ID] = request.chat_id
    return body


def encode_request(request: StreamRequest) -> str:
    try:
        return orjson.dumps(build_request_body(request)).decode("utf-8")
    except (TypeError, orjson.JSONEncodeError) as exc:
        raise EncodingError(f"failed to serialize chat request: {exc}") from exc


__all__ = ["build_request_body", "encode_request"]
