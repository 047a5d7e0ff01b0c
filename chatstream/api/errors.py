"""Failure-reason extraction for REST responses."""

from __future__ import annotations

from typing import Any

import httpx
import orjson

from chatstream.config.api import API_KEY_DETAIL, UNEXPECTED_ERROR_MESSAGE, VALIDATION_ERROR_MESSAGE


def _response_detail(response: httpx.Response | None) -> Any:
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body.get(API_KEY_DETAIL)


def _format_validation_detail(detail: list[Any]) -> str:
    messages: list[str] = []
    for err in detail:
        if isinstance(err, dict) and err.get("msg") and err.get("loc"):
            loc = err["loc"]
            field = loc[-1] if isinstance(loc, list | tuple) and loc else loc
            messages.append(f"{field}: {err['msg']}")
        elif isinstance(err, dict) and err.get("msg"):
            messages.append(str(err["msg"]))
        else:
            messages.append(VALIDATION_ERROR_MESSAGE)
    return ", ".join(messages)


def format_detail(detail: Any) -> str | None:
    """Render a FastAPI-style ``detail`` value, or None when there is none."""
    if not detail:
        return None
    if isinstance(detail, list):
        return _format_validation_detail(detail)
    if isinstance(detail, str):
        return detail
    return orjson.dumps(detail).decode("utf-8")


def extract_error_message(
    exc: Exception,
    response: httpx.Response | None = None,
    *,
    fallback: str = UNEXPECTED_ERROR_MESSAGE,
) -> str:
    if response is None and isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
    message = format_detail(_response_detail(response))
    if message:
        return message
    return str(exc) or fallback


__all__ = ["extract_error_message", "format_detail"]
