"""History retrieval collaborator."""

from __future__ import annotations

import logging

import httpx

from chatstream.state.messages import ChatMessage, HistoryPage
from chatstream.config.api import API_KEY_MESSAGES, API_MESSAGES_PATH, DEFAULT_HISTORY_PAGE_SIZE

from .client import auth_headers
from .errors import extract_error_message

logger = logging.getLogger(__name__)


async def fetch_recent_messages(
    client: httpx.AsyncClient,
    token: str | None,
    before: str | None = None,
    limit: int = DEFAULT_HISTORY_PAGE_SIZE,
) -> HistoryPage:
    params: dict[str, str] = {}
    if before:
        params["before"] = before
    params["limit"] = str(limit)

    try:
        response = await client.get(API_MESSAGES_PATH, params=params, headers=auth_headers(token))
        response.raise_for_status()
        data = response.json()
    except Exception as exc:
        error = extract_error_message(exc)
        logger.error("error getting chat history: %s", error)
        return HistoryPage(error=error)

    raw_messages = data.get(API_KEY_MESSAGES) if isinstance(data, dict) else None
    return HistoryPage(
        messages=[ChatMessage.from_api(item) for item in raw_messages or [] if isinstance(item, dict)],
    )


__all__ = ["fetch_recent_messages"]
