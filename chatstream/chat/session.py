"""Headless chat orchestrator: transcript, attachments, streaming, history."""

from __future__ import annotations

import uuid
import logging
from collections.abc import Callable, Iterable

import httpx

from chatstream.api.client import build_http_client
from chatstream.api.history import fetch_recent_messages
from chatstream.state.request import StreamRequest
from chatstream.api.attachments import upload_attachment
from chatstream.errors import ChatStreamError
from chatstream.state.frames import Fragment, SessionIdNotice
from chatstream.state.settings import ClientSettings
from chatstream.state.messages import ChatMessage, AttachmentAsset
from chatstream.config.api import LOCAL_ATTACHMENT_PREFIX
from chatstream.runtime.settings_loader import load_settings
from chatstream.stream.connector import ConnectFn, StreamConnector
from chatstream.config.chat import ROLE_USER, ROLE_ASSISTANT, STREAM_ERROR_CONTENT, CONNECT_FAILED_CONTENT

logger = logging.getLogger(__name__)


def _local_message_id() -> str:
    return f"msg_{uuid.uuid4().hex}"


class ChatSession:
    """Fold streamed replies into a transcript for one conversation.

    Each ``send()`` gets its own ``StreamConnector`` and its own assistant
    message, so a late event from an earlier turn can never touch a newer one.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        connect_fn: ConnectFn | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.messages: list[ChatMessage] = []
        self.chat_id: str = ""
        self.has_more: bool = True
        self.last_error: ChatStreamError | None = None

        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._connect_fn = connect_fn
        self._loading_more = False

    async def __aenter__(self) -> ChatSession:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = build_http_client(self.settings.api)
        return self._http_client

    def clear(self) -> None:
        self.messages = []
        self.chat_id = ""

    async def resolve_attachment_ids(self, attachments: Iterable[AttachmentAsset]) -> list[str | None]:
        ids: list[str | None] = []
        for asset in attachments:
            if not asset.id.startswith(LOCAL_ATTACHMENT_PREFIX):
                ids.append(asset.id)
                continue
            result = await upload_attachment(self._client(), self.settings.api.token, asset)
            if result.error is not None:
                logger.error("failed to upload attachment %s: %s", asset.id, result.error)
                continue
            ids.append(result.attachment_id)
        return ids

    async def send(
        self,
        text: str,
        attachments: Iterable[AttachmentAsset] = (),
        *,
        on_update: Callable[[str], None] | None = None,
    ) -> ChatMessage | None:
        """Send one turn and wait until its reply stream retires."""
        attachments = list(attachments)
        if not text.strip() and not attachments:
            return None

        attachment_ids = await self.resolve_attachment_ids(attachments)

        self.messages.append(
            ChatMessage(role=ROLE_USER, content=text, id=_local_message_id(), attachments=attachments)
        )
        reply = ChatMessage(role=ROLE_ASSISTANT, content="", id=_local_message_id(), is_streaming=True)
        self.messages.append(reply)
        self.last_error = None

        def on_fragment(fragment: Fragment) -> None:
            if isinstance(fragment, SessionIdNotice):
                self.chat_id = fragment.session_id
                return
            reply.content += fragment.text
            if on_update is not None:
                on_update(fragment.text)

        def on_close() -> None:
            reply.is_streaming = False

        def on_error(error: ChatStreamError) -> None:
            logger.error("stream error: %s", error)
            self.last_error = error
            reply.content = STREAM_ERROR_CONTENT
            reply.is_streaming = False

        connector = StreamConnector(
            StreamRequest(
                message=text,
                attachment_ids=tuple(attachment_ids),
                chat_id=self.chat_id,
                token=self.settings.api.token,
            ),
            on_fragment=on_fragment,
            on_close=on_close,
            on_error=on_error,
            settings=self.settings,
            connect_fn=self._connect_fn,
        )

        try:
            await connector.open()
        except ChatStreamError as exc:
            logger.error("failed to connect to AI stream: %s", exc)
            self.last_error = exc
            reply.content = CONNECT_FAILED_CONTENT
            reply.is_streaming = False

        await connector.wait_closed()
        return reply

    async def load_more(self) -> int:
        """Prepend the page of history older than the first message; returns how many arrived."""
        if self._loading_more or not self.has_more:
            return 0

        self._loading_more = True
        try:
            before = self.messages[0].id if self.messages else None
            page = await fetch_recent_messages(
                self._client(),
                self.settings.api.token,
                before,
                self.settings.api.history_page_size,
            )
        finally:
            self._loading_more = False

        if page.error is not None:
            logger.error("failed to load messages: %s", page.error)
            return 0
        if not page.messages:
            self.has_more = False
            return 0

        self.messages[:0] = page.messages
        return len(page.messages)


__all__ = ["ChatSession"]
