"""Streaming session connector: one socket, one request, one streamed reply."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable, Awaitable

import websockets
from websockets.protocol import State
from websockets.exceptions import InvalidStatus, ConnectionClosed

from chatstream.state.request import StreamRequest
from chatstream.state.session import SessionState, SessionHandle
from chatstream.runtime.settings_loader import load_settings
from chatstream.state.settings import ClientSettings, WebSocketSettings
from chatstream.state.frames import Fragment, ErrorNotice, CompletionSentinel
from chatstream.errors import (
    SendError,
    TransportError,
    ChatStreamError,
    AbnormalCloseError,
    ConfigurationError,
    ConnectTimeoutError,
    ServerReportedError,
)
from chatstream.config.websocket import (
    WS_CLOSE_ERROR_CODE,
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_ABNORMAL_CODE,
    WS_CLOSE_COMPLETE_REASON,
    WS_CLOSE_GOING_AWAY_CODE,
    WS_CLOSE_DISCARDED_REASON,
    WS_CLOSE_SEND_ERROR_REASON,
    WS_CLOSE_CLIENT_ERROR_REASON,
    WS_CLOSE_SERVER_ERROR_REASON,
)

from .endpoint import build_ws_url
from .payload import encode_request
from .outcome import OneShotOutcome
from .classifier import classify_frame
from .close import state_name, is_clean_close, describe_transport_state

logger = logging.getLogger(__name__)

ConnectFn = Callable[..., Awaitable[Any]]
FragmentCallback = Callable[[Fragment], None]
CloseCallback = Callable[[], None]
ErrorCallback = Callable[[ChatStreamError], None]


def get_ws_options(settings: WebSocketSettings) -> dict[str, Any]:
    return {
        "ping_interval": settings.ping_interval_s,
        "ping_timeout": settings.ping_timeout_s,
        "max_size": settings.max_message_bytes,
        # Readiness is bounded by the connector's own timeout scope.
        "open_timeout": None,
    }


class StreamConnector:
    """Own one WebSocket for a single request/response exchange.

    ``open()`` settles exactly once: it returns the live connection after the
    request was sent, or raises a ``ChatStreamError``. Everything after that is
    reported through the callbacks: fragments in arrival order, errors as they
    happen, and ``on_close`` exactly once when the session retires.
    """

    def __init__(
        self,
        request: StreamRequest,
        *,
        on_fragment: FragmentCallback,
        on_close: CloseCallback | None = None,
        on_error: ErrorCallback | None = None,
        settings: ClientSettings | None = None,
        connect_fn: ConnectFn | None = None,
    ) -> None:
        self._request = request
        self._on_fragment = on_fragment
        self._on_close = on_close
        self._on_error = on_error
        self._settings = settings or load_settings()
        self._connect_fn = connect_fn or websockets.connect

        self.handle = SessionHandle()
        self.url: str | None = None
        self._outcome: OneShotOutcome[Any] | None = None
        self._task: asyncio.Task | None = None
        self._close_notified = False

    @property
    def state(self) -> SessionState:
        return self.handle.state

    @property
    def settled(self) -> bool:
        return self._outcome is not None and self._outcome.settled

    async def open(self) -> Any:
        if self._task is not None or self._outcome is not None:
            raise RuntimeError("StreamConnector.open() may only be called once")

        base_url = self._settings.api.base_url
        if not base_url:
            self.handle.state = SessionState.FAILED
            raise ConfigurationError("API base URL is not configured (set CHAT_API_URL)")
        try:
            url = build_ws_url(base_url, secure=self._settings.api.secure)
        except ValueError as exc:
            self.handle.state = SessionState.FAILED
            raise ConfigurationError(str(exc)) from exc

        try:
            payload = encode_request(self._request)
        except ChatStreamError:
            self.handle.state = SessionState.FAILED
            logger.error("chat request could not be serialized")
            raise

        self.url = url
        self._outcome = OneShotOutcome()
        self._task = asyncio.create_task(self._run(url, payload))
        return await self._outcome.wait()

    async def wait_closed(self) -> None:
        """Wait until the session retired and ``on_close`` has fired."""
        if self._task is None:
            return
        # asyncio.wait leaves the session task running if this caller is cancelled.
        await asyncio.wait({self._task})

    async def _run(self, url: str, payload: str) -> None:
        ws = None
        try:
            ws = await self._connect(url)
            if ws is None:
                return
            if not await self._send(ws, payload):
                return
            await self._consume(ws)
        finally:
            if ws is not None and getattr(ws, "state", None) is not State.CLOSED:
                await self._force_close(ws, WS_CLOSE_GOING_AWAY_CODE, WS_CLOSE_DISCARDED_REASON)
            self._finish()

    async def _connect(self, url: str) -> Any:
        ws_settings = self._settings.websocket
        logger.debug("connecting url=%s timeout=%.1fs", url, ws_settings.connect_timeout_s)
        scope = asyncio.timeout(ws_settings.connect_timeout_s)
        try:
            async with scope:
                return await self._connect_fn(url, **get_ws_options(ws_settings))
        except TimeoutError as exc:
            if scope.expired():
                logger.error("connection timeout after %.1fs url=%s", ws_settings.connect_timeout_s, url)
                # Timeout is surfaced through the outcome only.
                self._fail(ConnectTimeoutError("WebSocket connection timeout"))
                return None
            # Raised by the transport itself (e.g. ETIMEDOUT), not by our scope.
            error = TransportError(describe_transport_state(State.CONNECTING))
            error.__cause__ = exc
        except ConnectionClosed as exc:
            code = exc.rcvd.code if exc.rcvd is not None else WS_CLOSE_ABNORMAL_CODE
            reason = exc.rcvd.reason if exc.rcvd is not None else ""
            error = AbnormalCloseError(code, reason)
            error.__cause__ = exc
        except InvalidStatus as exc:
            error = TransportError(
                f"{describe_transport_state(State.CONNECTING)} (HTTP {exc.response.status_code})"
            )
            error.__cause__ = exc
        except Exception as exc:
            error = TransportError(describe_transport_state(State.CONNECTING))
            error.__cause__ = exc

        logger.error("connection failed url=%s: %s", url, error, exc_info=error.__cause__)
        self._report(error)
        self._fail(error)
        return None

    async def _send(self, ws: Any, payload: str) -> bool:
        if self.settled or self.handle.is_terminal:
            # Readiness raced a settlement; nothing left to do with this socket.
            return False

        self.handle.state = SessionState.AWAITING_SEND
        try:
            await ws.send(payload)
        except Exception as exc:
            error = SendError(f"failed to send chat request: {exc}")
            error.__cause__ = exc
            logger.error("send failed: %s", exc)
            self._report(error)
            self._fail(error)
            await self._force_close(ws, WS_CLOSE_ERROR_CODE, WS_CLOSE_SEND_ERROR_REASON)
            return False

        self.handle.state = SessionState.STREAMING
        logger.debug("request sent; streaming")
        self._outcome.resolve(ws)
        return True

    async def _consume(self, ws: Any) -> None:
        # Single consumer: frames are handled one at a time in delivery order.
        while not self.handle.is_terminal:
            try:
                message = await ws.recv()
            except ConnectionClosed:
                self._handle_close(getattr(ws, "close_code", None), getattr(ws, "close_reason", None))
                return
            except Exception as exc:
                await self._handle_transport_error(ws, exc)
                return
            await self._handle_message(ws, message)

    async def _handle_message(self, ws: Any, message: Any) -> None:
        if self.handle.state is not SessionState.STREAMING:
            logger.debug("dropping frame received in state=%s", self.handle.state.value)
            return

        try:
            frame = classify_frame(message)
        except Exception:
            logger.warning("malformed frame ignored", exc_info=True)
            return

        if isinstance(frame, ErrorNotice):
            logger.error("server error frame: %s", frame.raw)
            error = ServerReportedError(frame.raw)
            self._report(error)
            self._fail(error)
            await self._force_close(ws, WS_CLOSE_ERROR_CODE, WS_CLOSE_SERVER_ERROR_REASON)
            return

        if isinstance(frame, CompletionSentinel):
            self.handle.close_requested_by_client = True
            self.handle.state = SessionState.CLOSING_REQUESTED
            await self._force_close(ws, WS_CLOSE_NORMAL_CODE, WS_CLOSE_COMPLETE_REASON)
            return

        try:
            self._on_fragment(frame)
        except Exception:
            logger.warning("fragment callback failed; stream continues", exc_info=True)

    async def _handle_transport_error(self, ws: Any, exc: Exception) -> None:
        if self.handle.is_terminal:
            return
        state = getattr(ws, "state", None)
        error = TransportError(describe_transport_state(state))
        error.__cause__ = exc
        logger.error("socket error url=%s state=%s: %s", self.url, state_name(state), exc)
        self._report(error)
        self._fail(error)
        await self._force_close(ws, WS_CLOSE_ERROR_CODE, WS_CLOSE_CLIENT_ERROR_REASON)

    def _handle_close(self, code: int | None, reason: str | None) -> None:
        code = WS_CLOSE_ABNORMAL_CODE if code is None else code
        self.handle.close_code = code
        self.handle.close_reason = reason or ""
        if self.handle.is_terminal:
            # Already failed and reported; this is the echo of our own close.
            return

        if is_clean_close(code, close_requested=self.handle.close_requested_by_client):
            logger.debug("socket closed cleanly code=%s", code)
            self.handle.state = SessionState.CLOSED
            return

        error = AbnormalCloseError(code, reason or "")
        logger.error("socket closed abnormally code=%s reason=%s", code, reason or "no reason")
        self._report(error)
        self._fail(error)

    async def _force_close(self, ws: Any, code: int, reason: str) -> None:
        try:
            await ws.close(code=code, reason=reason)
        except Exception:
            logger.debug("socket close failed code=%s", code, exc_info=True)

    def _fail(self, error: ChatStreamError) -> None:
        self.handle.state = SessionState.FAILED
        if self._outcome is not None:
            self._outcome.reject(error)

    def _report(self, error: ChatStreamError) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(error)
        except Exception:
            logger.warning("error callback failed", exc_info=True)

    def _finish(self) -> None:
        if self._outcome is not None and not self._outcome.settled:
            # Only reachable when the session task was cancelled before readiness.
            self._fail(TransportError("WebSocket session ended before the connection was ready"))
        if not self.handle.is_terminal:
            self.handle.state = SessionState.CLOSED

        if self._close_notified:
            return
        self._close_notified = True
        if self._on_close is None:
            return
        try:
            self._on_close()
        except Exception:
            logger.warning("close callback failed", exc_info=True)


__all__ = ["StreamConnector", "get_ws_options"]
