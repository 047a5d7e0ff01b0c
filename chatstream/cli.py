"""Terminal front end: stream assistant replies to stdout."""

from __future__ import annotations

import sys
import asyncio
import logging
import argparse
import dataclasses
from pathlib import Path

import httpx

from chatstream.chat import ChatSession
from chatstream.errors import ConfigurationError
from chatstream.state.messages import AttachmentAsset
from chatstream.runtime import load_settings, configure_logging
from chatstream.config.api import LOCAL_ATTACHMENT_PREFIX
from chatstream.stream.connector import ConnectFn

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_TURN_FAILED = 2

CMD_QUIT = "/quit"
CMD_CLEAR = "/clear"
CMD_MORE = "/more"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Chat with the assistant over its streaming WebSocket")
    p.add_argument("message", nargs="?", help="Send one message and exit (omit for an interactive prompt)")
    p.add_argument("--base-url", help="API base URL, e.g. https://host or host:port (default: $CHAT_API_URL)")
    p.add_argument("--secure", action="store_true", help="Use wss/https for a bare host:port")
    p.add_argument("--token", help="Bearer credential (default: $CHAT_API_TOKEN)")
    p.add_argument("--chat-id", default="", help="Continue an existing conversation")
    p.add_argument("--attach", action="append", default=[], metavar="PATH", help="File to upload and attach")
    p.add_argument("--history", type=int, default=0, metavar="N", help="Print N pages of history before chatting")
    p.add_argument("--timeout", type=float, help="Connection timeout in seconds")
    p.add_argument("--debug", action="store_true")
    return p.parse_args(argv)


def build_settings(args: argparse.Namespace):
    settings = load_settings()
    api = settings.api
    if args.base_url:
        api = dataclasses.replace(api, base_url=args.base_url)
    if args.secure:
        api = dataclasses.replace(api, secure=True)
    if args.token:
        api = dataclasses.replace(api, token=args.token)
    websocket = settings.websocket
    if args.timeout and args.timeout > 0:
        websocket = dataclasses.replace(websocket, connect_timeout_s=args.timeout)
    return dataclasses.replace(settings, api=api, websocket=websocket)


def _attachments(paths: list[str]) -> list[AttachmentAsset]:
    return [
        AttachmentAsset(id=f"{LOCAL_ATTACHMENT_PREFIX}{i}", uri=str(Path(p).expanduser().resolve()))
        for i, p in enumerate(paths)
    ]


def _print_messages(session: ChatSession, count: int | None = None) -> None:
    for msg in session.messages[:count]:
        print(f"[{msg.role}] {msg.content}")


async def _turn(session: ChatSession, text: str, attachments: list[AttachmentAsset]) -> bool:
    def on_update(chunk: str) -> None:
        sys.stdout.write(chunk)
        sys.stdout.flush()

    reply = await session.send(text, attachments, on_update=on_update)
    if reply is None:
        return True
    if session.last_error is not None:
        # The streamed text (if any) was replaced by the fallback message.
        print(f"\n{reply.content}", file=sys.stderr)
        return False
    print()
    return True


async def _repl(session: ChatSession, attachments: list[AttachmentAsset]) -> int:
    loop = asyncio.get_running_loop()
    failed = False
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            break
        text = line.rstrip("\n")
        if text.strip() == CMD_QUIT:
            break
        if text.strip() == CMD_CLEAR:
            session.clear()
            print("(new conversation)")
            continue
        if text.strip() == CMD_MORE:
            loaded = await session.load_more()
            _print_messages(session, loaded)
            print(f"(loaded {loaded} older messages)")
            continue
        # --attach goes with the first message sent.
        pending, attachments = attachments, []
        if not await _turn(session, text, pending):
            failed = True
    return EXIT_TURN_FAILED if failed else EXIT_OK


async def run(
    args: argparse.Namespace,
    *,
    http_client: httpx.AsyncClient | None = None,
    connect_fn: ConnectFn | None = None,
) -> int:
    settings = build_settings(args)
    if not settings.api.base_url:
        print("CHAT_API_URL is not set; pass --base-url or export CHAT_API_URL", file=sys.stderr)
        return EXIT_CONFIG

    async with ChatSession(settings, http_client=http_client, connect_fn=connect_fn) as session:
        session.chat_id = args.chat_id
        try:
            for _ in range(max(0, args.history)):
                if not await session.load_more():
                    break
            if args.history:
                _print_messages(session)

            if args.message is not None:
                ok = await _turn(session, args.message, _attachments(args.attach))
                return EXIT_OK if ok else EXIT_TURN_FAILED
            return await _repl(session, _attachments(args.attach))
        except ConfigurationError as exc:
            print(f"configuration error: {exc}", file=sys.stderr)
            return EXIT_CONFIG


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.WARNING)
    raise SystemExit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
