"""Outgoing stream request (dataclass only)."""

from __future__ import annotations

from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class StreamRequest:
    message: str
    attachment_ids: tuple[str | None, ...] = field(default_factory=tuple)
    chat_id: str = ""
    token: str | None = None


__all__ = ["StreamRequest"]
