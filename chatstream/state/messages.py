"""Transcript and REST result types (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class AttachmentAsset:
    id: str
    uri: str = ""
    mime_type: str | None = None
    file_name: str | None = None
    content: bytes | None = None


@dataclass(slots=True)
class ChatMessage:
    role: str
    content: str
    id: str | None = None
    attachments: list[AttachmentAsset] = field(default_factory=list)
    is_streaming: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> ChatMessage:
        raw_id = data.get("id")
        return cls(
            role=str(data.get("role") or ""),
            content=str(data.get("content") or ""),
            id=str(raw_id) if raw_id is not None else None,
            attachments=[
                AttachmentAsset(
                    id=str(att.get("id") or ""),
                    uri=str(att.get("url") or ""),
                    mime_type=att.get("mimeType"),
                    file_name=att.get("fileName"),
                )
                for att in (data.get("attachments") or [])
                if isinstance(att, dict)
            ],
        )


@dataclass(frozen=True, slots=True)
class UploadResult:
    attachment_id: str | None = None
    data: Any = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class HistoryPage:
    messages: list[ChatMessage] = field(default_factory=list)
    error: str | None = None


__all__ = [
    "AttachmentAsset",
    "ChatMessage",
    "HistoryPage",
    "UploadResult",
]
