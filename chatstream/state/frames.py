"""Inbound frame kinds produced by the frame classifier."""

from __future__ import annotations

from typing import Union
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SessionIdNotice:
    """Server-assigned identifier for a newly created conversation."""

    session_id: str


@dataclass(frozen=True, slots=True)
class CompletionSentinel:
    """Terminal marker; no further fragments follow."""


@dataclass(frozen=True, slots=True)
class ErrorNotice:
    raw: str


@dataclass(frozen=True, slots=True)
class TextFragment:
    text: str


InboundFrame = Union[SessionIdNotice, CompletionSentinel, ErrorNotice, TextFragment]

# What the connector hands to the fragment callback.
Fragment = Union[SessionIdNotice, TextFragment]

__all__ = [
    "CompletionSentinel",
    "ErrorNotice",
    "Fragment",
    "InboundFrame",
    "SessionIdNotice",
    "TextFragment",
]
