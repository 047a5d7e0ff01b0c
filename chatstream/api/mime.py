"""Content-type inference for attachment uploads."""

from __future__ import annotations

from chatstream.config.api import DEFAULT_MIME_TYPE, MIME_TYPES_BY_EXTENSION


def get_extension(uri: str) -> str:
    name = (uri or "").rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def get_mime_type(uri: str) -> tuple[str, str]:
    """Return ``(mime_type, extension)`` for a path or URI."""
    extension = get_extension(uri)
    return MIME_TYPES_BY_EXTENSION.get(extension, DEFAULT_MIME_TYPE), extension


__all__ = ["get_extension", "get_mime_type"]
