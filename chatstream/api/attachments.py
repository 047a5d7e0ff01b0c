"""Attachment upload collaborator."""

from __future__ import annotations

import random
import asyncio
import logging
from pathlib import Path
from urllib.parse import unquote, urlparse

import httpx

from chatstream.state.messages import UploadResult, AttachmentAsset
from chatstream.config.api import API_UPLOAD_PATH, API_UPLOAD_FIELD, UPLOAD_FAILED_MESSAGE, API_KEY_ATTACHMENT_ID

from .mime import get_mime_type
from .client import auth_headers
from .errors import extract_error_message

logger = logging.getLogger(__name__)


def _local_path(uri: str) -> Path:
    if uri.startswith("file://"):
        return Path(unquote(urlparse(uri).path))
    return Path(uri).expanduser()


def _default_file_name(uri: str, extension: str) -> str:
    name = uri.rstrip("/").rsplit("/", 1)[-1] if uri else ""
    if name:
        return name
    name = f"file{random.randint(1000, 9999)}"
    return f"{name}.{extension}" if extension else name


async def _read_asset(asset: AttachmentAsset) -> tuple[str, bytes, str]:
    if asset.content is not None:
        guessed_type, extension = get_mime_type(asset.file_name or asset.uri)
        file_name = asset.file_name or _default_file_name(asset.uri, extension)
        return file_name, asset.content, asset.mime_type or guessed_type

    if not asset.uri:
        raise ValueError("Invalid asset: no file or URI provided")

    path = _local_path(asset.uri)
    mime_type, extension = get_mime_type(path.name)
    content = await asyncio.to_thread(path.read_bytes)
    return asset.file_name or _default_file_name(path.as_posix(), extension), content, mime_type


async def upload_attachment(client: httpx.AsyncClient, token: str | None, asset: AttachmentAsset) -> UploadResult:
    try:
        file_name, content, mime_type = await _read_asset(asset)
        response = await client.post(
            API_UPLOAD_PATH,
            files={API_UPLOAD_FIELD: (file_name, content, mime_type)},
            headers=auth_headers(token),
        )
        response.raise_for_status()
        data = response.json()
    except Exception as exc:
        error = extract_error_message(exc, fallback=UPLOAD_FAILED_MESSAGE)
        logger.error("upload failed asset=%s: %s", asset.id, error)
        return UploadResult(error=error)

    attachment_id = data.get(API_KEY_ATTACHMENT_ID) if isinstance(data, dict) else None
    return UploadResult(
        attachment_id=str(attachment_id) if attachment_id is not None else None,
        data=data,
    )


__all__ = ["upload_attachment"]
