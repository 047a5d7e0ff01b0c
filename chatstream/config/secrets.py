"""Secrets and authentication configuration."""

from __future__ import annotations

import os

ENV_API_TOKEN = "CHAT_API_TOKEN"


def get_api_token() -> str | None:
    token = (os.getenv(ENV_API_TOKEN) or "").strip()
    return token or None


__all__ = ["ENV_API_TOKEN", "get_api_token"]
