"""Streaming session connector and its wire helpers."""

from __future__ import annotations

from .outcome import OneShotOutcome
from .classifier import classify_frame
from .payload import encode_request, build_request_body
from .endpoint import build_api_url, build_ws_url
from .connector import StreamConnector, get_ws_options
from .close import state_name, is_clean_close, describe_transport_state

__all__ = [
    "OneShotOutcome",
    "StreamConnector",
    "build_api_url",
    "build_request_body",
    "build_ws_url",
    "classify_frame",
    "describe_transport_state",
    "encode_request",
    "get_ws_options",
    "is_clean_close",
    "state_name",
]
