from __future__ import annotations

from .settings import make_settings
from .transport import FakeConnect, FakeConnection

__all__ = ["FakeConnect", "FakeConnection", "make_settings"]
