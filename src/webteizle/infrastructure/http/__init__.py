from __future__ import annotations

from .transport import HttpxTransport

__all__ = ["HttpxTransport"]
