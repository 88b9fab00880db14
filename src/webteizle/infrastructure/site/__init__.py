"""Client for the upstream site's AJAX endpoints."""

from __future__ import annotations

from .client import WebteizleClient

__all__ = ["WebteizleClient"]
