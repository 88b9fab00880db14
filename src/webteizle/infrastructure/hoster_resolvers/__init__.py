"""Hoster resolver implementations for extracting playable video URLs."""

from __future__ import annotations

from .factory import create_all_resolvers
from .registry import HosterResolverRegistry, classify_embed_url

__all__ = ["HosterResolverRegistry", "classify_embed_url", "create_all_resolvers"]
