"""Port for resolving provider embed URLs to playable video URLs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from webteizle.domain.entities.stream import ExtractedVideo


@runtime_checkable
class HosterResolverPort(Protocol):
    """Resolves a provider embed page URL to an actual video stream URL.

    Implementations handle provider-specific extraction logic (URL
    rewriting, pattern scraping, nested JSON decoding).
    """

    @property
    def name(self) -> str:
        """Provider family this resolver handles (e.g. 'filemoon', 'okru')."""
        ...

    async def resolve(self, url: str) -> ExtractedVideo | None:
        """Resolve an embed URL to a playable video URL.

        Returns None if resolution fails (page offline, pattern missing, etc.).
        Must not raise.
        """
        ...


class EmbedDispatcherPort(Protocol):
    """Routes an embed URL to the resolver for its provider family."""

    async def resolve(self, url: str) -> ExtractedVideo | None: ...
