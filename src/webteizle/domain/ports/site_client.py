"""Port for the upstream site's AJAX endpoints."""

from __future__ import annotations

from typing import Protocol

from webteizle.domain.entities.catalog import (
    Language,
    SearchResult,
    SourceDescriptor,
    TitleDetail,
    WatchOption,
)


class SiteClientPort(Protocol):
    """Scrapes search results, metadata and source lists from the site."""

    async def search(self, keyword: str) -> list[SearchResult]: ...

    async def details(self, url: str) -> TitleDetail: ...

    async def episodes(self, url: str) -> list[WatchOption]: ...

    async def lookup_film_id(self, url: str) -> str | None:
        """Resolve the numeric film id for a detail or watch page URL."""
        ...

    async def list_sources(
        self, film_id: str, language: Language, referer: str
    ) -> list[SourceDescriptor]: ...

    async def lookup_embed_url(self, source_id: str) -> str | None:
        """Return the provider iframe URL for one source descriptor."""
        ...
