"""Catalog use case — search, title details and watch options."""

from __future__ import annotations

import structlog

from webteizle.domain.entities.catalog import (
    UNEXPECTED_ERROR,
    SearchResult,
    TitleDetail,
    WatchOption,
)
from webteizle.domain.ports.site_client import SiteClientPort

log = structlog.get_logger(__name__)


class CatalogUseCase:
    """Provides catalog data scraped from the site.

    Delegates all HTTP/parsing work to the injected SiteClientPort;
    unexpected errors are logged and degrade to empty results.
    """

    def __init__(self, site: SiteClientPort) -> None:
        self._site = site

    async def search(self, keyword: str) -> list[SearchResult]:
        keyword = keyword.strip()
        if not keyword:
            return []
        try:
            return await self._site.search(keyword)
        except Exception:
            log.warning("catalog_search_error", keyword=keyword, exc_info=True)
            return []

    async def details(self, url: str) -> TitleDetail:
        try:
            return await self._site.details(url)
        except Exception:
            log.warning("catalog_details_error", url=url, exc_info=True)
            return TitleDetail(description=UNEXPECTED_ERROR)

    async def episodes(self, url: str) -> list[WatchOption]:
        try:
            return await self._site.episodes(url)
        except Exception:
            log.warning("catalog_episodes_error", url=url, exc_info=True)
            return []
