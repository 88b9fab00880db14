"""Shared test fixtures for the webteizle test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from webteizle.domain.entities import (
    ExtractedVideo,
    Language,
    SearchResult,
    SourceDescriptor,
    TitleDetail,
    WatchOption,
)
from webteizle.infrastructure.http import HttpxTransport

BASE_URL = "https://webteizle.test"

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def source_descriptors() -> list[SourceDescriptor]:
    """Three sources in the order the sources endpoint returns them."""
    return [
        SourceDescriptor(id="11", name="Filemoon", quality=1080),
        SourceDescriptor(id="12", name="Vidmoly", quality=720),
        SourceDescriptor(id="13", name="Okru", quality=None),
    ]


@pytest.fixture()
def extracted_video() -> ExtractedVideo:
    return ExtractedVideo(
        video_url="https://cdn.example.com/hls/master.m3u8",
        headers={"Referer": "https://filemoon.to/"},
        is_hls=True,
    )


# ---------------------------------------------------------------------------
# Infrastructure fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking."""
    return httpx.AsyncClient()


@pytest.fixture()
def transport(http_client: httpx.AsyncClient) -> HttpxTransport:
    """Transport backed by a live primary client."""
    return HttpxTransport(http_client, timeout=5.0)


# ---------------------------------------------------------------------------
# Port mocks
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_site() -> AsyncMock:
    """AsyncMock satisfying SiteClientPort with empty defaults."""
    site = AsyncMock()
    site.search.return_value = []
    site.details.return_value = TitleDetail()
    site.episodes.return_value = []
    site.lookup_film_id.return_value = None
    site.list_sources.return_value = []
    site.lookup_embed_url.return_value = None
    return site


@pytest.fixture()
def mock_dispatcher() -> AsyncMock:
    dispatcher = AsyncMock()
    dispatcher.resolve.return_value = None
    return dispatcher


@pytest.fixture()
def sample_search_results() -> list[SearchResult]:
    return [
        SearchResult(
            title="Örnek Film",
            image=f"{BASE_URL}/uploads/ornek.jpg",
            href=f"{BASE_URL}/hakkinda/ornek-film",
        )
    ]


@pytest.fixture()
def sample_watch_options() -> list[WatchOption]:
    return [
        WatchOption(href=f"{BASE_URL}/izle/dublaj/ornek-film?fid=4321", number=1),
        WatchOption(href=f"{BASE_URL}/izle/altyazi/ornek-film?fid=4321", number=2),
    ]


@pytest.fixture()
def dublaj() -> Language:
    return Language.DUBLAJ
