"""Tests for ResolveStreamsUseCase."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from webteizle.application.use_cases.resolve_streams import (
    ResolveStreamsUseCase,
    film_id_from_url,
    language_from_url,
)
from webteizle.domain.entities import (
    ExtractedVideo,
    Language,
    ResolvedStream,
    SourceDescriptor,
)

_BASE = "https://webteizle.test"
_WATCH = f"{_BASE}/izle/dublaj/ornek-film?fid=4321"


def _embed_for(source_id: str) -> str:
    return f"https://embed.example/{source_id}"


def _video_for(source_id: str) -> ExtractedVideo:
    return ExtractedVideo(
        video_url=f"https://cdn.example/{source_id}.m3u8",
        headers={"Referer": f"https://embed.example/{source_id}"},
        is_hls=True,
    )


def _wire(
    site: AsyncMock,
    dispatcher: AsyncMock,
    sources: list[SourceDescriptor],
    failing: frozenset[str] | set[str] = frozenset(),
) -> None:
    """Make every source resolvable except those in *failing*."""
    site.list_sources.return_value = sources

    async def _lookup(source_id: str) -> str | None:
        return _embed_for(source_id)

    async def _resolve(url: str) -> ExtractedVideo | None:
        source_id = url.rsplit("/", 1)[-1]
        return None if source_id in failing else _video_for(source_id)

    site.lookup_embed_url.side_effect = _lookup
    dispatcher.resolve.side_effect = _resolve


# ---------------------------------------------------------------------------
# URL helpers
# ---------------------------------------------------------------------------


class TestFilmIdFromUrl:
    def test_query_param(self) -> None:
        assert film_id_from_url(_WATCH) == "4321"

    def test_not_first_param(self) -> None:
        assert film_id_from_url(f"{_BASE}/izle/dublaj/x?a=1&fid=9") == "9"

    def test_absent(self) -> None:
        assert film_id_from_url(f"{_BASE}/izle/dublaj/x") is None


class TestLanguageFromUrl:
    def test_altyazi(self) -> None:
        assert language_from_url(f"{_BASE}/izle/altyazi/x") is Language.ALTYAZI

    def test_dublaj(self) -> None:
        assert language_from_url(f"{_BASE}/izle/dublaj/x") is Language.DUBLAJ

    def test_ambiguous_defaults_to_dublaj(self) -> None:
        assert language_from_url(f"{_BASE}/hakkinda/x") is Language.DUBLAJ

    def test_both_segments_prefer_dublaj(self) -> None:
        url = f"{_BASE}/izle/dublaj/film?ref=/altyazi/"
        assert language_from_url(url) is Language.DUBLAJ


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


class TestResolveStreamsUseCase:
    @pytest.mark.asyncio()
    async def test_failed_source_is_omitted_in_order(
        self,
        mock_site: AsyncMock,
        mock_dispatcher: AsyncMock,
        source_descriptors: list[SourceDescriptor],
    ) -> None:
        _wire(mock_site, mock_dispatcher, source_descriptors, failing={"12"})
        uc = ResolveStreamsUseCase(mock_site, mock_dispatcher)

        streams = await uc.execute(_WATCH)

        assert streams == [
            ResolvedStream(
                title="Filemoon 1080p",
                stream_url="https://cdn.example/11.m3u8",
                headers={"Referer": "https://embed.example/11"},
            ),
            ResolvedStream(
                title="Okru",
                stream_url="https://cdn.example/13.m3u8",
                headers={"Referer": "https://embed.example/13"},
            ),
        ]
        mock_site.lookup_film_id.assert_not_awaited()
        mock_site.list_sources.assert_awaited_once_with("4321", Language.DUBLAJ, _WATCH)

    @pytest.mark.asyncio()
    async def test_film_id_looked_up_when_missing(
        self,
        mock_site: AsyncMock,
        mock_dispatcher: AsyncMock,
        source_descriptors: list[SourceDescriptor],
    ) -> None:
        _wire(mock_site, mock_dispatcher, source_descriptors)
        mock_site.lookup_film_id.return_value = "555"
        url = f"{_BASE}/izle/altyazi/ornek-film"
        uc = ResolveStreamsUseCase(mock_site, mock_dispatcher)

        streams = await uc.execute(url)

        assert streams is not None
        assert len(streams) == 3
        mock_site.lookup_film_id.assert_awaited_once_with(url)
        mock_site.list_sources.assert_awaited_once_with("555", Language.ALTYAZI, url)

    @pytest.mark.asyncio()
    async def test_no_film_id(
        self, mock_site: AsyncMock, mock_dispatcher: AsyncMock
    ) -> None:
        uc = ResolveStreamsUseCase(mock_site, mock_dispatcher)

        assert await uc.execute(f"{_BASE}/izle/dublaj/x") is None
        mock_site.list_sources.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_no_sources(
        self, mock_site: AsyncMock, mock_dispatcher: AsyncMock
    ) -> None:
        uc = ResolveStreamsUseCase(mock_site, mock_dispatcher)

        assert await uc.execute(_WATCH) is None
        mock_dispatcher.resolve.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_all_sources_fail(
        self,
        mock_site: AsyncMock,
        mock_dispatcher: AsyncMock,
        source_descriptors: list[SourceDescriptor],
    ) -> None:
        _wire(
            mock_site, mock_dispatcher, source_descriptors, failing={"11", "12", "13"}
        )
        uc = ResolveStreamsUseCase(mock_site, mock_dispatcher)

        assert await uc.execute(_WATCH) is None

    @pytest.mark.asyncio()
    async def test_missing_embed_skips_dispatch(
        self,
        mock_site: AsyncMock,
        mock_dispatcher: AsyncMock,
        source_descriptors: list[SourceDescriptor],
    ) -> None:
        mock_site.list_sources.return_value = source_descriptors[:1]
        mock_site.lookup_embed_url.return_value = None
        uc = ResolveStreamsUseCase(mock_site, mock_dispatcher)

        assert await uc.execute(_WATCH) is None
        mock_dispatcher.resolve.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_unexpected_exception_is_contained(
        self,
        mock_site: AsyncMock,
        mock_dispatcher: AsyncMock,
        source_descriptors: list[SourceDescriptor],
    ) -> None:
        _wire(mock_site, mock_dispatcher, source_descriptors)

        async def _lookup(source_id: str) -> str:
            if source_id == "11":
                raise RuntimeError("boom")
            return _embed_for(source_id)

        mock_site.lookup_embed_url.side_effect = _lookup
        uc = ResolveStreamsUseCase(mock_site, mock_dispatcher)

        streams = await uc.execute(_WATCH)

        assert streams is not None
        assert [s.stream_url for s in streams] == [
            "https://cdn.example/12.m3u8",
            "https://cdn.example/13.m3u8",
        ]

    @pytest.mark.asyncio()
    async def test_parallel_preserves_source_order(
        self,
        mock_site: AsyncMock,
        mock_dispatcher: AsyncMock,
        source_descriptors: list[SourceDescriptor],
    ) -> None:
        _wire(mock_site, mock_dispatcher, source_descriptors, failing={"12"})
        delays = {"11": 0.03, "13": 0.0}

        async def _resolve(url: str) -> ExtractedVideo | None:
            source_id = url.rsplit("/", 1)[-1]
            await asyncio.sleep(delays.get(source_id, 0.0))
            return None if source_id == "12" else _video_for(source_id)

        mock_dispatcher.resolve.side_effect = _resolve
        uc = ResolveStreamsUseCase(
            mock_site,
            mock_dispatcher,
            parallel_sources=True,
            max_concurrent_sources=3,
        )

        streams = await uc.execute(_WATCH)

        assert streams is not None
        assert [s.title for s in streams] == ["Filemoon 1080p", "Okru"]

    @pytest.mark.asyncio()
    async def test_parallel_respects_concurrency_limit(
        self, mock_site: AsyncMock, mock_dispatcher: AsyncMock
    ) -> None:
        sources = [SourceDescriptor(id=str(i), name=f"S{i}") for i in range(6)]
        _wire(mock_site, mock_dispatcher, sources)
        in_flight = 0
        peak = 0

        async def _resolve(url: str) -> ExtractedVideo:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return _video_for(url.rsplit("/", 1)[-1])

        mock_dispatcher.resolve.side_effect = _resolve
        uc = ResolveStreamsUseCase(
            mock_site,
            mock_dispatcher,
            parallel_sources=True,
            max_concurrent_sources=2,
        )

        streams = await uc.execute(_WATCH)

        assert streams is not None
        assert len(streams) == 6
        assert peak <= 2
