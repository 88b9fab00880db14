"""Stream resolution use case.

watch URL -> film id + language -> source list
-> (per source) embed lookup -> dispatcher -> ResolvedStream list.
"""

from __future__ import annotations

import asyncio
import re

import structlog

from webteizle.domain.entities.catalog import Language, SourceDescriptor
from webteizle.domain.entities.stream import ResolvedStream, stream_title
from webteizle.domain.ports.hoster_resolver import EmbedDispatcherPort
from webteizle.domain.ports.site_client import SiteClientPort

log = structlog.get_logger(__name__)

_FID_RE = re.compile(r"[?&]fid=(\d+)")


def film_id_from_url(url: str) -> str | None:
    """Return the ``fid`` query value of a watch URL, if present."""
    m = _FID_RE.search(url or "")
    return m.group(1) if m else None


def language_from_url(url: str) -> Language:
    """Infer the track from the ``/dublaj/`` and ``/altyazi/`` path segments.

    Subtitled only when ``/altyazi/`` is present and ``/dublaj/`` is not.
    Everything else is dubbed; URLs carrying both segments or neither are
    logged.
    """
    dublaj = "/dublaj/" in url
    altyazi = "/altyazi/" in url
    if altyazi and not dublaj:
        return Language.ALTYAZI
    if dublaj == altyazi:
        log.info("language_ambiguous", url=url, default=Language.DUBLAJ.name)
    return Language.DUBLAJ


class ResolveStreamsUseCase:
    """Turns a watch page URL into the playable streams of its sources.

    Sources are resolved one after another unless *parallel_sources* is
    set, in which case up to *max_concurrent_sources* run at once. Result
    order always follows the source list.
    """

    def __init__(
        self,
        site: SiteClientPort,
        dispatcher: EmbedDispatcherPort,
        *,
        parallel_sources: bool = False,
        max_concurrent_sources: int = 4,
    ) -> None:
        self._site = site
        self._dispatcher = dispatcher
        self._parallel = parallel_sources
        self._max_concurrent = max(1, max_concurrent_sources)

    async def execute(self, watch_url: str) -> list[ResolvedStream] | None:
        """Return the resolved streams, or ``None`` when there are none."""
        film_id = film_id_from_url(watch_url)
        if film_id is None:
            film_id = await self._site.lookup_film_id(watch_url)
        if not film_id:
            log.warning("streams_film_id_not_found", url=watch_url)
            return None

        language = language_from_url(watch_url)
        sources = await self._site.list_sources(film_id, language, watch_url)
        if not sources:
            log.info("streams_no_sources", film_id=film_id, language=language.name)
            return None

        if self._parallel:
            results = await self._resolve_parallel(sources)
        else:
            results = [await self._resolve_source(source) for source in sources]

        streams = [stream for stream in results if stream is not None]
        log.info(
            "streams_resolved",
            film_id=film_id,
            sources=len(sources),
            streams=len(streams),
        )
        return streams or None

    async def _resolve_parallel(
        self, sources: list[SourceDescriptor]
    ) -> list[ResolvedStream | None]:
        semaphore = asyncio.Semaphore(self._max_concurrent)

        async def _bounded(source: SourceDescriptor) -> ResolvedStream | None:
            async with semaphore:
                return await self._resolve_source(source)

        return list(await asyncio.gather(*(_bounded(s) for s in sources)))

    async def _resolve_source(self, source: SourceDescriptor) -> ResolvedStream | None:
        """Resolve one source; every failure yields ``None``."""
        try:
            embed_url = await self._site.lookup_embed_url(source.id)
            if not embed_url:
                log.info("source_embed_missing", source_id=source.id)
                return None

            video = await self._dispatcher.resolve(embed_url)
            if video is None or not video.video_url:
                log.info(
                    "source_unresolved", source_id=source.id, embed_url=embed_url
                )
                return None

            return ResolvedStream(
                title=stream_title(source.name, source.quality),
                stream_url=video.video_url,
                headers=dict(video.headers),
            )
        except Exception:
            log.exception("source_resolve_error", source_id=source.id)
            return None
