"""Vidmoly hoster resolver — reads the JWPlayer ``sources`` array."""

from __future__ import annotations

from webteizle.domain.entities.stream import ExtractedVideo
from webteizle.infrastructure.common.patterns import (
    FILE_HTTP_M3U8,
    JW_SOURCES_FILE,
    first_match,
)

from ._base import EmbedPageResolver, looks_like_hls

_PATTERNS = (JW_SOURCES_FILE, FILE_HTTP_M3U8)

_PLAYBACK_HEADERS = {
    "Referer": "https://vidmoly.to/",
    "Origin": "https://vidmoly.to",
}


class VidmolyResolver(EmbedPageResolver):
    """Resolves vidmoly embed pages (vidmoly.to, vidmoly.me, ...)."""

    name = "vidmoly"

    async def resolve(self, url: str) -> ExtractedVideo | None:
        html = await self._fetch(url)
        if html is None:
            return None

        video_url = first_match(html, _PATTERNS)
        if not video_url:
            self._log.warning("vidmoly_extraction_failed", url=url)
            return None

        self._log.debug("vidmoly_resolved", url=video_url[:80])
        return ExtractedVideo(
            video_url=video_url,
            headers=dict(_PLAYBACK_HEADERS),
            is_hls=looks_like_hls(video_url),
        )
