"""Fallback resolver for embed providers without a dedicated strategy.

Applies the common JWPlayer/m3u8 patterns plus a final ``.mp4`` pattern and
derives the playback ``Referer`` from the embed URL's own origin.
"""

from __future__ import annotations

from webteizle.domain.entities.stream import ExtractedVideo
from webteizle.infrastructure.common.patterns import (
    BARE_M3U8_STRICT,
    BARE_MP4,
    JW_FILE_M3U8,
    JW_SOURCES_FILE,
    first_match,
    origin_of,
)

from ._base import EmbedPageResolver, looks_like_hls

_PATTERNS = (JW_FILE_M3U8, JW_SOURCES_FILE, BARE_M3U8_STRICT, BARE_MP4)


class GenericResolver(EmbedPageResolver):
    """Best-effort resolver used when no provider family matches."""

    name = "generic"

    async def resolve(self, url: str) -> ExtractedVideo | None:
        html = await self._fetch(url)
        if html is None:
            return None

        video_url = first_match(html, _PATTERNS)
        if not video_url:
            self._log.info("generic_extraction_failed", url=url)
            return None

        origin = origin_of(url)
        return ExtractedVideo(
            video_url=video_url,
            headers={"Referer": origin + "/"} if origin else {},
            is_hls=looks_like_hls(video_url),
        )
