"""Netu hoster resolver — covers the netu.tv / waaw / hqq family.

Links use either the ``netu.ac`` mirror or a ``/watch/`` path; both are
rewritten to the ``netu.tv/embed/`` player before fetching. The player
page URL doubles as the playback ``Referer``.
"""

from __future__ import annotations

from webteizle.domain.entities.stream import ExtractedVideo
from webteizle.infrastructure.common.patterns import (
    BARE_M3U8_STRICT,
    JW_FILE_M3U8,
    JW_SOURCES_FILE,
    first_match,
)

from ._base import EmbedPageResolver, looks_like_hls

_PATTERNS = (JW_FILE_M3U8, JW_SOURCES_FILE, BARE_M3U8_STRICT)

_ORIGIN = "https://netu.tv"


def normalize_netu_url(url: str) -> str:
    """Rewrite mirror domain and watch path to the embed player URL."""
    return url.replace("netu.ac", "netu.tv", 1).replace("/watch/", "/embed/", 1)


class NetuResolver(EmbedPageResolver):
    """Resolves netu/waaw/hqq embeds to HLS URLs."""

    name = "netu"

    async def resolve(self, url: str) -> ExtractedVideo | None:
        page_url = normalize_netu_url(url)
        html = await self._fetch(page_url)
        if html is None:
            return None

        video_url = first_match(html, _PATTERNS)
        if not video_url:
            self._log.warning("netu_extraction_failed", url=page_url)
            return None

        self._log.debug("netu_resolved", url=video_url[:80])
        return ExtractedVideo(
            video_url=video_url,
            headers={"Referer": page_url, "Origin": _ORIGIN},
            is_hls=looks_like_hls(video_url),
        )
