"""Filemoon hoster resolver — extracts HLS URLs from filemoon download pages.

Embed links arrive as ``/e/{id}`` on several TLDs (filemoon.sx, filemoon.in,
filemoon.to). The ``/d/{id}`` download page on filemoon.to carries the
JWPlayer config, so the embed URL is rewritten before fetching.
"""

from __future__ import annotations

from webteizle.domain.entities.stream import ExtractedVideo
from webteizle.infrastructure.common.patterns import BARE_M3U8, JW_FILE_M3U8, first_match

from ._base import EmbedPageResolver, looks_like_hls

_CANONICAL_DOMAIN = "filemoon.to"
_DOMAIN_ALIASES = ("filemoon.in", "filemoon.sx")

_PATTERNS = (JW_FILE_M3U8, BARE_M3U8)

_PLAYBACK_HEADERS = {
    "Referer": "https://filemoon.to/",
    "Origin": "https://filemoon.to",
}


def normalize_filemoon_url(url: str) -> str:
    """Rewrite an embed URL to the canonical-domain ``/d/`` page."""
    url = url.replace("/e/", "/d/", 1)
    for alias in _DOMAIN_ALIASES:
        url = url.replace(alias, _CANONICAL_DOMAIN, 1)
    return url


class FilemoonResolver(EmbedPageResolver):
    """Resolves Filemoon embed pages to playable HLS URLs."""

    name = "filemoon"

    async def resolve(self, url: str) -> ExtractedVideo | None:
        page_url = normalize_filemoon_url(url)
        # Filemoon checks that the download page is opened from its own embed.
        html = await self._fetch(page_url, referer=url)
        if html is None:
            return None

        video_url = first_match(html, _PATTERNS)
        if not video_url:
            self._log.warning("filemoon_extraction_failed", url=page_url)
            return None

        self._log.debug("filemoon_resolved", url=video_url[:80])
        return ExtractedVideo(
            video_url=video_url,
            headers=dict(_PLAYBACK_HEADERS),
            is_hls=looks_like_hls(video_url),
        )
