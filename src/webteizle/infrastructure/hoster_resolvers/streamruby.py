"""StreamRuby hoster resolver — streamruby.com and its rubyvidhub.com player."""

from __future__ import annotations

from webteizle.domain.entities.stream import ExtractedVideo
from webteizle.infrastructure.common.patterns import (
    BARE_M3U8,
    JW_SOURCES_FILE,
    first_match,
)

from ._base import EmbedPageResolver, looks_like_hls

_PATTERNS = (JW_SOURCES_FILE, BARE_M3U8)

_PLAYBACK_HEADERS = {
    "Referer": "https://rubyvidhub.com/",
    "Origin": "https://rubyvidhub.com",
}


class StreamRubyResolver(EmbedPageResolver):
    """Resolves streamruby / rubyvidhub embed pages."""

    name = "streamruby"

    async def resolve(self, url: str) -> ExtractedVideo | None:
        html = await self._fetch(url)
        if html is None:
            return None

        video_url = first_match(html, _PATTERNS)
        if not video_url:
            self._log.warning("streamruby_extraction_failed", url=url)
            return None

        self._log.debug("streamruby_resolved", url=video_url[:80])
        return ExtractedVideo(
            video_url=video_url,
            headers=dict(_PLAYBACK_HEADERS),
            is_hls=looks_like_hls(video_url),
        )
