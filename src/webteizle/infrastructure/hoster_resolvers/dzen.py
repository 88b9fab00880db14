"""Dzen hoster resolver — dzen.ru / zen.yandex video embeds.

The embed page inlines a ``"streams":[{"type": ..., "url": ...}]`` array.
An HLS entry is preferred, otherwise the first entry. Pages without a
usable array sometimes still reference the VK CDN playlist directly.
"""

from __future__ import annotations

import json
import re
from typing import Any

from webteizle.domain.entities.stream import ExtractedVideo

from ._base import EmbedPageResolver, looks_like_hls

_STREAMS_RE = re.compile(r'"streams"\s*:\s*(\[[^\]]+\])')
_VK_HLS_RE = re.compile(
    r"""(https?://[^"'\s]+vkuser\.net/video\.m3u8[^"'\s]*)""", re.IGNORECASE
)

_PLAYBACK_HEADERS = {
    "Referer": "https://dzen.ru/",
    "Origin": "https://dzen.ru",
}
_VK_PLAYBACK_HEADERS = {"Referer": "https://dzen.ru/"}


def parse_streams(html: str) -> list[dict[str, Any]] | None:
    """Extract and decode the inline ``streams`` array."""
    m = _STREAMS_RE.search(html or "")
    if not m:
        return None
    try:
        streams = json.loads(m.group(1))
    except ValueError:
        return None
    if not isinstance(streams, list):
        return None
    return [s for s in streams if isinstance(s, dict)]


def select_dzen_stream(streams: list[dict[str, Any]]) -> dict[str, Any] | None:
    """Prefer the entry tagged ``hls``; fall back to the first entry."""
    for stream in streams:
        if stream.get("type") == "hls":
            return stream
    return streams[0] if streams else None


class DzenResolver(EmbedPageResolver):
    """Resolves dzen / zen.yandex embeds."""

    name = "dzen"

    async def resolve(self, url: str) -> ExtractedVideo | None:
        html = await self._fetch(url)
        if html is None:
            return None

        streams = parse_streams(html)
        if streams:
            chosen = select_dzen_stream(streams)
            video_url = chosen.get("url") if chosen else None
            if isinstance(video_url, str) and video_url:
                self._log.debug(
                    "dzen_resolved", type=chosen.get("type"), url=video_url[:80]
                )
                return ExtractedVideo(
                    video_url=video_url,
                    headers=dict(_PLAYBACK_HEADERS),
                    is_hls=looks_like_hls(video_url) or chosen.get("type") == "hls",
                )

        m = _VK_HLS_RE.search(html)
        if m:
            self._log.debug("dzen_vk_fallback", url=m.group(1)[:80])
            return ExtractedVideo(
                video_url=m.group(1),
                headers=dict(_VK_PLAYBACK_HEADERS),
                is_hls=True,
            )

        self._log.warning("dzen_extraction_failed", url=url)
        return None
