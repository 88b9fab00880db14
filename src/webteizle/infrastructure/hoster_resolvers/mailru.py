"""Mail.ru hoster resolver — two-hop resolution via the ``metaUrl`` JSON.

1. The embed page references a metadata URL (often scheme-relative).
2. The metadata JSON lists the available videos, lowest quality first;
   the last entry is taken.
"""

from __future__ import annotations

import json
import re
from typing import Any

from webteizle.domain.entities.stream import ExtractedVideo
from webteizle.infrastructure.common.patterns import absolutize_url

from ._base import EmbedPageResolver, looks_like_hls

_META_URL_RE = re.compile(
    r"""["']metaUrl["']\s*:\s*["']([^"']+)["']""", re.IGNORECASE
)

_PLAYBACK_HEADERS = {
    "Referer": "https://my.mail.ru/",
    "Origin": "https://my.mail.ru",
}


def select_mailru_video(videos: list[Any]) -> dict[str, Any] | None:
    """Pick the last entry of the video list (assumed ascending quality)."""
    if not videos or not isinstance(videos[-1], dict):
        return None
    return videos[-1]


class MailRuResolver(EmbedPageResolver):
    """Resolves my.mail.ru video embeds."""

    name = "mailru"

    async def resolve(self, url: str) -> ExtractedVideo | None:
        html = await self._fetch(url)
        if html is None:
            return None

        m = _META_URL_RE.search(html)
        if not m:
            self._log.warning("mailru_meta_url_not_found", url=url)
            return None
        meta_url = absolutize_url(m.group(1))

        body = await self._fetch(
            meta_url,
            referer=_PLAYBACK_HEADERS["Referer"],
            headers={"Accept": "application/json"},
        )
        if body is None:
            return None

        try:
            meta = json.loads(body)
        except ValueError:
            self._log.warning("mailru_meta_invalid_json", url=meta_url)
            return None

        videos = meta.get("videos") if isinstance(meta, dict) else None
        best = select_mailru_video(videos) if isinstance(videos, list) else None
        video_url = best.get("url") if best else None
        if not isinstance(video_url, str) or not video_url:
            self._log.warning("mailru_video_url_missing", url=meta_url)
            return None

        video_url = absolutize_url(video_url)
        self._log.debug("mailru_resolved", key=best.get("key"), url=video_url[:80])
        return ExtractedVideo(
            video_url=video_url,
            headers=dict(_PLAYBACK_HEADERS),
            is_hls=looks_like_hls(video_url),
        )
