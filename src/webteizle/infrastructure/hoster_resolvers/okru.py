"""OK.ru hoster resolver — decodes the player's ``data-options`` attribute.

The embed page stores its player configuration as HTML-entity-encoded JSON
inside a ``data-options`` attribute. Its ``flashvars.metadata`` field is a
second JSON document, encoded as a string, which holds the video list:

    data-options="{&quot;flashvars&quot;:{&quot;metadata&quot;:&quot;{\\&quot;videos\\&quot;:[...]}&quot;}}"

Decoding happens in two explicit stages (entity-unescape + parse options,
then parse metadata) so each can fail on its own.
"""

from __future__ import annotations

import json
import re
from typing import Any

from webteizle.domain.entities.stream import ExtractedVideo
from webteizle.infrastructure.common.patterns import absolutize_url, decode_html_entities

from ._base import EmbedPageResolver, looks_like_hls

_DATA_OPTIONS_RE = re.compile(r"""data-options=["']([^"']+)["']""", re.IGNORECASE)

# Named quality tiers, best first.
QUALITY_ORDER = ("ultra", "quad", "full", "hd", "sd", "low", "lowest", "mobile")

_PLAYBACK_HEADERS = {"Referer": "https://ok.ru/"}


def parse_player_options(html: str) -> dict[str, Any] | None:
    """Stage 1: locate ``data-options``, decode entities, parse the JSON."""
    m = _DATA_OPTIONS_RE.search(html or "")
    if not m:
        return None
    try:
        options = json.loads(decode_html_entities(m.group(1)))
    except ValueError:
        return None
    return options if isinstance(options, dict) else None


def parse_video_list(options: dict[str, Any]) -> list[dict[str, Any]] | None:
    """Stage 2: parse ``flashvars.metadata`` and return its ``videos`` list."""
    flashvars = options.get("flashvars")
    if not isinstance(flashvars, dict):
        return None
    raw_metadata = flashvars.get("metadata")
    if not isinstance(raw_metadata, str) or not raw_metadata:
        return None
    try:
        metadata = json.loads(raw_metadata)
    except ValueError:
        return None
    if not isinstance(metadata, dict):
        return None
    videos = metadata.get("videos")
    if not isinstance(videos, list):
        return None
    return [v for v in videos if isinstance(v, dict)] or None


def select_okru_video(videos: list[dict[str, Any]]) -> dict[str, Any] | None:
    """Pick the best entry by tier name; the first entry if no tier matches.

    Selection is by name in ``QUALITY_ORDER``, never by numeric comparison.
    """
    if not videos:
        return None
    for tier in QUALITY_ORDER:
        for video in videos:
            if video.get("name") == tier:
                return video
    return videos[0]


class OkRuResolver(EmbedPageResolver):
    """Resolves ok.ru / odnoklassniki video embeds."""

    name = "okru"

    async def resolve(self, url: str) -> ExtractedVideo | None:
        html = await self._fetch(url)
        if html is None:
            return None

        options = parse_player_options(html)
        if options is None:
            self._log.warning("okru_options_not_found", url=url)
            return None

        videos = parse_video_list(options)
        if not videos:
            self._log.warning("okru_metadata_invalid", url=url)
            return None

        best = select_okru_video(videos)
        video_url = best.get("url") if best else None
        if not isinstance(video_url, str) or not video_url:
            self._log.warning("okru_video_url_missing", url=url)
            return None

        video_url = absolutize_url(video_url)
        self._log.debug("okru_resolved", quality=best.get("name"), url=video_url[:80])
        return ExtractedVideo(
            video_url=video_url,
            headers=dict(_PLAYBACK_HEADERS),
            is_hls=looks_like_hls(video_url),
        )
