"""PixelDrain hoster resolver — synthesizes the download API URL.

No request is made: ``https://pixeldrain.com/u/{file_id}`` maps directly to
``https://pixeldrain.com/api/file/{file_id}?download``.
"""

from __future__ import annotations

import re

import structlog

from webteizle.domain.entities.stream import ExtractedVideo

log = structlog.get_logger(__name__)

_FILE_ID_RE = re.compile(r"/u/([a-zA-Z0-9]+)")

_DOWNLOAD_URL = "https://pixeldrain.com/api/file/{file_id}?download"


def extract_file_id(url: str) -> str | None:
    m = _FILE_ID_RE.search(url or "")
    return m.group(1) if m else None


class PixelDrainResolver:
    """Resolves pixeldrain share links without touching the network."""

    @property
    def name(self) -> str:
        return "pixeldrain"

    async def resolve(self, url: str) -> ExtractedVideo | None:
        file_id = extract_file_id(url)
        if not file_id:
            log.warning("pixeldrain_invalid_url", url=url)
            return None
        return ExtractedVideo(video_url=_DOWNLOAD_URL.format(file_id=file_id))
