"""Shared plumbing for resolvers that fetch a provider's embed page.

Eliminates the fetch/log boilerplate every page-scraping resolver needs:
one GET with a desktop user agent and a referer, status checking, and
structured failure logging keyed by the resolver name.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from webteizle.domain.ports.http_transport import FetchResponse, HttpTransportPort

BROWSER_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
DEFAULT_SITE_URL = "https://webteizle3.xyz"


def looks_like_hls(url: str) -> bool:
    return ".m3u8" in url.lower()


class EmbedPageResolver:
    """Base for resolvers that scrape a provider page.

    Subclasses **must** set ``name`` and implement ``resolve()``.
    The site URL is sent as ``Referer`` unless a call overrides it.
    """

    name: str = ""

    def __init__(
        self,
        transport: HttpTransportPort,
        *,
        site_url: str = DEFAULT_SITE_URL,
        user_agent: str = BROWSER_UA,
    ) -> None:
        self._transport = transport
        self._site_url = site_url
        self._user_agent = user_agent
        self._log = structlog.get_logger(f"webteizle.hoster.{self.name}")

    async def _fetch(
        self,
        url: str,
        *,
        referer: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str | None:
        """GET *url* and return the body, or ``None`` on any failure."""
        request_headers = {
            "Referer": referer if referer is not None else self._site_url,
            "User-Agent": self._user_agent,
        }
        request_headers.update(headers or {})

        resp = await self._transport.request("GET", url, headers=request_headers)
        return self._body_or_none(resp, url)

    def _body_or_none(self, resp: FetchResponse | None, url: str) -> str | None:
        if resp is None:
            self._log.warning(f"{self.name}_request_failed", url=url)
            return None
        if not resp.ok:
            self._log.warning(f"{self.name}_http_error", status=resp.status_code, url=url)
            return None
        if not resp.text:
            self._log.warning(f"{self.name}_empty_response", url=url)
            return None
        return resp.text
