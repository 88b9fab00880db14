"""Scraping client for the webteizle AJAX endpoints.

Every public method degrades to an empty result (``[]``, ``None`` or a
``TitleDetail`` carrying a Turkish fallback message) instead of raising.
Transport failures, payload-shape failures and missing markers are only
distinguished in the logs.
"""

from __future__ import annotations

import json
import re
from typing import Any
from urllib.parse import urlencode

import structlog

from webteizle.domain.entities.catalog import (
    LOAD_FAILED,
    NO_DESCRIPTION,
    NOT_FOUND,
    UNEXPECTED_ERROR,
    Language,
    SearchResult,
    SourceDescriptor,
    TitleDetail,
    WatchOption,
)
from webteizle.domain.ports.http_transport import FetchResponse, HttpTransportPort
from webteizle.infrastructure.common.html_selectors import (
    extract_all_texts,
    extract_inner_html,
    parse_html,
)
from webteizle.infrastructure.common.parsers import (
    clean_html,
    clean_title,
    extract_slug_from_url,
    normalize_image_url,
)
from webteizle.infrastructure.common.patterns import extract_iframe_src

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://webteizle3.xyz"
MOBILE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 "
    "Mobile/15E148 Safari/604.1"
)

_FILM_ID_RE = re.compile(r"""data-id=["'](\d+)["']""")
_DUBLAJ_LINK_RE = re.compile(r"""href=["']([^"']*/izle/dublaj/[^"']+)["']""", re.I)
_ALTYAZI_LINK_RE = re.compile(r"""href=["']([^"']*/izle/altyazi/[^"']+)["']""", re.I)
_YEAR_RE = re.compile(r"\((\d{4})\)")
_DURATION_RE = re.compile(r"(\d+)\s*(dakika|min)", re.I)
_IMDB_RE = re.compile(r"imdb[^>]*>[\s\S]*?(\d+[,\.]\d+)", re.I)


def _to_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class WebteizleClient:
    """Implements ``SiteClientPort`` on top of an ``HttpTransportPort``."""

    def __init__(
        self,
        transport: HttpTransportPort,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = MOBILE_UA,
    ) -> None:
        self._transport = transport
        self.base_url = base_url.rstrip("/")
        self._user_agent = user_agent

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    def _headers(self, *, referer: str, accept: str | None = None) -> dict[str, str]:
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "X-Requested-With": "XMLHttpRequest",
            "Referer": referer,
            "Origin": self.base_url,
            "User-Agent": self._user_agent,
            "Accept-Language": "tr-TR,tr;q=0.9,en-US;q=0.8,en;q=0.7",
        }
        if accept:
            headers["Accept"] = accept
        return headers

    async def _post(
        self,
        path: str,
        *,
        referer: str,
        body: str | None = None,
        accept: str | None = None,
    ) -> str | None:
        """POST to a site endpoint; return the body or ``None`` on failure."""
        url = f"{self.base_url}{path}"
        resp: FetchResponse | None = await self._transport.request(
            "POST",
            url,
            headers=self._headers(referer=referer, accept=accept),
            data=body,
        )
        if resp is None:
            log.warning("site_request_failed", url=url)
            return None
        if not resp.ok:
            log.warning("site_http_error", url=url, status=resp.status_code)
            return None
        if not resp.text:
            log.warning("site_empty_response", url=url)
            return None
        return resp.text

    async def _post_json(
        self,
        path: str,
        *,
        referer: str,
        body: str,
    ) -> dict[str, Any] | None:
        text = await self._post(
            path,
            referer=referer,
            body=body,
            accept="application/json, text/javascript, */*; q=0.01",
        )
        if text is None:
            return None
        try:
            data = json.loads(text)
        except ValueError:
            log.warning("site_invalid_json", path=path)
            return None
        if not isinstance(data, dict) or data.get("status") != "OK":
            log.info("site_status_not_ok", path=path)
            return None
        return data

    async def _fetch_detail_fragment(self, slug: str) -> str | None:
        return await self._post(
            f"/_ajaxweb/sol/hakkinda/{slug}",
            referer=f"{self.base_url}/hakkinda/{slug}",
            accept="text/html, */*; q=0.01",
        )

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    async def search(self, keyword: str) -> list[SearchResult]:
        """Search movies first, then series."""
        data = await self._post_json(
            "/ajax/arama.asp",
            referer=f"{self.base_url}/",
            body=urlencode({"q": keyword}),
        )
        results_root = data.get("results") if data else None
        if not isinstance(results_root, dict):
            log.info("search_no_results", keyword=keyword)
            return []

        results: list[SearchResult] = []
        for section in ("filmler", "diziler"):
            block = results_root.get(section)
            items = block.get("results") if isinstance(block, dict) else None
            if not isinstance(items, list):
                continue
            for item in items:
                if not isinstance(item, dict):
                    continue
                slug = extract_slug_from_url(item.get("url"))
                if not slug:
                    continue
                results.append(
                    SearchResult(
                        title=clean_title(item.get("title")),
                        image=normalize_image_url(item.get("image"), self.base_url),
                        href=f"{self.base_url}/hakkinda/{slug}",
                    )
                )

        log.debug("search_completed", keyword=keyword, count=len(results))
        return results

    async def details(self, url: str) -> TitleDetail:
        slug = extract_slug_from_url(url)
        if not slug:
            return TitleDetail(description=NOT_FOUND)

        html = await self._fetch_detail_fragment(slug)
        if html is None:
            return TitleDetail(description=LOAD_FAILED)

        try:
            return self._parse_details(html)
        except (ValueError, TypeError, AttributeError):
            log.exception("details_parse_error", url=url)
            return TitleDetail(description=UNEXPECTED_ERROR)

    @staticmethod
    def _parse_details(html: str) -> TitleDetail:
        soup = parse_html(html)
        description = clean_html(extract_inner_html(soup, "blockquote"))

        genres = ", ".join(extract_all_texts(soup, 'a[href*="filtre?tur="]'))
        m = _DURATION_RE.search(html)
        duration = f"{m.group(1)} dakika" if m else ""

        m = _YEAR_RE.search(html)
        year = f"Yıl: {m.group(1)}" if m else ""
        m = _IMDB_RE.search(html)
        imdb = f"IMDB: {m.group(1)}" if m else ""

        return TitleDetail(
            description=description or NO_DESCRIPTION,
            aliases=" | ".join(part for part in (genres, duration) if part),
            airdate=" | ".join(part for part in (year, imdb) if part),
        )

    async def episodes(self, url: str) -> list[WatchOption]:
        """Return the dublaj (1) and altyazi (2) watch pages of a title."""
        slug = extract_slug_from_url(url)
        if not slug:
            return []

        html = await self._fetch_detail_fragment(slug)
        if html is None:
            return []

        m = _FILM_ID_RE.search(html)
        film_id = m.group(1) if m else ""
        fid_suffix = f"?fid={film_id}" if film_id else ""

        options: list[WatchOption] = []
        for number, pattern in ((1, _DUBLAJ_LINK_RE), (2, _ALTYAZI_LINK_RE)):
            link = pattern.search(html)
            if not link:
                continue
            href = link.group(1)
            if not href.startswith("http"):
                href = self.base_url + href
            options.append(WatchOption(href=href + fid_suffix, number=number))

        if not options and film_id:
            options.append(
                WatchOption(
                    href=f"{self.base_url}/izle/dublaj/{slug}{fid_suffix}",
                    number=1,
                )
            )
        return options

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    async def lookup_film_id(self, url: str) -> str | None:
        slug = extract_slug_from_url(url)
        if not slug:
            log.info("film_id_no_slug", url=url)
            return None

        html = await self._fetch_detail_fragment(slug)
        m = _FILM_ID_RE.search(html) if html else None
        if not m:
            log.info("film_id_not_found", slug=slug)
            return None
        return m.group(1)

    async def list_sources(
        self, film_id: str, language: Language, referer: str
    ) -> list[SourceDescriptor]:
        body = urlencode(
            {"filmid": film_id, "dil": language.value, "s": "", "b": "", "bot": "0"}
        )
        data = await self._post_json(
            "/ajax/dataAlternatif3.asp", referer=referer, body=body
        )
        rows = data.get("data") if data else None
        if not isinstance(rows, list):
            return []

        sources: list[SourceDescriptor] = []
        for row in rows:
            if not isinstance(row, dict) or row.get("id") in (None, ""):
                continue
            sources.append(
                SourceDescriptor(
                    id=str(row["id"]),
                    name=str(row.get("baslik") or ""),
                    quality=_to_int(row.get("kalitesi")),
                )
            )
        log.debug("sources_listed", film_id=film_id, count=len(sources))
        return sources

    async def lookup_embed_url(self, source_id: str) -> str | None:
        html = await self._post(
            "/ajax/dataEmbed.asp",
            referer=self.base_url,
            body=urlencode({"id": source_id}),
        )
        if html is None:
            return None
        embed_url = extract_iframe_src(html)
        if not embed_url:
            log.info("embed_iframe_not_found", source_id=source_id)
        return embed_url
