"""JSON presenter for the host application's fixed payload shapes.

Field names here are the host contract:
title/image/href, description/aliases/airdate, href/number and
title/streamUrl/headers.
"""

from __future__ import annotations

from typing import Any

from webteizle.domain.entities import (
    ResolvedStream,
    SearchResult,
    TitleDetail,
    WatchOption,
)


def present_search_results(results: list[SearchResult]) -> list[dict[str, str]]:
    return [{"title": r.title, "image": r.image, "href": r.href} for r in results]


def present_details(detail: TitleDetail) -> list[dict[str, str]]:
    """Details are always a one-element list."""
    return [
        {
            "description": detail.description,
            "aliases": detail.aliases,
            "airdate": detail.airdate,
        }
    ]


def present_episodes(options: list[WatchOption]) -> list[dict[str, Any]]:
    return [{"href": o.href, "number": o.number} for o in options]


def present_streams(streams: list[ResolvedStream] | None) -> dict[str, Any] | None:
    """Multi-server payload, or ``None`` when nothing resolved."""
    if not streams:
        return None
    return {
        "streams": [
            {
                "title": s.title,
                "streamUrl": s.stream_url,
                "headers": dict(s.headers),
            }
            for s in streams
        ]
    }
