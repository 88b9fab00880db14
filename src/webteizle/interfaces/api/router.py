"""Host-facing API endpoints (search, details, episodes, streams)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Query, Request

from webteizle.interfaces.api.presenter import (
    present_details,
    present_episodes,
    present_search_results,
    present_streams,
)
from webteizle.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["webteizle"])


@router.get("/search")
async def search(
    request: Request, q: str = Query(..., min_length=1)
) -> list[dict[str, str]]:
    state = cast(AppState, request.app.state)
    results = await state.catalog_uc.search(q)
    return present_search_results(results)


@router.get("/details")
async def details(request: Request, url: str = Query(...)) -> list[dict[str, str]]:
    state = cast(AppState, request.app.state)
    detail = await state.catalog_uc.details(url)
    return present_details(detail)


@router.get("/episodes")
async def episodes(request: Request, url: str = Query(...)) -> list[dict[str, Any]]:
    state = cast(AppState, request.app.state)
    options = await state.catalog_uc.episodes(url)
    return present_episodes(options)


@router.get("/streams")
async def streams(request: Request, url: str = Query(...)) -> dict[str, Any] | None:
    """Resolve every source of a watch page; ``null`` when none resolved."""
    state = cast(AppState, request.app.state)
    resolved = await state.resolve_streams_uc.execute(url)
    if resolved is None:
        log.info("streams_empty", url=url)
    return present_streams(resolved)
