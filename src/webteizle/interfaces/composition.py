"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from webteizle.application.use_cases import CatalogUseCase, ResolveStreamsUseCase
from webteizle.infrastructure.config.schema import AppConfig
from webteizle.infrastructure.hoster_resolvers import (
    HosterResolverRegistry,
    create_all_resolvers,
)
from webteizle.infrastructure.http import HttpxTransport
from webteizle.infrastructure.site import WebteizleClient
from webteizle.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create shared resources on startup and release them on shutdown."""
    state = cast(AppState, app.state)
    config: AppConfig = state.config

    # 1) Shared HTTP client (primary transport)
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        follow_redirects=True,
    )
    state.transport = HttpxTransport(
        state.http_client, timeout=config.http_timeout_seconds
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 2) Site client
    state.site_client = WebteizleClient(
        state.transport,
        base_url=config.site_base_url,
        user_agent=config.site_user_agent,
    )

    # 3) Hoster resolvers
    state.hoster_resolver_registry = HosterResolverRegistry(
        resolvers=create_all_resolvers(
            state.transport,
            site_url=config.site_base_url,
            user_agent=config.http_user_agent,
        )
    )
    log.info(
        "hoster_resolvers_registered",
        hosters=state.hoster_resolver_registry.supported_hosters,
    )

    # 4) Use cases
    state.catalog_uc = CatalogUseCase(state.site_client)
    state.resolve_streams_uc = ResolveStreamsUseCase(
        state.site_client,
        state.hoster_resolver_registry,
        parallel_sources=config.streams.parallel_sources,
        max_concurrent_sources=config.streams.max_concurrent_sources,
    )

    log.info("app_startup_complete", base_url=config.site_base_url)

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")
        log.info("app_shutdown_complete")
