"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from webteizle.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from webteizle.application.use_cases import CatalogUseCase, ResolveStreamsUseCase
    from webteizle.domain.ports import HttpTransportPort, SiteClientPort
    from webteizle.infrastructure.hoster_resolvers import HosterResolverRegistry


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient
    transport: HttpTransportPort

    # Domain Ports
    site_client: SiteClientPort

    # Hoster resolution
    hoster_resolver_registry: HosterResolverRegistry

    # Application Services
    catalog_uc: CatalogUseCase
    resolve_streams_uc: ResolveStreamsUseCase
