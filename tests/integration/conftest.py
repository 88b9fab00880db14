"""Shared fixtures for integration tests.

These tests use real infrastructure components (HttpxTransport,
WebteizleClient, HosterResolverRegistry) with mocked HTTP via respx.
"""

from __future__ import annotations

import os

import httpx
import pytest
import respx


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking."""
    return httpx.AsyncClient()


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep WEBTEIZLE_* variables from the host out of config tests."""
    for key in list(os.environ):
        if key.startswith("WEBTEIZLE_"):
            monkeypatch.delenv(key, raising=False)
