"""httpx implementation of the host transport port.

The shared ``httpx.AsyncClient`` is the primary transport. When it is not
available (never configured, or already closed during shutdown) a one-shot
plain client serves the request instead. Network failures on either path
yield ``None``; there are no retries.
"""

from __future__ import annotations

from collections.abc import Mapping

import httpx
import structlog

from webteizle.domain.ports.http_transport import FetchResponse

log = structlog.get_logger(__name__)


class HttpxTransport:
    """Performs single HTTP requests and converts them to ``FetchResponse``.

    Satisfies ``HttpTransportPort``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = 15.0,
    ) -> None:
        self._client = client
        self._timeout = timeout

    @property
    def primary_available(self) -> bool:
        return self._client is not None and not self._client.is_closed

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: str | None = None,
    ) -> FetchResponse | None:
        """Send one request, falling back to a plain client if needed."""
        client = self._client
        if client is not None and not client.is_closed:
            return await self._send(client, method, url, headers, data)

        log.debug("transport_primary_unavailable", url=url)
        async with httpx.AsyncClient(
            timeout=self._timeout, follow_redirects=True
        ) as fallback:
            return await self._send(fallback, method, url, headers, data)

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        headers: Mapping[str, str] | None,
        data: str | None,
    ) -> FetchResponse | None:
        try:
            resp = await client.request(
                method.upper(),
                url,
                headers=dict(headers or {}),
                content=data.encode("utf-8") if data is not None else None,
                timeout=self._timeout,
                follow_redirects=True,
            )
        except httpx.TimeoutException:
            log.warning("transport_timeout", method=method, url=url)
            return None
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning("transport_http_error", method=method, url=url, error=str(exc))
            return None

        return FetchResponse(
            status_code=resp.status_code,
            text=resp.text,
            url=str(resp.url),
        )
