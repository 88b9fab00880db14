"""Port for the single outbound HTTP capability the adapter depends on."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class FetchResponse:
    """Status and body of a completed HTTP exchange."""

    status_code: int
    text: str
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON. Raises ``ValueError`` on malformed input."""
        return json.loads(self.text)


class HttpTransportPort(Protocol):
    """Performs one HTTP request.

    Returns ``None`` when no response was obtained at all (connection
    error, timeout). Never raises for network conditions.
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: str | None = None,
    ) -> FetchResponse | None: ...
