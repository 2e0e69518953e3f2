import logging
from typing import Any

import httpx

from .errors import RateLimited, SourceUnavailable
from .rate_limit import RateLimiter

logger = logging.getLogger(__name__)


class FetchClient:
    """Base for upstream JSON clients. Every failure surfaces as SourceUnavailable."""

    source = "upstream"
    payload_types: tuple[type, ...] = (dict,)

    def __init__(
        self,
        limiter: RateLimiter | None = None,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.limiter = limiter or RateLimiter()
        self.timeout = timeout
        self._transport = transport

    def _default_headers(self) -> dict[str, str]:
        return {}

    async def _get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """GET a JSON object, paced by the host's rate limit."""
        host = httpx.URL(url).host

        async with self.limiter.slot(host):
            try:
                async with httpx.AsyncClient(transport=self._transport) as client:
                    response = await client.get(
                        url,
                        headers=self._default_headers(),
                        params=params or {},
                        timeout=timeout or self.timeout,
                    )
                    if response.status_code == 429:
                        raise RateLimited(self.source)
                    response.raise_for_status()
                    data = response.json()
            except httpx.HTTPError as e:
                raise SourceUnavailable(self.source, f"{type(e).__name__}: {e}") from e
            except ValueError as e:
                raise SourceUnavailable(self.source, f"malformed JSON from {url}") from e

        if not isinstance(data, self.payload_types):
            raise SourceUnavailable(self.source, f"unexpected payload type {type(data).__name__}")
        return data
