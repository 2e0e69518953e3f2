"""Per-host request pacing for upstream sources."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager

from .config import THROTTLED_HOSTS, RateLimitSettings

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Escalating fixed-delay scheduler keyed by upstream host.

    Every request to a throttled host waits before it is sent. The first wait is
    the host's BASE_DELAY; each following request to the same host waits
    DELAY_STEP longer, up to MAX_DELAY. Once a host has been idle for IDLE_RESET
    seconds the next request starts over at BASE_DELAY, so one burst of requests
    does not slow down the next user's request.

    Requests to the same throttled host are serialized, requests to different
    hosts are not. Hosts outside `throttled_hosts` pass straight through.
    `throttled_hosts` maps host -> settings class; a plain list of hosts uses
    `settings` for each of them.
    """

    def __init__(
        self,
        settings: type[RateLimitSettings] = RateLimitSettings,
        throttled_hosts: dict[str, type[RateLimitSettings]] | list[str] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings
        if throttled_hosts is None:
            throttled_hosts = THROTTLED_HOSTS
        if isinstance(throttled_hosts, dict):
            self.throttled_hosts = dict(throttled_hosts)
        else:
            self.throttled_hosts = {host: settings for host in throttled_hosts}
        self._sleep = sleep
        self._clock = clock
        self._delays: dict[str, float] = {}
        self._last_request: dict[str, float] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def is_throttled(self, host: str) -> bool:
        return host in self.throttled_hosts

    def settings_for(self, host: str) -> type[RateLimitSettings]:
        return self.throttled_hosts.get(host, self.settings)

    def next_delay(self, host: str) -> float:
        """Delay the next request to `host` will wait, in seconds."""
        if not self.is_throttled(host):
            return 0.0
        settings = self.settings_for(host)
        last = self._last_request.get(host)
        if last is not None and self._clock() - last >= settings.IDLE_RESET:
            return settings.BASE_DELAY
        return self._delays.get(host, settings.BASE_DELAY)

    def _lock_for(self, host: str) -> asyncio.Lock:
        if host not in self._locks:
            self._locks[host] = asyncio.Lock()
        return self._locks[host]

    @asynccontextmanager
    async def slot(self, host: str):
        """Hold the host's slot for one request, waiting out its delay first."""
        if not self.is_throttled(host):
            yield 0.0
            return

        settings = self.settings_for(host)
        async with self._lock_for(host):
            delay = self.next_delay(host)
            # Bumped before the request so a throttled response leaves it raised
            self._delays[host] = min(delay + settings.DELAY_STEP, settings.MAX_DELAY)
            if delay > 0:
                logger.debug(f"Waiting {delay:.1f}s before request to {host}")
                await self._sleep(delay)
            try:
                yield delay
            finally:
                self._last_request[host] = self._clock()

    async def wait_for_page_token(self) -> None:
        """Page tokens from search-style sources are not valid immediately."""
        await self._sleep(self.settings.PAGE_TOKEN_DELAY)

    def reset(self, host: str | None = None) -> None:
        if host is None:
            self._delays.clear()
            self._last_request.clear()
        else:
            self._delays.pop(host, None)
            self._last_request.pop(host, None)
