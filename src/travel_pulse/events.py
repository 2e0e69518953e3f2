"""Local events directory backed by the Doorkeeper events API"""

import logging
import re
from datetime import datetime, timezone

import httpx
from bs4 import BeautifulSoup
from pydantic import ValidationError

from .cache import ResponseCache
from .config import EVENTS_CACHE_TTL, EVENTS_TIMEOUT, get_doorkeeper_api_key
from .errors import SourceUnavailable
from .fetch import FetchClient
from .models import Event
from .rate_limit import RateLimiter

logger = logging.getLogger(__name__)


def clean_description(html: str | None) -> str:
    """Strip tags, decode entities and collapse whitespace."""
    if not html:
        return ""
    text = BeautifulSoup(html, "html.parser").get_text()
    return re.sub(r"\s+", " ", text).strip()


def to_event(raw: dict) -> Event:
    address = raw.get("address") or ""
    return Event(
        id=str(raw["id"]),
        title=raw.get("title") or "",
        description=clean_description(raw.get("description")),
        date=raw.get("starts_at") or "",
        location=address,
        city=address.split(",")[0].strip(),
        source="doorkeeper",
    )


class EventsClient(FetchClient):
    source = "events"
    payload_types = (dict, list)
    BASE_URL = "https://api.doorkeeper.jp"

    def __init__(
        self,
        api_key: str | None = None,
        limiter: RateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(limiter=limiter, timeout=EVENTS_TIMEOUT, transport=transport)
        self.api_key = api_key if api_key is not None else get_doorkeeper_api_key()

    def _default_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    async def fetch_events(self, city: str) -> list[Event]:
        """Events matching `city`. Raises SourceUnavailable on any failure."""
        if not self.api_key:
            raise SourceUnavailable(self.source, "DOORKEEPER_API_KEY is not set")

        data = await self._get(f"{self.BASE_URL}/events", {"q": city})
        # Either a bare list or {"events": [...]}; list items may be wrapped as {"event": {...}}
        raw_events = data if isinstance(data, list) else data.get("events") or []
        try:
            events = [
                to_event(item.get("event", item))
                for item in raw_events
                if isinstance(item, dict)
            ]
        except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as e:
            raise SourceUnavailable(self.source, f"malformed event for {city}: {e}") from e

        logger.debug(f"Fetched {len(events)} events for {city}")
        return events


class EventsService:
    def __init__(self, client: EventsClient, cache: ResponseCache):
        self.client = client
        self.cache = cache

    async def events(self, city: str) -> list[Event]:
        """Cached events for a city, or a single placeholder when the source is down."""
        cache_key = f"events_{city}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            events = await self.client.fetch_events(city)
        except SourceUnavailable as e:
            logger.error(f"Error fetching events for {city}: {e}")
            events = [
                Event(
                    id="1",
                    title=f"Sample Event in {city}",
                    description="This is a placeholder event",
                    date=datetime.now(timezone.utc).isoformat(),
                    location=city,
                    city=city,
                    source="doorkeeper",
                )
            ]

        self.cache.set(cache_key, events, EVENTS_CACHE_TTL)
        return events
