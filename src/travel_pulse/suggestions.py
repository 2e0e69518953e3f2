import logging
from datetime import date, datetime, timezone

from .cache import ResponseCache
from .config import SUGGESTIONS_CACHE_TTL
from .errors import SourceUnavailable
from .events import EventsClient
from .food import FoodService
from .models import Suggestion

logger = logging.getLogger(__name__)

TOP_FOOD_SUGGESTIONS = 3


class SuggestionService:
    """Today's events followed by the best-rated food places for a city."""

    def __init__(self, events_client: EventsClient, food_service: FoodService, cache: ResponseCache):
        self.events_client = events_client
        self.food_service = food_service
        self.cache = cache

    async def suggestions(self, city: str, country: str, today: date | None = None) -> list[Suggestion]:
        cache_key = f"suggestions_{country}_{city}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        today_prefix = (today or datetime.now(timezone.utc).date()).isoformat()
        try:
            events = await self.events_client.fetch_events(city)
            todays_events = sorted(
                (e for e in events if e.date.startswith(today_prefix)),
                key=lambda e: e.date,
                reverse=True,
            )
            # Already ordered by rating
            food = (await self.food_service.search(city, country))[:TOP_FOOD_SUGGESTIONS]

            suggestions = [
                Suggestion(
                    id=e.id,
                    type="event",
                    title=e.title,
                    subtitle=e.location,
                    date=e.date,
                    reviews=e.reviews,
                )
                for e in todays_events
            ] + [
                Suggestion(
                    id=f.id,
                    type="food",
                    title=f.name,
                    subtitle=f.address,
                    rating=f.rating,
                    reviews=f.reviews,
                )
                for f in food
            ]
        except SourceUnavailable as e:
            logger.error(f"Error building suggestions for {city}, {country}: {e}")
            suggestions = [
                Suggestion(
                    id="1",
                    type="event",
                    title=f"Check out local events in {city}",
                    subtitle="Sample event",
                ),
                Suggestion(id="2", type="food", title="Try local cuisine", subtitle="Sample restaurant", rating=4.5),
            ]

        self.cache.set(cache_key, suggestions, SUGGESTIONS_CACHE_TTL)
        return suggestions
