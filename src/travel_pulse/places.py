import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .cache import ResponseCache
from .config import PLACE_DETAILS_CACHE_TTL, PLACES_TIMEOUT, get_places_api_key
from .errors import RateLimited, SourceUnavailable
from .fetch import FetchClient
from .models import Coordinates, Page, PlaceRecord, Review
from .rate_limit import RateLimiter

logger = logging.getLogger(__name__)


class PlacesClient(FetchClient):
    """Async client for the Places text search and details endpoints."""

    source = "places"
    BASE_URL = "https://maps.googleapis.com/maps/api/place"
    DETAILS_FIELDS = (
        "name,rating,reviews,user_ratings_total,types,formatted_url,formatted_address,"
        "geometry,editorial_summary,opening_hours,price_level,website"
    )

    def __init__(
        self,
        api_key: str | None = None,
        limiter: RateLimiter | None = None,
        cache: ResponseCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(limiter=limiter, timeout=PLACES_TIMEOUT, transport=transport)
        self.api_key = api_key if api_key is not None else get_places_api_key()
        self.cache = cache

    def _check_status(self, data: dict) -> None:
        status = data.get("status")
        if status in (None, "OK", "ZERO_RESULTS"):
            return
        if status == "OVER_QUERY_LIMIT":
            raise RateLimited(self.source, "OVER_QUERY_LIMIT")
        raise SourceUnavailable(self.source, data.get("error_message") or str(status))

    async def _places_get(self, endpoint: str, params: dict[str, Any]) -> dict:
        if not self.api_key:
            raise SourceUnavailable(self.source, "GOOGLE_PLACES_API_KEY is not set")
        data = await self._get(f"{self.BASE_URL}/{endpoint}", {**params, "key": self.api_key})
        self._check_status(data)
        return data

    def _parse_place(self, item: dict) -> PlaceRecord | None:
        """Decode a raw place result. Returns None when identity fields are missing."""
        place_id = item.get("place_id")
        name = item.get("name")
        if not place_id or not name:
            return None

        location = None
        loc = (item.get("geometry") or {}).get("location") or {}
        if "lat" in loc and "lng" in loc:
            location = Coordinates(lat=loc["lat"], lng=loc["lng"])

        reviews = [
            Review(
                author=r.get("author_name", ""),
                rating=r.get("rating") or 0,
                text=r.get("text", ""),
                time=r.get("time") or 0,
            )
            for r in item.get("reviews") or []
        ]

        return PlaceRecord(
            place_id=place_id,
            name=name,
            rating=item.get("rating"),
            user_ratings_total=item.get("user_ratings_total"),
            types=item.get("types") or [],
            formatted_address=item.get("formatted_address"),
            formatted_url=item.get("url") or item.get("formatted_url"),
            overview=(item.get("editorial_summary") or {}).get("overview"),
            location=location,
            reviews=reviews,
            price_level=item.get("price_level"),
            open_now=(item.get("opening_hours") or {}).get("open_now"),
            website=item.get("website"),
        )

    async def fetch_page(
        self,
        query: str,
        page_token: str | None = None,
        location: Coordinates | None = None,
        region: str | None = None,
        radius: int | None = None,
        place_type: str | None = None,
        language: str | None = None,
    ) -> Page:
        """One page of text search results plus the continuation token, if any."""
        if page_token:
            await self.limiter.wait_for_page_token()

        params: dict[str, Any] = {"query": query}
        if page_token:
            params["pagetoken"] = page_token
        if location is not None:
            params["location"] = f"{location.lat},{location.lng}"
            if radius:
                params["radius"] = radius
        if region:
            params["region"] = region
        if place_type:
            params["type"] = place_type
        if language:
            params["language"] = language

        data = await self._places_get("textsearch/json", params)
        results = data.get("results", [])
        if not isinstance(results, list):
            raise SourceUnavailable(self.source, "results is not a list")

        try:
            items = [p for p in (self._parse_place(r) for r in results if isinstance(r, dict)) if p]
        except (AttributeError, TypeError, ValueError, ValidationError) as e:
            raise SourceUnavailable(self.source, f"malformed place in results: {e}") from e
        return Page(items=items, next_page_token=data.get("next_page_token"))

    async def get_details(self, place_id: str) -> PlaceRecord | None:
        """Full details for a place, or None when the lookup fails."""
        cache_key = f"place_details_{place_id}"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        try:
            data = await self._places_get(
                "details/json", {"place_id": place_id, "fields": self.DETAILS_FIELDS}
            )
        except SourceUnavailable as e:
            logger.warning(f"Error fetching place details for {place_id}: {e}")
            return None

        result = data.get("result")
        if not isinstance(result, dict):
            return None
        try:
            place = self._parse_place({"place_id": place_id, **result})
        except (AttributeError, TypeError, ValueError, ValidationError) as e:
            logger.warning(f"Malformed place details for {place_id}: {e}")
            return None
        if place is not None and self.cache is not None:
            self.cache.set(cache_key, place, PLACE_DETAILS_CACHE_TTL)
        return place
