"""Trending aggregation: places directory + Reddit, ranked per category."""

import asyncio
import logging
from urllib.parse import quote

from .cache import ResponseCache, build_cache_key
from .classify import categorize_place, is_trending_post
from .config import (
    MAX_PER_CATEGORY,
    MIN_PER_CATEGORY,
    TRENDING_CACHE_TTL,
    TRENDING_CACHE_VERSION,
    TRENDING_KEYWORDS,
    TRENDING_POSTS_PER_SUBREDDIT,
)
from .dedupe import dedupe, dedupe_titles
from .errors import InvalidInput, SourceUnavailable
from .models import Coordinates, PlaceRecord, PostRecord, RankedItem
from .places import PlacesClient
from .reddit import RedditClient
from .reference import city_center, region_for, trending_subreddits_for
from .scoring import calculate_place_trending_score, calculate_post_trending_score

logger = logging.getLogger(__name__)


def clamp_limit(per_category_limit: int) -> int:
    return min(max(int(per_category_limit), MIN_PER_CATEGORY), MAX_PER_CATEGORY)


def maps_url(place: PlaceRecord, details: PlaceRecord | None = None) -> str:
    """Coordinate link when any coordinates are known, else the listing URL, else a name search."""
    for record in (details, place):
        if record is not None and record.location is not None:
            return f"https://www.google.com/maps?q={record.location.lat},{record.location.lng}"
    if details is not None and details.formatted_url:
        return details.formatted_url
    return f"https://www.google.com/maps/search/{quote(place.name)}"


def rank_by_category(items: list[RankedItem], per_category_limit: int) -> list[RankedItem]:
    """
    Final shaping of aggregated items.

    Drops repeated titles (case-insensitive, first seen wins), groups by
    category in order of first appearance, sorts each group by descending
    trending score (stable, so ties keep insertion order) and keeps the top
    `per_category_limit` of each.
    """
    unique = dedupe_titles(items, key=lambda item: item.title)

    grouped: dict[str, list[RankedItem]] = {}
    for item in unique:
        grouped.setdefault(item.category, []).append(item)

    result: list[RankedItem] = []
    for category_items in grouped.values():
        ranked = sorted(category_items, key=lambda item: item.trending_score, reverse=True)
        result.extend(ranked[:per_category_limit])
    return result


class TrendingAggregator:
    """Fetch, classify, score and rank trending items for a city."""

    def __init__(
        self,
        places: PlacesClient,
        reddit: RedditClient,
        cache: ResponseCache,
        keywords: list[str] | None = None,
    ):
        self.places = places
        self.reddit = reddit
        self.cache = cache
        self.keywords = keywords if keywords is not None else TRENDING_KEYWORDS

    def _place_item(
        self, place: PlaceRecord, details: PlaceRecord | None, city: str, country: str
    ) -> RankedItem:
        return RankedItem(
            id=f"place-{place.place_id}",
            title=place.name,
            type="place",
            rating=place.rating,
            reviews_count=place.user_ratings_total,
            category=categorize_place(place.types, place.name, city, country),
            description=(details.overview if details else None) or "",
            address=(details.formatted_address if details else None) or "",
            google_maps_url=maps_url(place, details),
            source="Google Places",
            trending_score=calculate_place_trending_score(place.rating, place.user_ratings_total),
            reviews=list(details.reviews) if details else [],
        )

    def _post_item(self, post: PostRecord) -> RankedItem:
        return RankedItem(
            id=f"reddit-{post.id}",
            title=post.title,
            type="reddit",
            upvotes=post.ups,
            category="Trending",
            url=f"https://reddit.com{post.permalink}",
            source=f"r/{post.subreddit}",
            trending_score=calculate_post_trending_score(post.ups),
        )

    async def _fetch_places(
        self,
        keyword: str,
        city: str,
        country: str,
        origin: Coordinates | None,
        max_places: int,
    ) -> list[RankedItem]:
        query = f"{keyword} in {city}, {country}"
        try:
            page = await self.places.fetch_page(query, location=origin, region=region_for(country))
        except SourceUnavailable as e:
            logger.warning(f"Error fetching places for {keyword!r}: {e}")
            return []

        items = []
        for place in page.items[:max_places]:
            if not isinstance(place, PlaceRecord):
                continue
            details = await self.places.get_details(place.place_id)
            items.append(self._place_item(place, details, city, country))
        return items

    async def _fetch_posts(self, subreddit: str) -> list[RankedItem]:
        try:
            page = await self.reddit.fetch_page(subreddit, sort="hot")
        except SourceUnavailable as e:
            logger.warning(f"Error fetching Reddit for r/{subreddit}: {e}")
            return []

        posts = [
            post
            for post in page.items[:TRENDING_POSTS_PER_SUBREDDIT]
            if isinstance(post, PostRecord) and post.title and is_trending_post(post.title)
        ]
        return [self._post_item(post) for post in posts]

    async def _collect(
        self, city: str, country: str, limit: int, origin: Coordinates | None
    ) -> list[RankedItem]:
        max_places = 5 if limit <= 10 else 8

        branches = [
            self._fetch_places(keyword, city, country, origin, max_places) for keyword in self.keywords
        ]
        branches += [self._fetch_posts(subreddit) for subreddit in trending_subreddits_for(city, country)]

        results = await asyncio.gather(*branches, return_exceptions=True)

        place_items: list[RankedItem] = []
        post_items: list[RankedItem] = []
        for result in results:
            if isinstance(result, BaseException):
                logger.error("Trending branch failed", exc_info=result)
                continue
            for item in result:
                (post_items if item.type == "reddit" else place_items).append(item)

        # Cross-posted threads show up with slightly different titles
        post_items = dedupe(post_items, key=lambda item: item.title)
        return place_items + post_items

    async def aggregate(
        self,
        city: str,
        country: str,
        per_category_limit: int = MAX_PER_CATEGORY,
        user_coordinates: Coordinates | None = None,
    ) -> list[RankedItem]:
        """
        Ranked trending items for a city, grouped by category.

        Never raises: failing sources contribute nothing and total failure
        returns an empty list.
        """
        limit = clamp_limit(per_category_limit)
        try:
            if not city or not city.strip():
                raise InvalidInput("city is required")
            city = city.strip()

            cache_key = build_cache_key(
                TRENDING_CACHE_VERSION, f"limit{limit}", country, city, user_coordinates
            )
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.info(f"Trending cache hit: {cache_key}")
                return cached

            origin = user_coordinates or city_center(city)
            items = await self._collect(city, country, limit, origin)
            result = rank_by_category(items, limit)
        except InvalidInput as e:
            logger.warning(f"Invalid trending request ({city!r}, {country!r}): {e}")
            return []
        except Exception as e:
            logger.error(f"Error fetching trending data: {e}", exc_info=True)
            return []

        logger.info(f"Trending for {city}, {country}: {len(result)} items from {len(items)} candidates")
        if result:
            self.cache.set(cache_key, result, TRENDING_CACHE_TTL)
        return result
