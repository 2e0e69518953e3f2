"""Travel-Pulse REST API: thin FastAPI adapters over the aggregation services."""

from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parents[2] / ".env")

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .cache import ResponseCache
from .events import EventsClient, EventsService
from .food import FoodService
from .guide import GuideService
from .models import Coordinates
from .places import PlacesClient
from .rate_limit import RateLimiter
from .reddit import RedditClient
from .suggestions import SuggestionService
from .trending import TrendingAggregator

cache: ResponseCache
aggregator: TrendingAggregator
guide_service: GuideService
food_service: FoodService
events_service: EventsService
suggestion_service: SuggestionService


@asynccontextmanager
async def lifespan(app: FastAPI):
    global cache, aggregator, guide_service, food_service, events_service, suggestion_service
    cache = ResponseCache()
    limiter = RateLimiter()
    places = PlacesClient(limiter=limiter, cache=cache)
    reddit = RedditClient(limiter=limiter)
    aggregator = TrendingAggregator(places, reddit, cache)
    guide_service = GuideService(reddit, cache)
    food_service = FoodService(places, cache)
    events_client = EventsClient(limiter=limiter)
    events_service = EventsService(events_client, cache)
    suggestion_service = SuggestionService(events_client, food_service, cache)
    yield


app = FastAPI(title="Travel Pulse", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _coordinates(lat: float | None, lng: float | None) -> Coordinates | None:
    if lat is None or lng is None:
        return None
    return Coordinates(lat=lat, lng=lng)


# --- Trending ---


@app.get("/api/trending")
async def trending(
    city: str = "Tokyo",
    country: str = "Japan",
    limit_per_category: int = Query(default=30, alias="limitPerCategory"),
    lat: float | None = None,
    lng: float | None = None,
):
    items = await aggregator.aggregate(city, country, limit_per_category, _coordinates(lat, lng))
    return [item.model_dump(by_alias=True, exclude_none=True) for item in items]


# --- Guide & Stories ---


@app.get("/api/guide")
async def guide(city: str = "Tokyo", country: str = "Japan"):
    data = await guide_service.guide(city, country)
    return data.model_dump(by_alias=True)


@app.get("/api/subreddit-stories")
async def subreddit_stories(
    subreddit: str | None = None,
    country: str | None = None,
    city: str | None = None,
):
    if not subreddit or not country or not city:
        return JSONResponse(
            status_code=400,
            content={"error": "Missing subreddit, country, or city parameter"},
        )
    stories = await guide_service.stories_from_subreddit(subreddit, country, city)
    return {"stories": [story.model_dump() for story in stories], "subreddit": subreddit}


# --- Food ---


@app.get("/api/food")
async def food(
    city: str = "Tokyo",
    country: str = "Japan",
    lat: float | None = None,
    lng: float | None = None,
):
    places = await food_service.search(city, country, user_coordinates=_coordinates(lat, lng))
    return {"food": [place.model_dump(by_alias=True) for place in places]}


# --- Events & Suggestions ---


@app.get("/api/events")
async def events(city: str = "Tokyo"):
    items = await events_service.events(city)
    return {"events": [event.model_dump() for event in items]}


@app.get("/api/suggestions")
async def suggestions(city: str = "Tokyo", country: str = "Japan"):
    items = await suggestion_service.suggestions(city, country)
    return {"suggestions": [item.model_dump(exclude_none=True) for item in items]}


if __name__ == "__main__":
    import logging

    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host="127.0.0.1", port=8000)
