# tests/test_api.py
from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient
from travel_pulse import api
from travel_pulse.cache import ResponseCache
from travel_pulse.guide import GuideService
from travel_pulse.models import (
    Coordinates,
    Event,
    FoodPlace,
    GuideData,
    RankedItem,
    Suggestion,
    TravelStory,
    TravelTip,
)
from travel_pulse.rate_limit import RateLimiter
from travel_pulse.reddit import RedditClient


@pytest.fixture
def services(monkeypatch):
    """Swap the lifespan-built services for mocks. The lifespan itself never runs."""
    aggregator = Mock()
    aggregator.aggregate = AsyncMock(
        return_value=[
            RankedItem(
                id="place-dai",
                title="Sushi Dai",
                type="place",
                rating=4.6,
                reviews_count=3000,
                category="Food",
                trending_score=124.0,
                google_maps_url="https://www.google.com/maps?q=35.64,139.78",
            )
        ]
    )
    guide_service = Mock()
    guide_service.guide = AsyncMock(
        return_value=GuideData(
            tips=[TravelTip(text="Get a Suica card.", category="transport", source="static")],
            best_time=["Spring"],
        )
    )
    guide_service.stories_from_subreddit = AsyncMock(
        return_value=[TravelStory(id="s1", title="My first trip to Japan", subreddit="JapanTravel", upvotes=120)]
    )
    food_service = Mock()
    food_service.search = AsyncMock(
        return_value=[FoodPlace(id="r1", name="Fuunji", rating=4.8, is_open=True, price_level=2)]
    )

    monkeypatch.setattr(api, "aggregator", aggregator, raising=False)
    monkeypatch.setattr(api, "guide_service", guide_service, raising=False)
    monkeypatch.setattr(api, "food_service", food_service, raising=False)
    return aggregator, guide_service, food_service


@pytest.fixture
def client(services):
    return TestClient(api.app)


def test_trending(client, services):
    """Test query params are forwarded and output uses camelCase without nulls"""
    aggregator, _, _ = services

    response = client.get(
        "/api/trending",
        params={"city": "Osaka", "country": "Japan", "limitPerCategory": 5, "lat": 34.7, "lng": 135.5},
    )

    assert response.status_code == 200
    [item] = response.json()
    assert item["trendingScore"] == 124.0
    assert item["reviewsCount"] == 3000
    assert item["googleMapsUrl"] == "https://www.google.com/maps?q=35.64,139.78"
    assert "upvotes" not in item
    aggregator.aggregate.assert_awaited_once_with("Osaka", "Japan", 5, Coordinates(lat=34.7, lng=135.5))


def test_trending_defaults(client, services):
    aggregator, _, _ = services

    client.get("/api/trending")

    aggregator.aggregate.assert_awaited_once_with("Tokyo", "Japan", 30, None)


def test_guide(client):
    response = client.get("/api/guide", params={"city": "Tokyo", "country": "Japan"})

    assert response.status_code == 200
    body = response.json()
    assert body["bestTime"] == ["Spring"]
    assert body["tips"][0]["category"] == "transport"


def test_subreddit_stories(client, services):
    _, guide_service, _ = services

    response = client.get(
        "/api/subreddit-stories", params={"subreddit": "JapanTravel", "country": "Japan", "city": "Tokyo"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["subreddit"] == "JapanTravel"
    assert body["stories"][0]["id"] == "s1"
    guide_service.stories_from_subreddit.assert_awaited_once_with("JapanTravel", "Japan", "Tokyo")


@pytest.mark.parametrize(
    "params",
    [
        {"country": "Japan", "city": "Tokyo"},
        {"subreddit": "JapanTravel", "city": "Tokyo"},
        {"subreddit": "JapanTravel", "country": "Japan"},
    ],
)
def test_subreddit_stories_requires_all_params(client, services, params):
    _, guide_service, _ = services

    response = client.get("/api/subreddit-stories", params=params)

    assert response.status_code == 400
    assert "Missing" in response.json()["error"]
    guide_service.stories_from_subreddit.assert_not_called()


def test_food(client, services):
    _, _, food_service = services

    response = client.get("/api/food", params={"city": "Tokyo", "country": "Japan"})

    assert response.status_code == 200
    [place] = response.json()["food"]
    assert place["isOpen"] is True
    assert place["priceLevel"] == 2
    food_service.search.assert_awaited_once_with("Tokyo", "Japan", user_coordinates=None)


@pytest.fixture
def local_services(monkeypatch):
    events_service = Mock()
    events_service.events = AsyncMock(
        return_value=[Event(id="e1", title="Shibuya Python Meetup", date="2026-10-17T10:00:00Z", city="Shibuya")]
    )
    suggestion_service = Mock()
    suggestion_service.suggestions = AsyncMock(
        return_value=[
            Suggestion(id="e1", type="event", title="Shibuya Python Meetup", subtitle="Shibuya", date="2026-10-17"),
            Suggestion(id="f1", type="food", title="Fuunji", subtitle="Yoyogi", rating=4.8),
        ]
    )
    monkeypatch.setattr(api, "events_service", events_service, raising=False)
    monkeypatch.setattr(api, "suggestion_service", suggestion_service, raising=False)
    return events_service, suggestion_service


def test_events(client, local_services):
    events_service, _ = local_services

    response = client.get("/api/events", params={"city": "Shibuya"})

    assert response.status_code == 200
    [event] = response.json()["events"]
    assert event["source"] == "doorkeeper"
    assert event["reviews"] == []
    events_service.events.assert_awaited_once_with("Shibuya")


def test_events_default_city(client, local_services):
    events_service, _ = local_services

    client.get("/api/events")

    events_service.events.assert_awaited_once_with("Tokyo")


def test_suggestions(client, local_services):
    """Test unset optional fields are left out of each suggestion"""
    _, suggestion_service = local_services

    response = client.get("/api/suggestions")

    assert response.status_code == 200
    event, food = response.json()["suggestions"]
    assert "rating" not in event
    assert "date" not in food
    assert food["rating"] == 4.8
    suggestion_service.suggestions.assert_awaited_once_with("Tokyo", "Japan")


def test_subreddit_stories_with_malformed_post(monkeypatch, recording_sleep):
    """A post with a non-numeric score yields no stories instead of a server error"""
    reddit = RedditClient(limiter=RateLimiter(sleep=recording_sleep), user_agent="travel-pulse-tests")
    monkeypatch.setattr(api, "guide_service", GuideService(reddit, ResponseCache()), raising=False)
    bad = {"data": {"children": [{"kind": "t3", "data": {"id": "x", "title": "Trip to Tokyo", "score": "many"}}]}}

    with patch.object(reddit, "_get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = bad
        response = TestClient(api.app).get(
            "/api/subreddit-stories", params={"subreddit": "JapanTravel", "country": "Japan", "city": "Tokyo"}
        )

    assert response.status_code == 200
    assert response.json() == {"stories": [], "subreddit": "JapanTravel"}
