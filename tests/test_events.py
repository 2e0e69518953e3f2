# tests/test_events.py
from unittest.mock import AsyncMock, Mock

import httpx
import pytest
from travel_pulse.cache import ResponseCache
from travel_pulse.errors import SourceUnavailable
from travel_pulse.events import EventsClient, EventsService, clean_description, to_event
from travel_pulse.models import Event
from travel_pulse.rate_limit import RateLimiter

RAW_EVENT = {
    "id": 98765,
    "title": "Shibuya Python Meetup",
    "description": "<p>Talks&nbsp;and   <b>beer</b> &amp; snacks</p>\n\n<p>All welcome</p>",
    "starts_at": "2026-10-17T10:00:00.000Z",
    "address": "Shibuya, Tokyo, Japan",
}


def make_client(handler, recording_sleep, api_key="test_token"):
    return EventsClient(
        api_key=api_key,
        limiter=RateLimiter(sleep=recording_sleep),
        transport=httpx.MockTransport(handler),
    )


class TestCleanDescription:
    def test_strips_tags_and_entities(self):
        assert clean_description(RAW_EVENT["description"]) == "Talks and beer & snacks All welcome"

    def test_empty(self):
        assert clean_description(None) == ""
        assert clean_description("") == ""


class TestToEvent:
    def test_maps_fields(self):
        event = to_event(RAW_EVENT)

        assert event.id == "98765"
        assert event.date == "2026-10-17T10:00:00.000Z"
        assert event.location == "Shibuya, Tokyo, Japan"
        assert event.city == "Shibuya"
        assert event.source == "doorkeeper"
        assert event.reviews == []

    def test_missing_address(self):
        """No address leaves both location and city empty"""
        event = to_event({"id": 1, "title": "Online"})
        assert event.location == ""
        assert event.city == ""


@pytest.mark.asyncio
async def test_fetch_events_sends_bearer_token(recording_sleep):
    """Test the city is the search term and the key goes in the Authorization header"""
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[{"event": RAW_EVENT}])

    client = make_client(handler, recording_sleep)
    events = await client.fetch_events("Tokyo")

    assert [e.title for e in events] == ["Shibuya Python Meetup"]
    [request] = seen
    assert request.url.host == "api.doorkeeper.jp"
    assert request.url.path == "/events"
    assert request.url.params["q"] == "Tokyo"
    assert request.headers["Authorization"] == "Bearer test_token"


@pytest.mark.asyncio
async def test_fetch_events_object_payload(recording_sleep):
    client = make_client(lambda request: httpx.Response(200, json={"events": [RAW_EVENT]}), recording_sleep)

    events = await client.fetch_events("Tokyo")

    assert [e.id for e in events] == ["98765"]


@pytest.mark.asyncio
async def test_missing_api_key(recording_sleep):
    client = make_client(lambda request: httpx.Response(200, json=[]), recording_sleep, api_key="")

    with pytest.raises(SourceUnavailable, match="DOORKEEPER_API_KEY"):
        await client.fetch_events("Tokyo")


@pytest.mark.asyncio
async def test_upstream_error(recording_sleep):
    client = make_client(lambda request: httpx.Response(401), recording_sleep)

    with pytest.raises(SourceUnavailable):
        await client.fetch_events("Tokyo")


@pytest.mark.asyncio
async def test_event_without_id(recording_sleep):
    """An event missing its id fails the call instead of leaking a KeyError"""
    client = make_client(lambda request: httpx.Response(200, json=[{"title": "No id"}]), recording_sleep)

    with pytest.raises(SourceUnavailable, match="malformed event"):
        await client.fetch_events("Tokyo")


class TestEventsService:
    @pytest.fixture
    def client(self):
        client = Mock(spec=EventsClient)
        client.fetch_events = AsyncMock(return_value=[to_event(RAW_EVENT)])
        return client

    @pytest.mark.asyncio
    async def test_events_are_cached_per_city(self, client):
        cache = ResponseCache()
        service = EventsService(client, cache)

        first = await service.events("Tokyo")
        second = await service.events("Tokyo")

        assert first == second
        client.fetch_events.assert_awaited_once_with("Tokyo")
        assert cache.get("events_Tokyo") == first

    @pytest.mark.asyncio
    async def test_failure_falls_back_to_placeholder(self, client):
        """Test a dead source yields one cached placeholder event for the city"""
        client.fetch_events.side_effect = SourceUnavailable("events", "timeout")
        cache = ResponseCache()
        service = EventsService(client, cache)

        [event] = await service.events("Osaka")

        assert isinstance(event, Event)
        assert event.id == "1"
        assert event.title == "Sample Event in Osaka"
        assert event.description == "This is a placeholder event"
        assert event.city == "Osaka"
        assert event.location == "Osaka"
        assert cache.get("events_Osaka") == [event]
