from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    lat: float
    lng: float


class Review(BaseModel):
    author: str = ""
    rating: float = 0
    text: str = ""
    time: int = 0


# --- Candidate items (decoded at the fetch boundary) ---


class PlaceRecord(BaseModel):
    kind: Literal["place"] = "place"
    place_id: str
    name: str
    rating: float | None = None
    user_ratings_total: int | None = None
    types: list[str] = Field(default_factory=list)
    formatted_address: str | None = None
    formatted_url: str | None = None
    overview: str | None = None  # editorial summary
    location: Coordinates | None = None
    reviews: list[Review] = Field(default_factory=list)
    price_level: int | None = None
    open_now: bool | None = None
    website: str | None = None


class PostRecord(BaseModel):
    kind: Literal["post"] = "post"
    id: str
    title: str
    selftext: str = ""
    subreddit: str = ""
    ups: int = 0
    score: int = 0
    num_comments: int = 0
    created_utc: float = 0
    permalink: str = ""
    over_18: bool = False


CandidateItem = Annotated[PlaceRecord | PostRecord, Field(discriminator="kind")]


class Page(BaseModel):
    items: list[CandidateItem] = Field(default_factory=list)
    next_page_token: str | None = None


# --- Output shapes ---


class RankedItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str  # "place-<place_id>" | "reddit-<post id>"
    title: str
    type: Literal["place", "reddit"]
    rating: float | None = None
    reviews_count: int | None = Field(default=None, alias="reviewsCount")
    upvotes: int | None = None
    category: str
    description: str | None = None
    url: str | None = None
    address: str | None = None
    google_maps_url: str | None = Field(default=None, alias="googleMapsUrl")
    source: str | None = None
    trending_score: float = Field(alias="trendingScore")
    reviews: list[Review] | None = None


class TravelTip(BaseModel):
    text: str
    category: Literal["food", "transport", "itinerary", "budget", "mistakes", "general"]
    source: Literal["reddit", "static"] = "reddit"
    upvotes: int = 0


class TravelStory(BaseModel):
    id: str
    title: str
    subreddit: str
    upvotes: int = 0
    comments: int = 0
    created: float = 0
    url: str = ""


class FoodPlace(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    rating: float = 0
    address: str = ""
    is_open: bool = Field(default=False, alias="isOpen")
    price_level: int = Field(default=0, alias="priceLevel")
    lat: float = 0
    lng: float = 0
    website: str | None = None
    reviews: list[Review] = Field(default_factory=list)


class GuideData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tips: list[TravelTip] = Field(default_factory=list)
    checklist: list[str] = Field(default_factory=list)
    stories: list[TravelStory] = Field(default_factory=list)
    mistakes: list[str] = Field(default_factory=list)
    transportation: list[str] = Field(default_factory=list)
    best_time: list[str] = Field(default_factory=list, alias="bestTime")


class Event(BaseModel):
    id: str
    title: str
    description: str = ""
    date: str = ""  # ISO-8601 start time
    location: str = ""
    city: str = ""
    source: Literal["doorkeeper", "festival"] = "doorkeeper"
    reviews: list[Review] = Field(default_factory=list)


class Suggestion(BaseModel):
    id: str
    type: Literal["event", "food"]
    title: str
    subtitle: str = ""
    date: str | None = None
    rating: float | None = None
    reviews: list[Review] | None = None
