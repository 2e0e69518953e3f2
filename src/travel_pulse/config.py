"""
Aggregator Configuration

RATE LIMITS:
Upstream providers throttle aggressive clients without documenting the limits.
These delays were tuned by hand against Reddit's public JSON endpoints and the
Places text search page tokens. Treat them as knobs, not guarantees.

- BASE_DELAY: Wait before the first request to a host in a session
- DELAY_STEP: Added to the wait after every request to the same host
- MAX_DELAY: Upper bound for the escalating wait
- PAGE_TOKEN_DELAY: Wait before a freshly issued page token becomes usable
- IDLE_RESET: A host left alone this long starts over at BASE_DELAY

The Places API publishes generous per-second quotas, so its schedule is a short
flat spacing rather than Reddit's escalation.
"""

import os


class RateLimitSettings:
    BASE_DELAY = 1.0
    DELAY_STEP = 0.5
    MAX_DELAY = 3.0
    PAGE_TOKEN_DELAY = 2.0
    IDLE_RESET = 10.0

    @classmethod
    def validate(cls):
        """Ensure the delay schedule is well formed"""
        if min(cls.BASE_DELAY, cls.DELAY_STEP, cls.PAGE_TOKEN_DELAY) < 0:
            raise AssertionError("Delays must be non-negative")
        if cls.MAX_DELAY < cls.BASE_DELAY:
            raise AssertionError(
                f"MAX_DELAY ({cls.MAX_DELAY}) must be >= BASE_DELAY ({cls.BASE_DELAY})"
            )
        if cls.IDLE_RESET <= 0:
            raise AssertionError("IDLE_RESET must be positive")
        return True


class PlacesRateLimitSettings(RateLimitSettings):
    BASE_DELAY = 0.1
    DELAY_STEP = 0.0
    MAX_DELAY = 0.1


# Validate on import
RateLimitSettings.validate()
PlacesRateLimitSettings.validate()


# Throttled hosts and their delay schedules
THROTTLED_HOSTS = {
    "www.reddit.com": RateLimitSettings,
    "maps.googleapis.com": PlacesRateLimitSettings,
}

# Cache TTLs (in seconds)
TRENDING_CACHE_TTL = 10 * 60  # 10 minutes
PLACE_DETAILS_CACHE_TTL = 10 * 60  # 10 minutes
FOOD_CACHE_TTL = 10 * 60  # 10 minutes
GUIDE_CACHE_TTL = 60 * 60  # 1 hour
EVENTS_CACHE_TTL = 10 * 60  # 10 minutes
SUGGESTIONS_CACHE_TTL = 10 * 60  # 10 minutes

# Cache key version tags, bump when the payload shape changes
TRENDING_CACHE_VERSION = "trending_v1"
FOOD_CACHE_VERSION = "food_v6"
GUIDE_CACHE_VERSION = "guide_v4"

# Per-call timeouts (in seconds)
PLACES_TIMEOUT = 5.0
REDDIT_TIMEOUT = 5.0
STORIES_TIMEOUT = 15.0
CHECKLIST_TIMEOUT = 3.0
EVENTS_TIMEOUT = 5.0

# Per-category limit bounds for trending results
MIN_PER_CATEGORY = 1
MAX_PER_CATEGORY = 30

# Restaurant search
FOOD_SEARCH_RADIUS_M = 25000
FOOD_MAX_RESULTS = 50
FOOD_PAGE_LIMIT = 60

# Reddit thresholds
TIP_MIN_UPVOTES = 5  # strictly greater than
STORY_MIN_SCORE = 10
TRENDING_POSTS_PER_SUBREDDIT = 10

# Reddit subreddits searched for tips
TIP_SUBREDDITS = [
    "JapanTravel",
    "JapanTravelTips",
    "Tokyo",
    "travel",
]

# Fixed query terms for the places directory
TRENDING_KEYWORDS = [
    "things to do",
    "nightlife",
    "arcade",
    "karaoke",
    "shopping street",
    "theme park",
    "popular tourist destinations",
    "top sights",
    "famous landmarks",
    "iconic places",
    "attractions",
    "landmarks",
    "temples",
    "shrines",
    "museums",
    "gardens",
    "parks",
    "viewpoints",
    "scenic spots",
    "historical sites",
    "cafes",
    "hot springs",
    "observation decks",
]


def get_places_api_key() -> str:
    return os.getenv("GOOGLE_PLACES_API_KEY", "")


def get_doorkeeper_api_key() -> str:
    return os.getenv("DOORKEEPER_API_KEY", "")


def get_reddit_user_agent() -> str:
    return os.getenv(
        "REDDIT_USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    )
