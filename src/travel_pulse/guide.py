"""City guide assembly: Reddit tips and stories with static fallbacks."""

import logging

import httpx
from bs4 import BeautifulSoup

from .cache import ResponseCache, build_cache_key
from .classify import categorize_tip, is_relevant_tip, is_story_candidate, to_actionable_tip
from .config import (
    CHECKLIST_TIMEOUT,
    GUIDE_CACHE_TTL,
    GUIDE_CACHE_VERSION,
    STORIES_TIMEOUT,
    STORY_MIN_SCORE,
    TIP_MIN_UPVOTES,
    TIP_SUBREDDITS,
)
from .dedupe import dedupe
from .errors import SourceUnavailable
from .models import GuideData, PostRecord, TravelStory, TravelTip
from .reddit import RedditClient
from .reference import (
    CHECKLIST_URL_TEMPLATES,
    COMMON_MISTAKES,
    city_search_keywords,
    static_guide_for,
    static_tips_for,
    story_subreddits_for,
)

logger = logging.getLogger(__name__)

MAX_TIPS_BEFORE_DEDUPE = 50
MAX_TIPS = 20
MAX_CHECKLIST_ITEMS = 8


def build_search_query(country: str, city: str) -> str:
    """Reddit search expression matching any of the city's keywords."""
    return " OR ".join(city_search_keywords(country, city))


def _story_from_post(post: PostRecord) -> TravelStory:
    return TravelStory(
        id=post.id,
        title=post.title,
        subreddit=post.subreddit,
        upvotes=post.score,
        comments=post.num_comments,
        created=post.created_utc,
        url=f"https://reddit.com{post.permalink}",
    )


class GuideService:
    """Builds the per-city guide from Reddit plus static reference content."""

    def __init__(self, reddit: RedditClient, cache: ResponseCache):
        self.reddit = reddit
        self.cache = cache

    def _collect_stories(
        self, posts: list, subreddit: str, country: str | None
    ) -> list[TravelStory]:
        stories = []
        for post in posts:
            if not isinstance(post, PostRecord) or not post.title:
                continue
            if not is_story_candidate(post.title, post.over_18, subreddit, country):
                logger.debug(f"Rejected story: {post.title[:50]!r}")
                continue
            if post.score < STORY_MIN_SCORE:
                logger.debug(f"Low score ({post.score}): {post.title[:50]!r}")
                continue
            stories.append(_story_from_post(post))
        return stories

    async def extract_tips(self, city: str) -> list[TravelTip]:
        """
        Mine actionable tips about a city from travel subreddits.

        Keeps posts that pass the tip relevance filter, have more than
        TIP_MIN_UPVOTES upvotes and survive the actionable rewrite. The best 50
        by upvotes are deduplicated and the top 20 returned.
        """
        tips: list[TravelTip] = []

        for subreddit in TIP_SUBREDDITS:
            try:
                page = await self.reddit.fetch_page(
                    subreddit, sort="top", time_window="month", limit=100, search=city
                )
            except SourceUnavailable as e:
                logger.warning(f"Skipping tips from r/{subreddit}: {e}")
                continue

            for post in page.items:
                if not isinstance(post, PostRecord):
                    continue
                if post.ups <= TIP_MIN_UPVOTES or not is_relevant_tip(post.title, post.selftext):
                    continue
                text = to_actionable_tip(post.title)
                if text:
                    tips.append(
                        TravelTip(
                            text=text,
                            category=categorize_tip(post.title),
                            source="reddit",
                            upvotes=post.ups,
                        )
                    )

        top = sorted(tips, key=lambda tip: tip.upvotes, reverse=True)[:MAX_TIPS_BEFORE_DEDUPE]
        deduped = dedupe(top, key=lambda tip: tip.text)
        logger.info(f"Extracted {len(deduped)} tips for {city} from {len(tips)} candidates")
        return deduped[:MAX_TIPS]

    async def extract_stories(self, country: str, city: str) -> list[TravelStory]:
        """Top weekly travel stories from the country's channels."""
        subreddits = story_subreddits_for(country)
        logger.info(f"Fetching stories for {city}, {country} from {', '.join(subreddits)}")
        stories: list[TravelStory] = []

        for subreddit in subreddits:
            try:
                page = await self.reddit.fetch_page(
                    subreddit, sort="top", time_window="week", limit=5, timeout=STORIES_TIMEOUT
                )
            except SourceUnavailable as e:
                logger.warning(f"Skipping stories from r/{subreddit}: {e}")
                continue
            stories.extend(self._collect_stories(page.items, subreddit, country))

        logger.info(f"Total stories found: {len(stories)}")
        return stories

    async def stories_from_subreddit(self, subreddit: str, country: str, city: str) -> list[TravelStory]:
        """Stories from one channel searched for the city, for progressive loading."""
        try:
            page = await self.reddit.fetch_page(
                subreddit,
                sort="top",
                time_window="week",
                limit=5,
                search=build_search_query(country, city),
                timeout=STORIES_TIMEOUT,
            )
        except SourceUnavailable as e:
            logger.warning(f"Error fetching stories from r/{subreddit}: {e}")
            return []
        return self._collect_stories(page.items, subreddit, country)

    async def _fetch_html(self, url: str) -> str:
        async with httpx.AsyncClient(follow_redirects=True) as client:
            response = await client.get(url, timeout=CHECKLIST_TIMEOUT)
            response.raise_for_status()
            return response.text

    async def scrape_checklist(self, city: str) -> list[str]:
        """Bullet points from the city's guide page, 10-150 characters each."""
        checklist: list[str] = []

        for template in CHECKLIST_URL_TEMPLATES:
            url = template.format(city=city.lower().replace(" ", ""))
            try:
                html = await self._fetch_html(url)
            except httpx.HTTPError as e:
                logger.warning(f"Checklist page unavailable {url}: {e}")
                continue

            soup = BeautifulSoup(html, "html.parser")
            for li in soup.select("ul li, ol li"):
                text = li.get_text(strip=True)
                if 10 < len(text) < 150 and text not in checklist:
                    checklist.append(text)
            if len(checklist) > 5:
                break

        return checklist[:MAX_CHECKLIST_ITEMS]

    async def guide(self, city: str, country: str) -> GuideData:
        """Full guide for a city. Reddit content when available, static content otherwise."""
        cache_key = build_cache_key(GUIDE_CACHE_VERSION, "", country, city)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        static_guide = static_guide_for(city)

        try:
            tips = await self.extract_tips(city)
            checklist = await self.scrape_checklist(city)
            stories = await self.extract_stories(country, city)
        except Exception as e:
            logger.error(f"Error building guide for {city}: {e}", exc_info=True)
            tips, checklist, stories = [], [], []

        data = GuideData(
            tips=tips or static_tips_for(city),
            checklist=checklist or static_guide["checklist"],
            stories=stories,
            mistakes=COMMON_MISTAKES,
            transportation=static_guide["transportation"],
            best_time=static_guide["best_time"],
        )
        self.cache.set(cache_key, data, GUIDE_CACHE_TTL)
        return data
