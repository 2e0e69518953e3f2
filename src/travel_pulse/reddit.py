"""Reddit JSON listing client"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .config import REDDIT_TIMEOUT, get_reddit_user_agent
from .errors import SourceUnavailable
from .fetch import FetchClient
from .models import Page, PostRecord
from .rate_limit import RateLimiter

logger = logging.getLogger(__name__)


class RedditClient(FetchClient):
    """Fetch subreddit listings and in-subreddit searches as PostRecords"""

    source = "reddit"
    BASE_URL = "https://www.reddit.com"

    def __init__(
        self,
        limiter: RateLimiter | None = None,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(limiter=limiter, timeout=REDDIT_TIMEOUT, transport=transport)
        self.user_agent = user_agent or get_reddit_user_agent()

    def _default_headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent}

    def _parse_post(self, post: dict) -> PostRecord:
        return PostRecord(
            id=str(post.get("id") or ""),
            title=post.get("title") or "",
            selftext=post.get("selftext") or "",
            subreddit=post.get("subreddit") or "",
            ups=int(post.get("ups") or 0),
            score=int(post.get("score") or 0),
            num_comments=int(post.get("num_comments") or 0),
            created_utc=float(post.get("created_utc") or 0),
            permalink=post.get("permalink") or "",
            over_18=bool(post.get("over_18")),
        )

    async def fetch_page(
        self,
        subreddit: str,
        sort: str = "hot",
        time_window: str | None = None,
        limit: int | None = None,
        search: str | None = None,
        after: str | None = None,
        timeout: float | None = None,
    ) -> Page:
        """
        Fetch one listing page.

        With `search`, queries /r/<subreddit>/search.json restricted to the
        subreddit; otherwise /r/<subreddit>/<sort>.json. `after` continues a
        previous page.
        """
        params: dict[str, Any] = {}
        if search is not None:
            url = f"{self.BASE_URL}/r/{subreddit}/search.json"
            params.update({"q": search, "restrict_sr": 1, "sort": sort})
        else:
            url = f"{self.BASE_URL}/r/{subreddit}/{sort}.json"
        if time_window:
            params["t"] = time_window
        if limit:
            params["limit"] = limit
        if after:
            params["after"] = after

        data = await self._get(url, params, timeout=timeout)

        listing = data.get("data")
        children = listing.get("children") if isinstance(listing, dict) else None
        if not isinstance(children, list):
            raise SourceUnavailable(self.source, f"unexpected response structure from r/{subreddit}")

        try:
            posts = [
                self._parse_post(child["data"])
                for child in children
                if isinstance(child, dict) and isinstance(child.get("data"), dict)
            ]
        except (TypeError, ValueError, ValidationError) as e:
            raise SourceUnavailable(self.source, f"malformed post in r/{subreddit}: {e}") from e
        logger.debug(f"Fetched {len(posts)} posts from r/{subreddit}")
        return Page(items=posts, next_page_token=listing.get("after"))
