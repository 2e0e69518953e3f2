"""
Trending score functions.

Places and Reddit posts are scored on different formulas chosen so the two
land in a comparable range:
- places: 0-100 from rating plus a 0-50 review bonus
- posts: logarithmic in upvotes (10k upvotes ~ 276)

No cross-type normalization happens beyond this. Missing or negative inputs
count as zero, so every score is finite and non-negative.
"""

import math

RATING_WEIGHT = 20
REVIEWS_PER_POINT = 100
MAX_REVIEWS_BONUS = 50
UPVOTE_WEIGHT = 30


def calculate_place_trending_score(rating: float | None, review_count: int | None) -> float:
    """
    Score a place from its rating and review count.

    Rating dominates (0-100 for a 0-5 rating). Review count adds one point per
    hundred reviews, capped at 50 so mega-popular venues don't run away.

    Args:
        rating: Average rating (0-5), None if unrated
        review_count: Total number of ratings, None if unknown

    Returns:
        rating * 20 + min(review_count / 100, 50)
    """
    rating = max(rating or 0.0, 0.0)
    review_count = max(review_count or 0, 0)

    rating_score = rating * RATING_WEIGHT
    reviews_score = min(review_count / REVIEWS_PER_POINT, MAX_REVIEWS_BONUS)
    return rating_score + reviews_score


def calculate_post_trending_score(upvotes: int | None) -> float:
    """
    Score a Reddit post from its upvotes: ln(upvotes + 1) * 30.

    Args:
        upvotes: Post upvote count, None if unknown

    Returns:
        Non-negative score, 0.0 for no upvotes
    """
    upvotes = max(upvotes or 0, 0)
    return math.log(upvotes + 1) * UPVOTE_WEIGHT
