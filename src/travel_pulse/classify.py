"""
Text heuristics for Reddit posts and place records.

Three independent steps share this module:
- relevance filters (is this post a tip, a story, a trending mention?)
- category assignment (ordered keyword tables, first match wins)
- the actionable-tip rewrite (ordered regex rules, first match wins)

All checks run on lower-cased text. Filters return booleans and the rewrite
returns None on rejection; nothing here raises on bad input.
"""

import re

from .reference import COUNTRY_KEYWORDS, GENERIC_SUBREDDITS, popular_keywords_for

# --- Keyword tables ---

TIP_INCLUDE_KEYWORDS = [
    "tip", "advice", "recommend", "avoid", "mistake", "don't",
    "itinerary", "budget", "food", "transport", "hotel", "accommodation",
    "first time", "guide", "experience", "visit", "best", "better",
    "trick", "secret", "hidden", "worth", "must", "essential",
]

GENERAL_EXCLUDE_KEYWORDS = [
    "photo", "picture", "image", "meme", "joke",
    "politics", "news", "caught", "affair", "scandal",
    "relationship", "dating", "reddit meetup",
]

TIP_EXCLUDE_PHRASES = ["rate my", "photo", "picture", "image", "meme", "story of", "experience of"]

COMMON_VERBS = [
    "is", "are", "was", "were", "be", "have", "has", "had", "do", "does", "did",
    "avoid", "try", "visit", "go", "take", "use", "get", "book", "stay",
    "eat", "explore", "skip", "miss", "recommend", "suggest",
    "don't", "shouldn't", "must", "should", "consider", "check", "bring",
]

ACTION_WORDS = [
    "avoid", "try", "use", "visit", "book", "stay", "eat", "consider", "prefer",
    "do", "go", "take", "explore", "skip", "bring", "must", "should", "don't", "not",
]

STORY_INCLUDE_KEYWORDS = ["trip", "itinerary", "experience", "recommend", "first time", "travel"]

STORY_EXCLUDE_KEYWORDS = ["moving to japan", "job", "visa question", "anime"]

TRENDING_POST_KEYWORDS = [
    "recommend", "best", "must try", "hidden gem", "avoid", "experience", "worth it", "amazing",
]

# Ordered: the first category with any substring hit wins
TIP_CATEGORY_KEYWORDS: list[tuple[str, list[str]]] = [
    ("food", ["food", "eat", "restaurant", "ramen", "sushi", "meal", "cuisine", "café", "coffee", "drink", "taste", "flavor"]),
    ("transport", ["train", "bus", "transport", "taxi", "subway", "metro", "rail", "ticket", "suica", "ic card", "walk", "bike"]),
    ("itinerary", ["itinerary", "day trip", "planning", "schedule", "visit", "explore", "route", "circuit", "order", "when"]),
    ("budget", ["budget", "cost", "expensive", "cheap", "price", "money", "save", "value", "discount", "pass", "free"]),
    ("mistakes", ["avoid", "don't", "mistake", "wrong", "learned", "regret", "wish", "not", "don't waste", "trap"]),
]
DEFAULT_TIP_CATEGORY = "general"

POPULAR_DESTINATION_KEYWORDS = [
    "tower", "skytree", "sky tree", "palace", "castle", "garden", "museum", "park",
    "shrine", "temple", "mount", "mt ", "observation", "viewpoint", "national", "heritage",
]

PLACE_CATEGORIES = [
    "Food", "Nightlife", "Shopping", "Attractions", "Landmarks", "Popular Destinations", "Trending",
]

# --- Actionable tip rewrite ---

_SOURCE_PREFIX = re.compile(r"^(LPT|PSA|TIL|TRAVEL TIP|GUIDE|ADVICE|QUESTION|DAILY THREAD):\s*")
_BRACKET_TAG = re.compile(r"\[.*?\]\s*")
_JP_PREFIX = re.compile(r"^JP\s*")
_UNANSWERABLE = re.compile(
    r"^(for those.*|if you.*|anyone who.*|does anyone know|has anyone|can someone)", re.I
)
_SENTENCE_SPLIT = re.compile(r"[.!?]")

TIP_REWRITE_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"^don[’']t\s+(.+)$", re.I), r"Avoid \1"),
    (re.compile(r"^do not\s+(.+)$", re.I), r"Do not \1"),
    (re.compile(r"^(.+?)\s+is\s+not\s+(.+)$", re.I), r"Do not treat \1 as \2; plan accordingly"),
    (re.compile(r"^(.+?)\s+is\s+(a|the).*trap", re.I), r"\1 is a common tourist trap; consider alternatives instead"),
    (re.compile(r"^(.+?)\s+is\s+overrated$", re.I), r"\1 may not be worth the hype; consider your preferences"),
    (re.compile(r"^best\s+(.+?)(?:\s+in\s+.+)?$", re.I), r"For the best \1, explore less touristy neighborhoods"),
    (re.compile(r"^(?:must\s+)?try\s+(.+)$", re.I), r"Try \1 if you have the opportunity; it is worth experiencing"),
    (re.compile(r"^(.+?)\s+is\s+worth\s+(.+)$", re.I), r"\1 is worth \2; budget accordingly"),
    (re.compile(r"^(?:cheap|budget)\s+(.+)$", re.I), r"For budget options on \1, research local alternatives first"),
    (re.compile(r"^if\s+(.+?),\s+(.+)$", re.I), r"\2, especially if \1"),
    (re.compile(r"^(.+?)\s+is\s+better\s+than\s+(.+)$", re.I), r"Prefer \1 over \2 for a better experience and value"),
]

MIN_TIP_SENTENCE = 15
MAX_TIP_SENTENCE = 250
MAX_TIP_LENGTH = 220
MIN_TIP_WORDS = 8


def _has_word(text: str, word: str) -> bool:
    return re.search(rf"(?<![\w']){re.escape(word)}(?![\w'])", text) is not None


def _has_any(text: str, keywords: list[str]) -> bool:
    return any(kw in text for kw in keywords)


def is_relevant_tip(title: str, selftext: str = "") -> bool:
    """Strict quality gate for posts that might become travel tips."""
    full_text = f"{title} {selftext}".lower()

    if title.strip().endswith("?"):
        return False

    if len(title.split()) < MIN_TIP_WORDS:
        return False

    if not any(_has_word(full_text, verb) for verb in COMMON_VERBS):
        return False

    if _has_any(full_text, TIP_EXCLUDE_PHRASES):
        return False

    return _has_any(full_text, TIP_INCLUDE_KEYWORDS) and not _has_any(full_text, GENERAL_EXCLUDE_KEYWORDS)


def is_story_candidate(title: str, over_18: bool, subreddit: str, country: str | None = None) -> bool:
    """
    Decide whether a post is a travel story worth showing.

    Generic channels (r/travel and friends) must mention the country AND look like
    a travel post. Country channels only need the country mention since the
    channel is already scoped. Without a country, only the travel check applies.
    """
    lower_title = title.lower()
    if over_18:
        return False
    if title.strip().endswith("?"):
        return False
    if _has_any(lower_title, STORY_EXCLUDE_KEYWORDS) or _has_any(lower_title, GENERAL_EXCLUDE_KEYWORDS):
        return False

    has_travel_keyword = _has_any(lower_title, STORY_INCLUDE_KEYWORDS)
    if not country:
        return has_travel_keyword

    # Whole words only, unlike the other story checks: "kl" must not match "weekly"
    has_country_keyword = any(_has_word(lower_title, kw) for kw in COUNTRY_KEYWORDS.get(country, []))
    if subreddit.lower() in GENERIC_SUBREDDITS:
        return has_country_keyword and has_travel_keyword
    return has_country_keyword


def is_trending_post(title: str) -> bool:
    return _has_any(title.lower(), TRENDING_POST_KEYWORDS)


def categorize_tip(text: str) -> str:
    lower_text = text.lower()
    for category, keywords in TIP_CATEGORY_KEYWORDS:
        if _has_any(lower_text, keywords):
            return category
    return DEFAULT_TIP_CATEGORY


def categorize_place(types: list[str], name: str, city: str, country: str) -> str:
    """Map a place's type tags and name to a display category."""
    joined_types = " ".join(types).lower()
    name_lower = name.lower()

    # Landmarks by name beat every type-based category
    if _has_any(name_lower, POPULAR_DESTINATION_KEYWORDS) or _has_any(
        name_lower, popular_keywords_for(city, country)
    ):
        return "Popular Destinations"

    type_set = set(types)

    if type_set & {"restaurant", "cafe", "bar"} or "food" in joined_types:
        return "Food"

    if type_set & {"night_club", "nightclub"} or "night" in joined_types:
        return "Nightlife"

    if type_set & {"shopping_mall", "store", "department_store"} or "shop" in joined_types:
        return "Shopping"

    if type_set & {"amusement_park", "park", "point_of_interest", "tourist_attraction", "museum", "library"} or _has_any(
        joined_types, ["park", "temple", "shrine", "landmark", "monument"]
    ):
        return "Attractions"

    if "mosque" in type_set or _has_any(
        joined_types, ["temple", "shrine", "historic", "cathedral", "mosque", "observation"]
    ):
        return "Landmarks"

    return "Attractions"


def to_actionable_tip(title: str) -> str | None:
    """
    Rewrite a post title into imperative travel advice.

    Returns None when the title cannot become a usable tip. Callers drop the
    candidate in that case.
    """
    tip = _SOURCE_PREFIX.sub("", title)
    tip = _BRACKET_TAG.sub("", tip)
    tip = _JP_PREFIX.sub("", tip).strip()

    if not tip or _UNANSWERABLE.match(tip):
        return None

    for pattern, template in TIP_REWRITE_RULES:
        if pattern.search(tip):
            tip = pattern.sub(template, tip, count=1)
            break

    tip = tip[0].upper() + tip[1:]
    if not tip.endswith((".", "!")):
        tip += "."

    main_sentence = _SENTENCE_SPLIT.split(tip)[0].strip()
    if not MIN_TIP_SENTENCE <= len(main_sentence) <= MAX_TIP_SENTENCE:
        return None

    # Substring match: "visits", "booking" and "stays" count as action words
    if not _has_any(main_sentence.lower(), ACTION_WORDS):
        return None

    return tip[:MAX_TIP_LENGTH]
