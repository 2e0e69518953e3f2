"""Near-duplicate removal for short texts (tips, titles)."""

import re
from collections.abc import Callable, Iterable
from typing import TypeVar

from rapidfuzz.distance import Levenshtein

T = TypeVar("T")

SIMILARITY_THRESHOLD = 0.75
KEY_PHRASE_WORDS = 8

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance (insert, delete, substitute all cost 1)."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """
    Normalized similarity in [0.0, 1.0]: (len(longer) - distance) / len(longer).

    Two empty strings are identical (1.0).
    """
    longer, shorter = (a, b) if len(a) > len(b) else (b, a)
    if not longer:
        return 1.0
    return (len(longer) - edit_distance(longer, shorter)) / len(longer)


def key_phrase(text: str, words: int = KEY_PHRASE_WORDS) -> str:
    """Lower-case, strip punctuation, collapse whitespace, keep the first `words` words."""
    normalized = _PUNCTUATION.sub("", text.lower())
    normalized = _WHITESPACE.sub(" ", normalized).strip()
    return " ".join(normalized.split(" ")[:words])


def dedupe(
    items: Iterable[T],
    key: Callable[[T], str],
    threshold: float = SIMILARITY_THRESHOLD,
) -> list[T]:
    """
    Drop items whose key phrase is too similar to one already kept.

    Stable: the first occurrence of each near-duplicate group survives, in input
    order. Quadratic in the number of kept items, fine for the bounded lists
    this runs on.
    """
    kept: list[T] = []
    seen_phrases: list[str] = []

    for item in items:
        phrase = key_phrase(key(item))
        if any(similarity(phrase, seen) > threshold for seen in seen_phrases):
            continue
        seen_phrases.append(phrase)
        kept.append(item)

    return kept


def dedupe_titles(items: Iterable[T], key: Callable[[T], str]) -> list[T]:
    """Keep the first item for each exact case-insensitive title."""
    seen: set[str] = set()
    unique: list[T] = []
    for item in items:
        title = key(item).lower()
        if title in seen:
            continue
        seen.add(title)
        unique.append(item)
    return unique
