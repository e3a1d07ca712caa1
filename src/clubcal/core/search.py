"""Free-text event search - no I/O dependencies."""

import re
from difflib import SequenceMatcher
from enum import Enum
from typing import Callable, Sequence

from .events import Event

# Minimum SequenceMatcher ratio for a query token to match a word in fuzzy mode
FUZZY_THRESHOLD = 0.8
# Query tokens shorter than this must appear literally
FUZZY_MIN_TOKEN = 3

_WORD = re.compile(r"[a-z0-9]+")


class SearchMode(Enum):
    EXACT = "exact"
    FUZZY = "fuzzy"
    SEMANTIC = "semantic"


class InvalidSearchMode(ValueError):
    """Raised when a search mode is unknown or unsupported."""

    pass


def parse_search_mode(mode: SearchMode | str) -> SearchMode:
    """Resolve a mode name. Raises InvalidSearchMode, never falls back."""
    if isinstance(mode, SearchMode):
        return mode
    try:
        return SearchMode(str(mode).strip().lower())
    except ValueError:
        raise InvalidSearchMode(f"Unsupported search mode: {mode!r}") from None


def exact_match(event: Event, query: str) -> bool:
    """Case-insensitive substring of title or description."""
    needle = query.strip().lower()
    return needle in event.title.lower() or needle in event.description.lower()


def _search_text(event: Event) -> str:
    return " ".join([event.title, event.description, *event.tags]).lower()


def _token_matches(token: str, words: set[str], haystack: str) -> bool:
    if token in haystack:
        return True
    if len(token) < FUZZY_MIN_TOKEN:
        return False
    return any(SequenceMatcher(None, token, word).ratio() >= FUZZY_THRESHOLD for word in words)


def fuzzy_match(event: Event, query: str) -> bool:
    """
    Typo-tolerant match.

    Anything exact_match accepts is accepted. Otherwise every query token has
    to either appear as a substring of the event text or be close to one of
    its words (SequenceMatcher ratio >= FUZZY_THRESHOLD).
    """
    if exact_match(event, query):
        return True
    tokens = _WORD.findall(query.lower())
    if not tokens:
        return False
    haystack = _search_text(event)
    words = set(_WORD.findall(haystack))
    return all(_token_matches(t, words, haystack) for t in tokens)


def search_events(
    events: list[Event],
    query: str,
    mode: SearchMode | str = SearchMode.EXACT,
    scorer: Callable[[list[Event], str], Sequence[Event]] | None = None,
    limit: int | None = None,
) -> list[Event]:
    """
    Match events against a free-text query.

    An empty or whitespace-only query returns the events unchanged. exact and
    fuzzy keep input order. semantic hands the whole list to `scorer` once and
    returns its ranking, restricted to the input events and cut to `limit`.
    """
    mode = parse_search_mode(mode)
    if not query.strip():
        return list(events)

    match mode:
        case SearchMode.EXACT:
            return [e for e in events if exact_match(e, query)]
        case SearchMode.FUZZY:
            return [e for e in events if fuzzy_match(e, query)]
        case SearchMode.SEMANTIC:
            if scorer is None:
                raise InvalidSearchMode("Semantic search requires a search scorer")
            return _rank(events, scorer(list(events), query.strip()), limit)


def _rank(events: list[Event], ranked: Sequence[Event], limit: int | None) -> list[Event]:
    known = {e.id for e in events}
    seen: set[str] = set()
    result = []
    for event in ranked:
        if event.id not in known or event.id in seen:
            continue
        seen.add(event.id)
        result.append(event)
    return result[:limit] if limit and limit > 0 else result
