"""Semantic search scorer interface."""

from typing import Protocol, Sequence

from clubcal.core.events import Event


class SearchScorer(Protocol):
    """Ranks events by relevance to a free-text query."""

    def __call__(self, events: list[Event], query: str) -> Sequence[Event]:
        """Return the relevant subset of events, most relevant first."""
        ...
