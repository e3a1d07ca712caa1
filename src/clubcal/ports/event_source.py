"""Event source interface."""

from typing import Protocol

from clubcal.core.events import Event


class EventSource(Protocol):
    """Interface for fetching the flat event list from any backend."""

    def fetch_events(self) -> list[Event]:
        """Fetch all known events."""
        ...
