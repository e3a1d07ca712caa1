"""Event classifier interface."""

from typing import Protocol

from clubcal.core.events import Event, EventClass


class EventClassifier(Protocol):
    """Decides whether an event counts as a club or a social event."""

    def __call__(self, event: Event) -> EventClass:
        ...
