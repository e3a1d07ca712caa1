"""HTTP event source adapter."""

import logging

import requests

from clubcal.core.events import Event

from .file_events import parse_events

logger = logging.getLogger(__name__)


class EventSourceError(RuntimeError):
    """Raised when the events API cannot be reached or returns garbage."""

    pass


class HttpEventSource:
    """
    Events from a REST API.

    Implements EventSource protocol. GETs {base_url}/events.
    """

    def __init__(self, base_url: str, timeout: int = 10, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch_events(self) -> list[Event]:
        """Fetch all events from the API."""
        url = f"{self.base_url}/events"
        try:
            resp = self._session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch events from {url}: {e}")
            raise EventSourceError(f"Failed to fetch events from {url}: {e}") from e
        except ValueError as e:
            raise EventSourceError(f"Invalid JSON from {url}: {e}") from e
        return parse_events(data, source=url)
