"""HTTP ranking-service scorer adapter."""

import logging

import requests

from clubcal.core.events import Event

logger = logging.getLogger(__name__)


class ScorerError(RuntimeError):
    """Raised when the ranking service fails."""

    pass


class HttpSearchScorer:
    """
    Delegates semantic ranking to a remote service.

    Implements SearchScorer protocol. POSTs the query and a compact view of the
    events, and expects {"ids": [...]} ordered by relevance.
    """

    def __init__(self, url: str, timeout: int = 10, session: requests.Session | None = None):
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def _payload(self, events: list[Event], query: str) -> dict:
        return {
            "query": query,
            "events": [
                {
                    "id": e.id,
                    "title": e.title,
                    "description": e.description,
                    "category": e.category.value,
                    "categories": [c.value for c in e.categories],
                    "tags": list(e.tags),
                    "location": e.location,
                }
                for e in events
            ],
        }

    def __call__(self, events: list[Event], query: str) -> list[Event]:
        try:
            resp = self._session.post(
                self.url, json=self._payload(events, query), timeout=self.timeout
            )
            resp.raise_for_status()
            ids = resp.json()["ids"]
        except requests.RequestException as e:
            logger.error(f"Ranking service request failed: {e}")
            raise ScorerError(f"Ranking service request failed: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise ScorerError(f"Invalid ranking service response: {e}") from e

        by_id = {e.id: e for e in events}
        ranked = [by_id[str(i)] for i in ids if str(i) in by_id]
        logger.debug(f"Ranking service returned {len(ids)} ids, {len(ranked)} known")
        return ranked
