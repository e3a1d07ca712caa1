"""Week-indexed store of scheduled (pinned) events.

The mapping lives in memory and is the authoritative copy. Every mutation is
written through to the key-value backend as JSON of the shape
{"2025-W10": ["event-id", ...]}.
"""

import json
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clubcal.ports.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "clubcal_scheduled_events"


class PersistenceReadFailure(Exception):
    """Stored schedule data could not be read. Recovered as an empty mapping."""

    pass


class PersistenceWriteFailure(Exception):
    """The backend rejected a write. In-memory state is kept."""

    pass


class ScheduledEventStore:
    """
    Scheduled event ids per ISO week key.

    Reads are tolerant: a missing key loads as an empty mapping, malformed
    data loads as an empty mapping with a warning (see last_read_failure).
    Weeks emptied by unschedule stay in the mapping as empty entries.
    """

    def __init__(self, backend: "KeyValueStore", storage_key: str = STORAGE_KEY):
        self.backend = backend
        self.storage_key = storage_key
        self.last_read_failure: PersistenceReadFailure | None = None
        self._scheduled: dict[str, set[str]] = {}
        self.reload()

    def reload(self) -> None:
        """Replace the in-memory mapping with what the backend holds."""
        self.last_read_failure = None
        try:
            raw = self.backend.read(self.storage_key)
        except Exception as e:
            self._read_failed(f"Failed to read scheduled events: {e}")
            return

        if not raw:
            self._scheduled = {}
            return

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            self._read_failed(f"Malformed scheduled events data: {e}")
            return

        if not isinstance(data, dict):
            self._read_failed(
                f"Malformed scheduled events data: expected an object, got {type(data).__name__}"
            )
            return

        scheduled = {}
        for week_key, ids in data.items():
            if not isinstance(ids, list):
                logger.warning(f"Dropping malformed entry for week {week_key}: {ids!r}")
                continue
            scheduled[str(week_key)] = {str(i) for i in ids}
        self._scheduled = scheduled

    def _read_failed(self, message: str) -> None:
        logger.warning(f"{message} - starting with an empty schedule")
        self.last_read_failure = PersistenceReadFailure(message)
        self._scheduled = {}

    def _save(self) -> None:
        payload = json.dumps(
            {week_key: sorted(ids) for week_key, ids in self._scheduled.items()}
        )
        try:
            self.backend.write(self.storage_key, payload)
        except Exception as e:
            logger.error(f"Failed to save scheduled events: {e}")
            raise PersistenceWriteFailure(f"Failed to save scheduled events: {e}") from e

    def is_scheduled(self, event_id: str, week_key: str) -> bool:
        """Check if an event is pinned to a week."""
        return event_id in self._scheduled.get(week_key, ())

    def schedule(self, event_id: str, week_key: str) -> None:
        """Pin an event to a week. No-op if already pinned."""
        ids = self._scheduled.setdefault(week_key, set())
        if event_id in ids:
            return
        ids.add(event_id)
        self._save()

    def unschedule(self, event_id: str, week_key: str) -> None:
        """Unpin an event from a week. No-op if not pinned."""
        ids = self._scheduled.get(week_key)
        if ids is None or event_id not in ids:
            return
        ids.discard(event_id)
        self._save()

    def ids_for(self, week_key: str) -> set[str]:
        """Event ids pinned to a week (empty if the week is unknown)."""
        return set(self._scheduled.get(week_key, ()))

    def all_scheduled_ids(self) -> set[str]:
        """Event ids pinned to any week."""
        return set().union(*self._scheduled.values())

    def week_keys(self) -> list[str]:
        """Weeks with at least one pinned event."""
        return sorted(k for k, ids in self._scheduled.items() if ids)

    def snapshot(self) -> dict[str, set[str]]:
        """Copy of the full mapping, empty weeks included."""
        return {k: set(ids) for k, ids in self._scheduled.items()}
