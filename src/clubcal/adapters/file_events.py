"""JSON file event source adapter."""

import json
import logging
from pathlib import Path

from clubcal.core.events import Event

logger = logging.getLogger(__name__)


def parse_events(data: list | dict, source: str = "events") -> list[Event]:
    """
    Parse event records, skipping the ones that cannot be used.

    Accepts a bare list or an object with an "events" list.
    """
    if isinstance(data, dict):
        data = data.get("events", [])
    if not isinstance(data, list):
        logger.warning(f"Ignoring {source}: expected a list of events")
        return []

    events = []
    for item in data:
        try:
            events.append(Event.from_dict(item))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            item_id = item.get("id") if isinstance(item, dict) else None
            logger.warning(f"Skipping event {item_id!r} from {source}: {e}")
            continue
    return events


class JsonFileEventSource:
    """
    Events from a local JSON file.

    Implements EventSource protocol.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def fetch_events(self) -> list[Event]:
        """Read all events. A missing file yields no events."""
        if not self.path.exists():
            logger.info(f"No events file at {self.path}")
            return []
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read events file {self.path}: {e}")
            return []
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse events file {self.path}: {e}")
            return []
        return parse_events(data, source=str(self.path))
