"""Configuration management for clubcal."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.navigator import DEFAULT_VIEW_DAYS, MAX_VIEW_DAYS, MIN_VIEW_DAYS
from .core.search import InvalidSearchMode, parse_search_mode

logger = logging.getLogger(__name__)

CLUBCAL_HOME = Path(os.environ.get("CLUBCAL_HOME", Path.home() / "clubcal"))
CONFIG_FILE = CLUBCAL_HOME / "config" / "clubcal.conf"
DATA_DIR = CLUBCAL_HOME / "data"


@dataclass
class Config:
    """clubcal configuration."""

    timezone: str = "UTC"
    view_days: int = DEFAULT_VIEW_DAYS
    # Event source: a URL wins over a file when both are set
    events_file: str = ""
    events_url: str = ""
    schedule_dir: str = ""
    search_mode: str = "exact"
    # Semantic search: remote ranking service, local keyword scoring if unset
    scorer_url: str = ""
    semantic_limit: int | None = None
    http_timeout: int = 10


def _parse_int(key: str, value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring {key.upper()}: not an integer: {value!r}")
        return None


def _unquote(value: str) -> str:
    """Handle quoted values with inline comments: "value" # comment"""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config() -> Config:
    """Load configuration from clubcal.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        return config

    for line in CONFIG_FILE.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "timezone":
                config.timezone = value
            case "view_days":
                days = _parse_int(key, value)
                if days is None:
                    continue
                if MIN_VIEW_DAYS <= days <= MAX_VIEW_DAYS:
                    config.view_days = days
                else:
                    logger.warning(
                        f"Ignoring VIEW_DAYS={days}: must be between {MIN_VIEW_DAYS} and {MAX_VIEW_DAYS}"
                    )
            case "events_file":
                config.events_file = value
            case "events_url":
                config.events_url = value
            case "schedule_dir":
                config.schedule_dir = value
            case "search_mode":
                try:
                    config.search_mode = parse_search_mode(value).value
                except InvalidSearchMode as e:
                    logger.warning(f"Ignoring SEARCH_MODE: {e}")
            case "scorer_url":
                config.scorer_url = value
            case "semantic_limit":
                limit = _parse_int(key, value)
                if limit is not None:
                    config.semantic_limit = limit if limit > 0 else None
            case "http_timeout":
                timeout = _parse_int(key, value)
                if timeout is not None:
                    config.http_timeout = timeout

    return config
