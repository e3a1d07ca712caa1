"""Adapters - I/O implementations of ports."""

from .file_events import JsonFileEventSource
from .http_events import HttpEventSource, EventSourceError
from .file_store import FileKeyValueStore
from .memory_store import MemoryKeyValueStore
from .keyword_scorer import KeywordScorer
from .http_scorer import HttpSearchScorer, ScorerError

__all__ = [
    "JsonFileEventSource",
    "HttpEventSource",
    "EventSourceError",
    "FileKeyValueStore",
    "MemoryKeyValueStore",
    "KeywordScorer",
    "HttpSearchScorer",
    "ScorerError",
]
