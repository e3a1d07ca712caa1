"""Ports - interfaces/protocols for external dependencies."""

from .event_source import EventSource
from .event_classifier import EventClassifier
from .search_scorer import SearchScorer
from .kv_store import KeyValueStore

__all__ = [
    "EventSource",
    "EventClassifier",
    "SearchScorer",
    "KeyValueStore",
]
