"""Upstream record sources for the calendar feed."""

from calfeed.sources.adapters import EventAdapter, MeetingAdapter
from calfeed.sources.base import RecordAdapter, RecordStore
from calfeed.sources.fetcher import FetchResult, RecordFetcher
from calfeed.sources.json_store import JSONRecordStore
from calfeed.sources.memory_store import InMemoryRecordStore
from calfeed.sources.visibility import filter_visible, is_visible

__all__ = [
    "EventAdapter",
    "FetchResult",
    "InMemoryRecordStore",
    "JSONRecordStore",
    "MeetingAdapter",
    "RecordAdapter",
    "RecordFetcher",
    "RecordStore",
    "filter_visible",
    "is_visible",
]
