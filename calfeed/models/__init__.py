"""Pydantic and dataclass models for the calendar feed."""

from calfeed.models.instant import DateOnly, Instant, TimedInstant, is_all_day
from calfeed.models.record import CalendarRecord, RecordKind
from calfeed.models.feed import CalendarFeed, FeedMode, VEventRecord
from calfeed.models.source import EventDocument, MeetingDocument

__all__ = [
    "CalendarFeed",
    "CalendarRecord",
    "DateOnly",
    "EventDocument",
    "FeedMode",
    "Instant",
    "MeetingDocument",
    "RecordKind",
    "TimedInstant",
    "VEventRecord",
    "is_all_day",
]
