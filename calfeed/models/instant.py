"""Start/end instants of a feed entry.

An instant is either a point in time (``TimedInstant``) or a whole
calendar day (``DateOnly``). The date classifier picks the variant once
per record; everything downstream dispatches on the type instead of
re-inspecting the source fields.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Union


@dataclass(frozen=True)
class TimedInstant:
    """A UTC point in time."""

    utc: datetime

    def __post_init__(self):
        if self.utc.tzinfo is None:
            raise ValueError("TimedInstant requires a timezone-aware datetime")
        # Normalize so equality and rendering never depend on the source offset
        object.__setattr__(self, "utc", self.utc.astimezone(timezone.utc))


@dataclass(frozen=True)
class DateOnly:
    """A calendar date with no time of day."""

    day: date

    def __post_init__(self):
        if isinstance(self.day, datetime):
            raise ValueError("DateOnly requires a date, not a datetime")


Instant = Union[TimedInstant, DateOnly]


def is_all_day(instant: Instant) -> bool:
    """True for date-only instants."""
    return isinstance(instant, DateOnly)
