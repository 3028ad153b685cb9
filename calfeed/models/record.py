"""Calendar record model with Pydantic v2 validation."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field, field_validator


class RecordKind(str, Enum):
    """Source collection a record came from."""

    EVENT = "event"
    MEETING = "meeting"


class CalendarRecord(BaseModel):
    """Common shape for events and meetings.

    Built by the source adapters. ``start_time``/``end_time`` are always
    timezone-aware; ``start_date`` is the record's local calendar date.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    kind: RecordKind
    title: str = ""
    description: Optional[str] = None
    location: Optional[str] = None
    status: Optional[str] = None
    is_public: bool = False
    start_date: Optional[date] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def require_aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Reject naive datetimes; adapters localize before building records."""
        if v is not None and v.tzinfo is None:
            raise ValueError("datetime must be timezone-aware")
        return v

    @field_validator("start_date", mode="before")
    @classmethod
    def reject_datetime(cls, v):
        if isinstance(v, datetime):
            raise ValueError("start_date must be a date, not a datetime")
        return v

    @computed_field
    @property
    def has_start(self) -> bool:
        """True if the record carries any start information."""
        return self.start_time is not None or self.start_date is not None

    @computed_field
    @property
    def source_label(self) -> str:
        """Human-readable label used in log messages."""
        return f"{self.kind.value} {self.id} ({self.title or 'untitled'})"
