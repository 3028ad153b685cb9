"""Upstream document models.

These mirror what the admin store hands us for events and meetings.
Keys arrive in camelCase; date fields may be ISO-8601 strings or
already-parsed ``date``/``datetime`` objects.
"""

from datetime import date, datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

DateValue = Optional[Union[datetime, date]]

# Upstream field names (aliases) that carry dates
DATE_FIELDS = frozenset({"date", "startTime", "endTime"})


def parse_date_value(v: Any) -> Any:
    """Parse an ISO-8601 date or date-time string.

    ``YYYY-MM-DD`` becomes a ``date``; anything longer becomes a
    ``datetime`` (naive if the string has no offset). A trailing ``Z`` is
    accepted as UTC.
    """
    if v is None or isinstance(v, (date, datetime)):
        return v
    if isinstance(v, str):
        text = v.strip()
        if not text:
            return None
        if len(text) == 10:
            return date.fromisoformat(text)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise ValueError(f"Unsupported date value: {v!r}")


class _SourceDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: DateValue = Field(default=None, alias="date")
    start_time: DateValue = Field(default=None, alias="startTime")
    end_time: DateValue = Field(default=None, alias="endTime")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Store IDs may be numeric; UIDs are built from their string form."""
        if isinstance(v, (int, str)) and not isinstance(v, bool):
            return str(v)
        raise ValueError(f"Invalid record id: {v!r}")

    @field_validator("start_date", "start_time", "end_time", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return parse_date_value(v)


class EventDocument(_SourceDocument):
    """Event as stored upstream."""

    status: Optional[str] = None
    is_public: bool = Field(default=False, alias="isPublic")
    purpose: Optional[str] = None

    @property
    def body(self) -> Optional[str]:
        """Event description; older records keep it under ``purpose``."""
        return self.purpose or self.description


class MeetingDocument(_SourceDocument):
    """Internal meeting as stored upstream. Meetings have no status."""

    @property
    def body(self) -> Optional[str]:
        return self.description
