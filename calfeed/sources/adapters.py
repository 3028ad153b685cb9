"""Adapters from upstream event/meeting documents to ``CalendarRecord``."""

from datetime import date, datetime
from typing import Mapping, Optional, Union

from pydantic import ValidationError

from calfeed.exceptions import DateParseError, MalformedRecordError
from calfeed.models.record import CalendarRecord, RecordKind
from calfeed.models.source import DATE_FIELDS, EventDocument, MeetingDocument
from calfeed.output.timezone import NEW_YORK, TimezoneDefinition
from calfeed.sources.base import RawDocument


def _validation_error(kind: RecordKind, raw: RawDocument, error: ValidationError):
    """Map a pydantic error to the record-level error taxonomy."""
    record_id = raw.get("id") if isinstance(raw, Mapping) else None
    fields = {str(err["loc"][0]) for err in error.errors() if err.get("loc")}
    message = f"Invalid {kind.value} {record_id}: {error.error_count()} validation error(s)"
    if fields & DATE_FIELDS:
        return DateParseError(message, record_id=record_id)
    return MalformedRecordError(message, record_id=record_id)


def _clean(value: Optional[str]) -> Optional[str]:
    """Strip text fields; blank values become None."""
    return (value or "").strip() or None


class _BaseAdapter:
    kind: RecordKind
    document_model: type

    def __init__(self, tz: TimezoneDefinition = NEW_YORK):
        self.tz = tz

    def _parse(self, raw: RawDocument):
        try:
            return self.document_model.model_validate(raw)
        except ValidationError as e:
            raise _validation_error(self.kind, raw, e) from e

    def _instant(self, value: Union[datetime, date, None]) -> Optional[datetime]:
        """Aware datetime for a time field; naive values are local wall-clock."""
        if value is None:
            return None
        if not isinstance(value, datetime):
            # A bare date in a time field: midnight local time
            value = datetime(value.year, value.month, value.day)
        if value.tzinfo is None:
            return self.tz.to_utc(value)
        return value

    def _start_fields(self, doc) -> tuple[Optional[date], Optional[datetime]]:
        """Start date and start time; a ``date`` carrying a time of day is timed."""
        start_date = doc.start_date
        start_time = doc.start_time
        if isinstance(start_date, datetime):
            if start_time is None:
                start_time = start_date
            start_date = None
        return start_date, self._instant(start_time)

    def _common(self, doc) -> dict:
        try:
            start_date, start_time = self._start_fields(doc)
            return {
                "id": doc.id,
                "kind": self.kind,
                "title": _clean(doc.title) or "",
                "description": _clean(doc.body),
                "location": _clean(doc.location),
                "start_date": start_date,
                "start_time": start_time,
                "end_time": self._instant(doc.end_time),
            }
        except ValueError as e:
            raise DateParseError(
                f"Invalid {self.kind.value} {doc.id}: {e}", record_id=doc.id
            ) from e


class EventAdapter(_BaseAdapter):
    """Maps event documents; status and visibility pass through."""

    kind = RecordKind.EVENT
    document_model = EventDocument

    def adapt(self, raw: RawDocument) -> CalendarRecord:
        doc = self._parse(raw)
        return CalendarRecord(
            **self._common(doc),
            status=doc.status,
            is_public=doc.is_public,
        )


class MeetingAdapter(_BaseAdapter):
    """Maps meeting documents. Meetings have no status and are never public."""

    kind = RecordKind.MEETING
    document_model = MeetingDocument

    def adapt(self, raw: RawDocument) -> CalendarRecord:
        doc = self._parse(raw)
        return CalendarRecord(**self._common(doc), is_public=False)
