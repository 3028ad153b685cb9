"""Decide timed vs. all-day semantics and compute start/end instants."""

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta

from calfeed.constants import DEFAULT_EVENT_DURATION_MINUTES
from calfeed.exceptions import DateParseError, MalformedRecordError
from calfeed.models.instant import DateOnly, Instant, TimedInstant, is_all_day
from calfeed.models.record import CalendarRecord
from calfeed.output.timezone import NEW_YORK, TimezoneDefinition

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59)


@dataclass(frozen=True)
class ClassifiedRecord:
    """A record paired with its resolved instants."""

    record: CalendarRecord
    start: Instant
    end: Instant

    @property
    def all_day(self) -> bool:
        return is_all_day(self.start)


class DateClassifier:
    """Classifies records once; downstream code only sees ``Instant`` values."""

    def __init__(
        self,
        tz: TimezoneDefinition = NEW_YORK,
        default_duration: timedelta = timedelta(minutes=DEFAULT_EVENT_DURATION_MINUTES),
    ):
        self.tz = tz
        self.default_duration = default_duration

    def classify(self, record: CalendarRecord) -> ClassifiedRecord:
        """Resolve start and end for a single record.

        Raises:
            MalformedRecordError: record has neither a date nor a start time
            DateParseError: the resolved end falls before the start
        """
        if not record.has_start:
            raise MalformedRecordError(
                f"{record.source_label} has neither a date nor a start time",
                record_id=record.id,
            )
        if record.start_time is not None:
            start = TimedInstant(record.start_time)
            end = self._timed_end(record, start)
        else:
            start = DateOnly(record.start_date)
            end = self._all_day_end(record, start)
        return ClassifiedRecord(record=record, start=start, end=end)

    def classify_all(self, records: list[CalendarRecord]) -> tuple[list[ClassifiedRecord], int]:
        """Classify in order, skipping and logging records that can't be emitted.

        Returns the classified records and the number skipped.
        """
        classified = []
        skipped = 0
        for record in records:
            try:
                classified.append(self.classify(record))
            except (MalformedRecordError, DateParseError) as e:
                logger.warning(f"Skipping {record.source_label}: {e}")
                skipped += 1
        return classified, skipped

    def end_of_day(self, start: DateOnly) -> datetime:
        """UTC instant of 23:59:59 local time on an all-day start date."""
        return self.tz.to_utc(datetime.combine(start.day, END_OF_DAY))

    def _timed_end(self, record: CalendarRecord, start: TimedInstant) -> TimedInstant:
        if record.end_time is None:
            return TimedInstant(start.utc + self.default_duration)
        end = TimedInstant(record.end_time)
        if end.utc < start.utc:
            raise DateParseError(
                f"{record.source_label} ends before it starts", record_id=record.id
            )
        return end

    def _all_day_end(self, record: CalendarRecord, start: DateOnly) -> DateOnly:
        if record.end_time is not None:
            end_day = self.tz.local_date(record.end_time)
        else:
            # 23:59:59 local on the start date; as a DATE value that is the start date
            end_day = self.tz.to_wall(self.end_of_day(start)).date()
        if end_day < start.day:
            raise DateParseError(
                f"{record.source_label} ends before it starts", record_id=record.id
            )
        return DateOnly(end_day)
