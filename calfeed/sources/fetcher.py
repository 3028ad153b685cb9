"""Fetch, adapt, filter and order upstream records for one feed request."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, time
from typing import Callable, Optional

from calfeed.exceptions import RecordError, SourceUnavailableError
from calfeed.models.feed import FeedMode
from calfeed.models.record import CalendarRecord
from calfeed.output.timezone import NEW_YORK, TimezoneDefinition
from calfeed.sources.adapters import EventAdapter, MeetingAdapter
from calfeed.sources.base import RawDocument, RecordAdapter, RecordStore
from calfeed.sources.visibility import filter_visible

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Records ready for classification, in feed order."""

    records: list[CalendarRecord]
    skipped: int = 0


class RecordFetcher:
    """Reads both collections and returns the eligible records for a mode.

    Ordering: events ascending by start, then meetings descending by
    start. Records without any start sort last within their list.
    """

    def __init__(
        self,
        store: RecordStore,
        tz: TimezoneDefinition = NEW_YORK,
        max_workers: int = 2,
    ):
        self.store = store
        self.tz = tz
        self.max_workers = max_workers
        self.event_adapter = EventAdapter(tz)
        self.meeting_adapter = MeetingAdapter(tz)

    def fetch(self, mode: FeedMode) -> FetchResult:
        """Fetch records for ``mode``.

        Raises:
            SourceUnavailableError: if either collection can't be read
        """
        raw_events, raw_meetings = self._fetch_raw(mode)

        events, skipped_events = self._adapt_all(raw_events, self.event_adapter)
        meetings, skipped_meetings = self._adapt_all(raw_meetings, self.meeting_adapter)

        events = self._ordered(filter_visible(events, mode), descending=False)
        meetings = self._ordered(filter_visible(meetings, mode), descending=True)

        logger.info(
            f"Fetched {len(events)} events and {len(meetings)} meetings "
            f"for {mode.value} feed"
        )
        return FetchResult(
            records=events + meetings,
            skipped=skipped_events + skipped_meetings,
        )

    def _fetch_raw(self, mode: FeedMode) -> tuple[list[RawDocument], list[RawDocument]]:
        if not mode.is_private:
            # Meetings never appear in the public feed
            return self._call(self.store.list_events, "events"), []

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            events_future = pool.submit(self._call, self.store.list_events, "events")
            meetings_future = pool.submit(self._call, self.store.list_meetings, "meetings")
            return events_future.result(), meetings_future.result()

    def _call(self, loader: Callable[[], list[RawDocument]], collection: str) -> list[RawDocument]:
        try:
            return list(loader())
        except SourceUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Failed to fetch {collection}: {e}")
            raise SourceUnavailableError(f"Failed to fetch {collection}: {e}") from e

    def _adapt_all(
        self, documents: list[RawDocument], adapter: RecordAdapter
    ) -> tuple[list[CalendarRecord], int]:
        records = []
        skipped = 0
        for raw in documents:
            try:
                records.append(adapter.adapt(raw))
            except RecordError as e:
                logger.warning(f"Skipping {adapter.kind.value}: {e}")
                skipped += 1
        return records, skipped

    def start_key(self, record: CalendarRecord) -> Optional[datetime]:
        """UTC start used for ordering; all-day records sort at local midnight."""
        if record.start_time is not None:
            return record.start_time
        if record.start_date is not None:
            return self.tz.to_utc(datetime.combine(record.start_date, time.min))
        return None

    def _ordered(self, records: list[CalendarRecord], descending: bool) -> list[CalendarRecord]:
        dated = [r for r in records if self.start_key(r) is not None]
        undated = [r for r in records if self.start_key(r) is None]
        return sorted(dated, key=self.start_key, reverse=descending) + undated
