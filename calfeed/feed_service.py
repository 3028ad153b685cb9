"""Feed generation: fetch → filter → classify → assemble → render."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from calfeed.config import FeedConfig
from calfeed.constants import UNTITLED_SUMMARIES
from calfeed.models.feed import CalendarFeed, FeedMode, VEventRecord
from calfeed.models.record import CalendarRecord
from calfeed.output.ics_writer import ICSWriter
from calfeed.output.timezone import NEW_YORK, TimezoneDefinition
from calfeed.processing.date_classifier import ClassifiedRecord, DateClassifier
from calfeed.sources.base import RecordStore
from calfeed.sources.fetcher import RecordFetcher

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def make_uid(record: CalendarRecord, domain: str) -> str:
    """Stable UID; the kind prefix keeps events and meetings apart."""
    return f"{record.kind.value}-{record.id}@{domain}"


def summary_for(record: CalendarRecord) -> str:
    title = record.title.strip()
    return title or UNTITLED_SUMMARIES[record.kind.value]


@dataclass
class FeedResult:
    """Rendered document plus the feed it came from."""

    feed: CalendarFeed
    body: str
    filename: str

    @property
    def event_count(self) -> int:
        return len(self.feed)


class FeedService:
    """Builds a complete feed for one request.

    Holds no per-request state, so one instance can serve concurrent
    requests. ``clock`` is the only source of DTSTAMP/LAST-MODIFIED.
    """

    def __init__(
        self,
        store: RecordStore,
        config: Optional[FeedConfig] = None,
        clock: Clock = utc_now,
        tz: TimezoneDefinition = NEW_YORK,
    ):
        self.config = config or FeedConfig()
        self.clock = clock
        self.tz = tz
        self.fetcher = RecordFetcher(store, tz=tz, max_workers=self.config.fetch_workers)
        self.classifier = DateClassifier(tz=tz)
        self.writer = ICSWriter(self.config)

    def build(self, mode: FeedMode, now: Optional[datetime] = None) -> CalendarFeed:
        """Assemble the feed model.

        Raises:
            SourceUnavailableError: the record store can't be read
        """
        generated_at = now or self.clock()
        fetched = self.fetcher.fetch(mode)
        classified, skipped = self.classifier.classify_all(fetched.records)

        feed = CalendarFeed(
            mode=mode,
            timezone=self.tz,
            generated_at=generated_at,
            events=[self._vevent(item, generated_at) for item in classified],
            skipped=fetched.skipped + skipped,
        )
        if feed.skipped:
            logger.warning(f"Skipped {feed.skipped} record(s) for {mode.value} feed")
        logger.info(f"Assembled {len(feed)} events for {mode.value} feed")
        return feed

    def generate(self, mode: FeedMode, now: Optional[datetime] = None) -> FeedResult:
        feed = self.build(mode, now=now)
        return FeedResult(
            feed=feed,
            body=self.writer.render(feed),
            filename=self.writer.filename(mode),
        )

    def _vevent(self, item: ClassifiedRecord, generated_at: datetime) -> VEventRecord:
        record = item.record
        return VEventRecord(
            uid=make_uid(record, self.config.org_domain),
            dtstamp=generated_at,
            start=item.start,
            end=item.end,
            summary=summary_for(record),
            description=record.description or None,
            location=record.location or None,
        )
