"""Mode-specific inclusion rules."""

from calfeed.constants import APPROVED_STATUS
from calfeed.models.feed import FeedMode
from calfeed.models.record import CalendarRecord, RecordKind


def is_visible(record: CalendarRecord, mode: FeedMode) -> bool:
    """Whether a record belongs in the feed for ``mode``.

    Public: approved events flagged public; never meetings.
    Private: every approved event plus every meeting.
    """
    if record.kind is RecordKind.MEETING:
        return mode.is_private
    if record.status != APPROVED_STATUS:
        return False
    return mode.is_private or record.is_public


def filter_visible(records: list[CalendarRecord], mode: FeedMode) -> list[CalendarRecord]:
    return [record for record in records if is_visible(record, mode)]
