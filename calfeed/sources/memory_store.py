"""In-memory record store for tests and embedding."""

from typing import Optional

from calfeed.sources.base import RawDocument


class InMemoryRecordStore:
    """Holds raw documents in lists. ``fail_with`` simulates an outage."""

    def __init__(
        self,
        events: Optional[list[RawDocument]] = None,
        meetings: Optional[list[RawDocument]] = None,
        fail_with: Optional[Exception] = None,
    ):
        self.events = list(events or [])
        self.meetings = list(meetings or [])
        self.fail_with = fail_with

    def list_events(self) -> list[RawDocument]:
        if self.fail_with is not None:
            raise self.fail_with
        return list(self.events)

    def list_meetings(self) -> list[RawDocument]:
        if self.fail_with is not None:
            raise self.fail_with
        return list(self.meetings)
