"""Protocols for the upstream record store and its adapters."""

from typing import Any, Mapping, Protocol

from calfeed.models.record import CalendarRecord, RecordKind

RawDocument = Mapping[str, Any]


class RecordStore(Protocol):
    """Read-only view of the upstream event and meeting collections.

    Implementations raise any exception when the store can't be reached;
    the fetcher turns that into ``SourceUnavailableError``.
    """

    def list_events(self) -> list[RawDocument]:
        """Return every event document."""
        ...

    def list_meetings(self) -> list[RawDocument]:
        """Return every meeting document."""
        ...


class RecordAdapter(Protocol):
    """Maps one raw upstream document into a ``CalendarRecord``."""

    kind: RecordKind

    def adapt(self, raw: RawDocument) -> CalendarRecord:
        """Raise ``RecordError`` subclasses for documents that can't be mapped."""
        ...
