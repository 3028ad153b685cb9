"""Feed-level models: visibility mode, VEVENT records and the feed itself."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from calfeed.models.instant import Instant

if TYPE_CHECKING:
    from calfeed.output.timezone import TimezoneDefinition


class FeedMode(str, Enum):
    """Feed visibility mode."""

    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def from_query(cls, value: Optional[str]) -> "FeedMode":
        """Only the literal string ``"true"`` selects the private feed."""
        return cls.PRIVATE if value == "true" else cls.PUBLIC

    @property
    def is_private(self) -> bool:
        return self is FeedMode.PRIVATE

    @property
    def label(self) -> str:
        return self.value.title()


@dataclass(frozen=True)
class VEventRecord:
    """One VEVENT, built fresh per request and discarded after rendering."""

    uid: str
    dtstamp: datetime
    start: Instant
    end: Instant
    summary: str
    description: Optional[str] = None
    location: Optional[str] = None


@dataclass
class CalendarFeed:
    """Ordered VEVENTs plus the single timezone definition for one response."""

    mode: FeedMode
    timezone: "TimezoneDefinition"
    generated_at: datetime
    events: list[VEventRecord] = field(default_factory=list)
    skipped: int = 0

    def __len__(self) -> int:
        return len(self.events)
