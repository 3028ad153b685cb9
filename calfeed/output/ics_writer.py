"""ICS writer for calendar feeds."""

import logging
import re
from pathlib import Path

from calfeed.config import FeedConfig
from calfeed.models.feed import CalendarFeed, FeedMode, VEventRecord
from calfeed.output.text import content_line, join_lines
from calfeed.output.timezone import format_utc, instant_property

logger = logging.getLogger(__name__)


class ICSWriter:
    """Renders a ``CalendarFeed`` as an RFC 5545 document.

    Every content line is folded independently and terminated with CRLF.
    The VTIMEZONE block is always present, so an empty feed is still a
    valid calendar.
    """

    def __init__(self, config: FeedConfig | None = None):
        self.config = config or FeedConfig()

    def calendar_name(self, mode: FeedMode) -> str:
        return f"{self.config.org_short_name} - {mode.label}"

    def calendar_description(self, mode: FeedMode) -> str:
        return f"{self.config.org_name} - {mode.label} Events Calendar"

    def header_lines(self, feed: CalendarFeed) -> list[str]:
        name = self.calendar_name(feed.mode)
        relcalid = re.sub(r"\s+", "-", name)
        return [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            f"PRODID:-//{self.config.org_name}//{name}//EN",
            "CALSCALE:GREGORIAN",
            "METHOD:PUBLISH",
            f"X-WR-CALNAME:{name}",
            f"X-WR-CALDESC:{self.calendar_description(feed.mode)}",
            f"X-WR-TIMEZONE:{feed.timezone.tzid}",
            f"X-APPLE-CALENDAR-COLOR:{self.config.calendar_color}",
            f"X-WR-RELCALID:{relcalid}@{self.config.org_domain}",
        ]

    def event_lines(self, event: VEventRecord, feed: CalendarFeed) -> list[str]:
        dtstamp = format_utc(event.dtstamp)
        lines = [
            "BEGIN:VEVENT",
            f"UID:{event.uid}",
            f"DTSTAMP:{dtstamp}",
            instant_property("DTSTART", event.start, feed.timezone),
            instant_property("DTEND", event.end, feed.timezone),
            content_line("SUMMARY", event.summary),
        ]
        if event.description:
            lines.append(content_line("DESCRIPTION", event.description))
        if event.location:
            lines.append(content_line("LOCATION", event.location))
        lines.extend(
            [
                "STATUS:CONFIRMED",
                "SEQUENCE:0",
                f"LAST-MODIFIED:{dtstamp}",
                "END:VEVENT",
            ]
        )
        return lines

    def lines(self, feed: CalendarFeed) -> list[str]:
        """All content lines of the document, unfolded."""
        lines = self.header_lines(feed)
        lines.extend(feed.timezone.vtimezone_lines())
        for event in feed.events:
            lines.extend(self.event_lines(event, feed))
        lines.append("END:VCALENDAR")
        return lines

    def render(self, feed: CalendarFeed) -> str:
        return join_lines(self.lines(feed))

    def write(self, feed: CalendarFeed, path: Path) -> None:
        """Write the rendered feed to ``path`` as UTF-8 bytes."""
        content = self.render(feed).encode("utf-8")
        path.write_bytes(content)
        logger.info(f"Wrote {len(feed)} events to {path}")

    def filename(self, mode: FeedMode) -> str:
        return f"{mode.value}.ics"
