"""Read generated .ics feeds back for checks and diagnostics."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from icalendar import Calendar

from calfeed.constants import MAX_LINE_OCTETS
from calfeed.exceptions import FeedFormatError
from calfeed.models.instant import DateOnly, Instant, TimedInstant, is_all_day
from calfeed.output.text import unfold_lines
from calfeed.output.timezone import TimezoneDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedEntry:
    """One VEVENT as a client would see it."""

    uid: str
    summary: str
    start: Instant
    end: Optional[Instant]
    description: Optional[str] = None
    location: Optional[str] = None

    @property
    def all_day(self) -> bool:
        return is_all_day(self.start)


@dataclass
class FeedSummary:
    """Parsed view of a feed plus any wire-format problems found."""

    calendar_name: Optional[str]
    timezone: Optional[TimezoneDefinition]
    entries: list[FeedEntry] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues


def wire_issues(text: str, limit: int = MAX_LINE_OCTETS) -> list[str]:
    """Check line endings, physical line length and BEGIN/END nesting."""
    issues = []
    if text and not text.endswith("\r\n"):
        issues.append("Document does not end with CRLF")

    physical = text.split("\r\n")
    if physical and physical[-1] == "":
        physical.pop()
    stack: list[str] = []
    for number, line in enumerate(physical, start=1):
        if "\n" in line or "\r" in line:
            issues.append(f"Line {number}: bare LF or CR line ending")
        size = len(line.encode("utf-8"))
        if size > limit:
            issues.append(f"Line {number}: {size} octets exceeds {limit}")
        if line.startswith("BEGIN:"):
            stack.append(line[6:])
        elif line.startswith("END:"):
            name = line[4:]
            if not stack or stack[-1] != name:
                issues.append(f"Line {number}: unbalanced END:{name}")
            else:
                stack.pop()
    for name in reversed(stack):
        issues.append(f"Unclosed BEGIN:{name}")
    return issues


class FeedReader:
    """Parses feeds with icalendar and decodes times via the embedded VTIMEZONE."""

    def read(self, path: Path) -> FeedSummary:
        logger.info(f"Reading feed: {path}")
        try:
            text = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FeedFormatError(f"Failed to read feed file: {e}") from e
        return self.parse(text)

    def parse(self, text: str) -> FeedSummary:
        if not text.strip():
            raise FeedFormatError("Feed is empty")
        try:
            cal = Calendar.from_ical(text)
        except Exception as e:
            raise FeedFormatError(f"Failed to parse feed: {e}") from e

        issues = wire_issues(text)
        tz = self._timezone(text, issues)

        entries = []
        for component in cal.walk("VEVENT"):
            try:
                entries.append(self._entry(component, tz))
            except (KeyError, ValueError) as e:
                issues.append(f"VEVENT {component.get('UID', '?')}: {e}")

        name = cal.get("X-WR-CALNAME")
        logger.info(f"Parsed {len(entries)} events, {len(issues)} issue(s)")
        return FeedSummary(
            calendar_name=str(name) if name is not None else None,
            timezone=tz,
            entries=entries,
            issues=issues,
        )

    def _timezone(self, text: str, issues: list[str]) -> Optional[TimezoneDefinition]:
        lines = unfold_lines(text)
        try:
            begin = lines.index("BEGIN:VTIMEZONE")
            end = lines.index("END:VTIMEZONE", begin)
        except ValueError:
            issues.append("No VTIMEZONE block")
            return None
        if lines.count("BEGIN:VTIMEZONE") != 1:
            issues.append("More than one VTIMEZONE block")
        try:
            return TimezoneDefinition.from_vtimezone_lines(lines[begin : end + 1])
        except (KeyError, ValueError) as e:
            issues.append(f"Unsupported VTIMEZONE: {e}")
            return None

    def _entry(self, component, tz: Optional[TimezoneDefinition]) -> FeedEntry:
        end = component.get("DTEND")
        return FeedEntry(
            uid=str(component["UID"]),
            summary=str(component.get("SUMMARY", "")),
            start=self._instant(component["DTSTART"], tz),
            end=self._instant(end, tz) if end is not None else None,
            description=self._text(component, "DESCRIPTION"),
            location=self._text(component, "LOCATION"),
        )

    def _text(self, component, name: str) -> Optional[str]:
        value = component.get(name)
        return str(value) if value is not None else None

    def _instant(self, prop, tz: Optional[TimezoneDefinition]) -> Instant:
        value = prop.dt
        if isinstance(value, datetime):
            if "TZID" in prop.params and tz is not None and prop.params["TZID"] == tz.tzid:
                # Decode the wall-clock fields with our own rules
                return TimedInstant(tz.to_utc(value.replace(tzinfo=None)))
            if value.tzinfo is None:
                raise ValueError("floating date-time without TZID")
            return TimedInstant(value)
        if isinstance(value, date):
            return DateOnly(value)
        raise ValueError(f"Unsupported date value: {value!r}")
