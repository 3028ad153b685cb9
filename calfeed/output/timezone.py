"""Wall-clock formatting and the embedded VTIMEZONE definition.

The feed never relies on the host's tz database. Offsets and DST
transitions come from the rule table below, and the same rules are
rendered into the VTIMEZONE block so clients decode exactly what we
encoded.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

from calfeed.constants import TZID
from calfeed.models.instant import DateOnly, Instant, TimedInstant

SUNDAY = calendar.SUNDAY

_WEEKDAY_CODES = {
    calendar.MONDAY: "MO",
    calendar.TUESDAY: "TU",
    calendar.WEDNESDAY: "WE",
    calendar.THURSDAY: "TH",
    calendar.FRIDAY: "FR",
    calendar.SATURDAY: "SA",
    calendar.SUNDAY: "SU",
}
_CODE_WEEKDAYS = {code: day for day, code in _WEEKDAY_CODES.items()}

WALL_FORMAT = "%Y%m%dT%H%M%S"
UTC_FORMAT = "%Y%m%dT%H%M%SZ"
DATE_FORMAT = "%Y%m%d"


def nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """Return the n-th ``weekday`` (0=Monday) of a month, n starting at 1."""
    first = date(year, month, 1)
    delta = (weekday - first.weekday()) % 7
    day = first + timedelta(days=delta + 7 * (n - 1))
    if day.month != month:
        raise ValueError(f"No occurrence {n} of weekday {weekday} in {year}-{month:02d}")
    return day


def format_offset(offset: timedelta) -> str:
    """Render a UTC offset as ``+HHMM``/``-HHMM``."""
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    hours, remainder = divmod(abs(total), 3600)
    return f"{sign}{hours:02d}{remainder // 60:02d}"


def parse_offset(text: str) -> timedelta:
    """Inverse of :func:`format_offset`."""
    text = text.strip()
    sign = -1 if text.startswith("-") else 1
    digits = text.lstrip("+-")
    if len(digits) not in (4, 6) or not digits.isdigit():
        raise ValueError(f"Invalid UTC offset: {text!r}")
    seconds = int(digits[:2]) * 3600 + int(digits[2:4]) * 60
    if len(digits) == 6:
        seconds += int(digits[4:])
    return timedelta(seconds=sign * seconds)


@dataclass(frozen=True)
class TransitionRule:
    """Yearly switch into an observance (STANDARD or DAYLIGHT).

    ``hour`` is local wall-clock time measured in the offset in force
    *before* the switch (``offset_from``).
    """

    component: str
    name: str
    month: int
    week: int
    weekday: int
    hour: int
    offset_from: timedelta
    offset_to: timedelta

    def wall_time(self, year: int) -> datetime:
        """Local wall-clock moment of the transition (naive)."""
        day = nth_weekday(year, self.month, self.weekday, self.week)
        return datetime(day.year, day.month, day.day, self.hour)

    def utc_time(self, year: int) -> datetime:
        """UTC moment of the transition."""
        return (self.wall_time(year) - self.offset_from).replace(tzinfo=timezone.utc)

    @property
    def rrule(self) -> str:
        return (
            f"FREQ=YEARLY;BYMONTH={self.month};"
            f"BYDAY={self.week}{_WEEKDAY_CODES[self.weekday]}"
        )

    def lines(self, base_year: int) -> list[str]:
        return [
            f"BEGIN:{self.component}",
            f"TZOFFSETFROM:{format_offset(self.offset_from)}",
            f"TZOFFSETTO:{format_offset(self.offset_to)}",
            f"TZNAME:{self.name}",
            f"DTSTART:{self.wall_time(base_year).strftime(WALL_FORMAT)}",
            f"RRULE:{self.rrule}",
            f"END:{self.component}",
        ]


class TimezoneDefinition:
    """A named zone with one standard and one daylight rule.

    Assumes a northern-hemisphere zone, i.e. daylight time starts and
    ends within the same calendar year.
    """

    def __init__(
        self,
        tzid: str,
        standard: TransitionRule,
        daylight: TransitionRule,
        base_year: int = 1970,
    ):
        self.tzid = tzid
        self.standard = standard
        self.daylight = daylight
        self.base_year = base_year

    def __repr__(self) -> str:
        return f"TimezoneDefinition({self.tzid!r})"

    def is_dst(self, utc: datetime) -> bool:
        """True if daylight time is in force at the given instant."""
        utc = utc.astimezone(timezone.utc)
        year = utc.year
        return self.daylight.utc_time(year) <= utc < self.standard.utc_time(year)

    def utc_offset(self, utc: datetime) -> timedelta:
        if self.is_dst(utc):
            return self.daylight.offset_to
        return self.standard.offset_to

    def to_wall(self, utc: datetime) -> datetime:
        """Convert an aware datetime to naive local wall-clock time."""
        if utc.tzinfo is None:
            raise ValueError("to_wall requires a timezone-aware datetime")
        utc = utc.astimezone(timezone.utc)
        return (utc + self.utc_offset(utc)).replace(tzinfo=None)

    def to_utc(self, wall: datetime) -> datetime:
        """Convert naive local wall-clock time to an aware UTC datetime.

        Times inside the spring-forward gap use the offset before the gap;
        repeated times in the autumn use the first (daylight) occurrence.
        """
        if wall.tzinfo is not None:
            raise ValueError("to_utc expects a naive wall-clock datetime")
        year = wall.year
        gap = self.daylight.offset_to - self.daylight.offset_from
        dst_start = self.daylight.wall_time(year) + gap
        dst_end = self.standard.wall_time(year)
        if dst_start <= wall < dst_end:
            offset = self.daylight.offset_to
        else:
            offset = self.standard.offset_to
        return (wall - offset).replace(tzinfo=timezone.utc)

    def local_date(self, value: datetime) -> date:
        """Calendar date of an aware datetime in this zone."""
        return self.to_wall(value).date()

    def vtimezone_lines(self) -> list[str]:
        """Render the VTIMEZONE component, unfolded, without line endings."""
        lines = [
            "BEGIN:VTIMEZONE",
            f"TZID:{self.tzid}",
            f"X-LIC-LOCATION:{self.tzid}",
        ]
        lines.extend(self.daylight.lines(self.base_year))
        lines.extend(self.standard.lines(self.base_year))
        lines.append("END:VTIMEZONE")
        return lines

    @classmethod
    def from_vtimezone_lines(cls, lines: Iterable[str]) -> "TimezoneDefinition":
        """Rebuild a definition from unfolded VTIMEZONE content lines.

        Only the subset we emit is understood: one STANDARD and one
        DAYLIGHT block, each with a yearly ``BYMONTH``/``BYDAY`` rule.
        """
        tzid: Optional[str] = None
        blocks: dict[str, dict[str, str]] = {}
        current: Optional[dict[str, str]] = None
        for line in lines:
            name, _, value = line.partition(":")
            if name in ("BEGIN", "END") and value in ("STANDARD", "DAYLIGHT"):
                current = blocks.setdefault(value, {}) if name == "BEGIN" else None
            elif name == "TZID":
                tzid = value
            elif current is not None:
                current[name] = value

        if tzid is None or set(blocks) != {"STANDARD", "DAYLIGHT"}:
            raise ValueError("VTIMEZONE must define TZID, STANDARD and DAYLIGHT")

        rules = {}
        base_year = None
        for component, props in blocks.items():
            rrule = dict(part.split("=", 1) for part in props["RRULE"].split(";"))
            byday = rrule["BYDAY"]
            start = datetime.strptime(props["DTSTART"], WALL_FORMAT)
            base_year = start.year
            rules[component] = TransitionRule(
                component=component,
                name=props.get("TZNAME", component),
                month=int(rrule["BYMONTH"]),
                week=int(byday[:-2]),
                weekday=_CODE_WEEKDAYS[byday[-2:]],
                hour=start.hour,
                offset_from=parse_offset(props["TZOFFSETFROM"]),
                offset_to=parse_offset(props["TZOFFSETTO"]),
            )
        return cls(tzid, rules["STANDARD"], rules["DAYLIGHT"], base_year=base_year)


# Current US rule (in force since 2007)
NEW_YORK = TimezoneDefinition(
    TZID,
    standard=TransitionRule(
        component="STANDARD",
        name="EST",
        month=11,
        week=1,
        weekday=SUNDAY,
        hour=2,
        offset_from=timedelta(hours=-4),
        offset_to=timedelta(hours=-5),
    ),
    daylight=TransitionRule(
        component="DAYLIGHT",
        name="EDT",
        month=3,
        week=2,
        weekday=SUNDAY,
        hour=2,
        offset_from=timedelta(hours=-5),
        offset_to=timedelta(hours=-4),
    ),
)


def format_utc(value: datetime) -> str:
    """``YYYYMMDDTHHMMSSZ`` for DTSTAMP / LAST-MODIFIED."""
    if value.tzinfo is None:
        raise ValueError("format_utc requires a timezone-aware datetime")
    return value.astimezone(timezone.utc).strftime(UTC_FORMAT)


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_wall(utc: datetime, tz: TimezoneDefinition = NEW_YORK) -> str:
    """``YYYYMMDDTHHMMSS`` in the zone's wall-clock time, no offset."""
    return tz.to_wall(utc).strftime(WALL_FORMAT)


def parse_wall(text: str) -> datetime:
    """Parse a ``YYYYMMDDTHHMMSS`` value into a naive datetime."""
    return datetime.strptime(text, WALL_FORMAT)


def format_instant(instant: Instant, tz: TimezoneDefinition = NEW_YORK) -> str:
    """Value part of a DTSTART/DTEND for either instant variant."""
    if isinstance(instant, DateOnly):
        return format_date(instant.day)
    if isinstance(instant, TimedInstant):
        return format_wall(instant.utc, tz)
    raise TypeError(f"Unsupported instant: {instant!r}")


def instant_property(name: str, instant: Instant, tz: TimezoneDefinition = NEW_YORK) -> str:
    """Full DTSTART/DTEND content line (unfolded)."""
    if isinstance(instant, DateOnly):
        return f"{name};VALUE=DATE:{format_instant(instant, tz)}"
    return f"{name};TZID={tz.tzid}:{format_instant(instant, tz)}"
