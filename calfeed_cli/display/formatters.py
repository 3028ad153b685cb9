"""Pure formatting functions for display output."""

from calfeed.models.instant import DateOnly, Instant
from calfeed.output.timezone import NEW_YORK, TimezoneDefinition


def format_instant(instant: Instant | None, tz: TimezoneDefinition | None = None) -> str:
    """Format an instant for tables.

    Args:
        instant: Instant to format, or None.
        tz: Zone for wall-clock display (defaults to America/New_York).

    Returns:
        "2025-06-01 (all day)" or "2025-01-15 14:00 EST"; "—" for None.
    """
    if instant is None:
        return "—"
    if isinstance(instant, DateOnly):
        return f"{instant.day.isoformat()} (all day)"
    tz = tz or NEW_YORK
    wall = tz.to_wall(instant.utc)
    abbreviation = tz.daylight.name if tz.is_dst(instant.utc) else tz.standard.name
    return f"{wall:%Y-%m-%d %H:%M} {abbreviation}"


def truncate(text: str | None, width: int = 40) -> str:
    """Shorten text for a table cell."""
    if not text:
        return ""
    text = text.replace("\n", " ")
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"
