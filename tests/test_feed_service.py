"""End-to-end feed generation against an in-memory store."""

from datetime import datetime, timezone

import pytest

from calfeed.exceptions import SourceUnavailableError
from calfeed.feed_service import FeedService, make_uid, summary_for
from calfeed.ingestion.feed_reader import wire_issues
from calfeed.models.feed import FeedMode
from calfeed.models.record import CalendarRecord, RecordKind
from calfeed.output.text import unfold_lines
from calfeed.sources.memory_store import InMemoryRecordStore
from tests.conftest import FROZEN_NOW, make_event, make_meeting


def vevents(body):
    """Unfolded VEVENT blocks as lists of content lines."""
    blocks = []
    current = None
    for line in unfold_lines(body):
        if line == "BEGIN:VEVENT":
            current = []
        elif line == "END:VEVENT":
            blocks.append(current)
            current = None
        elif current is not None:
            current.append(line)
    return blocks


def test_public_timed_event_in_winter(store, service):
    store.events = [make_event(id="e1", title="Community Forum")]

    body = service.generate(FeedMode.PUBLIC).body
    (event,) = vevents(body)

    assert "UID:event-e1@bwcc.org" in event
    assert "DTSTAMP:20250301T123000Z" in event
    assert "DTSTART;TZID=America/New_York:20250115T140000" in event
    assert "DTEND;TZID=America/New_York:20250115T150000" in event
    assert "SUMMARY:Community Forum" in event
    assert "STATUS:CONFIRMED" in event
    assert "SEQUENCE:0" in event
    assert "LAST-MODIFIED:20250301T123000Z" in event


def board_meeting():
    return make_event(
        id="b1",
        title="Board Meeting",
        status="Approved",
        isPublic=False,
        startTime="2025-01-15T14:00:00-05:00",
    )


def test_non_public_event_in_private_feed(store, service):
    store.events = [board_meeting()]

    (event,) = vevents(service.generate(FeedMode.PRIVATE).body)
    assert "DTSTART;TZID=America/New_York:20250115T140000" in event
    assert "DTEND;TZID=America/New_York:20250115T150000" in event
    assert "SUMMARY:Board Meeting" in event


def test_non_public_event_absent_from_public_feed(store, service):
    store.events = [board_meeting()]

    assert vevents(service.generate(FeedMode.PUBLIC).body) == []


def test_date_field_with_time_of_day_is_timed(store, service):
    store.events = [make_event(startTime=None, date="2025-06-01T10:00:00-04:00")]

    (event,) = vevents(service.generate(FeedMode.PUBLIC).body)
    assert "DTSTART;TZID=America/New_York:20250601T100000" in event
    assert "DTEND;TZID=America/New_York:20250601T110000" in event


def test_whitespace_description_and_location_omitted(store, service):
    store.events = [make_event(description="   ", location=" \t ")]

    (event,) = vevents(service.generate(FeedMode.PUBLIC).body)
    assert not any(line.startswith("DESCRIPTION") for line in event)
    assert not any(line.startswith("LOCATION") for line in event)


def test_summer_event_uses_daylight_wall_time(store, service):
    store.events = [make_event(startTime="2025-07-15T18:00:00Z")]

    (event,) = vevents(service.generate(FeedMode.PUBLIC).body)
    assert "DTSTART;TZID=America/New_York:20250715T140000" in event
    assert "DTEND;TZID=America/New_York:20250715T150000" in event


def test_private_feed_includes_meetings_after_events(store, service):
    store.events = [make_event(id="e1")]
    store.meetings = [make_meeting(id="m1")]

    result = service.generate(FeedMode.PRIVATE)
    uids = [line for block in vevents(result.body) for line in block if line.startswith("UID:")]

    assert uids == ["UID:event-e1@bwcc.org", "UID:meeting-m1@bwcc.org"]
    assert result.filename == "private.ics"
    assert result.event_count == 2


def test_all_day_event_ends_same_date(store, service):
    store.events = [make_event(startTime=None, date="2025-06-01")]

    (event,) = vevents(service.generate(FeedMode.PUBLIC).body)
    assert "DTSTART;VALUE=DATE:20250601" in event
    assert "DTEND;VALUE=DATE:20250601" in event


def test_empty_feed_is_still_a_calendar(service):
    body = service.generate(FeedMode.PUBLIC).body
    lines = unfold_lines(body)

    assert lines[0] == "BEGIN:VCALENDAR"
    assert lines[-1] == "END:VCALENDAR"
    assert lines.count("BEGIN:VTIMEZONE") == 1
    assert "BEGIN:VEVENT" not in lines
    assert wire_issues(body) == []


def test_header_lines(service):
    lines = unfold_lines(service.generate(FeedMode.PRIVATE).body)

    assert lines[:10] == [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Black Women Cultivating Change//BWCC - Private//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "X-WR-CALNAME:BWCC - Private",
        "X-WR-CALDESC:Black Women Cultivating Change - Private Events Calendar",
        "X-WR-TIMEZONE:America/New_York",
        "X-APPLE-CALENDAR-COLOR:#FFA500",
        "X-WR-RELCALID:BWCC---Private@bwcc.org",
    ]


def test_public_feed_filters_ineligible_records(store, service):
    store.events = [
        make_event(id="ok"),
        make_event(id="hidden", isPublic=False),
        make_event(id="pending", status="Pending"),
    ]
    store.meetings = [make_meeting(id="m1")]

    body = service.generate(FeedMode.PUBLIC).body
    assert "UID:event-ok@bwcc.org" in body
    assert "hidden" not in body
    assert "pending" not in body
    assert "meeting-" not in body


def test_private_feed_includes_non_public_approved_events(store, service):
    store.events = [
        make_event(id="hidden", isPublic=False),
        make_event(id="pending", status="Pending"),
    ]

    body = service.generate(FeedMode.PRIVATE).body
    assert "UID:event-hidden@bwcc.org" in body
    assert "event-pending" not in body


def test_same_id_in_both_collections_gets_distinct_uids(store, service):
    store.events = [make_event(id="7")]
    store.meetings = [make_meeting(id="7")]

    body = service.generate(FeedMode.PRIVATE).body
    assert "UID:event-7@bwcc.org" in body
    assert "UID:meeting-7@bwcc.org" in body


def test_untitled_defaults(store, service):
    store.events = [make_event(title="   ")]
    store.meetings = [make_meeting(title=None)]

    body = service.generate(FeedMode.PRIVATE).body
    assert "SUMMARY:Untitled Event" in body
    assert "SUMMARY:Untitled Meeting" in body


def test_optional_text_properties_omitted_when_empty(store, service):
    store.events = [make_event(description="", location=None)]

    (event,) = vevents(service.generate(FeedMode.PUBLIC).body)
    assert not any(line.startswith("DESCRIPTION") for line in event)
    assert not any(line.startswith("LOCATION") for line in event)


def test_text_is_escaped_and_long_lines_folded(store, service):
    store.events = [
        make_event(
            title="Budget, Q1; review",
            location="Room 1, Floor 2",
            description="x" * 200,
        )
    ]

    body = service.generate(FeedMode.PUBLIC).body
    (event,) = vevents(body)

    assert r"SUMMARY:Budget\, Q1\; review" in event
    assert r"LOCATION:Room 1\, Floor 2" in event
    assert f"DESCRIPTION:{'x' * 200}" in event
    assert wire_issues(body) == []


def test_bad_records_are_skipped(store, service):
    store.events = [
        make_event(id="good"),
        make_event(id="undated", startTime=None),
        make_event(id="garbled", startTime="soon"),
    ]

    result = service.generate(FeedMode.PUBLIC)
    assert result.event_count == 1
    assert result.feed.skipped == 2


def test_generation_is_deterministic_for_a_fixed_clock(store, service):
    store.events = [make_event(id="e1"), make_event(id="e2", startTime=None, date="2025-06-01")]
    store.meetings = [make_meeting()]

    first = service.generate(FeedMode.PRIVATE).body
    second = service.generate(FeedMode.PRIVATE).body
    assert first == second


def test_only_timestamps_change_between_requests(store, service):
    store.events = [make_event(id="e1")]

    later = datetime(2025, 3, 2, 8, 0, tzinfo=timezone.utc)
    first = unfold_lines(service.generate(FeedMode.PUBLIC).body)
    second = unfold_lines(service.generate(FeedMode.PUBLIC, now=later).body)

    assert len(first) == len(second)
    changed = [(a, b) for a, b in zip(first, second) if a != b]
    assert changed
    for a, b in changed:
        assert a.split(":", 1)[0] in ("DTSTAMP", "LAST-MODIFIED")
        assert b.endswith("20250302T080000Z")


def test_store_failure_propagates(config):
    service = FeedService(
        InMemoryRecordStore(fail_with=OSError("disk gone")),
        config=config,
        clock=lambda: FROZEN_NOW,
    )
    with pytest.raises(SourceUnavailableError):
        service.generate(FeedMode.PUBLIC)


def test_make_uid_and_summary():
    record = CalendarRecord(id="abc", kind=RecordKind.MEETING)
    assert make_uid(record, "example.org") == "meeting-abc@example.org"
    assert summary_for(record) == "Untitled Meeting"
