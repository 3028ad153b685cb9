"""Shared constants for the calendar feed."""

CRLF = "\r\n"

# Wire format
TZID = "America/New_York"
MAX_LINE_OCTETS = 75

# Defaults used when a record has no explicit end
DEFAULT_EVENT_DURATION_MINUTES = 60

# Upstream status that makes an event eligible for any feed
APPROVED_STATUS = "Approved"

# Fallback summaries keyed by record kind value
UNTITLED_SUMMARIES = {
    "event": "Untitled Event",
    "meeting": "Untitled Meeting",
}

# Transport
FEED_CONTENT_TYPE = "text/calendar; charset=utf-8"
FEED_ERROR_MESSAGE = "Error generating calendar feed"
FEED_CACHE_CONTROL = "no-store, no-cache, must-revalidate, proxy-revalidate"

# Upstream collection files used by the JSON store
EVENTS_FILENAME = "events.json"
MEETINGS_FILENAME = "meetings.json"
