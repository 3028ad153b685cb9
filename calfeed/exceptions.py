"""Exception hierarchy for feed generation."""


class FeedError(Exception):
    """Base exception for feed generation."""

    pass


class SourceUnavailableError(FeedError):
    """Upstream record store could not be read."""

    pass


class RecordError(FeedError):
    """A single record cannot be emitted. Never fatal for the feed."""

    def __init__(self, message: str, record_id: str | None = None):
        super().__init__(message)
        self.record_id = record_id


class MalformedRecordError(RecordError):
    """Record has neither a date nor a start time."""

    pass


class DateParseError(RecordError):
    """Stored date or time cannot be turned into a valid instant."""

    pass


class ConfigurationError(FeedError):
    """Invalid feed configuration."""

    pass


class FeedFormatError(FeedError):
    """An .ics document could not be parsed."""

    pass
