"""Reading generated feeds back."""

from calfeed.ingestion.feed_reader import FeedEntry, FeedReader, FeedSummary, wire_issues

__all__ = [
    "FeedEntry",
    "FeedReader",
    "FeedSummary",
    "wire_issues",
]
