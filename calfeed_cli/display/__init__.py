"""Display module for rendering CLI output.

Provides:
- console: Shared Rich console instance
- FeedRenderer: Event table and issue list for parsed feeds
- Formatting functions for instants and table cells
"""

from calfeed_cli.display.console import console
from calfeed_cli.display.feed_renderer import FeedRenderer
from calfeed_cli.display.formatters import format_instant, truncate

__all__ = [
    "console",
    "FeedRenderer",
    "format_instant",
    "truncate",
]
