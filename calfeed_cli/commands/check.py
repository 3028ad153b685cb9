"""Parse an .ics feed and report its events and wire-format problems."""

import logging
from pathlib import Path

import typer
from typing_extensions import Annotated

from calfeed.exceptions import FeedFormatError
from calfeed.ingestion.feed_reader import FeedReader
from calfeed_cli.display import FeedRenderer, console

logger = logging.getLogger(__name__)


def check_command(
    feed_file: Annotated[
        Path,
        typer.Argument(help="Path to an .ics file", exists=True, dir_okay=False),
    ],
) -> None:
    """
    Check a feed file.

    Lists its events as decoded through the embedded VTIMEZONE and
    reports line-length, line-ending and BEGIN/END problems. Exits 1 if
    any problem is found.
    """
    try:
        summary = FeedReader().read(feed_file)
    except FeedFormatError as e:
        logger.error(str(e))
        raise typer.Exit(1)

    FeedRenderer().render_summary(summary)
    if not summary.is_valid:
        raise typer.Exit(1)
    console.print("\n[green]✓[/green] Feed is valid")
