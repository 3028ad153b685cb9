"""Render a feed from the record store."""

import logging
import sys
from pathlib import Path

import typer
from typing_extensions import Annotated

from calfeed.exceptions import FeedError
from calfeed.models.feed import FeedMode
from calfeed_cli.context import get_context
from calfeed_cli.display import console

logger = logging.getLogger(__name__)


def render_command(
    private: Annotated[
        bool,
        typer.Option("--private", help="Render the private feed (events + meetings)"),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to this file instead of stdout"),
    ] = None,
) -> None:
    """
    Render the public or private calendar feed.

    Reads records from the configured data directory and writes the
    .ics document to stdout, or to --output.
    """
    ctx = get_context()
    mode = FeedMode.PRIVATE if private else FeedMode.PUBLIC

    try:
        result = ctx.service.generate(mode)
    except FeedError as e:
        logger.error(f"Feed generation failed: {e}")
        raise typer.Exit(1)

    if output is None:
        sys.stdout.buffer.write(result.body.encode("utf-8"))
        sys.stdout.flush()
        return

    output.write_bytes(result.body.encode("utf-8"))
    if not ctx.quiet:
        console.print(
            f"[green]✓[/green] Rendered {result.event_count} events "
            f"({mode.value}) to {output.resolve()}"
        )
        if result.feed.skipped:
            console.print(f"  [yellow]{result.feed.skipped} record(s) skipped[/yellow]")
