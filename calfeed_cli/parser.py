"""Typer application and command registration."""

from pathlib import Path

import typer
from typing_extensions import Annotated

from calfeed_cli import setup_logging
from calfeed_cli.commands import check_command, render_command, serve_command
from calfeed_cli.context import CLIContext, set_context

app = typer.Typer(
    help="Generate and inspect subscribable iCalendar feeds.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show info messages")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only show errors")
    ] = False,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", help="Directory holding events.json and meetings.json"),
    ] = None,
) -> None:
    """Set up logging and the shared command context."""
    ctx = CLIContext(verbose=verbose, quiet=quiet, data_dir=data_dir)
    setup_logging(verbose=verbose, quiet=quiet, config=ctx.config)
    set_context(ctx)


app.command("render")(render_command)
app.command("check")(check_command)
app.command("serve")(serve_command)
