"""Run the feed endpoint with Flask's development server."""

import typer
from typing_extensions import Annotated

from calfeed import create_app
from calfeed_cli.context import get_context
from calfeed_cli.display import console


def serve_command(
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on")] = 5000,
    debug: Annotated[bool, typer.Option("--debug", help="Enable Flask debug mode")] = False,
) -> None:
    """Serve GET /calendar/feed (add ?private=true for the private feed)."""
    ctx = get_context()
    app = create_app(config=ctx.config, store=ctx.store)
    console.print(f"Serving calendar feed at http://{host}:{port}/calendar/feed")
    app.run(host=host, port=port, debug=debug)
