"""CLI commands package."""

from calfeed_cli.commands.check import check_command
from calfeed_cli.commands.render import render_command
from calfeed_cli.commands.serve import serve_command

__all__ = [
    "check_command",
    "render_command",
    "serve_command",
]
