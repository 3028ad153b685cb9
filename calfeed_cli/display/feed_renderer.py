"""Renderer for parsed feed summaries."""

from rich.table import Table

from calfeed.ingestion.feed_reader import FeedSummary
from calfeed_cli.display.console import console
from calfeed_cli.display.formatters import format_instant, truncate


class FeedRenderer:
    """Render a feed's events and any wire-format issues."""

    def render_summary(self, summary: FeedSummary) -> None:
        """Render header, event table and issue list.

        Args:
            summary: Parsed feed from FeedReader.
        """
        console.print()
        console.print("━" * 60)
        console.print(f"[bold]  Feed: {summary.calendar_name or '(unnamed)'}[/bold]")
        console.print("━" * 60)

        tzid = summary.timezone.tzid if summary.timezone else "none"
        console.print(f"\n{len(summary.entries)} events · timezone {tzid}")

        if summary.entries:
            table = Table(show_header=True, header_style="bold")
            table.add_column("UID", style="dim")
            table.add_column("Summary")
            table.add_column("Start")
            table.add_column("End")
            table.add_column("Location")
            for entry in summary.entries:
                table.add_row(
                    entry.uid,
                    truncate(entry.summary),
                    format_instant(entry.start, summary.timezone),
                    format_instant(entry.end, summary.timezone),
                    truncate(entry.location, 30),
                )
            console.print(table)

        if summary.issues:
            console.print(f"\n[bold red]{len(summary.issues)} issue(s):[/bold red]")
            for issue in summary.issues:
                console.print(f"  [red]✗[/red] {issue}")
