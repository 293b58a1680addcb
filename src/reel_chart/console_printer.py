"""Rich console output for normalized datasets."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .data.insights import calculate_delta
from .data.models import NormalizationResult, Series
from .timeline.animator import Composition

MAX_LISTED_DIAGNOSTICS = 10


class DatasetConsolePrinter:
    """Prints dataset summaries and normalization diagnostics."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def display_stats(self, composition: Composition) -> None:
        """Show size, date range, overall change and the highlight point."""
        dataset = composition.dataset
        deltas = calculate_delta(dataset)

        table = Table(title="Dataset", show_header=False, title_justify="left")
        table.add_column("Field", style="bold cyan")
        table.add_column("Value")
        table.add_row("Points", str(len(dataset)))
        if dataset:
            table.add_row("From", dataset[0].date_label)
            table.add_row("To", dataset[-1].date_label)
        for series in Series:
            label = composition.text.label(series)
            gaps = sum(1 for point in dataset if point.value(series) is None)
            table.add_row(
                label,
                f"{deltas[series].format_percent()} overall, {gaps} gap(s)",
            )
        if 0 <= composition.highlight_index < len(dataset):
            highlight = dataset[composition.highlight_index]
            table.add_row(
                "Highlight",
                f"#{composition.highlight_index} ({highlight.date_label})",
            )
        self.console.print(table)

    def display_diagnostics(self, result: NormalizationResult) -> None:
        """List row errors and warnings, truncated to keep the output readable."""
        self._print_messages(result.errors, "red", "Errors")
        self._print_messages(result.warnings, "yellow", "Warnings")

    def _print_messages(self, messages: tuple[str, ...], color: str, title: str) -> None:
        if not messages:
            return
        self.console.print(f"\n[bold {color}]{title} ({len(messages)}):[/bold {color}]")
        for message in messages[:MAX_LISTED_DIAGNOSTICS]:
            self.console.print(f"  [{color}]•[/{color}] {escape(message)}")
        hidden = len(messages) - MAX_LISTED_DIAGNOSTICS
        if hidden > 0:
            self.console.print(f"  [dim]... and {hidden} more[/dim]")
