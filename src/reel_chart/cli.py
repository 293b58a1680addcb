"""CLI interface for reel-chart."""

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .animation_pipeline import encode_animation, prepare_composition
from .config import NormalizeOptions, load_normalize_options
from .console_printer import DatasetConsolePrinter
from .constants import DEFAULT_DURATION_SECONDS, DEFAULT_FPS
from .data.models import ColumnMapping, NormalizationResult, TextConfig
from .data.table import ParsedTable, detect_column_mapping, load_csv
from .errors import InsufficientDataError, ReelChartError
from .output import default_output_path, resolve_output_provider, supported_output_formats
from .timeline.animator import Animator, Composition
from .timeline.phases import TimelineConfig

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_formats()).upper()


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def main(
    csv_path: str = typer.Argument(None, help="CSV file with a date column and two numeric series"),
    props_input: str = typer.Option(
        None,
        "--props-input",
        "-pi",
        help="Load a saved composition from JSON (skips CSV normalization)",
    ),
    props_output: str = typer.Option(
        None,
        "--props-output",
        "-po",
        help="Save the normalized composition to JSON",
    ),
    date_column: str = typer.Option(None, "--date-column", help="Column holding the dates"),
    series_a_column: str = typer.Option(None, "--series-a-column", help="Column of the first line"),
    series_b_column: str = typer.Option(None, "--series-b-column", help="Column of the second line"),
    label_a: str = typer.Option(None, "--label-a", help="Legend label of the first line"),
    label_b: str = typer.Option(None, "--label-b", help="Legend label of the second line"),
    hook: str = typer.Option(None, "--hook", help="Title shown at the start of the reel"),
    takeaway: str = typer.Option("", "--takeaway", help="Summary shown at the end of the reel"),
    out: str = typer.Option(
        None,
        "--output",
        "-out",
        "-o",
        help=f"Generate animated reel ({SUPPORTED_OUTPUT_FORMATS_TEXT})",
    ),
    fps: int = typer.Option(DEFAULT_FPS, "--fps", help="Frames per second of the reel"),
    duration: float = typer.Option(
        DEFAULT_DURATION_SECONDS, "--duration", help="Length of the reel in seconds"
    ),
    max_frames: int | None = typer.Option(
        None,
        "--max-frame",
        help="Maximum number of frames to generate",
    ),
    workers: int = typer.Option(1, "--workers", help="Threads used to render frames"),
    interpolate: bool | None = typer.Option(
        None,
        "--interpolate/--no-interpolate",
        help="Fill short interior gaps linearly (default from REEL_CHART_INTERPOLATE)",
    ),
    max_gap: int | None = typer.Option(
        None,
        "--max-gap",
        help="Longest run of missing values to interpolate",
    ),
    state_frame: int | None = typer.Option(
        None,
        "--state-frame",
        help="Print the draw state of one frame as JSON instead of rendering",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """
    Turn a two-series CSV into an animated vertical chart reel.

    You can either normalize a CSV or load a previously saved composition.

    Examples:
      # Render a reel and keep the normalized composition
      reel-chart prices.csv --hook "Rent vs wages" --props-output props.json

      # Re-render from the saved composition at a lower frame rate
      reel-chart --props-input props.json --fps 15 -o reel.webp
    """
    try:
        _configure_logging(verbose)

        if csv_path and props_input:
            raise CLIError("Cannot specify both a CSV file and --props-input. Choose one.")
        if not csv_path and not props_input:
            raise CLIError("A CSV file or --props-input is required")
        if fps <= 0:
            raise CLIError("--fps must be positive")
        if duration <= 0:
            raise CLIError("--duration must be positive")

        printer = DatasetConsolePrinter(console)
        if props_input:
            composition = _load_composition_from_file(props_input)
        else:
            mapping_override = (date_column, series_a_column, series_b_column)
            text_override = (label_a, label_b, hook, takeaway)
            options = _resolve_options(interpolate, max_gap)
            composition = _load_composition_from_csv(
                csv_path, mapping_override, text_override, options, printer
            )

        printer.display_stats(composition)

        if props_output:
            _save_composition_to_file(composition, props_output)

        config = TimelineConfig.for_duration(fps, duration)

        if state_frame is not None:
            state = Animator(composition, config).state_at(state_frame)
            console.print_json(json.dumps(state.to_dict()))
            return

        if not out:
            out = default_output_path(csv_path or props_input)
        _generate_output(composition, out, config, max_frames, workers)

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logger = logging.getLogger("reel_chart")
    logger.setLevel(logging.DEBUG)
    logger.addHandler(RichHandler(console=err_console, show_path=False))


def _resolve_options(interpolate: bool | None, max_gap: int | None) -> NormalizeOptions:
    """Environment defaults, overridden by explicit flags."""
    try:
        options = load_normalize_options()
    except ValueError as e:
        raise CLIError(str(e))
    if interpolate is not None:
        options = replace(options, interpolate=interpolate)
    if max_gap is not None:
        if max_gap < 0:
            raise CLIError("--max-gap must not be negative")
        options = replace(options, max_interpolate_gap=max_gap)
    return options


def _load_composition_from_csv(
    csv_path: str,
    mapping_override: tuple[str | None, str | None, str | None],
    text_override: tuple[str | None, str | None, str | None, str],
    options: NormalizeOptions,
    printer: DatasetConsolePrinter,
) -> Composition:
    """Parse, map and normalize a CSV file."""
    console.print(f"[bold blue]Loading data from {csv_path}...[/bold blue]")
    try:
        table = load_csv(csv_path)
    except ReelChartError as e:
        raise CLIError(str(e))

    mapping = _resolve_mapping(table, mapping_override)
    text = _resolve_text(mapping, text_override)

    try:
        composition, result = prepare_composition(table.rows, mapping, text, options)
    except InsufficientDataError as e:
        if e.result is not None:
            _display_diagnostics(printer, table, e.result)
        raise CLIError(str(e))
    except ReelChartError as e:
        raise CLIError(str(e))

    _display_diagnostics(printer, table, result)
    return composition


def _display_diagnostics(
    printer: DatasetConsolePrinter, table: ParsedTable, result: NormalizationResult
) -> None:
    # Malformed CSV lines are reported alongside normalization errors
    printer.display_diagnostics(replace(result, errors=table.errors + result.errors))


def _resolve_mapping(
    table: ParsedTable,
    override: tuple[str | None, str | None, str | None],
) -> ColumnMapping:
    detected = detect_column_mapping(table.headers)
    date_column, series_a_column, series_b_column = override
    if detected is None and not all(override):
        raise CLIError(
            f"Could not detect columns from headers: {', '.join(table.headers)}. "
            "Pass --date-column, --series-a-column and --series-b-column."
        )
    mapping = ColumnMapping(
        date_column=date_column or detected.date_column,
        series_a_column=series_a_column or detected.series_a_column,
        series_b_column=series_b_column or detected.series_b_column,
    )
    try:
        mapping.validate(table.headers)
    except ReelChartError as e:
        raise CLIError(str(e))
    return mapping


def _resolve_text(
    mapping: ColumnMapping,
    override: tuple[str | None, str | None, str | None, str],
) -> TextConfig:
    label_a, label_b, hook, takeaway = override
    label_a = label_a or mapping.series_a_column
    label_b = label_b or mapping.series_b_column
    text = TextConfig(
        label_a=label_a,
        label_b=label_b,
        hook_text=hook if hook is not None else f"{label_a} vs {label_b}",
        takeaway_text=takeaway,
    )
    problems = text.validate()
    if problems:
        raise CLIError("; ".join(problems))
    return text


def _load_composition_from_file(file_path: str) -> Composition:
    """Load a composition from a JSON file."""
    console.print(f"[bold blue]Loading composition from {file_path}...[/bold blue]")
    try:
        with open(file_path, "r") as f:
            return Composition.from_dict(json.load(f))
    except FileNotFoundError:
        raise CLIError(f"File '{file_path}' not found")
    except json.JSONDecodeError as e:
        raise CLIError(f"Invalid JSON in '{file_path}': {e}")
    except (KeyError, TypeError, ValueError) as e:
        raise CLIError(f"Invalid composition in '{file_path}': {e}")


def _save_composition_to_file(composition: Composition, file_path: str) -> None:
    """Save a composition to a JSON file."""
    try:
        with open(file_path, "w") as f:
            json.dump(composition.to_dict(), f, indent=2)
        console.print(f"\n[green]✓[/green] Composition saved to {file_path}")
    except IOError as e:
        raise CLIError(f"Failed to save file '{file_path}': {e}")


def _generate_output(
    composition: Composition,
    output_path: str,
    config: TimelineConfig,
    max_frames: int | None,
    workers: int,
) -> None:
    """Render the reel in the format given by the output path."""
    # GIF delays are stored in hundredths of a second
    if output_path.lower().endswith(".gif") and config.fps > 50:
        console.print(
            f"[yellow]Warning:[/yellow] FPS > 50 may not display correctly in browsers "
            f"(GIF delay will be {config.frame_duration}ms, but browsers clamp delays < 20ms to ~100ms)"
        )

    try:
        provider = resolve_output_provider(output_path)
    except ValueError as e:
        raise CLIError(str(e))

    ext = Path(output_path).suffix[1:].upper()
    console.print(f"\n[bold blue]Generating {ext} reel...[/bold blue]")

    try:
        encoded = encode_animation(
            composition,
            output_path,
            config=config,
            max_frames=max_frames,
            provider=provider,
            workers=workers,
        )
    except Exception as e:
        raise CLIError(f"Failed to generate output: {e}")

    console.print(f"[bold blue]Saving to {output_path}...[/bold blue]")
    try:
        provider.write(encoded)
    except OSError as e:
        raise CLIError(f"Failed to save file '{output_path}': {e}")
    console.print(f"[green]✓[/green] {ext} saved to {output_path}")


app = typer.Typer()
app.command()(main)

if __name__ == "__main__":
    app()
