"""Tests for the rich dataset summary."""

import io

from rich.console import Console

from reel_chart.console_printer import DatasetConsolePrinter
from reel_chart.data.models import NormalizationResult


def _printer():
    buffer = io.StringIO()
    return DatasetConsolePrinter(Console(file=buffer, width=120)), buffer


def test_display_stats_lists_range_and_highlight(composition):
    printer, buffer = _printer()

    printer.display_stats(composition)

    output = buffer.getvalue()
    assert "day-0" in output
    assert "day-4" in output
    assert "+50.0% overall, 1 gap(s)" in output
    assert "#2 (day-2)" in output


def test_display_diagnostics_truncates_long_lists():
    printer, buffer = _printer()
    warnings = tuple(f"Row {n}: Missing series_a value (will show gap)" for n in range(1, 14))

    printer.display_diagnostics(NormalizationResult(dataset=(), warnings=warnings))

    output = buffer.getvalue()
    assert "Warnings (13)" in output
    assert "Row 10:" in output
    assert "Row 11:" not in output
    assert "... and 3 more" in output
    assert "Errors" not in output


def test_display_diagnostics_keeps_brackets():
    printer, buffer = _printer()

    printer.display_diagnostics(NormalizationResult(dataset=(), errors=('Row 1: Invalid or missing date "[x]"',)))

    assert '"[x]"' in buffer.getvalue()
