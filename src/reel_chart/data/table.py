"""CSV ingestion and column auto-detection."""

import csv
import io
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from ..constants import MAX_FILE_SIZE
from ..errors import TableError
from .models import ColumnMapping

_DATE_HEADER = re.compile(r"date|time|month|year|period", flags=re.IGNORECASE)
_SERIES_A_HEADER = re.compile(r"series_a|line_a|value_a|a$", flags=re.IGNORECASE)
_SERIES_B_HEADER = re.compile(r"series_b|line_b|value_b|b$", flags=re.IGNORECASE)


@dataclass(frozen=True)
class ParsedTable:
    """Header row plus data rows keyed by header name."""

    headers: tuple[str, ...]
    rows: tuple[dict[str, str], ...]
    errors: tuple[str, ...] = field(default_factory=tuple)


def parse_csv(text: str) -> ParsedTable:
    """
    Parse CSV text with a header row.

    Blank lines are skipped. Rows with a different cell count than the header
    are kept (missing cells read as empty) and reported.

    Raises:
        TableError: If the text exceeds the 1MB limit or has no header row
    """
    if len(text) > MAX_FILE_SIZE:
        raise TableError(
            f"File too large: {len(text) / 1_000_000:.2f}MB exceeds 1MB limit"
        )

    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    headers: list[str] | None = None
    rows: list[dict[str, str]] = []
    errors: list[str] = []

    try:
        for record in reader:
            if not any(cell.strip() for cell in record):
                continue
            if headers is None:
                headers = [cell.strip() for cell in record]
                continue
            row_number = len(rows) + 1
            if len(record) != len(headers):
                errors.append(
                    f"Row {row_number}: Expected {len(headers)} fields but parsed {len(record)}"
                )
            padded = list(record) + [""] * (len(headers) - len(record))
            rows.append(dict(zip(headers, padded)))
    except csv.Error as e:
        raise TableError(f"Malformed CSV: {e}")

    if not headers:
        raise TableError("CSV has no header row")
    return ParsedTable(headers=tuple(headers), rows=tuple(rows), errors=tuple(errors))


def load_csv(file_path: str | Path) -> ParsedTable:
    """Read and parse a CSV file."""
    try:
        text = Path(file_path).read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise TableError(f"File '{file_path}' not found")
    except (OSError, UnicodeDecodeError) as e:
        raise TableError(f"Failed to read '{file_path}': {e}")
    return parse_csv(text)


def detect_column_mapping(headers: Sequence[str]) -> ColumnMapping | None:
    """Guess the date and series columns from header names."""
    if len(headers) < 3:
        return None

    date_column = next((h for h in headers if _DATE_HEADER.search(h)), headers[0])
    others = [h for h in headers if h != date_column]
    series_a = next((h for h in others if _SERIES_A_HEADER.search(h)), others[0])
    remaining = [h for h in others if h != series_a]
    series_b = next((h for h in remaining if _SERIES_B_HEADER.search(h)), remaining[0])
    return ColumnMapping(
        date_column=date_column,
        series_a_column=series_a,
        series_b_column=series_b,
    )
