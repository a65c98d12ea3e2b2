"""Row composition and range targeting for the Sheets proxy.

Everything here is pure: no I/O, no state kept between calls. The router
builds a row with `compose_row`, picks a target with `resolve_write_range`
or `resolve_read_range`, and orders batch deletions with `plan_row_deletions`.
"""

import re
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sheetproxy.exceptions import ValidationError

DEFAULT_TIMEZONE = "America/Chicago"
DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Widest column the read path requests when no explicit range is given
READ_LAST_COLUMN = "Z"

_PLAIN_SHEET_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class TimestampFormatter:
    """Formats the current instant in a named timezone with a strftime pattern."""

    def __init__(self, timezone: str = DEFAULT_TIMEZONE, pattern: str = DEFAULT_TIMESTAMP_FORMAT):
        try:
            self.tz = ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValidationError(f"Unknown timezone: {timezone}") from e
        self.timezone = timezone
        self.pattern = pattern

    def format(self, now: datetime | None = None) -> str:
        if now is None:
            now = datetime.now(self.tz)
        elif now.tzinfo is None:
            # Naive datetimes are taken to be UTC
            now = now.replace(tzinfo=ZoneInfo("UTC")).astimezone(self.tz)
        else:
            now = now.astimezone(self.tz)
        return now.strftime(self.pattern)


def column_letter(index: int) -> str:
    """Convert a zero-based column index to A1 letters (0 -> A, 26 -> AA)."""
    if index < 0:
        raise ValidationError(f"Column index must be non-negative, got {index}")
    letters = ""
    while index >= 0:
        letters = chr(ord("A") + index % 26) + letters
        index = index // 26 - 1
    return letters


def timestamp_position(column: int, length: int) -> int:
    """Map a timestampColumn option onto a list insertion index.

    0 prepends, -1 appends, anything past the end is clamped to the end.
    """
    if column == -1:
        return length
    if column < 0:
        raise ValidationError(f"timestampColumn must be -1 or a non-negative index, got {column}")
    return min(column, length)


def compose_row(
    values: list,
    include_timestamp: bool = False,
    timestamp_column: int = 0,
    formatter: TimestampFormatter | None = None,
    now: datetime | None = None,
) -> list:
    """Build the row to append, optionally with a timestamp cell inserted.

    The caller's list is never modified.
    """
    row = list(values)
    if not include_timestamp:
        return row
    formatter = formatter or TimestampFormatter()
    row.insert(timestamp_position(timestamp_column, len(row)), formatter.format(now))
    return row


def quote_sheet_name(sheet_name: str) -> str:
    """Quote a sheet title for A1 notation when it is not a plain identifier."""
    if _PLAIN_SHEET_NAME.match(sheet_name):
        return sheet_name
    # Already quoted by the caller
    if len(sheet_name) >= 2 and sheet_name.startswith("'") and sheet_name.endswith("'"):
        return sheet_name
    return "'" + sheet_name.replace("'", "''") + "'"


def _qualify(sheet_name: str, a1: str) -> str:
    if "!" in a1:
        return a1
    return f"{quote_sheet_name(sheet_name)}!{a1}"


def _require_sheet_name(sheet_name: str | None) -> None:
    if not sheet_name or not sheet_name.strip():
        raise ValidationError("sheetName must not be empty")


def resolve_write_range(sheet_name: str, row_width: int, explicit_range: str | None = None) -> str:
    """Range to pass to the append call for a row of `row_width` cells."""
    _require_sheet_name(sheet_name)
    if row_width <= 0:
        raise ValidationError("Cannot append an empty row")
    if explicit_range:
        return _qualify(sheet_name, explicit_range)
    return f"{quote_sheet_name(sheet_name)}!A1:{column_letter(row_width - 1)}1"


def resolve_read_range(
    sheet_name: str,
    range: str | None = None,
    start_row: int | None = None,
    end_row: int | None = None,
) -> str:
    """Range to read: explicit range, row bounds, or the whole A:Z block."""
    _require_sheet_name(sheet_name)
    if range:
        return _qualify(sheet_name, range)

    sheet = quote_sheet_name(sheet_name)
    if start_row is None:
        if end_row is not None:
            raise ValidationError("endRow requires startRow")
        return f"{sheet}!A:{READ_LAST_COLUMN}"
    if start_row < 1:
        raise ValidationError(f"startRow must be a positive integer, got {start_row}")
    if end_row is None:
        return f"{sheet}!A{start_row}:{READ_LAST_COLUMN}"
    if end_row < start_row:
        raise ValidationError(f"endRow ({end_row}) must not be before startRow ({start_row})")
    return f"{sheet}!A{start_row}:{READ_LAST_COLUMN}{end_row}"


def plan_row_deletions(row_numbers: list[int]) -> list[tuple[int, int]]:
    """Turn 1-based row numbers into zero-based [start, end) intervals.

    Intervals are ordered bottom-up so deleting one never shifts a row that
    is still waiting to be deleted.
    """
    if not row_numbers:
        raise ValidationError("rowNumbers must be a non-empty list of row numbers")

    invalid = [n for n in row_numbers if isinstance(n, bool) or not isinstance(n, int) or n < 1]
    if invalid:
        listed = ", ".join(str(n) for n in invalid)
        raise ValidationError(f"Invalid row numbers: {listed}. Row numbers must be positive integers.")

    seen: set[int] = set()
    duplicates = []
    for n in row_numbers:
        if n in seen and n not in duplicates:
            duplicates.append(n)
        seen.add(n)
    if duplicates:
        listed = ", ".join(str(n) for n in duplicates)
        raise ValidationError(f"Duplicate row numbers: {listed}")

    return [(n - 1, n) for n in sorted(row_numbers, reverse=True)]
