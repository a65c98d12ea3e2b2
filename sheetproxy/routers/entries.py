from fastapi import APIRouter, Depends, Query

from sheetproxy.config import Settings, get_settings
from sheetproxy.dependencies import get_sheets_client
from sheetproxy.exceptions import ValidationError
from sheetproxy.logging import logger
from sheetproxy.models.entries import (
    AppendEntryRequest,
    AppendEntryResponse,
    DeleteEntriesRequest,
    DeleteEntriesResponse,
    ReadEntriesResponse,
)
from sheetproxy.rows import (
    TimestampFormatter,
    compose_row,
    plan_row_deletions,
    resolve_read_range,
    resolve_write_range,
)
from sheetproxy.services.sheets import SheetsClient

router = APIRouter(prefix="/entries", tags=["entries"])

MISSING_TARGET = "Missing required parameters: spreadsheetId and sheetName"


@router.get("")
def get_entries(
    spreadsheet_id: str | None = Query(None, alias="spreadsheetId"),
    sheet_name: str | None = Query(None, alias="sheetName"),
    range: str | None = None,
    start_row: int | None = Query(None, alias="startRow"),
    end_row: int | None = Query(None, alias="endRow"),
    include_header: bool = Query(True, alias="includeHeader"),
    client: SheetsClient = Depends(get_sheets_client),
) -> ReadEntriesResponse:
    """Read rows from a sheet, splitting off the header row unless includeHeader=false."""
    if not spreadsheet_id or not sheet_name:
        raise ValidationError(MISSING_TARGET)

    target = resolve_read_range(sheet_name, range=range, start_row=start_row, end_row=end_row)
    result = client.read_range(spreadsheet_id, target)
    rows = result.values

    if not rows:
        return ReadEntriesResponse(
            data=[],
            headers=[] if include_header else None,
            total_rows=0,
            range=result.range,
            message="No data found",
        )

    if include_header:
        headers, data = rows[0], rows[1:]
    else:
        headers, data = None, rows
    return ReadEntriesResponse(data=data, headers=headers, total_rows=len(data), range=result.range)


@router.post("")
def create_entry(
    request: AppendEntryRequest,
    client: SheetsClient = Depends(get_sheets_client),
    settings: Settings = Depends(get_settings),
) -> AppendEntryResponse:
    """Append one row, optionally stamping it with the current time."""
    spreadsheet_id = request.spreadsheet_id or settings.default_spreadsheet_id
    sheet_name = request.sheet_name or settings.default_sheet_name
    if not spreadsheet_id or not sheet_name:
        raise ValidationError(MISSING_TARGET)

    options = request.options
    formatter = None
    if options.include_timestamp:
        formatter = TimestampFormatter(
            timezone=options.timezone or settings.timestamp_timezone,
            pattern=settings.timestamp_format,
        )
    row = compose_row(
        request.data,
        include_timestamp=options.include_timestamp,
        timestamp_column=options.timestamp_column,
        formatter=formatter,
    )
    target = resolve_write_range(sheet_name, len(row), explicit_range=options.range)

    result = client.append_row(spreadsheet_id, target, row, value_input_option=options.value_input_option)
    logger.info(f"Appended row to {result.updated_range} ({result.updated_cells} cells)")
    return AppendEntryResponse(
        updated_cells=result.updated_cells,
        updated_range=result.updated_range,
        data=row,
    )


@router.delete("")
def delete_entries(
    request: DeleteEntriesRequest,
    client: SheetsClient = Depends(get_sheets_client),
) -> DeleteEntriesResponse:
    """Delete rows by 1-based row number."""
    if not request.spreadsheet_id or not request.sheet_name:
        raise ValidationError(MISSING_TARGET)
    if not request.row_numbers:
        raise ValidationError("Missing or invalid rowNumbers parameter. Must be an array of row numbers.")

    intervals = plan_row_deletions(request.row_numbers)
    sheet_id = client.get_sheet_id(request.spreadsheet_id, request.sheet_name)
    client.delete_rows(request.spreadsheet_id, sheet_id, intervals)

    deleted = request.row_numbers
    listed = ", ".join(str(n) for n in deleted)
    return DeleteEntriesResponse(
        deleted_count=len(deleted),
        deleted_rows=deleted,
        message=f"Successfully deleted {len(deleted)} row(s): {listed}",
    )
