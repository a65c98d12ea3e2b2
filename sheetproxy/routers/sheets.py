from fastapi import APIRouter, Depends

from sheetproxy.config import Settings, get_settings
from sheetproxy.dependencies import get_sheets_client
from sheetproxy.exceptions import ConflictError, ValidationError
from sheetproxy.models.sheets import CreateSheetRequest, CreateSheetResponse
from sheetproxy.rows import resolve_write_range
from sheetproxy.services.sheets import SheetsClient

router = APIRouter(prefix="/sheets", tags=["sheets"])


@router.post("")
def create_sheet(
    request: CreateSheetRequest,
    client: SheetsClient = Depends(get_sheets_client),
    settings: Settings = Depends(get_settings),
) -> CreateSheetResponse:
    """Add a sheet to the spreadsheet and write the optional header row."""
    spreadsheet_id = request.spreadsheet_id or settings.default_spreadsheet_id
    if not spreadsheet_id or not request.sheet_name:
        raise ValidationError("Missing required parameters: spreadsheetId and sheetName")

    try:
        sheet = client.add_sheet(spreadsheet_id, request.sheet_name)
    except ConflictError as e:
        raise ConflictError(f'Sheet "{request.sheet_name}" already exists', details=e.details) from e

    if request.headers:
        target = resolve_write_range(sheet.title, len(request.headers))
        client.append_row(spreadsheet_id, target, list(request.headers))

    return CreateSheetResponse(
        sheet_id=sheet.sheet_id,
        sheet_name=sheet.title,
        message=f'Sheet "{sheet.title}" created successfully',
    )
