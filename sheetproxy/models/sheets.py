from pydantic import BaseModel

from sheetproxy.models.common import CamelModel


class SheetProperties(BaseModel):
    sheet_id: int
    title: str
    index: int = 0


class SpreadsheetMetadata(BaseModel):
    spreadsheet_id: str
    title: str
    sheets: list[SheetProperties]


class ReadRangeResult(BaseModel):
    range: str
    values: list[list]


class AppendResult(BaseModel):
    updated_range: str
    updated_rows: int
    updated_columns: int
    updated_cells: int


class CreateSheetRequest(CamelModel):
    spreadsheet_id: str | None = None
    sheet_name: str | None = None
    headers: list[str | int | float | bool | None] = []


class CreateSheetResponse(CamelModel):
    success: bool = True
    sheet_id: int | None = None
    sheet_name: str
    message: str
