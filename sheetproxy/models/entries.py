from typing import Literal

from pydantic import Field, StrictInt, model_serializer

from sheetproxy.models.common import CamelModel

CellValue = str | int | float | bool | None


class AppendOptions(CamelModel):
    include_timestamp: bool = False
    timestamp_column: int = 0
    value_input_option: Literal["RAW", "USER_ENTERED"] = "USER_ENTERED"
    timezone: str | None = None
    range: str | None = None


class AppendEntryRequest(CamelModel):
    spreadsheet_id: str | None = None
    sheet_name: str | None = None
    data: list[CellValue]
    options: AppendOptions = Field(default_factory=AppendOptions)


class AppendEntryResponse(CamelModel):
    success: bool = True
    message: str = "Entry added successfully"
    updated_cells: int
    updated_range: str
    data: list[CellValue]


class ReadEntriesResponse(CamelModel):
    success: bool = True
    data: list[list[CellValue]]
    headers: list[CellValue] | None
    total_rows: int
    range: str
    message: str | None = None

    @model_serializer(mode="wrap")
    def _omit_empty_message(self, handler):
        # headers stays null when not requested; message only appears for empty reads
        data = handler(self)
        if self.message is None:
            data.pop("message", None)
        return data


class DeleteEntriesRequest(CamelModel):
    spreadsheet_id: str | None = None
    sheet_name: str | None = None
    row_numbers: list[StrictInt] | None = None


class DeleteEntriesResponse(CamelModel):
    success: bool = True
    deleted_count: int
    deleted_rows: list[int]
    message: str
