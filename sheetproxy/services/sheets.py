import google_auth_httplib2
import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from sheetproxy.auth import get_sheets_credentials
from sheetproxy.config import Settings, get_settings
from sheetproxy.exceptions import (
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    RateLimitError,
    UpstreamTimeoutError,
)
from sheetproxy.logging import logger
from sheetproxy.models.sheets import (
    AppendResult,
    ReadRangeResult,
    SheetProperties,
    SpreadsheetMetadata,
)


def _handle_api_error(e: HttpError, spreadsheet_id: str):
    reason = e.reason if isinstance(getattr(e, "reason", None), str) else str(e)
    status = e.resp.status
    logger.warning(f"Sheets API returned {status} for spreadsheet {spreadsheet_id}: {reason}")
    if status == 429:
        raise RateLimitError("Sheets API rate limit exceeded. Try again shortly.", details=reason) from e
    if status == 404:
        raise NotFoundError(f"Spreadsheet {spreadsheet_id} not found", details=reason) from e
    if status == 403:
        raise NotFoundError(
            f"Spreadsheet {spreadsheet_id} is not shared with the service account",
            details=reason,
        ) from e
    if status == 400 and "already exists" in reason:
        raise ConflictError("Sheet already exists", details=reason) from e
    if status == 400 and "Unable to parse range" in reason:
        raise NotFoundError("Sheet or range not found", details=reason) from e
    raise ExternalServiceError("Sheets API error", details=reason) from e


class SheetsClient:
    """Thin wrapper over the Sheets v4 API for one authorized service account.

    Built once per process and handed to request handlers; holds no
    per-request state.
    """

    def __init__(self, service):
        self._service = service

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "SheetsClient":
        settings = settings or get_settings()
        creds = get_sheets_credentials(settings)
        http = google_auth_httplib2.AuthorizedHttp(
            creds, http=httplib2.Http(timeout=settings.request_timeout)
        )
        service = build("sheets", "v4", http=http, cache_discovery=False)
        return cls(service)

    def _execute(self, request, spreadsheet_id: str) -> dict:
        try:
            return request.execute()
        except HttpError as e:
            _handle_api_error(e, spreadsheet_id)
        except TimeoutError as e:
            logger.error(f"Sheets API timed out for spreadsheet {spreadsheet_id}")
            raise UpstreamTimeoutError("Sheets API request timed out", details=str(e)) from e
        except GoogleAuthError as e:
            logger.error(f"Service account authorization failed: {e}")
            raise ExternalServiceError("Service account authorization failed", details=str(e)) from e
        except (OSError, httplib2.HttpLib2Error) as e:
            logger.error(f"Sheets API request failed for spreadsheet {spreadsheet_id}: {e!r}")
            raise ExternalServiceError("Sheets API request failed", details=str(e)) from e

    def get_sheet_metadata(self, spreadsheet_id: str) -> SpreadsheetMetadata:
        """Get spreadsheet title and the id/title of every sheet in it."""
        result = self._execute(
            self._service.spreadsheets().get(
                spreadsheetId=spreadsheet_id,
                fields="spreadsheetId,properties.title,sheets.properties",
            ),
            spreadsheet_id,
        )
        sheets = [
            SheetProperties(
                sheet_id=s["properties"]["sheetId"],
                title=s["properties"]["title"],
                index=s["properties"].get("index", 0),
            )
            for s in result.get("sheets", [])
        ]
        return SpreadsheetMetadata(
            spreadsheet_id=result.get("spreadsheetId", spreadsheet_id),
            title=result.get("properties", {}).get("title", ""),
            sheets=sheets,
        )

    def get_sheet_id(self, spreadsheet_id: str, title: str) -> int:
        """Resolve a sheet title to its numeric sheetId."""
        metadata = self.get_sheet_metadata(spreadsheet_id)
        for sheet in metadata.sheets:
            if sheet.title == title:
                return sheet.sheet_id
        raise NotFoundError(f'Sheet "{title}" not found')

    def read_range(self, spreadsheet_id: str, range: str) -> ReadRangeResult:
        """Read a range of cells (e.g. 'Sheet1!A1:D10')."""
        logger.debug(f"Reading {range} from {spreadsheet_id}")
        result = self._execute(
            self._service.spreadsheets().values().get(spreadsheetId=spreadsheet_id, range=range),
            spreadsheet_id,
        )
        return ReadRangeResult(
            range=result.get("range", range),
            values=result.get("values", []),
        )

    def append_row(
        self,
        spreadsheet_id: str,
        range: str,
        values: list,
        value_input_option: str = "USER_ENTERED",
    ) -> AppendResult:
        """Append one row after the last row with data in the range's table."""
        logger.info(f"Appending {len(values)} cells to {range} in {spreadsheet_id}")
        result = self._execute(
            self._service.spreadsheets().values().append(
                spreadsheetId=spreadsheet_id,
                range=range,
                valueInputOption=value_input_option,
                insertDataOption="INSERT_ROWS",
                body={"values": [values]},
            ),
            spreadsheet_id,
        )
        updates = result.get("updates", {})
        return AppendResult(
            updated_range=updates.get("updatedRange", range),
            updated_rows=updates.get("updatedRows", 0),
            updated_columns=updates.get("updatedColumns", 0),
            updated_cells=updates.get("updatedCells", 0),
        )

    def add_sheet(self, spreadsheet_id: str, title: str) -> SheetProperties:
        """Add a new sheet (tab) to the spreadsheet."""
        logger.info(f"Adding sheet {title!r} to {spreadsheet_id}")
        result = self._execute(
            self._service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={"requests": [{"addSheet": {"properties": {"title": title}}}]},
            ),
            spreadsheet_id,
        )
        props = result["replies"][0]["addSheet"]["properties"]
        return SheetProperties(
            sheet_id=props["sheetId"],
            title=props["title"],
            index=props.get("index", 0),
        )

    def delete_rows(self, spreadsheet_id: str, sheet_id: int, intervals: list[tuple[int, int]]) -> None:
        """Delete row intervals in one batchUpdate, applied in the given order."""
        requests = [
            {
                "deleteDimension": {
                    "range": {
                        "sheetId": sheet_id,
                        "dimension": "ROWS",
                        "startIndex": start,
                        "endIndex": end,
                    }
                }
            }
            for start, end in intervals
        ]
        logger.info(f"Deleting {len(requests)} row interval(s) from sheet {sheet_id} in {spreadsheet_id}")
        self._execute(
            self._service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={"requests": requests},
            ),
            spreadsheet_id,
        )
