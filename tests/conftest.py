import json

import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from googleapiclient.errors import HttpError

from sheetproxy.config import Settings, get_settings
from sheetproxy.dependencies import get_sheets_client
from sheetproxy.models.sheets import AppendResult, ReadRangeResult
from sheetproxy.services.sheets import SheetsClient


# --- Canned API responses ---

SPREADSHEET_API_RESPONSE = {
    "spreadsheetId": "abc123",
    "properties": {"title": "Orders"},
    "sheets": [
        {"properties": {"sheetId": 0, "title": "Sheet1", "index": 0}},
        {"properties": {"sheetId": 918273, "title": "Orders", "index": 1}},
    ],
}

VALUES_API_RESPONSE = {
    "range": "Sheet1!A1:Z3",
    "values": [["Name", "Email"], ["Alice", "alice@example.com"], ["Bob", "bob@example.com"]],
}

APPEND_API_RESPONSE = {
    "spreadsheetId": "abc123",
    "tableRange": "Sheet1!A1:C4",
    "updates": {
        "updatedRange": "Sheet1!A5:C5",
        "updatedRows": 1,
        "updatedColumns": 3,
        "updatedCells": 3,
    },
}

ADD_SHEET_API_RESPONSE = {
    "spreadsheetId": "abc123",
    "replies": [{"addSheet": {"properties": {"sheetId": 555, "title": "Leads", "index": 2}}}],
}

SAMPLE_READ = ReadRangeResult(range=VALUES_API_RESPONSE["range"], values=VALUES_API_RESPONSE["values"])

SAMPLE_APPEND = AppendResult(updated_range="Sheet1!A5:C5", updated_rows=1, updated_columns=3, updated_cells=3)


def make_http_error(status: int, message: str = "error") -> HttpError:
    resp = MagicMock()
    resp.status = status
    resp.reason = "Error"
    content = json.dumps({"error": {"code": status, "message": message}}).encode()
    return HttpError(resp=resp, content=content)


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, default_spreadsheet_id="default123", default_sheet_name="Sheet1")


@pytest.fixture
def mock_client():
    """SheetsClient stand-in with the real method signatures."""
    return MagicMock(spec=SheetsClient)


@pytest.fixture
def mock_sheets_service():
    """Mocked googleapiclient Sheets resource."""
    return MagicMock()


@pytest.fixture
def sheets_client(mock_sheets_service):
    return SheetsClient(mock_sheets_service)


@pytest.fixture
def api_client(mock_client, test_settings):
    """FastAPI TestClient with the Sheets client and settings swapped out."""
    from sheetproxy.main import app

    app.dependency_overrides[get_sheets_client] = lambda: mock_client
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
