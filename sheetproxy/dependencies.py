from fastapi import Request

from sheetproxy.exceptions import ExternalServiceError
from sheetproxy.services.sheets import SheetsClient


def get_sheets_client(request: Request) -> SheetsClient:
    """Return the client built during application startup."""
    client = getattr(request.app.state, "sheets_client", None)
    if client is None:
        raise ExternalServiceError("Sheets client is not initialized")
    return client
