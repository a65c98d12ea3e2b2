from datetime import datetime, timezone

from fastapi import APIRouter

from sheetproxy.config import VERSION
from sheetproxy.models.common import HealthResponse, ServiceInfo

SERVICE_NAME = "Google Sheets API Proxy"

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        service=SERVICE_NAME,
        version=VERSION,
    )


@router.get("/")
def service_info() -> ServiceInfo:
    return ServiceInfo(
        service=SERVICE_NAME,
        version=VERSION,
        endpoints={
            "GET /health": "Health check",
            "GET /entries": "Read rows (query: spreadsheetId, sheetName, range, startRow, endRow, includeHeader)",
            "POST /entries": "Append a row (body: spreadsheetId, sheetName, data, options)",
            "DELETE /entries": "Delete rows (body: spreadsheetId, sheetName, rowNumbers)",
            "POST /sheets": "Create a sheet (body: spreadsheetId, sheetName, headers)",
        },
    )
