import secrets
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from sheetproxy.config import VERSION, get_settings, validate_settings
from sheetproxy.exceptions import SheetProxyError
from sheetproxy.logging import clear_request_context, logger, set_request_context, setup_logging
from sheetproxy.models.common import ErrorResponse
from sheetproxy.routers.entries import router as entries_router
from sheetproxy.routers.health import router as health_router
from sheetproxy.routers.sheets import router as sheets_router
from sheetproxy.services.sheets import SheetsClient


# --- Request logging middleware ---

class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        set_request_context(request_id=secrets.token_hex(4))
        logger.debug(f"{request.method} {request.url.path} started")
        try:
            response = await call_next(request)
            logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
            return response
        except Exception:
            logger.exception(f"{request.method} {request.url.path} failed")
            raise
        finally:
            clear_request_context()


# --- Lifespan ---

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(json_logs=settings.json_logs, log_level=settings.log_level)
    validate_settings(settings)

    # A client may already be attached (e.g. by tests); build one otherwise
    if getattr(app.state, "sheets_client", None) is None:
        app.state.sheets_client = SheetsClient.from_settings(settings)
    logger.info(f"Google Sheets API Proxy {VERSION} ready (default spreadsheet {settings.default_spreadsheet_id})")

    yield

    logger.info("Shutting down Google Sheets API Proxy")


# --- FastAPI app ---

app = FastAPI(title="Google Sheets API Proxy", version=VERSION, lifespan=lifespan)
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().allowed_origins_list,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
)
app.include_router(health_router)
app.include_router(entries_router)
app.include_router(sheets_router)


# --- Exception handlers ---

def _error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(SheetProxyError)
async def proxy_error_handler(request: Request, exc: SheetProxyError):
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{request.method} {request.url.path} {exc.status_code} {type(exc).__name__}: "
        f"{exc.message}" + (f" ({exc.details})" if exc.details else "")
    )
    return _error_response(exc.status_code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    logger.warning(f"{request.method} {request.url.path} 400 invalid request: {'; '.join(problems)}")
    return _error_response(400, "Invalid request", "; ".join(problems))


def run():
    settings = get_settings()
    uvicorn.run(
        "sheetproxy.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
