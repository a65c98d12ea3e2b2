from google.oauth2 import service_account

from sheetproxy.config import Settings, get_settings
from sheetproxy.exceptions import ConfigurationError
from sheetproxy.logging import logger

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

TOKEN_URI = "https://oauth2.googleapis.com/token"


def _service_account_info_from_env(settings: Settings) -> dict | None:
    """Build key-file style info from GOOGLE_* variables, or None if unset."""
    if not settings.google_client_email and not settings.google_private_key:
        return None
    if not (settings.google_client_email and settings.google_private_key):
        raise ConfigurationError(
            "GOOGLE_CLIENT_EMAIL and GOOGLE_PRIVATE_KEY must be set together"
        )
    return {
        "type": "service_account",
        "project_id": settings.google_project_id,
        "private_key_id": settings.google_private_key_id,
        # Hosting dashboards usually store the key with escaped newlines
        "private_key": settings.google_private_key.replace("\\n", "\n"),
        "client_email": settings.google_client_email,
        "client_id": settings.google_client_id,
        "token_uri": TOKEN_URI,
    }


def get_sheets_credentials(settings: Settings | None = None) -> service_account.Credentials:
    """Load service account credentials scoped to spreadsheet editing.

    Environment variables win over the key file so serverless deploys never
    need a file on disk.
    """
    settings = settings or get_settings()
    info = _service_account_info_from_env(settings)
    try:
        if info is not None:
            creds = service_account.Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)
            source = "environment"
        else:
            path = settings.google_credentials_file
            if not path.exists():
                raise ConfigurationError(
                    f"Service account key file not found at {path}. "
                    "Download a JSON key from Google Cloud Console or set "
                    "GOOGLE_CLIENT_EMAIL and GOOGLE_PRIVATE_KEY."
                )
            creds = service_account.Credentials.from_service_account_file(str(path), scopes=SHEETS_SCOPES)
            source = str(path)
    except (ValueError, KeyError) as e:
        # Never echo the key material itself
        raise ConfigurationError(f"Invalid service account credentials: {type(e).__name__}") from e

    logger.info(f"Loaded service account {creds.service_account_email} from {source}")
    return creds
