from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

from sheetproxy.exceptions import ConfigurationError

VERSION = "1.0.0"


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    json_logs: bool = False
    allowed_origins: str = "*"

    default_spreadsheet_id: str = ""
    default_sheet_name: str = "Sheet1"

    # Service account: env variables take precedence over the key file
    google_credentials_file: Path = Path("credentials.json")
    google_client_email: str = ""
    google_private_key: str = ""
    google_project_id: str = ""
    google_private_key_id: str = ""
    google_client_id: str = ""

    request_timeout: float = 10.0
    timestamp_timezone: str = "America/Chicago"
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def allowed_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


def validate_settings(settings: Settings) -> None:
    """Fail fast on configuration the server cannot run without."""
    if settings.request_timeout <= 0:
        raise ConfigurationError("REQUEST_TIMEOUT must be greater than zero")
    if not settings.default_spreadsheet_id:
        raise ConfigurationError("Missing required environment variable: DEFAULT_SPREADSHEET_ID")
