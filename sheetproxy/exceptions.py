class SheetProxyError(Exception):
    """Base class for errors surfaced to proxy clients."""

    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(SheetProxyError):
    """Raised when a required field is missing or malformed."""

    status_code = 400


class NotFoundError(SheetProxyError):
    """Raised when a spreadsheet or sheet does not exist or is not shared with the service account."""

    status_code = 404


class ConflictError(SheetProxyError):
    """Raised when creating a sheet whose title is already taken."""

    status_code = 409


class RateLimitError(SheetProxyError):
    """Raised when the Sheets API rate limit is hit."""

    status_code = 429


class ExternalServiceError(SheetProxyError):
    """Raised when a Sheets API call fails for any other reason."""

    status_code = 500


class UpstreamTimeoutError(SheetProxyError):
    """Raised when the Sheets API does not answer within the request timeout."""

    status_code = 504


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing."""
