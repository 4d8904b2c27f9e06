"""Domain errors raised by services and rendered by the API layer.

Each error carries the HTTP status it maps to and a message that is safe to
return to the client. Repositories never raise these; they return None/False
for expected misses and let driver errors propagate.
"""


class ServiceError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Client-facing message (falls back to the class default)
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Malformed, missing or out-of-range input."""

    status_code = 400
    default_message = "Invalid request parameters"


class NotFoundError(ServiceError):
    """An identifier did not resolve to a stored record."""

    status_code = 404
    default_message = "Resource not found"


class InternalError(ServiceError):
    """Unexpected failure; details are logged, never returned."""

    status_code = 500
