"""Application exceptions carrying the HTTP status they map to."""


class AppError(Exception):
    """Base exception for errors that are safe to show to API clients."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        """Initialize application error.

        Args:
            message: Client-facing error message
            status_code: HTTP status code, defaults to the class status
        """
        if status_code is not None:
            self.status_code = status_code
        self.message = message
        super().__init__(message)


class ValidationFailedError(AppError):
    """Request is missing fields or carries malformed values (400)."""

    status_code = 400


class AccessDeniedError(AppError):
    """Caller's subscription does not unlock the requested entity (403)."""

    status_code = 403


class ResourceNotFoundError(AppError):
    """Requested entity does not exist (404)."""

    status_code = 404


class ConflictError(AppError):
    """Entity already exists or is in the wrong state (409)."""

    status_code = 409


class ExternalServiceError(AppError):
    """Supabase Storage, Stripe or SMTP rejected a call the request needs."""

    def __init__(self, message: str, service_name: str, status_code: int = 500):
        """Initialize external service error.

        Args:
            message: Client-facing error message
            service_name: Name of the failing service
            status_code: HTTP status code to return
        """
        self.service_name = service_name
        super().__init__(message, status_code=status_code)
