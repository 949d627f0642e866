"""Service-layer error taxonomy; translated to HTTP responses in inventory.main."""


class ServiceError(Exception):
    """Base error raised by services; carries the HTTP status the API maps it to."""

    status_code: int = 500
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None, errors: list[str] | None = None) -> None:
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class InvalidInputError(ServiceError):
    status_code = 400
    default_message = "Invalid input"


class ConflictError(ServiceError):
    """Duplicate of a unique value (e.g. username). Reported as 400 like other input errors."""

    status_code = 400
    default_message = "Resource already exists"


class UnauthenticatedError(ServiceError):
    status_code = 401
    default_message = "Not authenticated"


class InvalidCredentialsError(UnauthenticatedError):
    """Login failure; the message never reveals which credential was wrong."""

    default_message = "Invalid username or password"


class ForbiddenError(ServiceError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Resource not found"
