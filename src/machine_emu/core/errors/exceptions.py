"""Domain exceptions.

Services and repositories raise these. The handlers in
``machine_emu.core.errors.handlers`` turn them into Problem Details
responses, with ``details`` merged into the response body.
"""

from typing import Any


def _compact(details: dict[str, Any] | None, **fields: Any) -> dict[str, Any]:
    """Merge the non-None ``fields`` into a copy of ``details``."""
    merged = dict(details or {})
    merged.update({key: value for key, value in fields.items() if value is not None})
    return merged


class AppException(Exception):
    """Base class for errors that map onto an HTTP status.

    Subclasses set the class-level defaults. ``error_code`` is the
    machine-readable code clients branch on; the response title is derived
    from it.
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.error_code!r}, {self.message!r})"


class UnauthorizedError(AppException):
    """No usable credentials: missing, malformed, expired or wrongly signed."""

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class ForbiddenError(AppException):
    """Valid credentials that lack the permission an operation declares."""

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class NotFoundError(AppException):
    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            error_code,
            _compact(details, resource=resource, resource_id=resource_id),
        )


class ConflictError(AppException):
    """A unique name is already taken. ``field`` names the offending field."""

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        value: Any = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, _compact(details, field=field, value=value))


class ValidationError(AppException):
    """Semantically invalid input, reported per field.

    Example:
        raise ValidationError(
            "Motorcycle must be running to drive",
            errors=[{"field": "status", "message": "expected Running"}],
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, _compact(details, errors=errors or None))
