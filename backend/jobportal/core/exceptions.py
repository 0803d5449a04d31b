"""
Domain error kinds.

Services raise ``PortalError`` tagged with an ``ErrorKind``. The API boundary
turns the kind into an HTTP status and category label with
``http_error_for``; nothing else decides status codes.
"""

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INTERNAL = "INTERNAL"


# kind -> (HTTP status, category label)
ERROR_TABLE: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.NOT_FOUND: (404, "Resource Not Found"),
    ErrorKind.BAD_REQUEST: (400, "Bad Request"),
    ErrorKind.CONFLICT: (400, "Conflict"),
    ErrorKind.UNAUTHORIZED: (401, "Unauthorized"),
    ErrorKind.FORBIDDEN: (403, "Access Denied"),
    ErrorKind.INTERNAL: (500, "Internal Server Error"),
}


def http_error_for(kind: ErrorKind) -> tuple[int, str]:
    """Map an error kind to ``(status_code, error_label)``."""
    return ERROR_TABLE.get(kind, ERROR_TABLE[ErrorKind.INTERNAL])


class PortalError(Exception):
    """A failure the API layer reports to the caller as a structured error."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class NotFoundError(PortalError):
    kind = ErrorKind.NOT_FOUND


class BadRequestError(PortalError):
    kind = ErrorKind.BAD_REQUEST


class ConflictError(PortalError):
    kind = ErrorKind.CONFLICT


class UnauthorizedError(PortalError):
    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(PortalError):
    kind = ErrorKind.FORBIDDEN
