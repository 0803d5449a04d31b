"""
Exception handlers.

Every failure leaves the API as ``{timestamp, status, error, message, path}``;
request validation failures add an ``errors`` map of field -> message.
"""

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobportal.core.dates import utcnow
from jobportal.core.exceptions import ErrorKind, PortalError, http_error_for
from jobportal.core.logging import get_logger

logger = get_logger("errors")

# Request parts that prefix a validation error location
LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def error_body(status_code: int, error: str, message: str, path: str) -> dict:
    return {
        "timestamp": utcnow().isoformat(),
        "status": status_code,
        "error": error,
        "message": message,
        "path": path,
    }


def field_name(loc: tuple) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in LOCATION_ROOTS:
        parts = parts[1:]
    return ".".join(parts) or "request"


def field_message(error: dict) -> str:
    message = error.get("msg", "Invalid value")
    # pydantic prefixes messages raised from validators
    return message.removeprefix("Value error, ")


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    status_code, label = http_error_for(exc.kind)
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content=error_body(status_code, label, exc.message, request.url.path),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, str] = {}
    for error in exc.errors():
        errors.setdefault(field_name(error.get("loc", ())), field_message(error))

    body = error_body(400, "Validation Failed", "Invalid input", request.url.path)
    body["errors"] = errors
    return JSONResponse(status_code=400, content=body)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        label = HTTPStatus(exc.status_code).phrase
    except ValueError:
        label = "Error"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, label, str(exc.detail), request.url.path),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    status_code, label = http_error_for(ErrorKind.INTERNAL)
    return JSONResponse(
        status_code=status_code,
        content=error_body(status_code, label, f"An unexpected error occurred: {exc}", request.url.path),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
