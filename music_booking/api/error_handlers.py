"""
Global error boundary: every failure leaves the API as an envelope with
isSuccess=false.

  ServiceError subclasses   -> their own status_code
  RequestValidationError    -> 400
  HTTPException             -> its status_code (unknown route, bad method)
  ValueError                -> 400
  PermissionError           -> 401
  LookupError               -> 404
  anything else             -> 500, see unexpected_error_response()
"""

import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from music_booking.core.config import Settings
from music_booking.core.errors import AuthError, ServiceError
from music_booking.core.logging import get_logger
from music_booking.schemas.common import failure

logger = get_logger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred."


def error_response(status_code: int, description: str, content=None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=failure(description, content).model_dump(mode="json", by_alias=True),
        headers=headers,
    )


def unexpected_error_response(exc: Exception, settings: Settings) -> JSONResponse:
    """500 envelope; the stack trace is only included outside production."""
    content = None
    if not settings.is_production:
        content = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR, content)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request."


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return error_response(exc.status_code, exc.message, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    description = _describe_validation_errors(exc)
    logger.info("request_invalid", errors=description)
    return error_response(status.HTTP_400_BAD_REQUEST, description)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    logger.warning("argument_error", error=str(exc))
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc) or "Invalid argument.")


async def permission_error_handler(request: Request, exc: PermissionError) -> JSONResponse:
    return error_response(
        status.HTTP_401_UNAUTHORIZED,
        str(exc) or "Not authorized.",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def lookup_error_handler(request: Request, exc: LookupError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, "Resource not found.")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(PermissionError, permission_error_handler)
    app.add_exception_handler(LookupError, lookup_error_handler)
