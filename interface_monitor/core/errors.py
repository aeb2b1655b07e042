"""Domain errors and their HTTP translation."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from interface_monitor.config import get_settings
from interface_monitor.core.logging import get_logger

logger = get_logger(__name__)


class MonitorError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MonitorError):
    """Bad enum value, missing required field or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(MonitorError):
    """Unknown record id."""

    status_code = status.HTTP_404_NOT_FOUND


class StoreError(MonitorError):
    """Database connectivity or query failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def monitor_error_handler(request: Request, exc: MonitorError) -> JSONResponse:
    if isinstance(exc, StoreError) and not get_settings().debug:
        return _error_response(exc.status_code, "Internal server error")
    return _error_response(exc.status_code, exc.message)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reshape FastAPI's 422 into a 400 with a readable message."""
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return _error_response(status.HTTP_400_BAD_REQUEST, "; ".join(parts) or "Invalid request")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return _error_response(exc.status_code, "Route not found")
    return _error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.bind(path=request.url.path, error=str(exc)).opt(exception=exc).error(
        "unhandled_exception"
    )
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers so every error response is shaped as {"error": ...}."""
    app.add_exception_handler(MonitorError, monitor_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
