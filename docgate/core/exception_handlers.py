"""Exception handlers turning errors into ``{"error": {...}}`` JSON responses.

AppError subclasses map to a status code through ``ERROR_STATUS``; the most
specific class in an error's MRO wins. Anything else is a 500 whose body
never echoes the exception text.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from docgate.core.errors import (
    AppError,
    DispatchAppError,
    LimiterClosedError,
    NotFoundAppError,
    ValidationAppError,
)
from docgate.core.logging import get_request_id

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[AppError], int] = {
    ValidationAppError: 400,
    NotFoundAppError: 404,
    DispatchAppError: 502,
    LimiterClosedError: 503,
}


def status_for(exc: AppError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 400


def _error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    error = {"code": code, "message": message, "request_id": get_request_id()}
    if details:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status_code = status_for(exc)
    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "request_path": request.url.path,
        },
    )
    return _error_response(status_code, exc.code, exc.message, exc.details)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log the failure, return a generic 500."""

    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )
    return _error_response(
        500,
        "internal_server_error",
        "An unexpected error occurred. Please try again later.",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the AppError handler and the catch-all fallback on ``app``."""

    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
