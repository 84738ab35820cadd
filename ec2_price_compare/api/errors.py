"""
API error type and exception handlers.
All errors are returned in the {"success": false, "error": {...}} envelope.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised by route handlers to return a specific error response."""

    def __init__(self, status_code: int, code: str, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message


def bad_request(message: str, code: str = "BAD_REQUEST") -> ApiError:
    return ApiError(400, code, message)


def server_error(message: str) -> ApiError:
    return ApiError(500, "INTERNAL_SERVER_ERROR", message)


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {"code": code, "message": message},
        }
    )


async def api_error_handler(request: Request, error: ApiError) -> JSONResponse:
    if error.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {error.message}")
    return error_response(error.status_code, error.code, error.message)


async def validation_error_handler(request: Request, error: RequestValidationError) -> JSONResponse:
    return error_response(400, "BAD_REQUEST", "Invalid request parameters")


async def unhandled_error_handler(request: Request, error: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {error}", exc_info=True)
    return error_response(500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred")


def register_error_handlers(app: FastAPI) -> None:
    """Attach the error handlers to an application."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
