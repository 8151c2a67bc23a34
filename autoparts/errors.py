"""
Domain exceptions and their JSON error handlers.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AutopartsError(Exception):
    """Base class for errors rendered as JSON error responses."""

    status_code = 500
    error_type = "server_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AutopartsError):
    """Custom validation error exception"""
    status_code = 400
    error_type = "validation_error"


class NotFoundError(AutopartsError):
    status_code = 404
    error_type = "not_found"


class ConflictError(AutopartsError):
    status_code = 409
    error_type = "conflict"


class OutOfStockError(ConflictError):
    error_type = "out_of_stock"


class StorageError(AutopartsError):
    status_code = 500
    error_type = "storage_error"


async def handle_autoparts_error(request: Request, exc: AutopartsError) -> JSONResponse:
    """Render domain errors in the API's error envelope."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": exc.message,
            "error_type": exc.error_type,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AutopartsError, handle_autoparts_error)
