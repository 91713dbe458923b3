"""
Centralized exception handlers for FastAPI application.
Maps custom exceptions to `{success: false, error}` JSON responses.
"""
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from core.utils.logger import setup_logger
from core.exceptions import (
    DriveException,
    DriveFileNotFoundError,
    NoFileUploadedError,
    FileTooLargeError,
    TempFileError,
)

logger = setup_logger(__name__)


def error_response(status_code: int, error: Any) -> JSONResponse:
    """Build the failure body shared by every error path."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error}
    )


def register_exception_handlers(app: FastAPI):
    """
    Register all exception handlers with the FastAPI app.

    Call this once in main.py after creating the app instance.

    Args:
        app: FastAPI application instance
    """

    # ========================================================================
    # Upload Validation Exceptions
    # ========================================================================

    @app.exception_handler(NoFileUploadedError)
    async def no_file_uploaded_handler(request: Request, exc: NoFileUploadedError):
        """Handle uploads without a file (400 - client error)"""
        logger.warning(f"Upload rejected: {exc.message}")
        return error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(FileTooLargeError)
    async def file_too_large_handler(request: Request, exc: FileTooLargeError):
        """Handle uploads over the size limit (413 - client error)"""
        logger.warning(f"Upload rejected: {exc.message}", extra={"detail": exc.detail})
        return error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, exc.message)

    @app.exception_handler(TempFileError)
    async def temp_file_error_handler(request: Request, exc: TempFileError):
        """Handle local temp-file failures (500 - our filesystem)"""
        logger.error(f"Temporary file error: {exc.message}", extra={"detail": exc.detail})
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    # ========================================================================
    # Google Drive Exceptions
    # ========================================================================

    @app.exception_handler(DriveException)
    async def drive_error_handler(request: Request, exc: DriveException):
        """
        Handle every Drive failure (500).

        The provider's error payload is passed through when Drive sent one,
        otherwise the exception message.
        """
        if isinstance(exc, DriveFileNotFoundError):
            logger.warning(f"{request.method} {request.url.path}: {exc.message}")
        else:
            logger.error(f"{request.method} {request.url.path}: {exc.message}", extra={"detail": exc.detail})
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            exc.detail.get("error") or exc.message
        )

    # ========================================================================
    # FastAPI Built-in Exceptions
    # ========================================================================

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors (422)"""
        errors = exc.errors()
        logger.warning(f"Request validation error: {errors}")

        error_details = []
        for error in errors:
            error_details.append({
                "loc": list(error.get("loc", [])),
                "msg": error.get("msg", ""),
                "type": error.get("type", "")
            })

        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, error_details)

    # ========================================================================
    # Catch-All Handler (Must be last!)
    # ========================================================================

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions (500)"""
        logger.exception(f"Unhandled exception: {str(exc)}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
