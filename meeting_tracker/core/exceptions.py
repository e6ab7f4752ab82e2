"""
Custom exceptions and global exception handlers.
"""
from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = None,
    ):
        self.message = message
        self.status_code = status_code
        self.detail = detail or message
        super().__init__(self.message)


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class ForbiddenError(AppException):
    """Access denied."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class BadRequestError(AppException):
    """Invalid request."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class UnsupportedFileFormatError(AppException):
    """Uploaded file is neither a Word document nor a PDF."""

    def __init__(
        self,
        message: str = "Unsupported file type. Please upload Word (.docx) or PDF files.",
    ):
        super().__init__(message, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE)


class UpstreamHttpError(AppException):
    """The chat-completion endpoint failed or answered with a non-2xx status."""

    def __init__(
        self,
        message: str = "LLM request failed",
        upstream_status: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.upstream_status = upstream_status
        self.body = body
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)


class MalformedModelOutputError(AppException):
    """Model output could not be turned into the expected JSON shape."""

    def __init__(self, message: str = "Failed to parse AI response"):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)


class DatabaseWriteError(AppException):
    """An insert or update statement failed."""

    def __init__(self, message: str = "Failed to write to the database"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


class NoActionItemsError(BadRequestError):
    """A meeting has no action items to work from."""

    def __init__(self, message: str = "No action items found for this meeting"):
        super().__init__(message)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message, "detail": exc.detail},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle validation errors with user-friendly messages."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        msg = error["msg"]
        errors.append(f"{field}: {msg}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "success": False,
            "detail": "The request contains invalid input",
            "errors": errors,
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": "An unexpected error occurred",
            "detail": "An unexpected error occurred. Please try again later.",
        },
    )
