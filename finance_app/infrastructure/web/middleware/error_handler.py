"""
Global error handler middleware for the FastAPI application.
Catches and formats all exceptions that escape the routers.
"""

import logging
import traceback
from typing import Any, Dict
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import status

from finance_app.config import settings
from finance_app.domain.models.base import (
    DomainException,
    ValidationError,
    AuthenticationError,
    EntityNotFoundError,
    BusinessRuleViolation,
    PopupBlockedError,
    UploadError,
)

logger = logging.getLogger(__name__)

# Most specific classes first
DOMAIN_STATUS_CODES = (
    (ValidationError, status.HTTP_400_BAD_REQUEST, "Bad Request"),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "Unauthorized"),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND, "Not Found"),
    (PopupBlockedError, status.HTTP_409_CONFLICT, "Conflict"),
    (BusinessRuleViolation, status.HTTP_422_UNPROCESSABLE_ENTITY, "Unprocessable Entity"),
    (UploadError, status.HTTP_502_BAD_GATEWAY, "Upload Failed"),
)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Process the request and handle any exceptions.
        """
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """
        Log the exception and return a JSON error body.
        """
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        error_response = self.format_error_response(exc)

        # In development, add more debug information
        if settings.debug:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=error_response.get("status_code", 500),
            content=error_response
        )

    def format_error_response(self, exc: Exception) -> Dict[str, Any]:
        """
        Format exception into a consistent error response structure.
        """
        error_response = {
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
        }

        if isinstance(exc, DomainException):
            error_response["code"] = exc.code
            for exc_type, status_code, title in DOMAIN_STATUS_CODES:
                if isinstance(exc, exc_type):
                    error_response.update({
                        "error": title,
                        "message": exc.message,
                        "status_code": status_code
                    })
                    break

        return error_response
