"""Error Handlers — global exception handlers for the Events API.

Invariants:
    - EventsApiError → its own to_response() body and http_status
    - RequestValidationError → 400 {success: false, message: "Invalid input", errors},
      for any route that takes FastAPI-parsed parameters instead of validated_body/query
    - Exception (catch-all) → 500 generic body; never leaks internal details
    - Every failure produces exactly one log record

Design Decisions:
    - Three-layer handler: domain (EventsApiError), validation (FastAPI), catch-all
    - Client errors logged at WARNING, server errors at ERROR with stack trace
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from events_api.core.errors import EventsApiError, GENERIC_FAILURE_MESSAGE
from events_api.core.validation import format_error

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register Events API domain/infrastructure error handler."""

    @app.exception_handler(EventsApiError)
    async def events_api_error_handler(request: Request, exc: EventsApiError):
        extra = {**exc.to_log_extra(), "path": request.url.path}
        if exc.http_status >= 500:
            logger.error(
                f"EventsApiError: {exc.message}", exc_info=exc, extra=extra,
            )
        else:
            logger.warning(f"EventsApiError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register FastAPI request validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": GENERIC_FAILURE_MESSAGE,
                "error": "Internal server error",
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "success": False,
        "message": "Invalid input",
        "errors": [
            format_error({**e, "loc": tuple(e["loc"])[1:] or e["loc"]})
            for e in exc.errors()
        ],
    }
