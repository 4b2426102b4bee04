from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
import traceback
import logging
import sys
from typing import Dict, Any, Optional

from gateway.middleware.request_id import get_request_id, generate_request_id

logger = logging.getLogger("gateway.middleware.error_handler")


class ErrorDetail:
    """Standard error envelope returned by the gateway."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_type: str,
        details: Optional[Any] = None
    ):
        self.status_code = status_code
        self.message = message
        self.error_type = error_type
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        error_dict = {
            "status_code": self.status_code,
            "message": self.message,
            "error_type": self.error_type
        }

        if self.details:
            error_dict["details"] = jsonable_encoder(self.details)

        return error_dict


def format_stack_trace(stack_trace: str) -> str:
    """Indent a stack trace so it reads as one block in the log."""
    lines = stack_trace.split('\n')
    formatted_lines = []
    for line in lines:
        if line.strip():
            formatted_lines.append(f"  │ {line}")

    return "\n".join(formatted_lines)


def _error_id() -> str:
    return get_request_id() or generate_request_id()


def _log_with_trace(message: str) -> None:
    exc_type, exc_value, exc_traceback = sys.exc_info()
    stack_trace = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    formatted_trace = format_stack_trace(stack_trace)
    logger.error(f"{message}\n╭─ Stack Trace ─────────────────────────╮\n{formatted_trace}\n╰───────────────────────────────────────╯")


async def error_handler_middleware(request: Request, call_next):
    """
    Middleware that turns unhandled exceptions into a JSON error envelope.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        _log_with_trace(
            f"❌ ERR#{_error_id()}: {request.method} {request.url.path} - {exc.__class__.__name__}: {exc}"
        )

        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        error_type = exc.__class__.__name__
        if isinstance(exc, StarletteHTTPException):
            status_code = exc.status_code
            error_type = "http_exception"

        return JSONResponse(
            status_code=status_code,
            content=ErrorDetail(
                status_code=status_code,
                message=str(exc),
                error_type=error_type,
            ).to_dict()
        )


def setup_error_handlers(app):
    """
    Register the exception handlers for the FastAPI application.
    """
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request, exc):
        """Handler for HTTP exceptions."""
        if exc.status_code >= 500:
            _log_with_trace(
                f"❌ HTTP#{_error_id()}: {request.method} {request.url.path} - {exc.status_code} - {exc.detail}"
            )
        else:
            logger.warning(f"⚠️ HTTP#{_error_id()}: {exc.status_code} - {exc.detail}")

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorDetail(
                status_code=exc.status_code,
                message=str(exc.detail),
                error_type="http_exception",
            ).to_dict()
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc):
        """Handler for request validation errors."""
        validation_errors = exc.errors()
        logger.warning(
            f"⚠️ VALID#{_error_id()}: {request.method} {request.url.path} - "
            f"{len(validation_errors)} validation error(s)"
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorDetail(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                message="Request validation failed",
                error_type="validation_error",
                details=validation_errors
            ).to_dict()
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request, exc):
        """Handler for unhandled exceptions."""
        _log_with_trace(
            f"❌ EXC#{_error_id()}: {request.method} {request.url.path} - {exc.__class__.__name__}: {exc}"
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorDetail(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message=str(exc),
                error_type=exc.__class__.__name__,
            ).to_dict()
        )
