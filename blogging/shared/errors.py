"""
Error handling

Maps request validation failures to 400 responses and store failures to
sanitized 500 responses, without leaking internals to the client.
"""

import logging
import uuid
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


def log_and_sanitize_error(
    error: Exception,
    context: str,
    user_message: Optional[str] = None
) -> tuple[str, str]:
    """
    Log full error details server-side and return sanitized message for client.

    Args:
        error: The exception that occurred
        context: Description of what operation failed (e.g., "GET /posts")
        user_message: Optional custom message to show user. If None, uses generic message.

    Returns:
        Tuple of (sanitized_message, error_id) for client response
    """
    # Generate unique error ID for correlation
    error_id = str(uuid.uuid4())[:8]

    logger.error(
        f"{context} failed [{error_id}]: {type(error).__name__}: {str(error)}",
        exc_info=error,
    )

    if user_message:
        sanitized = f"{user_message} (Error ID: {error_id})"
    else:
        sanitized = f"{context} failed. Please try again later. (Error ID: {error_id})"

    return sanitized, error_id


def validation_detail(message: str, errors: Optional[list] = None) -> dict:
    """Body of every 400 response."""
    detail = {"message": message, "category": "validation"}
    if errors is not None:
        detail["errors"] = errors
    return detail


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    missing = [
        ".".join(str(part) for part in err["loc"][1:]) or "body"
        for err in errors
        if err.get("type") == "missing"
    ]
    if missing:
        message = f"Missing required field(s): {', '.join(missing)}"
    else:
        message = "Request body failed validation"
    logger.info(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": validation_detail(message, errors)},
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    message, error_id = log_and_sanitize_error(exc, f"{request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": {"message": message, "category": "store", "error_id": error_id}},
    )


def setup_error_handlers(app: FastAPI) -> None:
    """Register the validation and store error handlers on an app."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
