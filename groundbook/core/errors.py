"""Domain errors and their HTTP mapping.

Services raise these; a single exception handler turns each one into a
stable ``{"code": ..., "detail": ...}`` response so clients can tell them
apart (redirect to login on ``unauthenticated``, show "not bookable" on
``listing_unavailable`` and so on).
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GroundbookError(Exception):
    """Base class for all domain errors."""

    code = "error"
    status_code = 400
    default_detail = "Request failed"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(GroundbookError):
    code = "unauthenticated"
    status_code = 401
    default_detail = "Not authenticated"


class InvalidCredentials(GroundbookError):
    code = "invalid_credentials"
    status_code = 401
    default_detail = "Invalid credentials"


class ForbiddenRole(GroundbookError):
    code = "forbidden_role"
    status_code = 403
    default_detail = "Your role does not allow this action"


class Forbidden(GroundbookError):
    code = "forbidden"
    status_code = 403
    default_detail = "Not yours"


class NotFound(GroundbookError):
    code = "not_found"
    status_code = 404
    default_detail = "Not found"


class ListingUnavailable(GroundbookError):
    code = "listing_unavailable"
    status_code = 409
    default_detail = "Ground not available"


class InvalidTransition(GroundbookError):
    code = "invalid_transition"
    status_code = 409
    default_detail = "Booking is no longer pending"


class DuplicateContact(GroundbookError):
    code = "duplicate_contact"
    status_code = 409
    default_detail = "Email already registered"


class UploadTooLarge(GroundbookError):
    code = "upload_too_large"
    status_code = 413
    default_detail = "Uploaded file is too large"


class RenderingUnavailable(GroundbookError):
    code = "rendering_unavailable"
    status_code = 503
    default_detail = "QR generation failed"


async def groundbook_error_handler(request: Request, exc: GroundbookError) -> JSONResponse:
    """Render a domain error as JSON."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.detail}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.code}")

    headers = None
    if isinstance(exc, Unauthenticated):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "detail": exc.detail},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain error handler to the application."""
    app.add_exception_handler(GroundbookError, groundbook_error_handler)
