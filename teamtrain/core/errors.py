"""
Error taxonomy.

Every error is an ``HTTPException`` so services can raise it directly; the
handlers registered by ``register_exception_handlers`` render it as
``{"error": <message>, "code": <code>}``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "internal_error"
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=message or self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    message = "Invalid request"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "not_authenticated"
    message = "Not logged in"


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    message = "Admin privileges required"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "conflict"
    message = "Conflict"


class PayloadTooLarge(AppError):
    status_code = 413
    code = "file_too_large"
    message = "File exceeds the upload size limit"


class MissingFields(ValidationError):
    code = "missing_fields"
    message = "All fields are required"


class InvalidRole(ValidationError):
    code = "invalid_role"
    message = "Invalid role"


class SelfDemotion(ValidationError):
    code = "self_demotion"
    message = "You cannot remove your own admin role"


class SelfDeletion(ValidationError):
    code = "self_deletion"
    message = "You cannot delete yourself"


class MissingFile(ValidationError):
    code = "missing_file"
    message = "No file uploaded"


class UnsupportedType(ValidationError):
    code = "unsupported_type"
    message = "File type not allowed"


class InvalidCredentials(AuthError):
    code = "invalid_credentials"
    message = "Invalid email or password"


class InvalidInvite(ConflictError):
    code = "invalid_invite"
    message = "Invalid or already used invite code"


class EmailTaken(ConflictError):
    code = "email_taken"
    message = "An account with this email already exists"


class PageRedirect(Exception):
    """Raised by page guards; rendered as a redirect instead of a JSON error."""

    def __init__(self, url: str):
        super().__init__(url)
        self.url = url


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "code": exc.code},
    )


HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: NotFoundError.code,
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (unknown path, wrong method) in the same shape as AppError."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "code": HTTP_ERROR_CODES.get(exc.status_code, "http_error")},
        headers=getattr(exc, "headers", None),
    )


async def page_redirect_handler(request: Request, exc: PageRedirect) -> RedirectResponse:
    return RedirectResponse(url=exc.url, status_code=status.HTTP_302_FOUND)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(part) for part in err["loc"][1:]) for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": ValidationError.message, "code": ValidationError.code, "fields": fields},
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": AppError.message, "code": AppError.code},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(PageRedirect, page_redirect_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
