"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
Every error body is one of the fixed plain-text status strings.
No stack traces or internal details are exposed to clients.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.domain.library.errors import (
    BookAlreadyExistsError,
    BookNotFoundError,
    LibraryDomainError,
    MissingFieldsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_405 = 405
HTTP_409 = 409
HTTP_500 = 500

BAD_REQUEST = "Bad Request"
ENDPOINT_NOT_FOUND = "Endpoint not found"
USER_NOT_FOUND = "User not found"
BOOK_NOT_FOUND = "Book not found"
USER_ALREADY_EXISTS = "User already exist"
BOOK_ALREADY_EXISTS = "Book already exist"
INTERNAL_ERROR = "Internal Server Error"


def _error_response(status_code: int, error: str) -> PlainTextResponse:
    """Build a consistent plain-text error response."""
    return PlainTextResponse(error, status_code=status_code)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(MissingFieldsError)
    async def handle_missing_fields(
        _request: Request, exc: MissingFieldsError
    ) -> PlainTextResponse:
        """Handle absent or falsy required fields."""
        logger.warning("Missing required fields: %s", ", ".join(exc.fields))
        return _error_response(HTTP_400, BAD_REQUEST)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> PlainTextResponse:
        """Handle malformed JSON bodies and wrongly typed fields."""
        logger.warning("Rejected malformed request (%d error(s))", len(exc.errors()))
        return _error_response(HTTP_400, BAD_REQUEST)

    @app.exception_handler(UserNotFoundError)
    async def handle_user_not_found(
        _request: Request, exc: UserNotFoundError
    ) -> PlainTextResponse:
        logger.warning("User not found")
        return _error_response(HTTP_404, USER_NOT_FOUND)

    @app.exception_handler(BookNotFoundError)
    async def handle_book_not_found(
        _request: Request, exc: BookNotFoundError
    ) -> PlainTextResponse:
        logger.warning("Book not found: %s", exc.identifier)
        return _error_response(HTTP_404, BOOK_NOT_FOUND)

    @app.exception_handler(UserAlreadyExistsError)
    async def handle_user_exists(
        _request: Request, exc: UserAlreadyExistsError
    ) -> PlainTextResponse:
        logger.warning("User already exists")
        return _error_response(HTTP_409, USER_ALREADY_EXISTS)

    @app.exception_handler(BookAlreadyExistsError)
    async def handle_book_exists(
        _request: Request, exc: BookAlreadyExistsError
    ) -> PlainTextResponse:
        logger.warning("Book already exists: %s", exc.title)
        return _error_response(HTTP_409, BOOK_ALREADY_EXISTS)

    @app.exception_handler(LibraryDomainError)
    async def handle_library_domain(
        _request: Request, exc: LibraryDomainError
    ) -> PlainTextResponse:
        """Catch-all for unhandled library domain errors."""
        logger.error("Unhandled library domain error: %s", exc.message)
        return _error_response(HTTP_500, INTERNAL_ERROR)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        _request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        """Unknown paths and unsupported methods share one 404."""
        if exc.status_code in (HTTP_404, HTTP_405):
            return _error_response(HTTP_404, ENDPOINT_NOT_FOUND)
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> PlainTextResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, INTERNAL_ERROR)
