"""Error Handlers: global exception handlers producing the error envelope.

Invariants:
    - Every non-2xx response body is {"error": {"message": ..., "status": ...}}
    - BooksApiError → its own status and message (list for validation)
    - RequestValidationError (body not JSON / not an object) → 400 with a list
    - Starlette HTTPException (unmatched route, wrong method) → its status
    - Exception (catch-all) → 500 carrying the exception's message
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from books_api.core.errors import BooksApiError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_books_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def error_envelope(message: str | list[str], status_code: int) -> dict:
    return {"error": {"message": message, "status": status_code}}


def _register_books_error_handler(app: FastAPI) -> None:
    """Register Books API domain/infrastructure error handler."""

    @app.exception_handler(BooksApiError)
    async def books_error_handler(request: Request, exc: BooksApiError):
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"BooksApiError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register framework request validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_envelope(
                _validation_messages(exc), status.HTTP_400_BAD_REQUEST,
            ),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register handler for routing-level HTTP errors (404, 405)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(exc.detail, exc.status_code),
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope(
                str(exc) or "Internal Server Error",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            ),
        )


def _validation_messages(exc: RequestValidationError) -> list[str]:
    return [
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    ]
