"""Error Hierarchy: typed exceptions for every failure a books request can hit.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status
    - to_response() produces the uniform envelope {"error": {"message", "status"}}
    - Validation errors carry a list of messages; all others carry a single string

Design Decisions:
    - Single hierarchy with BooksApiError base: one global handler maps all of them
    - StorageConstraintError (duplicate isbn included) is a 500
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """High-level error categories for logging and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class BooksApiError(Exception):
    """Base exception for all Books API errors."""

    def __init__(
        self,
        message: str | list[str],
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {
            "error": {
                "message": self.message,
                "status": self.http_status,
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class BookValidationError(BooksApiError):
    """Request body failed schema validation."""
    def __init__(self, errors: list[str]):
        super().__init__(
            list(errors), "VALIDATION_ERROR", ErrorCategory.VALIDATION, 400,
        )
        self.errors = list(errors)


class BookNotFoundError(BooksApiError):
    """No book exists for the given isbn."""
    def __init__(self, isbn: str):
        super().__init__(
            f"There is no book with an isbn '{isbn}'",
            "BOOK_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404,
        )
        self.isbn = isbn


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageConstraintError(BooksApiError):
    """Database rejected a write (unique, NOT NULL or CHECK constraint)."""
    def __init__(self, detail: str):
        super().__init__(
            f"Database constraint violated: {detail}",
            "STORAGE_CONSTRAINT", ErrorCategory.DATABASE, 500,
        )
        self.detail = detail
