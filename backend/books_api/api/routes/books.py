"""Books Routes: CRUD endpoints for the books resource.

Invariants:
    - Validation runs strictly before any storage call (no partial writes)
    - All field errors of one body are reported in a single 400
    - PUT never changes isbn: the path isbn wins over the body
    - Routes catch nothing: domain errors bubble to the global handlers
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from books_api.core.errors import BookValidationError
from books_api.infrastructure.database import get_db
from books_api.schemas.book import BookPayload, format_validation_errors
from books_api.services.book_repository import BookRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/books", tags=["books"])


def get_book_repository(db: AsyncSession = Depends(get_db)) -> BookRepository:
    return BookRepository(db)


def ensure_valid_book(payload: Any) -> dict:
    """Raise BookValidationError with every violation, else return table fields."""
    try:
        book = BookPayload.model_validate(payload)
    except ValidationError as exc:
        raise BookValidationError(format_validation_errors(exc)) from exc
    return book.model_dump()


@router.get("")
async def list_books(repo: BookRepository = Depends(get_book_repository)):
    """List every book."""
    return {"books": await repo.list_all()}


@router.get("/{isbn}")
async def get_book(
    isbn: str, repo: BookRepository = Depends(get_book_repository),
):
    """Get one book by isbn."""
    return {"book": await repo.get(isbn)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_book(
    payload: Any = Body(...),
    repo: BookRepository = Depends(get_book_repository),
):
    """Create a book from a full payload (caller supplies isbn)."""
    fields = ensure_valid_book(payload)
    return {"book": await repo.create(fields)}


@router.put("/{isbn}")
async def update_book(
    isbn: str,
    payload: Any = Body(...),
    repo: BookRepository = Depends(get_book_repository),
):
    """Replace every field of an existing book; isbn stays the path isbn."""
    fields = ensure_valid_book(payload)
    fields["isbn"] = isbn
    return {"book": await repo.update(isbn, fields)}


@router.delete("/{isbn}")
async def delete_book(
    isbn: str, repo: BookRepository = Depends(get_book_repository),
):
    """Delete one book by isbn."""
    await repo.delete(isbn)
    return {"message": "Book deleted"}
