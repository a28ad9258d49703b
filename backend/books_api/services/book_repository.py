"""Book Repository: parameterized storage operations on the books table.

Invariants:
    - Every statement is a SQLAlchemy construct (bound parameters, no string SQL)
    - Every operation returns plain dicts with the row's full field set
    - Missing isbn on get/update/delete raises BookNotFoundError
    - IntegrityError on commit is rolled back and raised as StorageConstraintError
    - isbn is never written by update

Design Decisions:
    - One repository per request, bound to that request's AsyncSession
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from books_api.core.errors import BookNotFoundError, StorageConstraintError
from books_api.models.book import Book
from books_api.schemas.book import BookRead

logger = logging.getLogger(__name__)


def _to_dict(book: Book) -> dict:
    return BookRead.model_validate(book).model_dump()


class BookRepository:
    """Storage accessor for Book rows."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_all(self) -> list[dict]:
        result = await self._db.execute(select(Book).order_by(Book.title))
        return [_to_dict(book) for book in result.scalars().all()]

    async def get(self, isbn: str) -> dict:
        return _to_dict(await self._get_or_raise(isbn))

    async def create(self, fields: dict) -> dict:
        """Insert one book. Duplicate isbn surfaces as StorageConstraintError."""
        book = Book(**fields)
        self._db.add(book)
        await self._commit(fields.get("isbn"))
        logger.info("Book created", extra={"isbn": book.isbn})
        return _to_dict(book)

    async def update(self, isbn: str, fields: dict) -> dict:
        """Replace every mutable field of an existing book."""
        book = await self._get_or_raise(isbn)
        for name, value in fields.items():
            if name != "isbn":
                setattr(book, name, value)
        await self._commit(isbn)
        logger.info("Book updated", extra={"isbn": isbn})
        return _to_dict(book)

    async def delete(self, isbn: str) -> None:
        result = await self._db.execute(delete(Book).where(Book.isbn == isbn))
        if result.rowcount == 0:
            raise BookNotFoundError(isbn)
        await self._commit(isbn)
        logger.info("Book deleted", extra={"isbn": isbn})

    async def _get_or_raise(self, isbn: str) -> Book:
        result = await self._db.execute(select(Book).where(Book.isbn == isbn))
        book = result.scalar_one_or_none()
        if book is None:
            raise BookNotFoundError(isbn)
        return book

    async def _commit(self, isbn: str | None) -> None:
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.error(
                f"DB integrity error: {e.orig}", extra={"isbn": isbn},
            )
            raise StorageConstraintError(str(e.orig)) from e
