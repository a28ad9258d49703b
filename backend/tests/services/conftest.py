"""Service test fixtures: in-memory SQLite manager + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The app gets its DatabaseSessionManager through app.state.db, exactly
      like the lifespan does (ASGITransport does not run the lifespan)
    - seed_book inserts the Jonathan Testington book before each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from books_api.config import Settings
from books_api.infrastructure.database import DatabaseSessionManager
from books_api.main import create_app
from books_api.services.book_repository import BookRepository
from tests.services.book_data import TEST_BOOK


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_schema()
    yield manager
    await manager.drop_schema()
    await manager.close()


@pytest.fixture
def app(db_manager):
    application = create_app(Settings(
        environment="test",
        test_database_url="sqlite+aiosqlite:///:memory:",
        log_format="text",
    ))
    application.state.db = db_manager
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def seed_book(db_manager):
    async with db_manager.session() as session:
        return await BookRepository(session).create(dict(TEST_BOOK))


@pytest.fixture
def fetch_book(db_manager):
    """Read a book straight from storage in a fresh session (None if absent)."""
    async def _fetch(isbn):
        async with db_manager.session() as session:
            repo = BookRepository(session)
            books = await repo.list_all()
        return next((b for b in books if b["isbn"] == isbn), None)
    return _fetch
