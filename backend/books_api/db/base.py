"""SQLAlchemy Declarative Base: shared base class for ORM models.

Invariants:
    - All models inherit from Base
    - Base.metadata is what alembic and create_schema() operate on
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all Books API ORM models."""
    pass
