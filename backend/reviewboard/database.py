"""
Review Board Backend — Database Engine & Declarative Base
==========================================================

What:  Async SQLAlchemy engine factory and the declarative Base for models.
How:   `build_engine()` turns a URL into an AsyncEngine; ReviewStore checks
       out exactly one connection from it and keeps it for the whole process.
Who:   Used by ReviewStore (engine) and models (Base).

Connection Strategy:
    The service deliberately holds a single shared connection rather than a
    session per request. All store access is already serialized by the
    ReviewService lock, so a pool would never hand out a second connection.
    SQLite is reached through the aiosqlite driver so statements do not
    block the event loop.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    `Base.metadata.create_all` is how ReviewStore.initialize() creates the
    schema; there are no migrations.
    """
    pass


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create the async engine for the review store.

    Args:
        database_url: e.g. "sqlite+aiosqlite:///./reviews.db"
        echo: Log every SQL statement (enabled when log_level is DEBUG)
    """
    return create_async_engine(database_url, echo=echo)
