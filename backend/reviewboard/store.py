"""
Review Board Backend — Review Store (Persistence)
==================================================

What:  Owns the `reviews` table and the one connection used to reach it.
How:   Opens a single AsyncConnection at startup and runs every statement
       in its own short transaction on that connection. Driver errors
       are wrapped in DatabaseError so callers never see driver details.
Who:   Owned by ReviewService; the /health route reaches it via the service.
When:  open() + initialize() once during startup, close() during shutdown.

Operations:
    initialize()      CREATE TABLE IF NOT EXISTS (idempotent)
    max_id()          SELECT MAX(id)  → int | None
    insert(review)    INSERT with the application-assigned id
    delete_by_id(id)  DELETE; zero affected rows → NotFoundError
    list_all()        SELECT every row, ordered by id

The store is not thread- or task-safe by itself. Every call after
open() is expected to run under the ReviewService lock.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, insert, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from reviewboard.database import Base, build_engine
from reviewboard.exceptions import DatabaseError, NotFoundError
from reviewboard.models.review import Review

logger = logging.getLogger(__name__)

# Raised by the sqlite3 driver for values it cannot bind (ints beyond 64 bits,
# text that is not encodable as UTF-8) before SQLAlchemy sees the statement
DRIVER_ERRORS = (SQLAlchemyError, OverflowError, UnicodeError)


class ReviewStore:
    """
    Durable storage of reviews in a single table.

    Args:
        database_url: Async SQLAlchemy URL (see Settings.database_url)
        echo: Echo SQL statements to the sqlalchemy.engine logger
        engine: Pre-built engine; mainly for tests. Overrides database_url.
    """

    def __init__(
        self,
        database_url: str = "",
        echo: bool = False,
        engine: Optional[AsyncEngine] = None,
    ):
        self._engine = engine or build_engine(database_url, echo=echo)
        self._conn: Optional[AsyncConnection] = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def open(self) -> None:
        """Check out the shared connection. Safe to call twice."""
        if self._conn is not None:
            return
        try:
            self._conn = await self._engine.connect()
        except DRIVER_ERRORS as e:
            logger.error("Could not open review store %s: %s", self._engine.url, e)
            raise DatabaseError(
                message="Could not open the review store",
                context={"url": str(self._engine.url), "original_error": str(e)},
            ) from e
        logger.info("Review store opened: %s", self._engine.url)

    async def close(self) -> None:
        """Release the shared connection and dispose the engine."""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
        await self._engine.dispose()

    def _connection(self) -> AsyncConnection:
        if self._conn is None:
            raise DatabaseError(
                message="The review store is not open",
                context={"url": str(self._engine.url)},
            )
        return self._conn

    # ── Schema ────────────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """
        Create the reviews table if it does not exist.

        Idempotent: create_all checks for the table first, so this runs on
        every startup.
        """
        conn = self._connection()
        try:
            async with conn.begin():
                await conn.run_sync(Base.metadata.create_all)
        except DRIVER_ERRORS as e:
            logger.error("Schema creation failed: %s", e)
            raise DatabaseError(
                message="Could not initialize the review store",
                context={"original_error": str(e)},
            ) from e

    # ── Queries ───────────────────────────────────────────────────────────

    async def max_id(self) -> Optional[int]:
        """Highest stored id, or None when the table is empty."""
        conn = self._connection()
        try:
            async with conn.begin():
                result = await conn.execute(select(func.max(Review.id)))
                return result.scalar()
        except DRIVER_ERRORS as e:
            logger.error("Failed to read highest review id: %s", e)
            raise DatabaseError(
                message="Could not read the highest review id",
                context={"original_error": str(e)},
            ) from e

    async def insert(self, review: Review) -> None:
        """
        Append a row using the id already set on `review`.

        The id is trusted; a collision surfaces as a DatabaseError from the
        primary key constraint.
        """
        conn = self._connection()
        try:
            async with conn.begin():
                await conn.execute(
                    insert(Review).values(
                        id=review.id,
                        name=review.name,
                        review=review.review,
                        rating=review.rating,
                    )
                )
        except DRIVER_ERRORS as e:
            logger.error("Failed to save review %s: %s", review.id, e)
            raise DatabaseError(
                message="Failed to save review",
                context={"review_id": review.id, "original_error": str(e)},
            ) from e

    async def delete_by_id(self, review_id: int) -> None:
        """
        Remove the review with `review_id`.

        Raises:
            NotFoundError: No row matched (nothing was deleted)
            DatabaseError: The statement itself failed
        """
        conn = self._connection()
        try:
            async with conn.begin():
                result = await conn.execute(
                    delete(Review).where(Review.id == review_id)
                )
                deleted = result.rowcount
        except DRIVER_ERRORS as e:
            logger.error("Failed to delete review %s: %s", review_id, e)
            raise DatabaseError(
                message="Failed to delete review",
                context={"review_id": review_id, "original_error": str(e)},
            ) from e

        if deleted == 0:
            raise NotFoundError(resource="review", resource_id=str(review_id))

    async def list_all(self) -> List[Review]:
        """
        Every stored review as detached Review objects.

        Rows are read fresh on each call; nothing is cached between calls.
        """
        conn = self._connection()
        try:
            async with conn.begin():
                result = await conn.execute(
                    select(Review.id, Review.name, Review.review, Review.rating)
                    .order_by(Review.id)
                )
                rows = result.all()
        except DRIVER_ERRORS as e:
            logger.error("Failed to load reviews: %s", e)
            raise DatabaseError(
                message="Failed to load reviews",
                context={"original_error": str(e)},
            ) from e

        return [
            Review(id=row.id, name=row.name, review=row.review, rating=row.rating)
            for row in rows
        ]

    async def ping(self) -> None:
        """SELECT 1 on the shared connection; raises DatabaseError on failure."""
        conn = self._connection()
        try:
            async with conn.begin():
                await conn.execute(text("SELECT 1"))
        except DRIVER_ERRORS as e:
            raise DatabaseError(
                message="Review store is unreachable",
                context={"original_error": str(e)},
            ) from e
