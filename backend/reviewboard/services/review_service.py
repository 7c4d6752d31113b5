"""
Review Board Backend — Review Service (Business Logic)
=======================================================

What:  The create / list / delete operations behind the HTTP routes.
Why:   Keeps validation, id assignment and locking out of the route layer
       so they can be tested without HTTP.
How:   Owns the ReviewStore, the IdAllocator and one asyncio.Lock. Every
       store-touching section runs under that lock.
Who:   Built by create_app(); routes reach it through get_review_service().

Concurrency Model:
    Requests run as concurrent asyncio tasks. The single lock serializes
    create, list and delete against each other:

        create:  validate ─▶ [lock: next_id ─▶ insert] ─▶ id
        list:               [lock: select all]          ─▶ rows
        delete:             [lock: delete by id]        ─▶ ok / not found

    Holding the lock across next_id() and insert() is what guarantees that
    two concurrent creates never receive the same id and that the counter
    is never advanced while another create is in flight.

Error Handling:
    Rating outside 1..5 → ValidationError, raised before taking the lock.
    Store failures propagate as DatabaseError / NotFoundError from the store.
"""

import asyncio
import logging
from typing import List, Optional

from reviewboard.exceptions import ValidationError
from reviewboard.models.review import Review
from reviewboard.schemas.review import ReviewCreate, ReviewResponse
from reviewboard.services.id_allocator import IdAllocator
from reviewboard.store import ReviewStore

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class ReviewService:
    """
    Review operations over a single store, serialized by one lock.

    Args:
        store:     The persistence backend (opened by start())
        allocator: Id source; a fresh IdAllocator if omitted
        lock:      Lock shared by all three operations; injectable so tests
                   can observe or hold it
    """

    def __init__(
        self,
        store: ReviewStore,
        allocator: Optional[IdAllocator] = None,
        lock: Optional[asyncio.Lock] = None,
    ):
        self.store = store
        self.allocator = allocator or IdAllocator()
        self._lock = lock or asyncio.Lock()

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def start(self) -> None:
        """
        Open the store, create the schema and seed the allocator.

        Any failure here is fatal: the exception propagates out of the app
        lifespan and the server does not start.
        """
        await self.store.open()
        await self.store.initialize()
        max_id = await self.store.max_id()
        self.allocator.seed(max_id)
        logger.info("Id counter seeded at %d", self.allocator.current)

    async def stop(self) -> None:
        await self.store.close()

    # ── Operations ────────────────────────────────────────────────────────

    async def create_review(self, payload: ReviewCreate) -> int:
        """
        Validate, assign the next id and persist a new review.

        Returns:
            The id assigned to the review

        Raises:
            ValidationError: rating outside 1..5 (nothing persisted)
            DatabaseError:   insert failed; the allocated id is not reused
        """
        if not MIN_RATING <= payload.rating <= MAX_RATING:
            raise ValidationError(
                message=f"Invalid rating value. Must be between {MIN_RATING} and {MAX_RATING}.",
                field="rating",
                context={"rating": payload.rating},
            )

        async with self._lock:
            review_id = self.allocator.next_id()
            await self.store.insert(
                Review(
                    id=review_id,
                    name=payload.name,
                    review=payload.review,
                    rating=payload.rating,
                )
            )

        logger.info("Review %d created (rating=%d)", review_id, payload.rating)
        return review_id

    async def list_reviews(self) -> List[ReviewResponse]:
        """All stored reviews; an empty list when there are none."""
        async with self._lock:
            reviews = await self.store.list_all()
        return [ReviewResponse.model_validate(r) for r in reviews]

    async def delete_review(self, review_id: int) -> None:
        """
        Remove a review by id.

        Raises:
            NotFoundError: no review has that id
            DatabaseError: the delete statement failed
        """
        async with self._lock:
            await self.store.delete_by_id(review_id)
        logger.info("Review %d deleted", review_id)

    async def ping(self) -> None:
        """Round-trip to the store for the health check."""
        async with self._lock:
            await self.store.ping()
