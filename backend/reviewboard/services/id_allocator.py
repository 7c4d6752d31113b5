"""
Review Board Backend — Identity Allocator
==========================================

What:  Hands out unique, strictly increasing integer ids for new reviews.
How:   Keeps a counter seeded from the store's MAX(id) at startup; each
       call to next_id() increments first and returns the new value.
Who:   Owned by ReviewService, which calls next_id() under its lock.

The allocator never consults the database after seeding and never gives
an id back. If the insert that follows next_id() fails, that id is simply
skipped, leaving a gap in the sequence.
"""

from typing import Optional


class IdAllocator:
    """Monotonic id counter. Not synchronized; callers hold the service lock."""

    def __init__(self, start: int = 0):
        self._counter = start

    @property
    def current(self) -> int:
        """Last id handed out (or the seed value if none yet)."""
        return self._counter

    def seed(self, max_id: Optional[int]) -> None:
        """Reset the counter to the highest stored id; None means an empty table."""
        self._counter = max_id or 0

    def next_id(self) -> int:
        self._counter += 1
        return self._counter
