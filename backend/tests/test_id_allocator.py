"""
Review Board Backend — Identity Allocator Unit Tests
=====================================================

What we test:
    ✅ Empty store seeds the counter at zero
    ✅ Seeding from an existing max id continues above it
    ✅ Ids are strictly increasing
"""

from reviewboard.services.id_allocator import IdAllocator


class TestIdAllocator:
    """Tests for seeding and handing out ids."""

    def test_seed_none_starts_at_one(self):
        allocator = IdAllocator()
        allocator.seed(None)
        assert allocator.current == 0
        assert allocator.next_id() == 1

    def test_seed_from_max_id(self):
        """After a restart with rows up to 41, the next id is 42."""
        allocator = IdAllocator()
        allocator.seed(41)
        assert allocator.next_id() == 42

    def test_reseed_replaces_counter(self):
        allocator = IdAllocator(start=10)
        allocator.seed(3)
        assert allocator.current == 3

    def test_ids_strictly_increasing(self):
        allocator = IdAllocator()
        ids = [allocator.next_id() for _ in range(100)]
        assert ids == sorted(set(ids))
        assert ids[0] == 1
        assert allocator.current == 100
