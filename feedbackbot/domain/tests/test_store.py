"""
Tests for store.py
"""
import threading

import pytest

from feedbackbot.domain.schemas.submission import Submission
from feedbackbot.domain.store import (
    SubmissionIdGenerator,
    SubmissionStore,
    compute_stats,
)


def make_submission(i: int, rating: int = 5) -> Submission:
    return Submission(
        id=str(i),
        rating=rating,
        review=f"review {i}",
        user_response="thanks",
        summary="summary",
        recommended_actions="1. act",
        timestamp="2026-01-01T00:00:00.000Z",
    )


class TestSubmissionStore:
    """Bounded newest-first log"""

    def test_starts_empty(self):
        store = SubmissionStore()

        assert len(store) == 0
        assert store.snapshot() == []
        assert store.capacity == 100

    def test_newest_first(self):
        store = SubmissionStore()
        for i in range(3):
            store.add(make_submission(i))

        assert [s.id for s in store.snapshot()] == ["2", "1", "0"]

    def test_size_grows_until_capacity(self):
        store = SubmissionStore(capacity=100)
        for i in range(100):
            before = len(store)
            store.add(make_submission(i))
            assert len(store) == min(before + 1, 100)
            assert store.snapshot()[0].id == str(i)

    def test_101st_insert_evicts_exactly_the_oldest(self):
        store = SubmissionStore(capacity=100)
        for i in range(100):
            store.add(make_submission(i))

        store.add(make_submission(100))
        ids = [s.id for s in store.snapshot()]

        assert len(ids) == 100
        assert ids[0] == "100"
        assert ids[-1] == "1"
        assert "0" not in ids

    def test_never_exceeds_capacity(self):
        store = SubmissionStore(capacity=5)
        for i in range(50):
            store.add(make_submission(i))

        assert len(store) == 5
        assert [s.id for s in store.snapshot()] == ["49", "48", "47", "46", "45"]

    def test_snapshot_is_a_copy(self):
        store = SubmissionStore()
        store.add(make_submission(1))

        snap = store.snapshot()
        snap.clear()

        assert len(store) == 1

    def test_clear(self):
        store = SubmissionStore()
        store.add(make_submission(1))
        store.clear()

        assert len(store) == 0

    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError):
            SubmissionStore(capacity=0)

    def test_concurrent_adds_respect_cap(self):
        store = SubmissionStore(capacity=100)

        def worker(offset: int):
            for i in range(50):
                store.add(make_submission(offset * 1000 + i))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store) == 100
        assert len({s.id for s in store.snapshot()}) == 100


class TestComputeStats:
    """Histogram and average"""

    def test_empty(self):
        stats = compute_stats([])

        assert stats.total == 0
        assert stats.by_rating == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}
        assert stats.average_rating == 0
        assert isinstance(stats.average_rating, int)

    def test_histogram_and_average(self):
        ratings = [5, 4, 4, 1]
        stats = compute_stats([make_submission(i, r) for i, r in enumerate(ratings)])

        assert stats.total == 4
        assert stats.by_rating == {"1": 1, "2": 0, "3": 0, "4": 2, "5": 1}
        assert stats.average_rating == "3.50"

    def test_average_rounds_to_two_decimals(self):
        ratings = [5, 4, 4]  # 4.333...
        stats = compute_stats([make_submission(i, r) for i, r in enumerate(ratings)])

        assert stats.average_rating == "4.33"

    @pytest.mark.parametrize("ratings", [[1], [2, 2, 3], [5, 1, 4, 4, 2, 3, 3]])
    def test_histogram_sums_to_total(self, ratings):
        stats = compute_stats([make_submission(i, r) for i, r in enumerate(ratings)])

        assert sum(stats.by_rating.values()) == stats.total == len(ratings)

    def test_serialized_keys(self):
        stats = compute_stats([make_submission(1, 3)])
        data = stats.model_dump(by_alias=True)

        assert set(data) == {"total", "byRating", "averageRating"}
        assert data["averageRating"] == "3.00"


class TestSubmissionIdGenerator:
    """Time-derived ids"""

    def test_uses_clock(self):
        gen = SubmissionIdGenerator(clock=lambda: 1_700_000_000_000)

        assert gen() == "1700000000000"

    def test_strictly_increasing_on_same_millisecond(self):
        gen = SubmissionIdGenerator(clock=lambda: 42)

        assert [gen(), gen(), gen()] == ["42", "43", "44"]

    def test_clock_going_backwards(self):
        ticks = iter([100, 90, 200])
        gen = SubmissionIdGenerator(clock=lambda: next(ticks))

        assert [gen(), gen(), gen()] == ["100", "101", "200"]

    def test_default_clock_ids_are_unique(self):
        gen = SubmissionIdGenerator()
        ids = [gen() for _ in range(1000)]

        assert len(set(ids)) == 1000
        assert all(i.isdigit() for i in ids)
