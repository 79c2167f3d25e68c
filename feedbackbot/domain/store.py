"""
In-memory submission log.

Holds at most `capacity` submissions, newest first. Everything is lost when
the process exits.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable, Iterable, List

from feedbackbot.domain.schemas.submission import Submission, SubmissionStats

DEFAULT_CAPACITY = 100
RATINGS = (1, 2, 3, 4, 5)


class SubmissionStore:
    """
    Bounded, newest-first log of submissions.

    `add` is the only mutation; it prepends and trims under one lock, so two
    requests finishing together can neither reorder entries nor overshoot
    the cap.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._items: deque[Submission] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def add(self, submission: Submission) -> None:
        with self._lock:
            # appendleft on a full deque drops the rightmost (oldest) item
            self._items.appendleft(submission)

    def snapshot(self) -> List[Submission]:
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def stats(self) -> SubmissionStats:
        return compute_stats(self.snapshot())


def compute_stats(submissions: Iterable[Submission]) -> SubmissionStats:
    by_rating = {str(r): 0 for r in RATINGS}
    total = 0
    rating_sum = 0
    for s in submissions:
        total += 1
        rating_sum += s.rating
        key = str(s.rating)
        if key in by_rating:
            by_rating[key] += 1

    average = f"{rating_sum / total:.2f}" if total else 0
    return SubmissionStats(total=total, by_rating=by_rating, average_rating=average)


class SubmissionIdGenerator:
    """
    Millisecond timestamps as ids, bumped by one whenever the clock has not
    moved past the last id handed out.
    """

    def __init__(self, clock: Callable[[], int] | None = None):
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            candidate = self._clock()
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)
