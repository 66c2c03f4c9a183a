"""Latest-request guard for views that refetch on every filter change.

In-flight store calls cannot be cancelled, so a slow response for an old
filter can arrive after the response for the current one. Each request gets
a sequence number; only the newest one is reported as current.

Usage:
    guard = LatestRequestGuard()
    tasks, current = await guard.run(services.tasks.fetch(filters))
    if current:
        view.tasks = tasks
"""
import logging
from typing import Awaitable, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LatestRequestGuard:
    def __init__(self) -> None:
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        """Start a request and return its sequence number."""
        self._latest += 1
        return self._latest

    def is_current(self, sequence: int) -> bool:
        return sequence == self._latest

    async def run(self, awaitable: Awaitable[T]) -> Tuple[T, bool]:
        """Await a call; the flag is False when a newer request was issued meanwhile.

        Exceptions propagate whether or not the request is still current.
        """
        sequence = self.issue()
        result = await awaitable
        current = self.is_current(sequence)
        if not current:
            logger.debug("Discarding stale response #%d (latest is #%d)", sequence, self._latest)
        return result, current
