"""Reusable retry policy for fetch operations."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

from .errors import RetryExhausted

logger = logging.getLogger("fa_archiver.retry")

T = TypeVar("T")


def no_backoff(attempt: int) -> float:
    return 0.0


@dataclass(frozen=True)
class RetryPolicy:
    """Run an operation until ``accept`` approves its result.

    ``retry_on`` lists exception types that count as a failed attempt instead
    of propagating. ``backoff(attempt)`` gives the pause before the next try.
    """
    max_attempts: int = 3
    backoff: Callable[[int], float] = no_backoff
    retry_on: tuple[type[BaseException], ...] = ()
    sleep: Callable[[float], None] = time.sleep

    def run(self, operation: Callable[[], T], accept: Callable[[T], bool] = lambda _: True, *, label: str = "") -> T:
        last: T | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                last = operation()
            except self.retry_on as exc:
                logger.warning("Attempt %d/%d failed for %s: %s", attempt, self.max_attempts, label, exc)
                last = None
            else:
                if accept(last):
                    return last
                logger.warning("Attempt %d/%d rejected for %s", attempt, self.max_attempts, label)
            if attempt < self.max_attempts:
                delay = self.backoff(attempt)
                if delay > 0:
                    self.sleep(delay)
        raise RetryExhausted(self.max_attempts, last)
