"""One retry policy shared by every call that leaves the process.

Repositories wrap their MySQL round-trips in it and the reverse geocoder wraps
its HTTP request in it, so attempt limits and backoff live in one place.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Tuple, Type, TypeVar

from ..core.constants import DEFAULT_RETRY_ATTEMPTS, DEFAULT_RETRY_BASE_DELAY, DEFAULT_RETRY_MAX_DELAY

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = DEFAULT_RETRY_ATTEMPTS
    base_delay: float = DEFAULT_RETRY_BASE_DELAY
    multiplier: float = 2.0
    max_delay: float = DEFAULT_RETRY_MAX_DELAY
    retry_on: Tuple[Type[BaseException], ...] = ()
    is_retryable: Callable[[BaseException], bool] | None = None
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False)

    def delay_for(self, attempt: int) -> float:
        """Backoff before attempt ``attempt + 1`` (attempts are 1-based)."""
        return min(self.base_delay * (self.multiplier ** (attempt - 1)), self.max_delay)

    def should_retry(self, exc: BaseException) -> bool:
        if self.is_retryable is not None:
            return bool(self.is_retryable(exc))
        return bool(self.retry_on) and isinstance(exc, self.retry_on)

    def call(self, fn: Callable[..., T], *args, **kwargs) -> T:
        attempts = max(1, int(self.max_attempts))
        attempt = 1
        while True:
            try:
                return fn(*args, **kwargs)
            except Exception as exc:
                if attempt >= attempts or not self.should_retry(exc):
                    raise
                delay = self.delay_for(attempt)
                logger.warning(
                    "Attempt %s/%s of %s failed (%s); retrying in %.2fs",
                    attempt,
                    attempts,
                    getattr(fn, "__name__", repr(fn)),
                    exc,
                    delay,
                )
                self.sleep(delay)
                attempt += 1


NO_RETRY = RetryPolicy(max_attempts=1)
