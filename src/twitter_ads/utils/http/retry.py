"""Retry policy for Ads API requests.

Rate limiting (429), gateway failures (502, 503, 504) and transport
errors are retried with jittered exponential backoff. Every other
failure is returned to the caller on the first attempt.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, FrozenSet, Iterator, Tuple, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_STATUS_CODES: FrozenSet[int] = frozenset({429, 502, 503, 504})


@dataclass(frozen=True)
class RetryPolicy:
    """When to re-send a request and how long to wait in between.

    :param max_attempts: Attempts per request, including the first
    :type max_attempts: int
    :param delay: Wait before the second attempt, in seconds
    :type delay: float
    :param backoff: Factor applied to the wait after each retry
    :type backoff: float
    :param jitter: Bounds of the random factor applied to each wait
    :type jitter: Tuple[float, float]
    :param status_codes: HTTP statuses worth another attempt
    :type status_codes: FrozenSet[int]
    """

    max_attempts: int = 3
    delay: float = 1.0
    backoff: float = 2.0
    jitter: Tuple[float, float] = (0.8, 1.2)
    status_codes: FrozenSet[int] = RETRYABLE_STATUS_CODES

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.twitter_ads_max_retries,
            delay=settings.twitter_ads_retry_delay,
        )

    def should_retry(self, error: httpx.HTTPError) -> bool:
        if isinstance(error, httpx.HTTPStatusError):
            return error.response.status_code in self.status_codes
        return True

    def delays(self) -> Iterator[float]:
        """Waits between consecutive attempts; one fewer than ``max_attempts``."""
        current = self.delay
        for _ in range(self.max_attempts - 1):
            yield current * random.uniform(*self.jitter)
            current *= self.backoff

    async def run(self, send: Callable[[], Awaitable[T]], label: str = "request") -> T:
        """Await ``send()`` until it succeeds or the policy gives up.

        :param send: Zero-argument coroutine function performing one attempt
        :type send: Callable[[], Awaitable[T]]
        :param label: Description used in retry warnings
        :type label: str
        :return: Result of the first successful attempt
        :raises httpx.HTTPError: The last error when no attempt succeeds,
                                 or the first one that is not retryable
        """
        waits = self.delays()
        attempt = 1
        while True:
            try:
                return await send()
            except httpx.HTTPError as e:
                if not self.should_retry(e):
                    raise
                wait = next(waits, None)
                if wait is None:
                    raise
                logger.warning(
                    "Attempt %d/%d of %s failed (%s), retrying in %.2fs",
                    attempt,
                    self.max_attempts,
                    label,
                    e,
                    wait,
                )
                await asyncio.sleep(wait)
                attempt += 1
