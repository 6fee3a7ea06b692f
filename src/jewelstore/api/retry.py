"""Bounded retry with linear backoff.

Used wherever the storefront has to poll the backend for a result that may
not be ready yet, such as a payment-gateway verification.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to retry and how long to wait before each retry."""

    max_retries: int = 3
    base_delay: float = 2.0

    def delay_for(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (1-based)."""
        return self.base_delay * attempt

    def delays(self) -> list[float]:
        return [self.delay_for(attempt) for attempt in range(1, self.max_retries + 1)]

    def can_retry(self, retries_made: int) -> bool:
        return retries_made < self.max_retries

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        from django.conf import settings

        return cls(
            max_retries=settings.PAYMENT_VERIFY_MAX_RETRIES,
            base_delay=settings.PAYMENT_VERIFY_BASE_DELAY,
        )


def call_with_retry(
    operation: Callable[[], Any],
    policy: RetryPolicy,
    *,
    succeeded: Callable[[Any], bool] = bool,
    cancel_event: threading.Event | None = None,
    on_retry: Callable[[int, float], None] | None = None,
) -> Any:
    """Run ``operation`` and retry it until it succeeds or retries run out.

    The first call happens immediately. Each retry waits
    ``policy.delay_for(attempt)`` seconds on ``cancel_event``; setting the
    event stops the loop without another call.

    Args:
        operation: Zero-argument callable; its return value is passed to ``succeeded``
        policy: Retry limits and backoff
        succeeded: Predicate deciding whether a result is final
        cancel_event: Event that aborts pending waits when set
        on_retry: Called with (attempt, delay) before each wait

    Returns:
        The last result of ``operation``.
    """
    if cancel_event is None:
        cancel_event = threading.Event()

    result = operation()
    attempt = 0
    while not succeeded(result) and policy.can_retry(attempt):
        attempt += 1
        delay = policy.delay_for(attempt)
        if on_retry is not None:
            on_retry(attempt, delay)
        logger.info("Retry %d/%d in %.1fs", attempt, policy.max_retries, delay)
        if cancel_event.wait(delay):
            logger.info("Retry cancelled before attempt %d", attempt)
            break
        result = operation()
    return result
