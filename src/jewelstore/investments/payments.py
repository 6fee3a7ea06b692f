"""Payment-gateway verification.

After the gateway redirects back, the customer lands on the payment status
page with the gateway order id. The backend is asked whether the order was
paid; a failed answer is retried a bounded number of times because the
gateway may confirm the payment a few seconds late.

States::

    idle -> verifying -> success
                      -> failed -> verifying (retry)
"""

import logging
import threading
from enum import Enum
from typing import Callable

from jewelstore.api import gold_plans
from jewelstore.api.client import BackendError, BackendUnavailable, is_success, message_of
from jewelstore.api.retry import RetryPolicy, call_with_retry

logger = logging.getLogger(__name__)

LAST_ORDER_SESSION_KEY = "va_last_cashfree_order_id"

MISSING_ORDER_MESSAGE = "Missing order_id"
VERIFIED_MESSAGE = "Payment verified successfully"
VERIFICATION_FAILED_MESSAGE = "Payment verification failed"
PAYMENT_FAILED_MESSAGE = "Payment failed"
VERIFICATION_ERROR_MESSAGE = "Verification error"


class VerificationStatus(str, Enum):
    IDLE = "idle"
    VERIFYING = "verifying"
    SUCCESS = "success"
    FAILED = "failed"


def resolve_order_id(params, session) -> str | None:
    """The ``order_id`` query parameter, else the order id cached at checkout."""
    order_id = params.get("order_id")
    if order_id:
        return order_id
    cached = session.get(LAST_ORDER_SESSION_KEY)
    return str(cached) if cached else None


def remember_order_id(session, order_id):
    """Cache the gateway order id for when the return URL arrives without one."""
    if order_id:
        session[LAST_ORDER_SESSION_KEY] = str(order_id)


class PaymentVerification:
    """Verification of one gateway order.

    Args:
        order_id: Gateway order id
        token: Customer bearer token
        verify: Backend call taking (token, order_id); defaults to the gold
            plan verification endpoint
        policy: Retry limits and backoff
        retries: Retries already made, for drivers that resume across requests
    """

    def __init__(
        self,
        order_id: str,
        token: str,
        verify: Callable[[str, str], dict] | None = None,
        policy: RetryPolicy | None = None,
        retries: int = 0,
    ):
        self.order_id = order_id
        self.token = token
        self.verify = verify or gold_plans.verify_payment
        self.policy = policy or RetryPolicy.from_settings()
        self.retries = retries
        self.status = VerificationStatus.IDLE
        self.message = ""

    def _resolve(self, status: VerificationStatus, message: str):
        self.status = status
        self.message = message
        return status

    @property
    def succeeded(self) -> bool:
        return self.status == VerificationStatus.SUCCESS

    @property
    def failed(self) -> bool:
        return self.status == VerificationStatus.FAILED

    def apply_redirect_flags(self, verified: str | None, error: str | None) -> bool:
        """Resolve from the flags the checkout page put on the return URL.

        Returns:
            True if the flags settled the status and no verification call is needed.
        """
        if verified == "true":
            self._resolve(VerificationStatus.SUCCESS, VERIFIED_MESSAGE)
            return True
        if verified == "false" or error:
            message = PAYMENT_FAILED_MESSAGE if error == "payment_failed" else VERIFICATION_FAILED_MESSAGE
            self._resolve(VerificationStatus.FAILED, message)
            return True
        return False

    def verify_once(self) -> VerificationStatus:
        """Ask the backend once and record the outcome."""
        self.status = VerificationStatus.VERIFYING
        try:
            payload = self.verify(self.token, self.order_id)
        except BackendUnavailable as e:
            logger.warning("Verification of %s could not reach the backend: %s", self.order_id, e)
            return self._resolve(VerificationStatus.FAILED, VERIFICATION_ERROR_MESSAGE)
        except BackendError as e:
            logger.warning("Verification of %s failed: %s", self.order_id, e)
            return self._resolve(VerificationStatus.FAILED, message_of(e.payload, VERIFICATION_ERROR_MESSAGE))

        if is_success(payload):
            logger.info("Payment %s verified", self.order_id)
            return self._resolve(VerificationStatus.SUCCESS, message_of(payload, VERIFIED_MESSAGE))
        return self._resolve(VerificationStatus.FAILED, message_of(payload, VERIFICATION_FAILED_MESSAGE))

    def can_retry(self) -> bool:
        return self.failed and self.policy.can_retry(self.retries)

    def next_delay(self) -> float | None:
        """Seconds to wait before the next retry, or None when none remains."""
        if not self.can_retry():
            return None
        return self.policy.delay_for(self.retries + 1)

    def retry(self) -> VerificationStatus:
        """Count a retry and verify again; a no-op once retries are exhausted."""
        if not self.can_retry():
            return self.status
        self.retries += 1
        return self.verify_once()

    def run(self, cancel_event: threading.Event | None = None, on_retry=None) -> VerificationStatus:
        """Verify, then retry with backoff until success, exhaustion or cancellation.

        Runs the whole sequence in-process; meant for drivers that can block.
        """

        def count_retry(attempt, delay):
            self.retries = attempt
            if on_retry is not None:
                on_retry(attempt, delay)

        return call_with_retry(
            self.verify_once,
            self.policy,
            succeeded=lambda status: status == VerificationStatus.SUCCESS,
            cancel_event=cancel_event,
            on_retry=count_retry,
        )
