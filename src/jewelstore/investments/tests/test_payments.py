"""Tests for payment-gateway verification."""

from unittest.mock import Mock

from jewelstore.api.client import BackendError, BackendUnavailable
from jewelstore.api.retry import RetryPolicy
from jewelstore.investments.payments import (
    LAST_ORDER_SESSION_KEY,
    PaymentVerification,
    VerificationStatus,
    remember_order_id,
    resolve_order_id,
)


class ImmediateEvent:
    """Cancel event whose waits return at once."""

    def __init__(self):
        self.waits = []

    def wait(self, timeout):
        self.waits.append(timeout)
        return False


def verification(verify, retries=0):
    return PaymentVerification("order_1", "tok", verify=verify, policy=RetryPolicy(3, 2.0), retries=retries)


class TestOrderId:
    def test_query_parameter_wins(self):
        assert resolve_order_id({"order_id": "from_url"}, {LAST_ORDER_SESSION_KEY: "cached"}) == "from_url"

    def test_falls_back_to_cached_order(self):
        assert resolve_order_id({}, {LAST_ORDER_SESSION_KEY: "cached"}) == "cached"

    def test_missing(self):
        assert resolve_order_id({"order_id": ""}, {}) is None

    def test_remember_ignores_empty(self):
        session = {}
        remember_order_id(session, None)
        assert session == {}

        remember_order_id(session, 42)
        assert session == {LAST_ORDER_SESSION_KEY: "42"}


class TestRedirectFlags:
    """Tests for flags carried on the gateway return URL."""

    def test_verified_true_settles_without_call(self):
        verify = Mock()
        v = verification(verify)

        assert v.apply_redirect_flags("true", None)
        assert v.status == VerificationStatus.SUCCESS
        assert v.message == "Payment verified successfully"
        assert v.next_delay() is None
        verify.assert_not_called()

    def test_verified_false(self):
        v = verification(Mock())

        assert v.apply_redirect_flags("false", None)
        assert v.failed
        assert v.message == "Payment verification failed"

    def test_payment_failed_error(self):
        v = verification(Mock())

        v.apply_redirect_flags(None, "payment_failed")

        assert v.message == "Payment failed"

    def test_no_flags(self):
        v = verification(Mock())

        assert not v.apply_redirect_flags(None, None)
        assert v.status == VerificationStatus.IDLE


class TestVerifyOnce:
    """Tests for a single verification call."""

    def test_success(self):
        verify = Mock(return_value={"success": True, "message": "Gold credited"})
        v = verification(verify)

        assert v.verify_once() == VerificationStatus.SUCCESS
        assert v.message == "Gold credited"
        verify.assert_called_once_with("tok", "order_1")

    def test_success_default_message(self):
        v = verification(Mock(return_value={"success": True}))

        v.verify_once()

        assert v.message == "Payment verified successfully"

    def test_unsuccessful_envelope(self):
        v = verification(Mock(return_value={"success": False, "message": "Payment pending"}))

        assert v.verify_once() == VerificationStatus.FAILED
        assert v.message == "Payment pending"

    def test_unreachable_backend(self):
        v = verification(Mock(side_effect=BackendUnavailable("refused")))

        v.verify_once()

        assert v.failed
        assert v.message == "Verification error"

    def test_backend_error_message(self):
        v = verification(Mock(side_effect=BackendError("bad", 400, {"message": "Order not found"})))

        v.verify_once()

        assert v.message == "Order not found"


class TestRetries:
    """Tests for bounded retries with backoff."""

    def test_delays_follow_retry_count(self):
        v = verification(Mock(return_value={"success": False}))
        v.verify_once()

        delays = []
        while v.can_retry():
            delays.append(v.next_delay())
            v.retry()

        assert delays == [2.0, 4.0, 6.0]
        assert v.retries == 3
        assert v.next_delay() is None

    def test_retry_is_noop_when_exhausted(self):
        verify = Mock(return_value={"success": False})
        v = verification(verify, retries=3)
        v.verify_once()

        v.retry()

        assert verify.call_count == 1

    def test_no_retry_after_success(self):
        v = verification(Mock(return_value={"success": True}))
        v.verify_once()

        assert not v.can_retry()

    def test_run_stops_after_three_retries(self):
        verify = Mock(return_value={"success": False})
        event = ImmediateEvent()
        v = verification(verify)

        assert v.run(cancel_event=event) == VerificationStatus.FAILED
        assert verify.call_count == 4
        assert event.waits == [2.0, 4.0, 6.0]
        assert v.retries == 3

    def test_run_stops_at_success(self):
        verify = Mock(side_effect=[{"success": False}, {"success": True}])
        on_retry = Mock()
        v = verification(verify)

        assert v.run(cancel_event=ImmediateEvent(), on_retry=on_retry) == VerificationStatus.SUCCESS
        assert verify.call_count == 2
        on_retry.assert_called_once_with(1, 2.0)

    def test_verify_defaults_to_gold_plan_endpoint(self):
        from jewelstore.api import gold_plans

        assert PaymentVerification("o", "t", policy=RetryPolicy()).verify is gold_plans.verify_payment
