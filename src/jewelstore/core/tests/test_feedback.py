"""Tests for backend error reporting."""

from unittest.mock import Mock

from django import forms
from django.contrib.messages import get_messages
from django.contrib.messages.storage.fallback import FallbackStorage
from django.test import RequestFactory

from jewelstore.api.client import BackendError, BackendNotFound, BackendUnavailable
from jewelstore.core import feedback


def make_request():
    request = RequestFactory().get("/")
    request.session = {}
    request._messages = FallbackStorage(request)
    return request


def texts(request):
    return [str(message) for message in get_messages(request)]


class TestUserMessage:
    """Tests for mapping backend errors to user-facing text."""

    def test_network_error(self):
        assert feedback.user_message(BackendUnavailable("refused"), "x") == feedback.NETWORK_ERROR_MESSAGE

    def test_not_found_prefers_backend_message(self):
        error = BackendNotFound("Not found", 404, {"message": "Product not found"})

        assert feedback.user_message(error, "x") == "Product not found"

    def test_not_found_without_message(self):
        assert feedback.user_message(BackendNotFound("Not found", 404), "x") == feedback.NOT_FOUND_MESSAGE

    def test_unauthorized(self):
        error = BackendError("Unauthenticated", 401, {"message": "Unauthenticated."})

        assert feedback.user_message(error, "x") == feedback.SESSION_EXPIRED_MESSAGE

    def test_server_message(self):
        error = BackendError("bad", 422, {"message": "Coupon expired"})

        assert feedback.user_message(error, "x") == "Coupon expired"

    def test_default(self):
        assert feedback.user_message(BackendError("bad", 500), "Failed to load cart") == "Failed to load cart"


class TestCallBackend:
    def test_returns_result(self):
        request = make_request()

        assert feedback.call_backend(request, Mock(return_value={"ok": 1})) == {"ok": 1}
        assert texts(request) == []

    def test_failure_returns_fallback_and_flashes(self):
        request = make_request()
        func = Mock(side_effect=BackendUnavailable("down"), __name__="get_cart")

        result = feedback.call_backend(request, func, "tok", error_message="Failed", fallback=[])

        assert result == []
        assert texts(request) == [feedback.NETWORK_ERROR_MESSAGE]
        func.assert_called_once_with("tok")


class TestReportResult:
    def test_success(self):
        request = make_request()

        assert feedback.report_result(request, {"success": True}, "Saved", "Failed")
        assert texts(request) == ["Saved"]

    def test_failure_uses_envelope_message(self):
        request = make_request()

        assert not feedback.report_result(request, {"success": False, "message": "Out of stock"}, "Saved", "Failed")
        assert texts(request) == ["Out of stock"]

    def test_none_payload_is_silent(self):
        request = make_request()

        assert not feedback.report_result(request, None, "Saved", "Failed")
        assert texts(request) == []


class SampleForm(forms.Form):
    name = forms.CharField()
    email = forms.EmailField()
    pincode = forms.RegexField(regex=r"^\d{6}$", required=False)


class TestReportFormErrors:
    def test_missing_fields_collapse_into_one_message(self):
        request = make_request()
        form = SampleForm(data={})
        form.is_valid()

        feedback.report_form_errors(request, form)

        assert texts(request) == [feedback.VALIDATION_MESSAGE]

    def test_other_errors_are_labelled(self):
        request = make_request()
        form = SampleForm(data={"name": "Asha", "email": "nope", "pincode": "12"})
        form.is_valid()

        feedback.report_form_errors(request, form)

        messages = texts(request)
        assert any(message.startswith("Email:") for message in messages)
        assert any(message.startswith("Pincode:") for message in messages)
