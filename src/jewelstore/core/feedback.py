"""Turn backend results into flash messages.

Views call the backend through ``call_backend`` so that network failures,
error answers and missing records are reported to the user in one place and
the page degrades to a fallback value instead of failing.
"""

import logging

from django.contrib import messages

from jewelstore.api.client import (
    BackendError,
    BackendNotFound,
    BackendUnavailable,
    is_success,
    message_of,
)

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "We could not reach the store server. Please try again."
NOT_FOUND_MESSAGE = "The requested item could not be found."
SESSION_EXPIRED_MESSAGE = "Your session has expired. Please sign in again."
VALIDATION_MESSAGE = "Please fill all required fields."


def user_message(error: Exception, default: str) -> str:
    """Map a backend exception to the text shown to the user."""
    if isinstance(error, BackendUnavailable):
        return NETWORK_ERROR_MESSAGE
    if isinstance(error, BackendNotFound):
        return message_of(error.payload) or NOT_FOUND_MESSAGE
    if isinstance(error, BackendError):
        if error.status_code == 401:
            return SESSION_EXPIRED_MESSAGE
        return message_of(error.payload) or default
    return default


def call_backend(request, func, *args, error_message="Something went wrong", fallback=None, **kwargs):
    """Call a backend wrapper, reporting failures as an error message.

    Returns:
        The wrapper's return value, or ``fallback`` when the call failed.
    """
    try:
        return func(*args, **kwargs)
    except (BackendError, BackendUnavailable) as e:
        logger.warning("%s failed: %s", getattr(func, "__name__", func), e)
        messages.error(request, user_message(e, error_message))
        return fallback


def report_result(request, payload, success_message, error_message) -> bool:
    """Flash the outcome of a mutation whose envelope carries a success flag."""
    if payload is None:
        return False
    if is_success(payload):
        messages.success(request, success_message)
        return True
    messages.error(request, message_of(payload, error_message))
    return False


def report_form_errors(request, form):
    """Flash form validation errors.

    Missing required fields collapse into a single "fill all required fields"
    message; other errors are flashed one per field.
    """
    missing_required = False
    for field, errors in form.errors.items():
        label = form[field].label if field in form.fields else None
        for error in errors.as_data():
            if error.code == "required":
                missing_required = True
                continue
            for text in error.messages:
                messages.error(request, f"{label}: {text}" if label else text)
    if missing_required:
        messages.error(request, VALIDATION_MESSAGE)
