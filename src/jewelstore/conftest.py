"""Shared pytest fixtures for jewelstore tests."""

from unittest.mock import patch

import httpx
import pytest
from django.conf import settings
from django.test import Client

from jewelstore.core.sessions import STORAGE_KEYS, Role


def offline_handler(request):
    raise httpx.ConnectError("backend disabled in tests", request=request)


def backend_client(handler):
    """Build the ``_get_client`` replacement that routes requests to ``handler``."""

    def factory(token=None):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return httpx.Client(
            base_url=settings.BACKEND_API_URL,
            headers=headers,
            transport=httpx.MockTransport(handler),
        )

    return factory


@pytest.fixture(autouse=True)
def no_backend():
    """Fail every backend request that a test did not mock explicitly."""
    with patch("jewelstore.api.client._get_client", side_effect=backend_client(offline_handler)):
        yield


@pytest.fixture
def backend():
    """Route backend requests to a handler taking an ``httpx.Request``.

    Usage::

        def test_something(backend):
            backend(lambda request: httpx.Response(200, json={"success": True}))
    """
    patchers = []

    def install(handler):
        patcher = patch("jewelstore.api.client._get_client", side_effect=backend_client(handler))
        patcher.start()
        patchers.append(patcher)

    yield install
    for patcher in reversed(patchers):
        patcher.stop()


def sign_in(client, role, token, name=None, email=None):
    """Store an auth state for ``role`` in the test client's session cookie."""
    session = client.session
    session[STORAGE_KEYS[role]] = {"token": token, "name": name, "email": email}
    session.save()
    client.cookies[settings.SESSION_COOKIE_NAME] = session.session_key
    return client


@pytest.fixture
def client():
    """Return a Django test client."""
    return Client()


@pytest.fixture
def customer_client(client):
    """A test client signed in as a customer."""
    return sign_in(client, Role.CUSTOMER, "customer-token", name="Asha", email="asha@example.com")


@pytest.fixture
def admin_client(client):
    """A test client signed in to the back-office."""
    return sign_in(client, Role.ADMIN, "admin-token", name="Admin", email="admin@example.com")
