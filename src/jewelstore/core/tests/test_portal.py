"""Tests for portal navigation, access mixins and template helpers."""

from decimal import Decimal

import pytest
from django.test import RequestFactory
from django.template import Context, Template

from jewelstore.core import context_processors
from jewelstore.core.formatting import format_currency, to_decimal
from jewelstore.core.mixins import safe_next_url
from jewelstore.core.sessions import Role, SessionContext


def make_request(path, customer_token=None):
    request = RequestFactory().get(path)
    session = {}
    request.customer_auth = SessionContext(Role.CUSTOMER, session)
    request.admin_auth = SessionContext(Role.ADMIN, session)
    if customer_token:
        request.customer_auth.set(customer_token)
    return request


class TestPortalContext:
    """Tests for the portal_context processor."""

    @pytest.mark.parametrize("path,expected", [
        ("/", "public"),
        ("/cart/", "public"),
        ("/account/orders/", "account"),
        ("/backoffice/orders/", "admin"),
    ])
    def test_context_from_path(self, path, expected):
        assert context_processors.get_portal_context(make_request(path)) == expected

    def test_admin_nav_grouped_by_section(self):
        portal = context_processors.portal_context(make_request("/backoffice/"))["portal_ui"]

        assert portal["is_admin"]
        assert "Catalog" in portal["nav_sections"]
        labels = [item["label"] for item in portal["nav_sections"]["Catalog"]]
        assert labels == ["Products", "Categories", "Collections", "Banners"]

    def test_customer_only_items_hidden_from_guests(self):
        portal = context_processors.portal_context(make_request("/"))["portal_ui"]

        assert "Cart" not in [item["label"] for item in portal["navigation"]]

    def test_customer_only_items_shown_when_signed_in(self):
        portal = context_processors.portal_context(make_request("/", customer_token="tok"))["portal_ui"]

        assert "Cart" in [item["label"] for item in portal["navigation"]]

    def test_named_url_resolved(self):
        assert context_processors.resolve_nav_url({"url": "store:cart"}) == "/cart/"


class TestAccessMixins:
    def test_customer_page_redirects_guest_to_signin(self, client):
        response = client.get("/account/orders/")

        assert response.status_code == 302
        assert response.url == "/signin/?next=%2Faccount%2Forders%2F"

    def test_backoffice_redirects_guest_to_admin_login(self, client):
        response = client.get("/backoffice/orders/")

        assert response.status_code == 302
        assert response.url.startswith("/backoffice/login/?next=")

    def test_customer_token_does_not_open_backoffice(self, customer_client):
        response = customer_client.get("/backoffice/")

        assert response.status_code == 302
        assert response.url.startswith("/backoffice/login/")


class TestSafeNextUrl:
    def test_local_path_allowed(self):
        request = RequestFactory().get("/signin/", {"next": "/cart/"})

        assert safe_next_url(request, "/") == "/cart/"

    def test_external_url_rejected(self):
        request = RequestFactory().get("/signin/", {"next": "https://evil.example.com/"})

        assert safe_next_url(request, "/") == "/"


class TestFormatting:
    def test_format_currency(self):
        assert format_currency(1000) == "₹1000.00"
        assert format_currency("12.345") == "₹12.35"

    def test_to_decimal_tolerates_junk(self):
        assert to_decimal("abc") == Decimal("0")
        assert to_decimal(None, Decimal("1")) == Decimal("1")

    def test_template_filters(self):
        rendered = Template(
            "{% load portal_tags %}{{ amount|currency }} {{ status|humanize_status }} {{ empty|humanize_status }}"
        ).render(Context({"amount": "5000", "status": "in_progress", "empty": ""}))

        assert rendered == "₹5000.00 In progress Pending"

    def test_coalesce_skips_missing_keys(self):
        template = Template(
            "{% load portal_tags %}{% coalesce order.final_amount order.total_amount as amount %}{{ amount|currency }}"
        )

        assert template.render(Context({"order": {"total_amount": "750"}})) == "₹750.00"
        assert template.render(Context({"order": {"final_amount": "600", "total_amount": "750"}})) == "₹600.00"
        assert template.render(Context({})) == "₹0.00"

    def test_coalesce_keeps_lists(self):
        rendered = Template(
            "{% load portal_tags %}{% coalesce data.plans data.custom_plans as plans %}{% for p in plans %}{{ p }};{% endfor %}"
        ).render(Context({"data": {"custom_plans": [1, 2]}}))

        assert rendered == "1;2;"


class TestHealthCheck:
    def test_unhealthy_when_backend_unreachable(self, client):
        response = client.get("/health/")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
