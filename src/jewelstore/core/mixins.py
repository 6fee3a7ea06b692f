"""
View mixins for portal access control.

Provides three levels of access:
- PublicViewMixin: No authentication required
- CustomerPortalMixin: Signed-in customers (customer bearer token)
- AdminPortalMixin: Signed-in back-office staff (admin bearer token)
"""
from urllib.parse import urlencode

from django.shortcuts import redirect
from django.utils.http import url_has_allowed_host_and_scheme

from . import conf
from .feedback import report_form_errors
from .sessions import Role


class PublicViewMixin:
    """
    No authentication required.

    Use for catalog pages, schemes, sign-in and sign-up.
    """
    portal_context = "public"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["portal_context"] = self.portal_context
        return context


class RoleRequiredMixin:
    """Require the auth session of ``role`` to hold a token."""

    role = None
    portal_context = None
    redirect_field_name = "next"

    def get_auth(self):
        if self.role == Role.ADMIN:
            return self.request.admin_auth
        return self.request.customer_auth

    @property
    def token(self):
        return self.get_auth().token

    def get_login_url(self):
        return conf.get_login_url(self.role)

    def handle_no_permission(self):
        query = urlencode({self.redirect_field_name: self.request.get_full_path()})
        return redirect(f"{self.get_login_url()}?{query}")

    def dispatch(self, request, *args, **kwargs):
        if not self.get_auth().is_authenticated:
            return self.handle_no_permission()
        return super().dispatch(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["portal_context"] = self.portal_context
        return context


class CustomerPortalMixin(RoleRequiredMixin):
    """
    Signed-in customer access.

    Use for cart, checkout, orders, wishlist, plans and wallet pages.
    """
    role = Role.CUSTOMER
    portal_context = "account"


class AdminPortalMixin(RoleRequiredMixin):
    """
    Back-office access.

    Use for every page under the back-office prefix.
    """
    role = Role.ADMIN
    portal_context = "admin"


class FormFeedbackMixin:
    """Flash validation errors when a ``FormView`` rejects its form."""

    def form_invalid(self, form):
        report_form_errors(self.request, form)
        return super().form_invalid(form)


def safe_next_url(request, default):
    """The ``next`` parameter when it points back at this site, else ``default``."""
    next_url = request.POST.get("next") or request.GET.get("next")
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return next_url
    return default
