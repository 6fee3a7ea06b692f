"""Back-office views.

Every page except the login requires the admin session and calls the backend
with the admin bearer token.
"""

import logging

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect
from django.urls import reverse, reverse_lazy
from django.views import View
from django.views.generic import FormView, TemplateView

from jewelstore.api import admin_catalog, admin_content, admin_reports, admin_sales, admin_users
from jewelstore.api import auth as auth_api
from jewelstore.api import schemes as schemes_api
from jewelstore.api import wallet as wallet_api
from jewelstore.api.client import BackendError, BackendUnavailable
from jewelstore.api.schemes import Scheme
from jewelstore.core.feedback import call_backend, report_result, user_message
from jewelstore.core.mixins import AdminPortalMixin, FormFeedbackMixin, safe_next_url

from . import forms

logger = logging.getLogger(__name__)


# =============================================================================
# Authentication
# =============================================================================


class LoginView(FormFeedbackMixin, FormView):
    template_name = "backoffice/login.html"
    form_class = forms.AdminLoginForm

    def dispatch(self, request, *args, **kwargs):
        if request.admin_auth.is_authenticated:
            return redirect("backoffice:dashboard")
        return super().dispatch(request, *args, **kwargs)

    def form_valid(self, form):
        username = form.cleaned_data["username"]
        try:
            login = auth_api.admin_login(username, form.cleaned_data["password"])
        except BackendUnavailable as e:
            messages.error(self.request, user_message(e, "Login failed"))
            return self.render_to_response(self.get_context_data(form=form))
        except BackendError as e:
            logger.warning("Admin login failed for %s: %s", username, e)
            messages.error(self.request, e.message)
            return self.render_to_response(self.get_context_data(form=form))

        self.request.admin_auth.set(login.token, name=login.name, email=login.email)
        logger.info("Admin signed in: %s", login.email or username)
        messages.success(self.request, login.message or "Login successful")
        return redirect(safe_next_url(self.request, reverse("backoffice:dashboard")))


class LogoutView(View):
    def post(self, request):
        request.admin_auth.logout()
        messages.success(request, "You have been logged out.")
        return redirect("backoffice:login")


class AdminProfileView(AdminPortalMixin, TemplateView):
    template_name = "backoffice/profile.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["profile"] = call_backend(
            self.request, auth_api.admin_profile, self.token,
            error_message="Failed to load profile", fallback={},
        )
        return context


# =============================================================================
# Dashboard and reports
# =============================================================================


class DashboardView(AdminPortalMixin, TemplateView):
    template_name = "backoffice/dashboard.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["analytics"] = call_backend(
            self.request, admin_reports.analytics, self.token,
            error_message="Failed to load analytics", fallback={},
        )
        return context


class ReportsView(AdminPortalMixin, TemplateView):
    """Customer report with optional date and search filters."""

    template_name = "backoffice/reports.html"
    filter_names = ("from_date", "to_date", "search")

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        filters = {name: self.request.GET.get(name, "") for name in self.filter_names}
        context["filters"] = filters
        context["customers"] = call_backend(
            self.request, admin_reports.customer_report, self.token,
            error_message="Failed to load report", fallback=[], **filters,
        )
        return context


class RatesView(AdminPortalMixin, TemplateView):
    template_name = "backoffice/rates.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        rates = call_backend(
            self.request, admin_reports.gold_price, self.token,
            error_message="Failed to load rates", fallback={"items": [], "summary": {}},
        )
        context.update(rates)
        return context


# =============================================================================
# Generic resource management
# =============================================================================


class ResourceMixin(AdminPortalMixin):
    """Shared configuration of a backend resource managed from the back-office.

    Subclasses name the resource and point at its backend wrappers; the list,
    form and delete views below do the rest.
    """

    resource_name = None
    resource_singular = None
    resource_label = None
    list_columns = ("name", "status")
    form_class = None
    list_func = None
    get_func = None
    create_func = None
    update_func = None
    delete_func = None
    upload_field = None
    multiple_uploads = False

    def list_url(self):
        return reverse(f"backoffice:{self.resource_name}")

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["resource_name"] = self.resource_name
        context["resource_label"] = self.resource_label
        context["create_url_name"] = f"backoffice:{self.resource_singular}-create"
        context["update_url_name"] = f"backoffice:{self.resource_singular}-update"
        context["delete_url_name"] = f"backoffice:{self.resource_singular}-delete"
        return context


class ResourceListView(ResourceMixin, TemplateView):
    template_name = "backoffice/resource_list.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        objects = call_backend(
            self.request, type(self).list_func, self.token,
            error_message=f"Failed to load {self.resource_label.lower()}", fallback=[],
        )
        context["columns"] = [column.replace("_", " ").capitalize() for column in self.list_columns]
        context["rows"] = [
            (obj.get("id"), [obj.get(column) for column in self.list_columns])
            for obj in objects
        ]
        return context


class ResourceFormView(ResourceMixin, FormFeedbackMixin, FormView):
    """Create a resource, or update it when the URL carries its ``pk``."""

    template_name = "backoffice/resource_form.html"

    @property
    def object_id(self):
        return self.kwargs.get("pk")

    def get_initial(self):
        if self.object_id is None or self.get_func is None or self.request.method != "GET":
            return super().get_initial()
        record = call_backend(
            self.request, type(self).get_func, self.token, self.object_id,
            error_message=f"Failed to load {self.resource_label.lower()}",
        )
        if record is None:
            raise Http404(f"{self.resource_label} not found")
        return self.initial_from(record)

    def initial_from(self, record):
        return {name: record.get(name) for name in self.get_form_class().base_fields if name in record}

    def get_uploads(self):
        if not self.upload_field:
            return None
        if self.multiple_uploads:
            return self.request.FILES.getlist(self.upload_field)
        return self.request.FILES.get(self.upload_field)

    def get_payload(self, form):
        return form.to_fields()

    def save(self, form):
        args = [self.token]
        if self.object_id is not None:
            func = type(self).update_func
            args.append(self.object_id)
        else:
            func = type(self).create_func
        args.append(self.get_payload(form))
        if self.upload_field:
            args.append(self.get_uploads())
        return call_backend(
            self.request, func, *args,
            error_message=f"Failed to save {self.resource_label.lower()}",
        )

    def form_valid(self, form):
        payload = self.save(form)
        verb = "updated" if self.object_id is not None else "created"
        if report_result(self.request, payload, f"{self.resource_label} {verb}", f"Failed to save {self.resource_label.lower()}"):
            return redirect(self.list_url())
        return self.render_to_response(self.get_context_data(form=form))

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["object_id"] = self.object_id
        context["multipart"] = bool(self.upload_field)
        context["upload_field"] = self.upload_field
        context["multiple_uploads"] = self.multiple_uploads
        return context


class ResourceDeleteView(ResourceMixin, View):
    def post(self, request, pk):
        payload = call_backend(
            request, type(self).delete_func, self.token, pk,
            error_message=f"Failed to delete {self.resource_label.lower()}",
        )
        report_result(request, payload, f"{self.resource_label} deleted", f"Failed to delete {self.resource_label.lower()}")
        return redirect(self.list_url())


def resource_views(config):
    """Build the list, form and delete views for a resource config class."""
    return (
        type(f"{config.__name__}ListView", (config, ResourceListView), {}),
        type(f"{config.__name__}FormView", (config, ResourceFormView), {}),
        type(f"{config.__name__}DeleteView", (config, ResourceDeleteView), {}),
    )


class Products(ResourceMixin):
    resource_name = "products"
    resource_singular = "product"
    list_columns = ("name", "metal_type", "purity", "price", "stock", "status")
    resource_label = "Product"
    form_class = forms.ProductForm
    list_func = staticmethod(admin_catalog.list_products)
    get_func = staticmethod(admin_catalog.get_product)
    create_func = staticmethod(admin_catalog.create_product)
    update_func = staticmethod(admin_catalog.update_product)
    delete_func = staticmethod(admin_catalog.delete_product)
    upload_field = "images"
    multiple_uploads = True

    def initial_from(self, record):
        initial = super().initial_from(record)
        sizes = record.get("sizes") or []
        initial["sizes"] = "\n".join(
            f"{entry.get('size')}:{entry.get('quantity', 0)}" for entry in sizes if isinstance(entry, dict)
        )
        return initial


class Categories(ResourceMixin):
    resource_name = "categories"
    resource_singular = "category"
    resource_label = "Category"
    form_class = forms.CategoryForm
    list_func = staticmethod(admin_catalog.list_categories)
    get_func = staticmethod(admin_catalog.get_category)
    create_func = staticmethod(admin_catalog.create_category)
    update_func = staticmethod(admin_catalog.update_category)
    delete_func = staticmethod(admin_catalog.delete_category)
    upload_field = "image"


class Collections(ResourceMixin):
    resource_name = "collections"
    resource_singular = "collection"
    resource_label = "Collection"
    form_class = forms.CollectionForm
    list_func = staticmethod(admin_catalog.list_collections)
    get_func = staticmethod(admin_catalog.get_collection)
    create_func = staticmethod(admin_catalog.create_collection)
    update_func = staticmethod(admin_catalog.update_collection)
    delete_func = staticmethod(admin_catalog.delete_collection)
    upload_field = "image"


class Banners(ResourceMixin):
    resource_name = "banners"
    resource_singular = "banner"
    list_columns = ("title", "position", "status")
    resource_label = "Banner"
    form_class = forms.BannerForm
    list_func = staticmethod(admin_catalog.list_banners)
    create_func = staticmethod(admin_catalog.create_banner)
    update_func = staticmethod(admin_catalog.update_banner)
    delete_func = staticmethod(admin_catalog.delete_banner)
    upload_field = "image"


class Coupons(ResourceMixin):
    resource_name = "coupons"
    resource_singular = "coupon"
    list_columns = ("coupon_code", "discount_type", "value", "min_order_amount", "status")
    resource_label = "Coupon"
    form_class = forms.CouponForm
    list_func = staticmethod(admin_sales.list_coupons)
    get_func = staticmethod(admin_sales.get_coupon)
    create_func = staticmethod(admin_sales.create_coupon)
    update_func = staticmethod(admin_sales.update_coupon)
    delete_func = staticmethod(admin_sales.delete_coupon)

    def get_payload(self, form):
        return form.to_payload()


ProductListView, ProductFormView, ProductDeleteView = resource_views(Products)
CategoryListView, CategoryFormView, CategoryDeleteView = resource_views(Categories)
CollectionListView, CollectionFormView, CollectionDeleteView = resource_views(Collections)
BannerListView, BannerFormView, BannerDeleteView = resource_views(Banners)
CouponListView, CouponFormView, CouponDeleteView = resource_views(Coupons)


# =============================================================================
# Orders
# =============================================================================


class OrderListView(AdminPortalMixin, TemplateView):
    """Orders with status counts, optionally filtered to one status."""

    template_name = "backoffice/orders.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        result = call_backend(
            self.request, admin_sales.list_orders, self.token,
            error_message="Failed to load orders", fallback={"orders": [], "status_counts": {}},
        )
        status = self.request.GET.get("status", "")
        orders = result.get("orders") or []
        if status:
            orders = [order for order in orders if order.get("status") == status]
        context.update({
            "orders": orders,
            "status_counts": result.get("status_counts") or {},
            "statuses": admin_sales.ORDER_STATUSES,
            "current_status": status,
        })
        return context


class OrderDetailView(AdminPortalMixin, TemplateView):
    template_name = "backoffice/order_detail.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        order = call_backend(
            self.request, admin_sales.get_order, self.token, kwargs["pk"],
            error_message="Failed to load order",
        )
        if not order:
            raise Http404("Order not found")
        context["order"] = order
        context["status_form"] = forms.OrderStatusForm(initial={"status": order.get("status")})
        return context


class OrderStatusView(AdminPortalMixin, View):
    def post(self, request, pk):
        form = forms.OrderStatusForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Choose a valid status")
            return redirect("backoffice:order-detail", pk=pk)

        status = form.cleaned_data["status"]
        payload = call_backend(
            request, admin_sales.change_order_status, self.token, pk, status,
            error_message="Failed to update order status",
        )
        report_result(request, payload, f"Order marked {status}", "Failed to update order status")
        return redirect("backoffice:order-detail", pk=pk)


class CustomOrderListView(AdminPortalMixin, TemplateView):
    template_name = "backoffice/custom_orders.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        status = self.request.GET.get("status") or None
        search = self.request.GET.get("search") or None
        page = self.request.GET.get("page")
        page = int(page) if page and page.isdigit() else None
        context.update({
            "custom_orders": call_backend(
                self.request, admin_sales.list_custom_orders, self.token,
                status=status, search=search, page=page,
                error_message="Failed to load custom orders", fallback=[],
            ),
            "statuses": admin_sales.CUSTOM_ORDER_STATUSES,
            "current_status": status or "",
            "search": search or "",
            "page": page or 1,
        })
        return context


class CustomOrderDetailView(AdminPortalMixin, FormFeedbackMixin, FormView):
    template_name = "backoffice/custom_order_detail.html"
    form_class = forms.CustomOrderUpdateForm

    def get_order(self):
        if not hasattr(self, "_order"):
            self._order = call_backend(
                self.request, admin_sales.get_custom_order, self.token, self.kwargs["pk"],
                error_message="Failed to load custom order",
            )
            if not self._order and self.request.method == "GET":
                raise Http404("Custom order not found")
        return self._order or {"id": self.kwargs["pk"]}

    def get_initial(self):
        if self.request.method != "GET":
            return super().get_initial()
        order = self.get_order()
        return {
            "status": order.get("status"),
            "quoted_price": order.get("quoted_price"),
            "admin_note": order.get("admin_note"),
        }

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["order"] = self.get_order()
        return context

    def form_valid(self, form):
        payload = call_backend(
            self.request, admin_sales.update_custom_order, self.token, self.kwargs["pk"], form.to_payload(),
            error_message="Failed to update custom order",
        )
        if report_result(self.request, payload, "Custom order updated", "Failed to update custom order"):
            return redirect("backoffice:custom-order-detail", pk=self.kwargs["pk"])
        return self.render_to_response(self.get_context_data(form=form))


# =============================================================================
# Schemes
# =============================================================================


class SchemeListView(AdminPortalMixin, TemplateView):
    template_name = "backoffice/schemes.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["schemes"] = call_backend(
            self.request, schemes_api.list_schemes, self.token,
            error_message="Failed to load schemes", fallback=[],
        )
        return context


class SchemeEditView(AdminPortalMixin, FormFeedbackMixin, FormView):
    template_name = "backoffice/scheme_form.html"
    form_class = forms.SchemeForm
    success_url = reverse_lazy("backoffice:schemes")

    def get_scheme(self):
        if not hasattr(self, "_scheme"):
            schemes = call_backend(
                self.request, schemes_api.list_schemes, self.token,
                error_message="Failed to load schemes", fallback=[],
            )
            self._scheme = next((s for s in schemes if s.id == self.kwargs["pk"]), None)
            if self._scheme is None:
                raise Http404("Scheme not found")
        return self._scheme

    def get_initial(self):
        if self.request.method != "GET":
            return super().get_initial()
        scheme = self.get_scheme()
        return {
            "name": scheme.name,
            "timeline": scheme.timeline,
            "min_amount": scheme.min_amount,
            "points": "\n".join(scheme.points),
            "status": scheme.status,
            "is_popular": bool(scheme.is_popular),
        }

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        if "scheme" not in context and self.request.method == "GET":
            context["scheme"] = self.get_scheme()
        return context

    def form_valid(self, form):
        data = form.cleaned_data
        scheme = Scheme(
            id=self.kwargs["pk"],
            name=data["name"],
            timeline=data["timeline"],
            min_amount=data["min_amount"],
            status=data["status"],
            is_popular=int(data["is_popular"]),
            points=data["points"],
        )

        try:
            message = schemes_api.update_scheme(
                self.token, scheme.id, scheme, attachments=self.request.FILES.getlist("attachments"),
            )
        except (BackendError, BackendUnavailable) as e:
            messages.error(self.request, user_message(e, "Failed to update scheme"))
            return self.render_to_response(self.get_context_data(form=form, scheme=scheme))

        messages.success(self.request, message or "Scheme updated")
        return super().form_valid(form)


# =============================================================================
# Customers
# =============================================================================


class UserListView(AdminPortalMixin, TemplateView):
    template_name = "backoffice/users.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        users = call_backend(
            self.request, admin_users.list_users, self.token,
            error_message="Failed to load users", fallback=[],
        )
        search = self.request.GET.get("search", "").strip().lower()
        if search:
            users = [
                user for user in users
                if search in str(user.get("name", "")).lower()
                or search in str(user.get("email", "")).lower()
                or search in str(user.get("mobile", "")).lower()
            ]
        context["users"] = users
        context["search"] = search
        return context


class UserStatusView(AdminPortalMixin, View):
    """Activate or block a customer account."""

    def post(self, request, pk):
        status = 1 if request.POST.get("status") == "1" else 0
        payload = call_backend(
            request, admin_users.update_user_status, self.token, pk, status,
            error_message="Failed to update user status",
        )
        report_result(
            request, payload,
            "User activated" if status else "User blocked",
            "Failed to update user status",
        )
        return redirect(safe_next_url(request, reverse("backoffice:users")))


class UserDetailView(AdminPortalMixin, TemplateView):
    """One customer, shown one tab at a time."""

    template_name = "backoffice/user_detail.html"
    tabs = {
        "orders": ("Orders", admin_users.user_with_orders),
        "custom-orders": ("Custom orders", admin_users.user_with_custom_orders),
        "schemes": ("Schemes", admin_users.user_with_schemes),
        "gold-plans": ("Gold plans", admin_users.user_custom_plans),
        "wallet": ("Wallet", wallet_api.admin_user_wallet),
        "vault": ("Gold vault", wallet_api.gold_vault),
    }

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        user_id = kwargs["pk"]
        tab = self.request.GET.get("tab", "orders")
        if tab not in self.tabs:
            tab = "orders"
        label, loader = self.tabs[tab]
        context.update({
            "user_id": user_id,
            "tab": tab,
            "tab_label": label,
            "tabs": [(key, value[0]) for key, value in self.tabs.items()],
            "data": call_backend(
                self.request, loader, self.token, user_id,
                error_message=f"Failed to load {label.lower()}", fallback={},
            ),
        })

        scheme_id = self.request.GET.get("scheme")
        if tab == "schemes" and scheme_id:
            context["payments"] = call_backend(
                self.request, admin_users.user_scheme_payments, self.token, user_id, scheme_id,
                error_message="Failed to load payments", fallback={},
            )
        plan_id = self.request.GET.get("plan")
        if tab == "gold-plans" and plan_id:
            context["payments"] = call_backend(
                self.request, admin_users.user_gold_plan_payments, self.token, user_id, plan_id,
                error_message="Failed to load payments", fallback={},
            )
        if tab == "wallet":
            context["debit_form"] = forms.WalletDebitForm()
        if tab == "vault":
            context["debit_form"] = forms.GoldVaultDebitForm()
        return context


class WalletDebitView(AdminPortalMixin, View):
    def post(self, request, pk):
        form = forms.WalletDebitForm(request.POST)
        if form.is_valid():
            payload = call_backend(
                request, wallet_api.admin_debit_wallet, self.token, pk,
                form.cleaned_data["amount"], form.cleaned_data["description"],
                attachments=request.FILES.getlist("attachments"),
                error_message="Failed to debit wallet",
            )
            report_result(request, payload, "Wallet debited", "Failed to debit wallet")
        else:
            messages.error(request, "Enter a valid amount")
        return redirect(f"{reverse('backoffice:user-detail', args=[pk])}?tab=wallet")


class GoldVaultDebitView(AdminPortalMixin, View):
    def post(self, request, pk):
        form = forms.GoldVaultDebitForm(request.POST)
        if form.is_valid():
            payload = call_backend(
                request, wallet_api.debit_gold_vault, self.token, pk,
                form.cleaned_data["gold_grams"], form.cleaned_data["description"],
                error_message="Failed to debit gold vault",
            )
            report_result(request, payload, "Gold vault debited", "Failed to debit gold vault")
        else:
            messages.error(request, "Enter a valid weight")
        return redirect(f"{reverse('backoffice:user-detail', args=[pk])}?tab=vault")


# =============================================================================
# Notifications and enquiries
# =============================================================================


class NotificationListView(AdminPortalMixin, FormFeedbackMixin, FormView):
    template_name = "backoffice/notifications.html"
    form_class = forms.NotificationForm
    success_url = reverse_lazy("backoffice:notifications")

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["notifications"] = call_backend(
            self.request, admin_content.list_notifications, self.token,
            error_message="Failed to load notifications", fallback=[],
        )
        return context

    def form_valid(self, form):
        data = form.cleaned_data
        payload = call_backend(
            self.request, admin_content.send_notification, self.token,
            data["title"], data["body"], user_ids=data["user_ids"] or None,
            error_message="Failed to send notification",
        )
        if report_result(self.request, payload, "Notification sent", "Failed to send notification"):
            return super().form_valid(form)
        return self.render_to_response(self.get_context_data(form=form))


class NotificationDeleteView(AdminPortalMixin, View):
    def post(self, request, pk):
        payload = call_backend(
            request, admin_content.delete_notification, self.token, pk,
            error_message="Failed to delete notification",
        )
        report_result(request, payload, "Notification deleted", "Failed to delete notification")
        return redirect("backoffice:notifications")


class EnquiryListView(AdminPortalMixin, TemplateView):
    template_name = "backoffice/enquiries.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        kind = self.request.GET.get("kind", "contact")
        if kind not in admin_content.ENQUIRY_KINDS:
            kind = "contact"
        context.update({
            "kind": kind,
            "kinds": list(admin_content.ENQUIRY_KINDS),
            "enquiries": call_backend(
                self.request, admin_content.list_enquiries, self.token, kind,
                error_message="Failed to load enquiries", fallback=[],
            ),
        })
        return context


# =============================================================================
# Business settings
# =============================================================================


class SettingsView(AdminPortalMixin, TemplateView):
    """Business settings, one form per section."""

    template_name = "backoffice/settings.html"

    def get_settings(self):
        return call_backend(
            self.request, admin_reports.get_settings, self.token,
            error_message="Failed to load settings", fallback={},
        )

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        current = kwargs.get("current")
        if current is None:
            current = self.get_settings()
        context["section_forms"] = [
            forms.SettingsSectionForm(prefix=section, values=current.get(section) or {})
            for section in admin_reports.SETTINGS_SECTIONS
            if isinstance(current.get(section), dict)
        ]
        return context

    def post(self, request, *args, **kwargs):
        section = request.POST.get("section_name")
        if section not in admin_reports.SETTINGS_SECTIONS:
            messages.error(request, "Unknown settings section")
            return redirect("backoffice:settings")

        current = self.get_settings()
        form = forms.SettingsSectionForm(
            request.POST, prefix=section, values=current.get(section) or {},
        )
        if not form.is_valid():
            messages.error(request, "Please check the highlighted settings")
            return redirect("backoffice:settings")

        payload = call_backend(
            request, admin_reports.update_settings, self.token, section, form.values(),
            error_message="Failed to save settings",
        )
        report_result(request, payload, "Settings saved", "Failed to save settings")
        return redirect("backoffice:settings")
