"""Storefront views: catalog, cart, checkout, orders, wishlist, custom orders, sign-in."""

import logging

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect
from django.urls import reverse, reverse_lazy
from django.views import View
from django.views.generic import FormView, TemplateView

from jewelstore.api import account as account_api
from jewelstore.api import cart as cart_api
from jewelstore.api import catalog as catalog_api
from jewelstore.api import custom_orders as custom_orders_api
from jewelstore.api import orders as orders_api
from jewelstore.api import wishlist as wishlist_api
from jewelstore.api.client import message_of
from jewelstore.core.feedback import call_backend, report_result
from jewelstore.core.formatting import to_decimal
from jewelstore.core.mixins import (
    CustomerPortalMixin,
    FormFeedbackMixin,
    PublicViewMixin,
    safe_next_url,
)

from . import quantity
from .coupons import evaluate_coupons, find_option
from .forms import (
    AddToCartForm,
    CheckoutForm,
    CouponForm,
    CustomOrderForm,
    EnquiryForm,
    RecordIdForm,
    SignInForm,
    SignUpForm,
)
from .summary import summarize_cart

logger = logging.getLogger(__name__)


def posted_id(request, field_name, error_message):
    """The positive integer id posted as ``field_name``, or None after flashing ``error_message``."""
    form = RecordIdForm(request.POST, field_name)
    if form.is_valid():
        return form.value
    messages.error(request, error_message)
    return None


# =============================================================================
# Catalog
# =============================================================================


class CollectionListView(PublicViewMixin, TemplateView):
    """Storefront home: collections and categories."""

    template_name = "store/collections.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["collections"] = call_backend(
            self.request, catalog_api.list_collections,
            error_message="Failed to load collections", fallback=[],
        )
        context["categories"] = call_backend(
            self.request, catalog_api.list_categories,
            error_message="Failed to load categories", fallback=[],
        )
        return context


class ProductListView(PublicViewMixin, TemplateView):
    """Products of one collection or category."""

    template_name = "store/products.html"
    source = "collection"

    def get_products(self, object_id):
        if self.source == "category":
            return catalog_api.category_products(object_id)
        return catalog_api.collection_products(object_id)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        products = call_backend(
            self.request, self.get_products, kwargs["pk"],
            error_message="Failed to load products", fallback=[],
        )
        context["products"] = products
        context["source"] = self.source
        context["add_form"] = AddToCartForm()
        return context


# =============================================================================
# Cart
# =============================================================================


def cart_rows(summary):
    """Cart items with the quantity stepper bounds of each line."""
    rows = []
    for item in summary.items:
        product = item.get("product") or {}
        stock = item.get("stock", product.get("stock"))
        stock = None if stock is None else int(to_decimal(stock))
        current = int(item.get("quantity") or quantity.MIN_QUANTITY)
        unit_price = to_decimal(item.get("unit_price", product.get("price")))
        rows.append({
            "item": item,
            "product": product,
            "quantity": current,
            "stock": stock,
            "unit_price": unit_price,
            "line_total": unit_price * current,
            "can_decrement": quantity.can_decrement(current),
            "can_increment": quantity.can_increment(current, stock),
        })
    return rows


class CartView(CustomerPortalMixin, TemplateView):
    """Cart lines, totals and the public coupons the subtotal qualifies for."""

    template_name = "store/cart.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        payload = call_backend(
            self.request, cart_api.get_cart, self.token,
            error_message="Failed to load cart",
        )
        summary = summarize_cart(payload)
        coupons = []
        if not summary.is_empty:
            coupons = call_backend(
                self.request, catalog_api.list_public_coupons,
                error_message="Failed to load coupons", fallback=[],
            )
        context.update({
            "summary": summary,
            "rows": cart_rows(summary),
            "coupon_options": evaluate_coupons(summary.total_amount, coupons),
            "coupon_form": CouponForm(),
        })
        return context


class CartQuantityView(CustomerPortalMixin, View):
    """Step a cart line up or down, never below 1 or above the stock."""

    def post(self, request):
        item_id = posted_id(request, "item_id", "Missing cart item")
        if item_id is None:
            return redirect("store:cart")

        stock = request.POST.get("stock")
        stock = int(stock) if stock and stock.isdigit() else None
        current = quantity.parse_quantity(request.POST.get("quantity"), stock)

        action = request.POST.get("action")
        if action == "increment":
            new_quantity = quantity.step(current, 1, stock)
        elif action == "decrement":
            new_quantity = quantity.step(current, -1, stock)
        else:
            new_quantity = current

        if action in ("increment", "decrement") and new_quantity == current:
            if action == "increment" and stock is not None:
                messages.info(request, f"Only {stock} in stock")
            return redirect("store:cart")

        payload = call_backend(
            request, cart_api.update_quantity, self.token, item_id, new_quantity,
            error_message="Failed to update quantity",
        )
        report_result(request, payload, "Quantity updated", "Failed to update quantity")
        return redirect("store:cart")


class CartRemoveView(CustomerPortalMixin, View):
    def post(self, request):
        item_id = posted_id(request, "item_id", "Missing cart item")
        if item_id is None:
            return redirect("store:cart")
        payload = call_backend(
            request, cart_api.remove_item, self.token, item_id,
            error_message="Failed to remove item",
        )
        report_result(request, payload, "Item removed from cart", "Failed to remove item")
        return redirect("store:cart")


class AddToCartView(CustomerPortalMixin, View):
    """Add a product, clamping the requested quantity to the stock."""

    def post(self, request):
        form = AddToCartForm(request.POST)
        if not form.is_valid():
            for error in form.non_field_errors() or ["Could not add this product to the cart."]:
                messages.error(request, error)
            return redirect(safe_next_url(request, reverse("store:collections")))

        data = form.cleaned_data
        payload = call_backend(
            request, cart_api.add_to_cart, self.token,
            data["product_id"], data["quantity"], data.get("size") or None,
            error_message="Failed to add to cart",
        )
        report_result(request, payload, "Added to cart", "Failed to add to cart")
        return redirect(safe_next_url(request, reverse("store:cart")))


class ApplyCouponView(CustomerPortalMixin, View):
    """Apply a coupon code, refusing codes the subtotal does not qualify for.

    The backend computes the discount; the cart page re-reads the cart after
    the coupon is applied.
    """

    def post(self, request):
        form = CouponForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Enter a coupon code")
            return redirect("store:cart")
        code = form.cleaned_data["coupon_code"]

        payload = call_backend(
            request, cart_api.get_cart, self.token, error_message="Failed to load cart",
        )
        if payload is None:
            return redirect("store:cart")
        summary = summarize_cart(payload)
        if summary.cart_id is None:
            messages.error(request, "Your cart is empty")
            return redirect("store:cart")

        coupons = call_backend(
            request, catalog_api.list_public_coupons,
            error_message="Failed to load coupons", fallback=[],
        )
        option = find_option(evaluate_coupons(summary.total_amount, coupons), code)
        if option is not None and not option.is_eligible:
            messages.error(
                request,
                f"Add {option.shortfall_display} more to use {option.code} "
                f"(minimum order {option.min_order_display})",
            )
            return redirect("store:cart")

        payload = call_backend(
            request, cart_api.apply_coupon, self.token, summary.cart_id, code,
            error_message="Failed to apply coupon",
        )
        report_result(request, payload, f"Coupon {code} applied", "Invalid coupon code")
        return redirect("store:cart")


class RemoveCouponView(CustomerPortalMixin, View):
    def post(self, request):
        cart_id = posted_id(request, "cart_id", "Your cart is empty")
        if cart_id is None:
            return redirect("store:cart")
        payload = call_backend(
            request, cart_api.remove_coupon, self.token, cart_id,
            error_message="Failed to remove coupon",
        )
        report_result(request, payload, "Coupon removed", "Failed to remove coupon")
        return redirect("store:cart")


# =============================================================================
# Checkout and orders
# =============================================================================


class CheckoutView(CustomerPortalMixin, FormFeedbackMixin, FormView):
    template_name = "store/checkout.html"
    form_class = CheckoutForm
    success_url = reverse_lazy("store:orders")

    def dispatch(self, request, *args, **kwargs):
        if not self.get_auth().is_authenticated:
            return self.handle_no_permission()
        self.summary = summarize_cart(call_backend(
            request, cart_api.get_cart, self.token, error_message="Failed to load cart",
        ))
        if self.summary.is_empty:
            messages.error(request, "Your cart is empty")
            return redirect("store:cart")
        return super().dispatch(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["summary"] = self.summary
        return context

    def form_valid(self, form):
        payload = call_backend(
            self.request, orders_api.create_order, self.token, form.to_order(self.summary.cart_id),
            error_message="Failed to place order",
        )
        if report_result(self.request, payload, "Order placed successfully", "Failed to place order"):
            return super().form_valid(form)
        return self.render_to_response(self.get_context_data(form=form))


class OrderListView(CustomerPortalMixin, TemplateView):
    template_name = "store/orders.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["orders"] = call_backend(
            self.request, orders_api.list_orders, self.token,
            error_message="Failed to load orders", fallback=[],
        )
        return context


class OrderDetailView(CustomerPortalMixin, TemplateView):
    template_name = "store/order_detail.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        order = call_backend(
            self.request, orders_api.get_order, self.token, kwargs["pk"],
            error_message="Failed to load order",
        )
        if not order:
            raise Http404("Order not found")
        context["order"] = order
        return context


class OrderCancelView(CustomerPortalMixin, View):
    def post(self, request, pk):
        payload = call_backend(
            request, orders_api.delete_order, self.token, pk,
            error_message="Failed to cancel order",
        )
        report_result(request, payload, "Order cancelled", "Failed to cancel order")
        return redirect("store:orders")


# =============================================================================
# Wishlist
# =============================================================================


class WishlistView(CustomerPortalMixin, TemplateView):
    template_name = "store/wishlist.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["items"] = call_backend(
            self.request, wishlist_api.list_items, self.token,
            error_message="Failed to load wishlist", fallback=[],
        )
        return context


class WishlistAddView(CustomerPortalMixin, View):
    def post(self, request):
        product_id = posted_id(request, "product_id", "Could not add this product to the wishlist.")
        if product_id is None:
            return redirect(safe_next_url(request, reverse("store:wishlist")))
        payload = call_backend(
            request, wishlist_api.add_item, self.token, product_id,
            error_message="Failed to add to wishlist",
        )
        report_result(request, payload, "Added to wishlist", "Failed to add to wishlist")
        return redirect(safe_next_url(request, reverse("store:wishlist")))


class WishlistRemoveView(CustomerPortalMixin, View):
    def post(self, request):
        wishlist_id = posted_id(request, "wishlist_id", "Missing wishlist item")
        if wishlist_id is None:
            return redirect("store:wishlist")
        payload = call_backend(
            request, wishlist_api.remove_item, self.token, wishlist_id,
            error_message="Failed to remove from wishlist",
        )
        report_result(request, payload, "Removed from wishlist", "Failed to remove from wishlist")
        return redirect("store:wishlist")


class WishlistMoveToCartView(CustomerPortalMixin, View):
    """Add a wishlist product to the cart, then drop it from the wishlist."""

    def post(self, request):
        form = AddToCartForm(request.POST)
        wishlist_form = RecordIdForm(request.POST, "wishlist_id")
        if not form.is_valid() or not wishlist_form.is_valid():
            for error in form.non_field_errors() or ["Could not move this item to the cart."]:
                messages.error(request, error)
            return redirect("store:wishlist")

        data = form.cleaned_data
        payload = call_backend(
            request, cart_api.add_to_cart, self.token,
            data["product_id"], data["quantity"], data.get("size") or None,
            error_message="Failed to add to cart",
        )
        if report_result(request, payload, "Moved to cart", "Failed to add to cart"):
            call_backend(
                request, wishlist_api.remove_item, self.token, wishlist_form.value,
                error_message="Failed to remove from wishlist",
            )
        return redirect("store:wishlist")


# =============================================================================
# Custom orders
# =============================================================================


class CustomOrderView(CustomerPortalMixin, FormFeedbackMixin, FormView):
    template_name = "store/custom_order.html"
    form_class = CustomOrderForm
    success_url = reverse_lazy("store:my-custom-orders")

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs["categories"] = call_backend(
            self.request, catalog_api.list_categories,
            error_message="Failed to load categories", fallback=[],
        )
        return kwargs

    def form_valid(self, form):
        payload = call_backend(
            self.request, custom_orders_api.create_custom_order, self.token,
            form.cleaned_data, images=self.request.FILES.getlist("images"),
            error_message="Failed to submit custom order",
        )
        if report_result(
            self.request, payload,
            "Custom order submitted. We will contact you with a quote.",
            "Failed to submit custom order",
        ):
            return super().form_valid(form)
        return self.render_to_response(self.get_context_data(form=form))


class MyCustomOrdersView(CustomerPortalMixin, TemplateView):
    template_name = "store/my_custom_orders.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["custom_orders"] = call_backend(
            self.request, custom_orders_api.my_custom_orders, self.token,
            error_message="Failed to load custom orders", fallback=[],
        )
        return context


# =============================================================================
# Accounts
# =============================================================================


class SignInView(PublicViewMixin, FormFeedbackMixin, FormView):
    """Customer sign-in with the identity from the Google button."""

    template_name = "store/signin.html"
    form_class = SignInForm

    def form_valid(self, form):
        name = form.cleaned_data.get("name") or ""
        email = form.cleaned_data["email"]
        token = call_backend(
            self.request, account_api.social_login, name, email,
            error_message="Sign in failed", fallback=False,
        )
        if token is False:
            return self.render_to_response(self.get_context_data(form=form))
        if not token:
            messages.error(self.request, "Sign in failed")
            return self.render_to_response(self.get_context_data(form=form))

        self.request.customer_auth.set(token, name=name, email=email)
        logger.info("Customer signed in: %s", email)
        messages.success(self.request, f"Welcome{', ' + name if name else ''}!")
        return redirect(safe_next_url(self.request, reverse("store:collections")))


class SignUpView(PublicViewMixin, FormFeedbackMixin, FormView):
    template_name = "store/signup.html"
    form_class = SignUpForm
    success_url = reverse_lazy("store:signin")

    def form_valid(self, form):
        data = form.cleaned_data
        payload = call_backend(
            self.request, account_api.register_user, data["name"], data["email"], data["mobile"],
            error_message="Registration failed",
        )
        if report_result(self.request, payload, "Registration successful. Please sign in.", "Registration failed"):
            return super().form_valid(form)
        return self.render_to_response(self.get_context_data(form=form))


class SignOutView(View):
    def post(self, request):
        request.customer_auth.logout()
        messages.success(request, "You have been signed out.")
        return redirect("store:collections")


class EnquiryView(PublicViewMixin, FormFeedbackMixin, FormView):
    template_name = "store/enquiry.html"
    form_class = EnquiryForm
    success_url = reverse_lazy("store:enquiry")

    def form_valid(self, form):
        payload = call_backend(
            self.request, catalog_api.submit_enquiry, form.cleaned_data,
            error_message="Failed to send enquiry",
        )
        if report_result(
            self.request, payload,
            message_of(payload, "Thank you. We will get back to you soon."),
            "Failed to send enquiry",
        ):
            return super().form_valid(form)
        return self.render_to_response(self.get_context_data(form=form))

