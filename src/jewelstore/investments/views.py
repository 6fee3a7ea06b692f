"""Gold investment views: schemes, custom gold plans, installments, wallet, payment status."""

import logging
from functools import partial
from urllib.parse import urlencode

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views import View
from django.views.generic import FormView, TemplateView

from jewelstore.api import account as account_api
from jewelstore.api import gold_plans
from jewelstore.api import schemes as schemes_api
from jewelstore.api import wallet as wallet_api
from jewelstore.api.client import data_of, is_success, message_of
from jewelstore.api.retry import RetryPolicy
from jewelstore.core import conf
from jewelstore.core.feedback import call_backend
from jewelstore.core.mixins import CustomerPortalMixin, FormFeedbackMixin, PublicViewMixin
from jewelstore.core.sessions import Role

from .forms import GoldPlanForm
from .payments import (
    MISSING_ORDER_MESSAGE,
    PaymentVerification,
    VerificationStatus,
    remember_order_id,
    resolve_order_id,
)

logger = logging.getLogger(__name__)

SCHEME_PAYMENT = "scheme"
MAX_AMOUNT_ERROR = "order amount cannot be greater than the max order amount"


def gateway_checkout(request, session_id, return_url, title):
    """Render the page that hands the checkout session to the payment gateway."""
    return render(request, "investments/gateway_checkout.html", {
        "session_id": session_id,
        "return_url": request.build_absolute_uri(return_url),
        "gateway_mode": settings.PAYMENT_GATEWAY_MODE,
        "gateway_sdk_url": settings.PAYMENT_GATEWAY_SDK_URL,
        "title": title,
    })


def payment_status_url(**params):
    return f"{reverse('investments:payment-success')}?{urlencode(params)}"


class SchemeListView(PublicViewMixin, TemplateView):
    """Public catalogue of gold savings schemes."""

    template_name = "investments/schemes.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        schemes = call_backend(
            self.request, schemes_api.list_schemes,
            error_message="Failed to load schemes", fallback=[],
        )
        context["schemes"] = [scheme for scheme in schemes if scheme.is_active]
        return context


class GoldInvestmentsView(CustomerPortalMixin, TemplateView):
    template_name = "investments/gold_investments.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["investments"] = call_backend(
            self.request, account_api.gold_investments, self.token,
            error_message="Failed to load your investments", fallback={},
        )
        return context


class PlanDetailsView(CustomerPortalMixin, FormFeedbackMixin, FormView):
    """Quote a custom gold plan, then create it and pay through the gateway.

    The ``preview`` action only asks for a quote. The ``pay`` action creates
    the plan, opens a gateway order, caches the gateway order id in the session
    and hands the checkout session to the gateway page.
    """

    template_name = "investments/plan_details.html"
    form_class = GoldPlanForm

    def form_valid(self, form):
        amount = form.cleaned_data["invested_amount"]
        if self.request.POST.get("action") == "pay":
            return self.create_and_pay(form, amount)

        quote = call_backend(
            self.request, gold_plans.preview_plan, self.token, amount,
            error_message="Could not quote this plan",
        )
        return self.render_to_response(self.get_context_data(form=form, quote=quote))

    def create_and_pay(self, form, amount):
        quote = call_backend(
            self.request, gold_plans.create_plan, self.token, amount,
            error_message="Could not create the plan",
        )
        if quote is None or quote.plan_id is None:
            if quote is not None:
                messages.error(self.request, "Could not create the plan")
            return self.render_to_response(self.get_context_data(form=form))

        payment = call_backend(
            self.request, gold_plans.initiate_payment, self.token, quote.plan_id,
            error_message="Payment initialization failed",
        )
        if payment is None:
            return self.render_to_response(self.get_context_data(form=form, quote=quote))

        gateway_error = payment.get("payment") if isinstance(payment.get("payment"), dict) else {}
        if payment.get("success") is False or gateway_error.get("code"):
            error = gateway_error.get("message") or message_of(payment, "Payment initialization failed")
            if MAX_AMOUNT_ERROR in error:
                error = "Payment amount exceeds the maximum limit. Please reduce your investment amount and try again."
            messages.error(self.request, error)
            return self.render_to_response(self.get_context_data(form=form, quote=quote))

        order_id = gold_plans.extract_order_id(payment)
        remember_order_id(self.request.session, order_id)
        session_id = gold_plans.extract_session_id(payment)
        if not session_id:
            logger.error("No gateway session in payment answer for plan %s: %s", quote.plan_id, sorted(payment))
            messages.error(self.request, "Unable to start the payment. Please try again.")
            return self.render_to_response(self.get_context_data(form=form, quote=quote))

        return gateway_checkout(
            self.request,
            session_id,
            payment_status_url(order_id=order_id or ""),
            title="Gold plan payment",
        )


class MyPlansView(CustomerPortalMixin, TemplateView):
    """Enrolled schemes with their installment schedule."""

    template_name = "investments/my_plans.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["plans"] = call_backend(
            self.request, schemes_api.my_plans, self.token,
            error_message="Failed to load your plans", fallback=[],
        )
        return context


class InstallmentPayView(CustomerPortalMixin, View):
    """Open a gateway order for one installment and hand it to the gateway."""

    def post(self, request, payment_id):
        response = call_backend(
            request, schemes_api.create_installment_order, self.token, payment_id,
            error_message="Failed to create order",
        )
        if response is None:
            return redirect("investments:my-plans")
        if not is_success(response):
            messages.error(request, message_of(response, "Failed to create order"))
            return redirect("investments:my-plans")

        gateway_order = response.get("cashfree_order") or response.get("razorpay_order") or {}
        session_id = (
            gold_plans.extract_session_id(gateway_order)
            or gold_plans.extract_session_id(data_of(response))
            or gold_plans.extract_session_id(response)
        )
        if not session_id:
            messages.error(request, "Missing payment session. Please try again.")
            return redirect("investments:my-plans")

        order_id = gold_plans.extract_order_id(gateway_order) or gold_plans.extract_order_id(response)
        remember_order_id(request.session, order_id)
        return gateway_checkout(
            request,
            session_id,
            payment_status_url(type=SCHEME_PAYMENT, order_id=order_id or "", scheme_payment_id=payment_id),
            title="Installment payment",
        )


class WalletView(CustomerPortalMixin, TemplateView):
    template_name = "investments/wallet.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        profile = call_backend(
            self.request, account_api.get_profile, self.token,
            error_message="Failed to load your profile", fallback={},
        )
        wallet = {}
        if profile.get("id"):
            wallet = call_backend(
                self.request, wallet_api.user_wallet, self.token, profile["id"],
                error_message="Failed to load wallet", fallback={},
            )
        context["profile"] = profile
        context["wallet"] = wallet
        context["transactions"] = wallet.get("transactions") or []
        return context


class PaymentSuccessView(PublicViewMixin, TemplateView):
    """Payment status page the gateway returns to.

    Each request performs at most one verification. While retries remain the
    page reloads itself after the next backoff delay, carrying the retry count
    in the ``attempt`` parameter; leaving the page cancels the pending retry.
    """

    template_name = "investments/payment_success.html"

    def get_attempt(self, policy):
        try:
            attempt = int(self.request.GET.get("attempt", 0))
        except (TypeError, ValueError):
            attempt = 0
        return min(max(attempt, 0), policy.max_retries)

    def get_verifier(self, params):
        if params.get("type") == SCHEME_PAYMENT:
            payment_id = params.get("scheme_payment_id")
            payment_id = int(payment_id) if payment_id and payment_id.isdigit() else None
            return partial(schemes_api.verify_installment_payment, payment_id=payment_id)
        return gold_plans.verify_payment

    def retry_url(self, verification):
        params = {"order_id": verification.order_id, "attempt": verification.retries + 1}
        if self.request.GET.get("type") == SCHEME_PAYMENT:
            params["type"] = SCHEME_PAYMENT
            params["scheme_payment_id"] = self.request.GET.get("scheme_payment_id", "")
        return payment_status_url(**params)

    def get(self, request, *args, **kwargs):
        params = request.GET
        order_id = resolve_order_id(params, request.session)
        if not order_id:
            return self.render_to_response(self.get_context_data(
                status=VerificationStatus.FAILED,
                message=MISSING_ORDER_MESSAGE,
                order_id=None,
            ))

        if not request.customer_auth.is_authenticated:
            query = urlencode({"next": request.get_full_path()})
            return redirect(f"{conf.get_login_url(Role.CUSTOMER)}?{query}")

        policy = RetryPolicy.from_settings()
        attempt = self.get_attempt(policy)
        verification = PaymentVerification(
            order_id,
            request.customer_auth.token,
            verify=self.get_verifier(params),
            policy=policy,
            retries=attempt,
        )
        if attempt > 0 or not verification.apply_redirect_flags(params.get("verified"), params.get("error")):
            verification.verify_once()

        context = {
            "status": verification.status,
            "message": verification.message,
            "order_id": order_id,
            "attempt": verification.retries,
        }
        delay = verification.next_delay()
        if delay is not None:
            context["retry_in"] = delay
            context["retry_url"] = self.retry_url(verification)
        return self.render_to_response(self.get_context_data(**context))

