"""URL patterns for gold investments."""

from django.urls import path

from . import views

app_name = "investments"

urlpatterns = [
    path("schemes/", views.SchemeListView.as_view(), name="schemes"),
    path("payment-success/", views.PaymentSuccessView.as_view(), name="payment-success"),
    path("account/gold/", views.GoldInvestmentsView.as_view(), name="gold-investments"),
    path("account/gold/plan/", views.PlanDetailsView.as_view(), name="plan-details"),
    path("account/plans/", views.MyPlansView.as_view(), name="my-plans"),
    path("account/plans/installments/<int:payment_id>/pay/", views.InstallmentPayView.as_view(), name="installment-pay"),
    path("account/wallet/", views.WalletView.as_view(), name="wallet"),
]
