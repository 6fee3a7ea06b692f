"""URL patterns for the back-office."""

from django.urls import path

from . import views

app_name = "backoffice"


def resource_patterns(prefix, list_view, form_view, delete_view, singular):
    return [
        path(f"{prefix}/", list_view.as_view(), name=prefix),
        path(f"{prefix}/new/", form_view.as_view(), name=f"{singular}-create"),
        path(f"{prefix}/<int:pk>/edit/", form_view.as_view(), name=f"{singular}-update"),
        path(f"{prefix}/<int:pk>/delete/", delete_view.as_view(), name=f"{singular}-delete"),
    ]


urlpatterns = [
    # Authentication
    path("login/", views.LoginView.as_view(), name="login"),
    path("logout/", views.LogoutView.as_view(), name="logout"),
    path("profile/", views.AdminProfileView.as_view(), name="profile"),

    # Overview
    path("", views.DashboardView.as_view(), name="dashboard"),
    path("reports/", views.ReportsView.as_view(), name="reports"),
    path("rates/", views.RatesView.as_view(), name="rates"),

    # Sales
    path("orders/", views.OrderListView.as_view(), name="orders"),
    path("orders/<int:pk>/", views.OrderDetailView.as_view(), name="order-detail"),
    path("orders/<int:pk>/status/", views.OrderStatusView.as_view(), name="order-status"),
    path("custom-orders/", views.CustomOrderListView.as_view(), name="custom-orders"),
    path("custom-orders/<int:pk>/", views.CustomOrderDetailView.as_view(), name="custom-order-detail"),

    # Investments
    path("schemes/", views.SchemeListView.as_view(), name="schemes"),
    path("schemes/<int:pk>/edit/", views.SchemeEditView.as_view(), name="scheme-update"),

    # Customers
    path("users/", views.UserListView.as_view(), name="users"),
    path("users/<int:pk>/", views.UserDetailView.as_view(), name="user-detail"),
    path("users/<int:pk>/status/", views.UserStatusView.as_view(), name="user-status"),
    path("users/<int:pk>/wallet/debit/", views.WalletDebitView.as_view(), name="wallet-debit"),
    path("users/<int:pk>/vault/debit/", views.GoldVaultDebitView.as_view(), name="vault-debit"),
    path("notifications/", views.NotificationListView.as_view(), name="notifications"),
    path("notifications/<int:pk>/delete/", views.NotificationDeleteView.as_view(), name="notification-delete"),
    path("enquiries/", views.EnquiryListView.as_view(), name="enquiries"),

    # System
    path("settings/", views.SettingsView.as_view(), name="settings"),
]

# Catalog and coupons
urlpatterns += resource_patterns(
    "products", views.ProductListView, views.ProductFormView, views.ProductDeleteView, "product",
)
urlpatterns += resource_patterns(
    "categories", views.CategoryListView, views.CategoryFormView, views.CategoryDeleteView, "category",
)
urlpatterns += resource_patterns(
    "collections", views.CollectionListView, views.CollectionFormView, views.CollectionDeleteView, "collection",
)
urlpatterns += resource_patterns(
    "banners", views.BannerListView, views.BannerFormView, views.BannerDeleteView, "banner",
)
urlpatterns += resource_patterns(
    "coupons", views.CouponListView, views.CouponFormView, views.CouponDeleteView, "coupon",
)
