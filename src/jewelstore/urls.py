"""URL configuration for the Jewelstore project."""

from django.urls import include, path

from jewelstore.core.views import health_check

urlpatterns = [
    # Health check
    path("health/", health_check, name="health_check"),

    # Admin back-office
    path("backoffice/", include("jewelstore.backoffice.urls", namespace="backoffice")),

    # Customer profile
    path("account/profile/", include("jewelstore.profile.urls", namespace="profile")),

    # Gold schemes, plans and payment status
    path("", include("jewelstore.investments.urls", namespace="investments")),

    # Storefront
    path("", include("jewelstore.store.urls", namespace="store")),
]
