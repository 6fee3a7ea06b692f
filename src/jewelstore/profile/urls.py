"""URL patterns for the customer profile."""

from django.urls import path

from . import views

app_name = "profile"

urlpatterns = [
    path("", views.ProfileView.as_view(), name="view"),
    path("device-token/", views.DeviceTokenView.as_view(), name="device-token"),
]
