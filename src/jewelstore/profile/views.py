"""Customer profile views."""

import json
import logging

from django.http import JsonResponse
from django.views import View
from django.views.generic import TemplateView

from jewelstore.api import account as account_api
from jewelstore.api.client import BackendError, BackendUnavailable, is_success, message_of
from jewelstore.core.feedback import call_backend
from jewelstore.core.mixins import CustomerPortalMixin

logger = logging.getLogger(__name__)


class ProfileView(CustomerPortalMixin, TemplateView):
    """Main profile page showing the customer's account details."""

    template_name = "profile/profile.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        profile = call_backend(
            self.request, account_api.get_profile, self.token,
            error_message="Failed to load profile. Please try again.",
        )

        context.update({
            "profile": profile,
            "name": (profile or {}).get("name") or self.request.customer_auth.name,
            "email": (profile or {}).get("email") or self.request.customer_auth.email,
        })

        return context


class DeviceTokenView(CustomerPortalMixin, View):
    """Register a browser push-notification token.

    POST /account/profile/device-token/
    {
        "token": "fcm-device-token",
        "platform": "web"
    }
    """

    def handle_no_permission(self):
        return JsonResponse({"error": "Authorization required"}, status=401)

    def post(self, request):
        try:
            data = json.loads(request.body)
        except json.JSONDecodeError:
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        device_token = str(data.get("token", "")).strip()
        if not device_token:
            return JsonResponse({"error": "token required"}, status=400)

        try:
            response = account_api.save_device_token(self.token, device_token, data.get("platform", "web"))
        except BackendUnavailable:
            return JsonResponse({"error": "Backend unavailable"}, status=503)
        except BackendError as e:
            logger.warning("Device token rejected: %s", e)
            return JsonResponse({"error": e.message}, status=502)

        return JsonResponse({
            "success": is_success(response),
            "message": message_of(response),
        })
