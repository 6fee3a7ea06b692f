"""Production settings."""

import os

from .base import *  # noqa: F401,F403
from .base import LOGGING

DEBUG = False

ALLOWED_HOSTS = [h.strip() for h in os.environ.get("ALLOWED_HOSTS", "").split(",") if h.strip()]

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

STORAGES = {
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage",
    },
}

# Structured logs for the log shipper
LOGGING["handlers"]["console"]["formatter"] = "json"
