"""Test settings."""

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = "test-secret-key-not-for-production"

ALLOWED_HOSTS = ["testserver"]

BACKEND_API_URL = "http://backend.test/api"
BACKEND_TIMEOUT = 1.0

PAYMENT_VERIFY_MAX_RETRIES = 3
PAYMENT_VERIFY_BASE_DELAY = 2.0
