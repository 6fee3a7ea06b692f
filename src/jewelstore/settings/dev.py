"""Development settings: talk to the backend through the local proxy."""

import os

from .base import *  # noqa: F401,F403

DEBUG = True

SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-not-for-production")

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

BACKEND_API_URL = os.environ.get("BACKEND_DEV_API_URL", "http://localhost:8000/api")
