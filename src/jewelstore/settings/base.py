"""Base settings for the Jewelstore project."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
SRC_DIR = BASE_DIR / "src"

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get("SECRET_KEY")

# Debug mode - override in dev.py
DEBUG = False

ALLOWED_HOSTS = []

# Application definition
DJANGO_APPS = [
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
]

# Local apps
LOCAL_APPS = [
    "jewelstore.core",
    "jewelstore.store",
    "jewelstore.investments",
    "jewelstore.profile",
    "jewelstore.backoffice",
]

INSTALLED_APPS = DJANGO_APPS + LOCAL_APPS

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "jewelstore.core.middleware.SessionContextMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "jewelstore.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.messages.context_processors.messages",
                "jewelstore.core.context_processors.portal_context",
                "jewelstore.core.context_processors.auth_context",
                "jewelstore.store.context_processors.cart_context",
            ],
        },
    },
]

WSGI_APPLICATION = "jewelstore.wsgi.application"

# All records live in the REST backend; the web tier keeps no database.
DATABASES = {}

# Auth tokens and the cached payment order id live in the signed session cookie
SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
SESSION_COOKIE_HTTPONLY = True
MESSAGE_STORAGE = "django.contrib.messages.storage.cookie.CookieStorage"

# Internationalization
LANGUAGE_CODE = "en-in"
TIME_ZONE = "Asia/Kolkata"
USE_I18N = True
USE_TZ = True

# Static files
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST backend
BACKEND_PRODUCTION_URL = "https://vailankanni-backend.cybenkotechnologies.in/api"
BACKEND_API_URL = os.environ.get("BACKEND_API_URL", BACKEND_PRODUCTION_URL)
BACKEND_TIMEOUT = float(os.environ.get("BACKEND_TIMEOUT", "15"))

# Payment verification polling
PAYMENT_VERIFY_MAX_RETRIES = int(os.environ.get("PAYMENT_VERIFY_MAX_RETRIES", "3"))
PAYMENT_VERIFY_BASE_DELAY = float(os.environ.get("PAYMENT_VERIFY_BASE_DELAY", "2"))

# Payment gateway (Cashfree) checkout
PAYMENT_GATEWAY_MODE = os.environ.get("PAYMENT_GATEWAY_MODE", "sandbox")
PAYMENT_GATEWAY_SDK_URL = "https://sdk.cashfree.com/js/v3/cashfree.js"
MAX_INVESTMENT_AMOUNT = 100000

# Store configuration
STORE_NAME = os.environ.get("STORE_NAME", "Vailankanni Jewellers")
CURRENCY_SYMBOL = os.environ.get("CURRENCY_SYMBOL", "₹")

# Portal navigation
PORTAL_UI = {
    "SITE_NAME": STORE_NAME,
    "ADMIN_PREFIX": "/backoffice/",
    "ACCOUNT_PREFIX": "/account/",
    "CUSTOMER_LOGIN_URL": "/signin/",
    "ADMIN_LOGIN_URL": "/backoffice/login/",
    "PUBLIC_NAV": [
        {"label": "Collections", "url": "store:collections"},
        {"label": "Gold Schemes", "url": "investments:schemes"},
        {"label": "Custom Order", "url": "store:custom-order", "customer_only": True},
        {"label": "Cart", "url": "store:cart", "customer_only": True},
    ],
    "ACCOUNT_NAV": [
        {"label": "Profile", "url": "profile:view"},
        {"label": "Orders", "url": "store:orders"},
        {"label": "Wishlist", "url": "store:wishlist"},
        {"label": "Gold Investments", "url": "investments:gold-investments"},
        {"label": "My Plans", "url": "investments:my-plans"},
        {"label": "Wallet", "url": "investments:wallet"},
    ],
    "ADMIN_NAV": [
        {"label": "Dashboard", "url": "backoffice:dashboard", "section": "Overview"},
        {"label": "Reports", "url": "backoffice:reports", "section": "Overview"},
        {"label": "Products", "url": "backoffice:products", "section": "Catalog"},
        {"label": "Categories", "url": "backoffice:categories", "section": "Catalog"},
        {"label": "Collections", "url": "backoffice:collections", "section": "Catalog"},
        {"label": "Banners", "url": "backoffice:banners", "section": "Catalog"},
        {"label": "Orders", "url": "backoffice:orders", "section": "Sales"},
        {"label": "Custom Orders", "url": "backoffice:custom-orders", "section": "Sales"},
        {"label": "Coupons", "url": "backoffice:coupons", "section": "Sales"},
        {"label": "Rates", "url": "backoffice:rates", "section": "Sales"},
        {"label": "Schemes", "url": "backoffice:schemes", "section": "Investments"},
        {"label": "Users", "url": "backoffice:users", "section": "Customers"},
        {"label": "Notifications", "url": "backoffice:notifications", "section": "Customers"},
        {"label": "Queries", "url": "backoffice:enquiries", "section": "Customers"},
        {"label": "Settings", "url": "backoffice:settings", "section": "System"},
    ],
}

# Logging configuration
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {message}",
            "style": "{",
        },
        "json": {
            "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": os.environ.get("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "jewelstore": {
            "handlers": ["console"],
            "level": "DEBUG",
            "propagate": False,
        },
    },
}
