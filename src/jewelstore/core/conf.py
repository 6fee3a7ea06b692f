"""Portal configuration."""

from django.conf import settings


def get_config():
    """Get portal configuration from settings."""
    defaults = {
        # Site branding
        "SITE_NAME": "Store",
        # Navigation for each portal context
        "PUBLIC_NAV": [],
        "ACCOUNT_NAV": [],
        "ADMIN_NAV": [],
        # URL prefixes for portal contexts
        "ACCOUNT_PREFIX": "/account/",
        "ADMIN_PREFIX": "/backoffice/",
        # Login URLs per role
        "CUSTOMER_LOGIN_URL": "/signin/",
        "ADMIN_LOGIN_URL": "/backoffice/login/",
    }

    user_config = getattr(settings, "PORTAL_UI", {})
    return {**defaults, **user_config}


def get_setting(name, default=None):
    """Get a specific portal setting."""
    return get_config().get(name, default)


def get_site_name():
    return get_config().get("SITE_NAME", "Store")


def get_login_url(role):
    """Login URL for a ``sessions.Role``."""
    from .sessions import Role

    config = get_config()
    if role == Role.ADMIN:
        return config["ADMIN_LOGIN_URL"]
    return config["CUSTOMER_LOGIN_URL"]
