"""Context processors for Jewelstore core."""

from django.urls import NoReverseMatch, reverse

from . import conf


def get_portal_context(request):
    """
    Determine portal context based on URL path.

    Returns: 'public', 'account' or 'admin'
    """
    path = request.path
    config = conf.get_config()

    if path.startswith(config["ADMIN_PREFIX"]):
        return "admin"
    elif path.startswith(config["ACCOUNT_PREFIX"]):
        return "account"
    return "public"


def resolve_nav_url(item):
    """
    Resolve navigation item URL.

    Supports both named URLs and path strings.
    """
    url = item.get("url", "")

    if not url:
        return "#"

    if url.startswith("/") or url.startswith("http"):
        return url

    try:
        return reverse(url)
    except NoReverseMatch:
        return url


def build_navigation(items, request):
    """Resolve URLs, mark the active item and hide customer-only items from guests."""
    customer_auth = getattr(request, "customer_auth", None)
    signed_in = bool(customer_auth and customer_auth.is_authenticated)

    navigation = []
    for item in items:
        if item.get("customer_only") and not signed_in:
            continue
        nav_item = item.copy()
        nav_item["resolved_url"] = resolve_nav_url(item)
        nav_item["is_active"] = request.path.startswith(nav_item["resolved_url"])
        navigation.append(nav_item)
    return navigation


def group_nav_by_section(items):
    """Group navigation items by section."""
    sections = {}
    for item in items:
        sections.setdefault(item.get("section", "Main"), []).append(item)
    return sections


def portal_context(request):
    """Add portal configuration and navigation to template context."""
    config = conf.get_config()
    context = get_portal_context(request)

    if context == "admin":
        navigation = build_navigation(config["ADMIN_NAV"], request)
    elif context == "account":
        navigation = build_navigation(config["ACCOUNT_NAV"], request)
    else:
        navigation = build_navigation(config["PUBLIC_NAV"], request)

    return {
        "portal_ui": {
            "site_name": config["SITE_NAME"],
            "context": context,
            "is_public": context == "public",
            "is_account": context == "account",
            "is_admin": context == "admin",
            "navigation": navigation,
            "nav_sections": group_nav_by_section(navigation),
            "customer_login_url": config["CUSTOMER_LOGIN_URL"],
            "admin_login_url": config["ADMIN_LOGIN_URL"],
        }
    }


def auth_context(request):
    """Expose both auth sessions to templates."""
    return {
        "customer_auth": getattr(request, "customer_auth", None),
        "admin_auth": getattr(request, "admin_auth", None),
    }
