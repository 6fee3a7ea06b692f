"""Back-office reporting, rates and business settings endpoints."""

from . import client

SETTINGS_SECTIONS = (
    "general",
    "business_information",
    "payment_methods",
    "inventory_management",
    "security_settings",
    "gold_api",
)


def analytics(token: str) -> dict:
    """Dashboard figures: revenue, order counts, top products, sales by month."""
    return client.data_of(client.get("/admin/reports/analytics", token=token), {})


def customer_report(token: str, **filters) -> list:
    params = {key: value for key, value in filters.items() if value}
    return client.list_of(client.get("/admin/reports/customer", token=token, params=params or None))


def gold_price(token: str) -> dict:
    """Live metal rates.

    Returns:
        Dict with ``items`` (per-metal price data) and ``summary`` (per-gram rates)
    """
    response = client.get("/admin/gold-price", token=token)
    return {
        "items": client.list_of(response),
        "summary": response.get("summary") or {},
    }


def get_settings(token: str) -> dict:
    return client.data_of(client.get("/admin/business-settings", token=token), {})


def update_settings(token: str, section: str, values: dict) -> dict:
    """Save one section of the business settings."""
    if section not in SETTINGS_SECTIONS:
        raise ValueError(f"Unknown settings section: {section}")
    return client.post(
        "/admin/business-settings/update",
        token=token,
        json={section: values},
    )
