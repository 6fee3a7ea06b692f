"""Public catalog endpoints: collections, categories, coupons, enquiries."""

from . import client


def list_collections() -> list:
    return client.list_of(client.get("/collections"))


def collection_products(collection_id) -> list:
    return client.list_of(client.get(f"/collections/{collection_id}/products"))


def list_categories() -> list:
    return client.list_of(client.get("/categories"))


def category_products(category_id) -> list:
    return client.list_of(client.get(f"/categories/{category_id}/products"))


def list_public_coupons() -> list:
    """Coupons offered on the cart page."""
    response = client.get("/public/coupons")
    if not client.is_success(response):
        return []
    return client.list_of(response)


def submit_enquiry(data: dict) -> dict:
    """Send a contact, compare-gold or compare-price enquiry."""
    return client.post("/enquiry", json=data)
