"""Wishlist endpoints."""

from . import client


def list_items(token: str) -> list:
    return client.list_of(client.get("/wishlist", token=token))


def add_item(token: str, product_id: int) -> dict:
    return client.post("/wishlist/add", token=token, json={"product_id": product_id})


def remove_item(token: str, wishlist_id: int) -> dict:
    return client.post("/wishlist/remove", token=token, json={"wishlist_id": wishlist_id})
