"""Cart and coupon endpoints for the signed-in customer."""

from . import client


def get_cart(token: str) -> dict:
    return client.get("/cart", token=token)


def add_to_cart(token: str, product_id: int, quantity: int, size=None) -> dict:
    payload = {"product_id": product_id, "quantity": quantity}
    if size:
        payload["size"] = size
    return client.post("/cart/add", token=token, json=payload)


def update_quantity(token: str, item_id: int, quantity: int) -> dict:
    return client.post(
        "/cart/update-quantity",
        token=token,
        json={"item_id": item_id, "quantity": quantity},
    )


def remove_item(token: str, item_id: int) -> dict:
    return client.post("/cart/remove", token=token, json={"item_id": item_id})


def apply_coupon(token: str, cart_id: int, coupon_code: str) -> dict:
    return client.post(
        "/apply/coupon",
        token=token,
        json={"cart_id": cart_id, "coupon_code": coupon_code},
    )


def remove_coupon(token: str, cart_id: int) -> dict:
    return client.post("/remove/coupon", token=token, json={"cart_id": cart_id})
