"""Customer order endpoints."""

from . import client


def create_order(token: str, data: dict) -> dict:
    return client.post("/user/order", token=token, json=data)


def list_orders(token: str) -> list:
    return client.list_of(client.get("/user/order", token=token))


def get_order(token: str, order_id) -> dict:
    return client.data_of(client.get(f"/user/order/{order_id}", token=token), {})


def delete_order(token: str, order_id) -> dict:
    return client.delete(f"/user/order/{order_id}", token=token)
