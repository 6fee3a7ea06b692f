"""Back-office sales endpoints: orders, custom orders, coupons."""

from . import client

ORDER_STATUSES = ("pending", "processing", "shipped", "completed", "cancelled")
CUSTOM_ORDER_STATUSES = ("pending", "quoted", "approved", "in_progress", "completed", "rejected")


def list_orders(token: str) -> dict:
    """Orders with per-status counts.

    Returns:
        Dict with ``orders`` (list) and ``status_counts`` (dict)
    """
    response = client.get("/admin/order/list", token=token)
    data = client.data_of(response, {})
    if isinstance(data, list):
        return {"orders": data, "status_counts": {}}
    orders = data.get("orders", data.get("data", []))
    return {
        "orders": orders if isinstance(orders, list) else [],
        "status_counts": data.get("status_counts") or {},
    }


def get_order(token: str, order_id) -> dict:
    return client.data_of(client.get(f"/admin/order/{order_id}", token=token), {})


def change_order_status(token: str, order_id, status: str) -> dict:
    if status not in ORDER_STATUSES:
        raise ValueError(f"Invalid status: {status}. Must be one of {list(ORDER_STATUSES)}")
    return client.post(
        "/admin/order/status-change",
        token=token,
        json={"order_id": order_id, "status": status},
    )


def list_custom_orders(token: str, status: str | None = None, search: str | None = None, page: int | None = None) -> list:
    params = {}
    if status:
        params["status"] = status
    if search:
        params["search"] = search
    if page:
        params["page"] = page
    return client.list_of(client.get("/admin/AllCustomeorder", token=token, params=params or None))


def get_custom_order(token: str, order_id) -> dict:
    return client.data_of(client.get(f"/admin/getCustomOrder/{order_id}", token=token), {})


def update_custom_order(token: str, order_id, fields: dict) -> dict:
    """Progress a custom order: status, quoted price, admin notes."""
    return client.post(f"/admin/updatecustomorder/{order_id}", token=token, json=fields)


def list_coupons(token: str) -> list:
    return client.list_of(client.get("/admin/coupons", token=token))


def get_coupon(token: str, coupon_id) -> dict:
    return client.data_of(client.get(f"/admin/coupons/{coupon_id}", token=token), {})


def create_coupon(token: str, data: dict) -> dict:
    return client.post("/admin/coupons", token=token, json=data)


def update_coupon(token: str, coupon_id, data: dict) -> dict:
    return client.put(f"/admin/coupons/{coupon_id}", token=token, json=data)


def delete_coupon(token: str, coupon_id) -> dict:
    return client.delete(f"/admin/coupons/{coupon_id}", token=token)
