"""Back-office customer endpoints."""

from . import client


def list_users(token: str) -> list:
    return client.list_of(client.get("/admin/user-list", token=token))


def update_user_status(token: str, user_id, status: int) -> dict:
    """Activate (1) or block (0) a customer account."""
    return client.post(
        f"/admin/update-user-status/{user_id}",
        token=token,
        json={"status": status},
    )


def user_with_orders(token: str, user_id) -> dict:
    return client.data_of(client.get(f"/admin/user-with-orders/{user_id}", token=token), {})


def user_with_custom_orders(token: str, user_id) -> dict:
    return client.data_of(client.get(f"/admin/user-with-customorders/{user_id}", token=token), {})


def user_with_schemes(token: str, user_id) -> dict:
    return client.data_of(client.get(f"/admin/user-with-schemes/{user_id}", token=token), {})


def user_scheme_payments(token: str, user_id, scheme_id) -> dict:
    return client.data_of(
        client.get(
            f"/admin/user-with-schemes-payments/{user_id}",
            token=token,
            params={"user_scheme_id": scheme_id},
        ),
        {},
    )


def user_custom_plans(token: str, user_id) -> dict:
    return client.data_of(client.get(f"/admin/user-custom-plans/{user_id}", token=token), {})


def user_gold_plan_payments(token: str, user_id, plan_id) -> dict:
    return client.data_of(
        client.get(
            f"/admin/user-with-gold-payemnts/{user_id}",
            token=token,
            params={"plan_id": plan_id},
        ),
        {},
    )
