"""Wallet and gold vault endpoints."""

from . import client


def user_wallet(token: str, user_id: int) -> dict:
    """Balance and transactions for the signed-in customer."""
    return client.data_of(client.get(f"/user/wallet/{user_id}", token=token), {})


def admin_user_wallet(token: str, user_id: int) -> dict:
    return client.data_of(client.get(f"/admin/wallet/{user_id}", token=token), {})


def admin_debit_wallet(token: str, user_id: int, amount, description: str = "", attachments=()) -> dict:
    """Debit a customer's wallet (admin), optionally with receipts attached."""
    data = {"user_id": str(user_id), "amount": str(amount)}
    if description:
        data["description"] = description
    files = [
        ("attachments[]", (upload.name, upload.read(), getattr(upload, "content_type", None)))
        for upload in attachments
    ]
    return client.post("/admin/wallet/debit", token=token, data=data, files=files or None)


def gold_vault(token: str, user_id: int) -> dict:
    return client.data_of(client.get(f"/admin/gold-wallet/{user_id}", token=token), {})


def debit_gold_vault(token: str, user_id: int, grams, description: str = "") -> dict:
    payload = {"user_id": user_id, "gold_grams": str(grams)}
    if description:
        payload["description"] = description
    return client.post("/admin/gold-wallet/debit", token=token, json=payload)
