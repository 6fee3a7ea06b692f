"""Back-office notifications and customer enquiries."""

from . import client

ENQUIRY_KINDS = {
    "contact": "/admin/enquiry",
    "compare-gold": "/admin/compare-gold",
    "compare-price": "/admin/compare-price",
}


def list_notifications(token: str) -> list:
    return client.list_of(client.get("/admin/notifications", token=token))


def send_notification(token: str, title: str, body: str, user_ids=None) -> dict:
    """Push a notification to the given customers, or to everyone when none are given."""
    payload = {"title": title, "body": body}
    if user_ids:
        payload["user_ids"] = list(user_ids)
        payload["audience"] = "selected"
    else:
        payload["audience"] = "all"
    return client.post("/admin/notifications", token=token, json=payload)


def delete_notification(token: str, notification_id) -> dict:
    return client.delete(f"/admin/notifications/{notification_id}", token=token)


def list_enquiries(token: str, kind: str = "contact") -> list:
    try:
        path = ENQUIRY_KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown enquiry kind: {kind}") from None
    return client.list_of(client.get(path, token=token))
