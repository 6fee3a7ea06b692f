"""Gold savings scheme endpoints."""

import json
from dataclasses import dataclass, field
from decimal import Decimal

from . import client


@dataclass
class Scheme:
    """A savings scheme as shown in the catalogue and the back-office."""

    id: int
    name: str
    timeline: str
    min_amount: Decimal
    status: int
    is_popular: int
    points: list[str] = field(default_factory=list)
    attachments: list[str] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.status == 1


def parse_points(points) -> list[str]:
    """Scheme highlights arrive as a list, a JSON-encoded list or a bare string."""
    if isinstance(points, list):
        return [p for p in points if isinstance(p, str)]
    if isinstance(points, str):
        try:
            parsed = json.loads(points)
        except ValueError:
            return [points]
        if isinstance(parsed, list):
            return [p for p in parsed if isinstance(p, str)]
        return [points]
    return []


def normalize_scheme(item: dict) -> Scheme:
    attachments = item.get("attachments")
    return Scheme(
        id=int(item.get("id") or 0),
        name=str(item.get("scheme") or item.get("name") or ""),
        timeline=str(item.get("timeline") or ""),
        min_amount=Decimal(str(item.get("min_amount") or item.get("minAmount") or 0)),
        status=int(item.get("status") or 0),
        is_popular=int(item.get("is_popular") or item.get("isPopular") or 0),
        points=parse_points(item.get("points")),
        attachments=attachments if isinstance(attachments, list) else [],
    )


def list_schemes(token: str | None = None) -> list[Scheme]:
    """All schemes; the same endpoint serves the public catalogue and the admin."""
    response = client.get("/admin/scheme", token=token)
    return [normalize_scheme(item) for item in client.list_of(response)]


def update_scheme(token: str, scheme_id: int, scheme: Scheme, attachments=()) -> str:
    """Update a scheme (admin). Returns the backend message."""
    data = {
        "scheme": scheme.name,
        "timeline": scheme.timeline,
        "min_amount": str(scheme.min_amount),
        "status": str(scheme.status),
        "is_popular": str(scheme.is_popular),
    }
    for index, point in enumerate(scheme.points):
        data[f"points[{index}]"] = point
    files = [
        ("attachments[]", (upload.name, upload.read(), getattr(upload, "content_type", None)))
        for upload in attachments
    ]
    response = client.post(f"/admin/scheme/{scheme_id}", token=token, data=data, files=files or None)
    return client.message_of(response)


def my_plans(token: str) -> list:
    """Schemes the customer is enrolled in, with their installment schedule."""
    return client.list_of(client.get("/user/my-plans", token=token))


def create_installment_order(token: str, payment_id: int) -> dict:
    """Open a gateway order for the next due installment."""
    return client.post(f"/user/scheme/payment/{payment_id}/order", token=token, json={})


def verify_installment_payment(token: str, order_id: str, payment_id: int | None = None) -> dict:
    """Ask the backend for the gateway status of an installment order."""
    payload = {"order_id": order_id}
    if payment_id is not None:
        payload["scheme_payment_id"] = payment_id
    return client.post("/user/scheme/payment/verify", token=token, json=payload)
