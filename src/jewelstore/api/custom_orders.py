"""Custom (bespoke) jewelry order endpoints."""

from . import client


def create_custom_order(token: str, fields: dict, images=()) -> dict:
    """Submit a custom order request with its reference images.

    Args:
        token: Customer bearer token
        fields: Form fields (category, metal, weight, budget, description...)
        images: Uploaded files; each sent as ``images[]``
    """
    files = [
        ("images[]", (image.name, image.read(), getattr(image, "content_type", None)))
        for image in images
    ]
    data = {key: str(value) for key, value in fields.items() if value not in (None, "")}
    return client.post(
        "/user/store/custom-order",
        token=token,
        data=data,
        files=files or None,
    )


def my_custom_orders(token: str) -> list:
    return client.list_of(client.get("/user/mycustom-order", token=token))
