"""Back-office catalog endpoints: products, categories, collections, banners."""

from . import client


def _files(uploads, field_name):
    return [
        (field_name, (upload.name, upload.read(), getattr(upload, "content_type", None)))
        for upload in uploads
    ]


def _form(fields: dict) -> dict:
    return {key: str(value) for key, value in fields.items() if value is not None}


# Products


def list_products(token: str) -> list:
    return client.list_of(client.get("/admin/products", token=token))


def get_product(token: str, product_id) -> dict:
    return client.data_of(client.get(f"/admin/products/{product_id}", token=token), {})


def create_product(token: str, fields: dict, images=()) -> dict:
    return client.post(
        "/admin/products",
        token=token,
        data=_form(fields),
        files=_files(images, "images[]") or None,
    )


def update_product(token: str, product_id, fields: dict, images=()) -> dict:
    """Update a product.

    Multipart updates go through POST with ``_method=PUT`` because the
    backend framework does not parse multipart bodies on PUT.
    """
    if images:
        data = _form(fields)
        data["_method"] = "PUT"
        return client.post(
            f"/admin/products/{product_id}",
            token=token,
            data=data,
            files=_files(images, "images[]"),
        )
    return client.put(f"/admin/products/{product_id}", token=token, json=fields)


def delete_product(token: str, product_id) -> dict:
    return client.delete(f"/admin/products/{product_id}", token=token)


# Categories


def list_categories(token: str) -> list:
    return client.list_of(client.get("/admin/categories", token=token))


def get_category(token: str, category_id) -> dict:
    return client.data_of(client.get(f"/admin/categories/{category_id}", token=token), {})


def create_category(token: str, fields: dict, image=None) -> dict:
    return client.post(
        "/admin/categories",
        token=token,
        data=_form(fields),
        files=_files([image], "image") if image else None,
    )


def update_category(token: str, category_id, fields: dict, image=None) -> dict:
    return client.post(
        f"/admin/categories/{category_id}",
        token=token,
        data=_form(fields),
        files=_files([image], "image") if image else None,
    )


def delete_category(token: str, category_id) -> dict:
    return client.delete(f"/admin/categories/{category_id}", token=token)


# Collections


def list_collections(token: str) -> list:
    return client.list_of(client.get("/admin/collections", token=token))


def get_collection(token: str, collection_id) -> dict:
    return client.data_of(client.get(f"/admin/collections/{collection_id}", token=token), {})


def create_collection(token: str, fields: dict, image=None) -> dict:
    return client.post(
        "/admin/collections",
        token=token,
        data=_form(fields),
        files=_files([image], "image") if image else None,
    )


def update_collection(token: str, collection_id, fields: dict, image=None) -> dict:
    return client.post(
        f"/admin/collections/{collection_id}/update",
        token=token,
        data=_form(fields),
        files=_files([image], "image") if image else None,
    )


def delete_collection(token: str, collection_id) -> dict:
    return client.delete(f"/admin/collections/{collection_id}", token=token)


# Banners


def list_banners(token: str) -> list:
    return client.list_of(client.get("/admin/banners", token=token))


def create_banner(token: str, fields: dict, image=None) -> dict:
    return client.post(
        "/admin/banners",
        token=token,
        data=_form(fields),
        files=_files([image], "image") if image else None,
    )


def update_banner(token: str, banner_id, fields: dict, image=None) -> dict:
    data = _form(fields)
    data["_method"] = "PUT"
    return client.post(
        f"/admin/banners/{banner_id}",
        token=token,
        data=data,
        files=_files([image], "image") if image else None,
    )


def delete_banner(token: str, banner_id) -> dict:
    return client.delete(f"/admin/banners/{banner_id}", token=token)
