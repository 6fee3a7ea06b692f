"""Admin authentication endpoints."""

from dataclasses import dataclass

from . import client


@dataclass
class NormalizedLogin:
    """Login answer reduced to what the admin session keeps."""

    token: str
    name: str
    email: str
    user_id: int | None = None
    role: str | None = None
    message: str = ""


def admin_login(username: str, password: str) -> NormalizedLogin:
    """Log an admin in by email or username.

    Raises:
        BackendError: Invalid credentials or the backend refused the login
    """
    if "@" in username:
        payload = {"email": username, "password": password}
    else:
        payload = {"username": username, "password": password}

    try:
        response = client.post("/admin/login", json=payload)
    except client.BackendError as e:
        raise client.BackendError(
            client.message_of(e.payload, "Login failed"),
            status_code=e.status_code,
            payload=e.payload,
        ) from e

    data = client.data_of(response, {})
    user = data.get("user") or {}
    token = data.get("token")
    if not token:
        raise client.BackendError(client.message_of(response, "Login failed"), payload=response)

    return NormalizedLogin(
        token=token,
        name=user.get("name") or "",
        email=user.get("email") or "",
        user_id=user.get("id"),
        role=user.get("role"),
        message=client.message_of(response),
    )


def admin_profile(token: str) -> dict:
    """Fetch the logged-in admin's profile record."""
    return client.data_of(client.get("/admin/getProfile", token=token), {})
