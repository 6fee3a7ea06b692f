"""Customer account endpoints: registration, sign-in, profile."""

from . import client


def register_user(name: str, email: str, mobile: str) -> dict:
    return client.post(
        "/user/register",
        json={"name": name, "email": email, "mobile": mobile},
    )


def social_login(name: str, email: str) -> str | None:
    """Sign a customer in with the identity returned by the Google button.

    Returns:
        The customer bearer token, or None when the backend issued none.
    """
    response = client.post("/user/google-login", json={"name": name, "email": email})
    data = client.data_of(response, {})
    return data.get("token") if isinstance(data, dict) else None


def get_profile(token: str) -> dict:
    return client.data_of(client.get("/user/profile", token=token), {})


def gold_investments(token: str) -> dict:
    """Summary of the customer's gold plans and schemes."""
    return client.data_of(client.get("/user/gold-investments", token=token), {})


def save_device_token(token: str, device_token: str, platform: str = "web") -> dict:
    """Register a push-notification device token for the customer."""
    return client.post(
        "/device-token",
        token=token,
        json={"token": device_token, "platform": platform},
    )
