"""HTTP client for the store REST backend.

All endpoint wrappers go through ``request`` so transport failures and
error responses are turned into the same small exception hierarchy, which
``jewelstore.core.feedback`` maps to user-facing messages.
"""

import logging
from typing import Any

import httpx
from django.conf import settings

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Error response from the store backend."""

    def __init__(self, message: str, status_code: int | None = None, payload: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}
        super().__init__(message)


class BackendNotFound(BackendError):
    """The backend answered 404 for the requested record."""

    pass


class BackendUnavailable(Exception):
    """The store backend could not be reached."""

    pass


def _get_client(token: str | None = None) -> httpx.Client:
    """Get a configured httpx client, authenticated when a token is given."""
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.Client(
        base_url=settings.BACKEND_API_URL,
        timeout=settings.BACKEND_TIMEOUT,
        headers=headers,
    )


def _decode(response: httpx.Response) -> dict:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {"data": data}


def _handle_response(response: httpx.Response) -> dict:
    """Handle response from the backend."""
    if response.is_success:
        return _decode(response)

    payload = _decode(response)
    message = message_of(payload) or f"Error {response.status_code}: {response.reason_phrase}"
    if response.status_code == 404:
        raise BackendNotFound(message, status_code=404, payload=payload)
    raise BackendError(message, status_code=response.status_code, payload=payload)


def request(
    method: str,
    path: str,
    *,
    token: str | None = None,
    json: Any = None,
    data: dict | None = None,
    files: Any = None,
    params: dict | None = None,
) -> dict:
    """Send one request to the backend and return the decoded JSON body.

    Raises:
        BackendNotFound: The backend answered 404
        BackendError: Any other non-2xx answer
        BackendUnavailable: The backend could not be reached
    """
    try:
        with _get_client(token) as client:
            response = client.request(
                method,
                path,
                json=json,
                data=data,
                files=files,
                params=params,
            )
    except httpx.RequestError as e:
        logger.error("Store backend unavailable for %s %s: %s", method, path, e)
        raise BackendUnavailable(str(e)) from e

    return _handle_response(response)


def get(path: str, **kwargs) -> dict:
    return request("GET", path, **kwargs)


def post(path: str, **kwargs) -> dict:
    return request("POST", path, **kwargs)


def put(path: str, **kwargs) -> dict:
    return request("PUT", path, **kwargs)


def delete(path: str, **kwargs) -> dict:
    return request("DELETE", path, **kwargs)


def is_success(payload: dict | None) -> bool:
    """Read the success flag of a response envelope.

    The backend is not consistent: some endpoints answer ``success``, some
    ``status``, and the scheme endpoints ``sucess``.
    """
    if not payload:
        return False
    for key in ("success", "status", "sucess"):
        if key in payload:
            return bool(payload[key])
    return False


def message_of(payload: dict | None, default: str = "") -> str:
    """Read the message of a response envelope (``message`` or ``massage``)."""
    if not payload:
        return default
    message = payload.get("message") or payload.get("massage")
    return str(message) if message else default


def data_of(payload: dict | None, default: Any = None) -> Any:
    """Read the ``data`` member of a response envelope."""
    if not payload:
        return default
    data = payload.get("data")
    return default if data is None else data


def list_of(payload: dict | None) -> list:
    """Read the ``data`` member of a response envelope as a list."""
    data = data_of(payload)
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        # Paginated endpoints nest the rows one level deeper
        rows = data.get("data")
        if isinstance(rows, list):
            return rows
    return []


def check_health() -> bool:
    """Check if the store backend answers.

    Returns:
        True if the backend is reachable and answers without a server error.
    """
    try:
        with _get_client() as client:
            response = client.get("/collections")
            return response.status_code < 500
    except httpx.RequestError as e:
        logger.warning("Store backend health check failed: %s", e)
        return False
