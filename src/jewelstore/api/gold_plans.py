"""Custom gold plan endpoints: quote, create, pay, verify."""

import logging
from dataclasses import dataclass
from decimal import Decimal

from . import client

logger = logging.getLogger(__name__)

# Key variations the payment gateway and backend use for the checkout session
SESSION_ID_KEYS = (
    "payment_session_id",
    "paymentSessionId",
    "order_token",
    "orderToken",
    "cf_payment_session_id",
    "token",
)
NESTED_KEYS = ("data", "payment", "order")


@dataclass
class GoldPlanQuote:
    """Grams of gold an investment buys at the current rate."""

    invested_amount: Decimal
    gold_rate: Decimal
    gold_grams: Decimal
    plan_id: int | None = None


def _quote_from(data: dict) -> GoldPlanQuote:
    return GoldPlanQuote(
        invested_amount=Decimal(str(data.get("invested_amount", 0))),
        gold_rate=Decimal(str(data.get("gold_rate", 0))),
        gold_grams=Decimal(str(data.get("gold_grams", 0))),
        plan_id=data.get("plan"),
    )


def preview_plan(token: str, invested_amount: Decimal) -> GoldPlanQuote:
    """Ask the backend how much gold ``invested_amount`` buys today."""
    response = client.post(
        "/user/show-gold-Plan",
        token=token,
        json={"invested_amount": str(invested_amount)},
    )
    if not client.is_success(response):
        raise client.BackendError(client.message_of(response, "Could not quote this plan"), payload=response)
    return _quote_from(client.data_of(response, {}))


def create_plan(token: str, invested_amount: Decimal) -> GoldPlanQuote:
    """Create the plan; the returned quote carries the new plan id."""
    response = client.post(
        "/user/gold-plan",
        token=token,
        json={"invested_amount": str(invested_amount)},
    )
    if not client.is_success(response):
        raise client.BackendError(client.message_of(response, "Could not create the plan"), payload=response)
    return _quote_from(client.data_of(response, {}))


def initiate_payment(token: str, plan_id: int) -> dict:
    return client.post(f"/user/gold-plan/{plan_id}/payment", token=token, json={})


def extract_session_id(data) -> str | None:
    """Find the payment-gateway checkout session id in an initiate-payment answer."""
    if not isinstance(data, dict):
        return None
    for key in SESSION_ID_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    for key in NESTED_KEYS:
        if data.get(key):
            return extract_session_id(data[key])
    return None


def extract_order_id(data) -> str | None:
    """Find the payment-gateway order id in an initiate-payment answer."""
    if not isinstance(data, dict):
        return None
    value = data.get("order_id")
    if value:
        return str(value)
    for key in NESTED_KEYS:
        if data.get(key):
            return extract_order_id(data[key])
    return None


def verify_payment(token: str, order_id: str) -> dict:
    """Ask the backend for the gateway status of ``order_id``."""
    logger.debug("Verifying gold plan payment %s", order_id)
    return client.post(
        "/user/gold-plan/payment/verify",
        token=token,
        json={"order_id": order_id},
    )
