"""Coupon eligibility for the cart page.

The backend decides the discount; this module only tells the customer which
coupons the current subtotal qualifies for and how far short it is of the
others.
"""

from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings

from jewelstore.core.formatting import format_currency, to_decimal

PERCENTAGE = "percentage"


@dataclass
class CouponOption:
    """A public coupon evaluated against the cart subtotal."""

    id: int | None
    code: str
    discount_type: str
    value: Decimal
    min_order_amount: Decimal
    description: str
    is_eligible: bool
    shortfall: Decimal | None

    @property
    def offer_label(self) -> str:
        return offer_label(self.discount_type, self.value)

    @property
    def min_order_display(self) -> str:
        return format_currency(self.min_order_amount)

    @property
    def shortfall_display(self) -> str:
        """``₹1000.00`` for ineligible coupons, empty otherwise."""
        if self.shortfall is None:
            return ""
        return format_currency(self.shortfall)


def _plain(amount: Decimal) -> str:
    # 10.00 -> 10, 12.50 -> 12.5
    return format(amount.normalize(), "f")


def offer_label(discount_type: str, value) -> str:
    """``10% OFF`` for percentage coupons, ``₹500 OFF`` for flat ones."""
    amount = _plain(to_decimal(value))
    if discount_type == PERCENTAGE:
        return f"{amount}% OFF"
    symbol = getattr(settings, "CURRENCY_SYMBOL", "₹")
    return f"{symbol}{amount} OFF"


def is_eligible(subtotal, min_order_amount) -> bool:
    return to_decimal(subtotal) >= to_decimal(min_order_amount)


def evaluate_coupon(subtotal, coupon: dict) -> CouponOption:
    subtotal = to_decimal(subtotal)
    minimum = to_decimal(coupon.get("min_order_amount"))
    eligible = subtotal >= minimum
    return CouponOption(
        id=coupon.get("id"),
        code=str(coupon.get("coupon_code") or coupon.get("code") or ""),
        discount_type=str(coupon.get("discount_type") or "flat"),
        value=to_decimal(coupon.get("value")),
        min_order_amount=minimum,
        description=str(coupon.get("description") or ""),
        is_eligible=eligible,
        shortfall=None if eligible else minimum - subtotal,
    )


def evaluate_coupons(subtotal, coupons) -> list[CouponOption]:
    """Evaluate every coupon against ``subtotal``, keeping the backend's order."""
    return [evaluate_coupon(subtotal, coupon) for coupon in coupons]


def find_option(options, code: str) -> CouponOption | None:
    code = (code or "").strip().upper()
    for option in options:
        if option.code.upper() == code:
            return option
    return None
