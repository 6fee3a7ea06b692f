"""Read-only view of the cart as the backend computed it."""

from dataclasses import dataclass, field
from decimal import Decimal

from jewelstore.api.client import data_of, is_success
from jewelstore.core.formatting import to_decimal


@dataclass
class AppliedCoupon:
    code: str
    description: str
    discount_type: str
    value: Decimal
    discount_amount: Decimal


@dataclass
class CartSummary:
    cart_id: int | None = None
    items: list = field(default_factory=list)
    total_amount: Decimal = Decimal("0")
    final_amount: Decimal = Decimal("0")
    coupon: AppliedCoupon | None = None

    @property
    def discount(self) -> Decimal:
        return self.coupon.discount_amount if self.coupon else Decimal("0")

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        return sum(int(item.get("quantity") or 0) for item in self.items)


def _applied_coupon(data: dict, total: Decimal, final: Decimal) -> AppliedCoupon | None:
    coupon = data.get("coupon") or data.get("applied_coupon")
    if not coupon and data.get("coupon_code"):
        coupon = {"coupon_code": data["coupon_code"]}
    if not coupon:
        return None

    discount = to_decimal(data.get("discount_amount")) or to_decimal(coupon.get("discount_amount"))
    if not discount and total and final:
        discount = total - final

    return AppliedCoupon(
        code=str(coupon.get("coupon_code") or ""),
        description=str(coupon.get("description") or "Discount applied successfully"),
        discount_type=str(coupon.get("discount_type") or "flat"),
        value=to_decimal(coupon.get("value")),
        discount_amount=discount,
    )


def summarize_cart(payload: dict | None) -> CartSummary:
    """Build a ``CartSummary`` from a ``GET /cart`` answer; failures give an empty cart."""
    if not is_success(payload):
        return CartSummary()
    data = data_of(payload, {})
    if not isinstance(data, dict):
        return CartSummary()

    total = to_decimal(data.get("total_amount"))
    final = to_decimal(data.get("final_amount"))
    return CartSummary(
        cart_id=data.get("cart_id"),
        items=data.get("items") or [],
        total_amount=total,
        final_amount=final,
        coupon=_applied_coupon(data, total, final),
    )
