"""Money formatting shared by the storefront and the back-office."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.conf import settings

CENTS = Decimal("0.01")


def to_decimal(value, default: Decimal = Decimal("0")) -> Decimal:
    """Coerce a backend amount (number, numeric string, None) to Decimal."""
    if value is None or value == "":
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default


def format_currency(amount, symbol: str | None = None) -> str:
    """Format an amount as ``₹1000.00``."""
    if symbol is None:
        symbol = getattr(settings, "CURRENCY_SYMBOL", "₹")
    value = to_decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    return f"{symbol}{value}"
