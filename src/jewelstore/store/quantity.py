"""Quantity stepper bounds."""

MIN_QUANTITY = 1


def clamp_quantity(value: int, stock: int | None = None) -> int:
    """Keep ``value`` within 1..stock. With no known stock only the floor applies."""
    value = max(MIN_QUANTITY, value)
    if stock is not None:
        value = min(value, max(MIN_QUANTITY, stock))
    return value


def parse_quantity(raw, stock: int | None = None) -> int:
    """Read a quantity typed by the customer; anything non-numeric resets to 1."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return MIN_QUANTITY
    return clamp_quantity(value, stock)


def step(current: int, delta: int, stock: int | None = None) -> int:
    """Apply a +/- press to the stepper."""
    return clamp_quantity(current + delta, stock)


def can_decrement(current: int) -> bool:
    return current > MIN_QUANTITY


def can_increment(current: int, stock: int | None = None) -> bool:
    return stock is None or current < stock
