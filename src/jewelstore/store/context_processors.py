"""Cart badge for the page header."""

import logging

from jewelstore.api import cart as cart_api
from jewelstore.api.client import BackendError, BackendUnavailable

from .summary import summarize_cart

logger = logging.getLogger(__name__)


def cart_context(request):
    """Add a lazily computed ``cart_count`` for signed-in customers.

    The template engine calls the function only when the header renders it.
    """
    customer_auth = getattr(request, "customer_auth", None)
    if not customer_auth or not customer_auth.is_authenticated:
        return {"cart_count": 0}

    cached = {}

    def cart_count():
        if "count" not in cached:
            try:
                cached["count"] = summarize_cart(cart_api.get_cart(customer_auth.token)).item_count
            except (BackendError, BackendUnavailable) as e:
                logger.warning("Could not load cart count: %s", e)
                cached["count"] = 0
        return cached["count"]

    return {"cart_count": cart_count}
