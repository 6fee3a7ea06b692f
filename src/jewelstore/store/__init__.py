"""Store module for e-commerce functionality.

Provides catalog browsing, cart, coupons, checkout, orders, wishlist and
custom order requests for signed-in customers.
"""
