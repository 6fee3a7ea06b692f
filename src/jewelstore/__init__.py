"""Jewelstore storefront and back-office."""
