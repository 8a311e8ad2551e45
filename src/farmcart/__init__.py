"""Delivery-zone cart aggregation, magic basket and checkout totals for a multi-farm storefront."""

__version__ = "0.1.0"
