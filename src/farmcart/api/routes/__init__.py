"""Route group exports."""

from . import basket, cart, catalog, checkout, health

__all__ = ["cart", "basket", "checkout", "catalog", "health"]
