"""Checkout services."""

from .options import default_delivery_options, get_delivery_option
from .service import CheckoutSummary, prepare_checkout
from .totals import Totals, compute_totals, round_currency

__all__ = [
    "default_delivery_options",
    "get_delivery_option",
    "prepare_checkout",
    "CheckoutSummary",
    "Totals",
    "compute_totals",
    "round_currency",
]
