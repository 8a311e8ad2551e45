"""Cart grouping and cart store helpers."""

from .aggregator import aggregate_cart
from .models import AggregationResult, CartGroup, FarmGroup, UnserviceableItem, UnserviceableReason
from .store import CartStore, InMemoryCartStore

__all__ = [
    "aggregate_cart",
    "AggregationResult",
    "CartGroup",
    "FarmGroup",
    "UnserviceableItem",
    "UnserviceableReason",
    "CartStore",
    "InMemoryCartStore",
]
