"""Magic basket recommendation services."""

from .models import BasketState, MagicBasket
from .selection import filter_candidates, ranking_key, select_basket
from .session import MagicBasketSession

__all__ = [
    "BasketState",
    "MagicBasket",
    "MagicBasketSession",
    "filter_candidates",
    "ranking_key",
    "select_basket",
]
