"""Magic basket domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from ...models.domain import Farm, Product, UserPreferences


class BasketState(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    GENERATED = "generated"
    EDITING = "editing"
    COMMITTED = "committed"


@dataclass(slots=True, frozen=True, eq=False)
class MagicBasket:
    """Proposed products in ranked order plus the snapshot they were picked from."""

    products: tuple[Product, ...]
    farms: Mapping[str, Farm]
    preferences: UserPreferences
    basket_size: int

    @property
    def product_ids(self) -> tuple[str, ...]:
        return tuple(product.id for product in self.products)

    @property
    def location_key(self) -> str:
        return self.preferences.target_location

    def get_product(self, product_id: str) -> Optional[Product]:
        for product in self.products:
            if product.id == product_id:
                return product
        return None
