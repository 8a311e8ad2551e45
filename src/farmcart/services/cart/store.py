"""Cart store contract and an in-memory implementation."""

from __future__ import annotations

import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, List, Protocol

from ...models.domain import CartItem, Product


class CartStore(Protocol):
    """Caller-owned cart the core reads and replaces; persistence lives elsewhere."""

    def get_items(self) -> List[CartItem]: ...

    def replace_items(self, items: Iterable[CartItem]) -> None: ...

    def add_item(self, item: CartItem) -> None: ...

    def clear(self) -> None: ...


def new_cart_item_id(product_id: str, farm_id: str) -> str:
    return f"{product_id}-{farm_id}-{uuid.uuid4().hex[:12]}"


class InMemoryCartStore:
    """Process-local cart; adding an existing product/farm pair bumps its quantity."""

    def __init__(self, items: Iterable[CartItem] | None = None) -> None:
        self._items: list[CartItem] = list(items or [])

    def get_items(self) -> List[CartItem]:
        return list(self._items)

    def replace_items(self, items: Iterable[CartItem]) -> None:
        # single assignment: the cart is either fully replaced or unchanged
        self._items = list(items)

    def add_item(self, item: CartItem) -> None:
        for index, existing in enumerate(self._items):
            if existing.product_id == item.product_id and existing.farm_id == item.farm_id:
                self._items[index] = replace(existing, quantity=existing.quantity + item.quantity)
                return
        self._items.append(item)

    def add_product(self, product: Product, farm_name: str, quantity: int = 1) -> None:
        self.add_item(
            CartItem(
                id=new_cart_item_id(product.id, product.farm_id),
                product_id=product.id,
                farm_id=product.farm_id,
                farm_name=farm_name,
                name=product.name,
                price=product.price,
                quantity=quantity,
                unit=product.unit,
            )
        )

    def remove_item(self, item_id: str) -> None:
        self._items = [item for item in self._items if item.id != item_id]

    def update_quantity(self, item_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(item_id)
            return
        self._items = [
            replace(item, quantity=quantity) if item.id == item_id else item for item in self._items
        ]

    def clear(self) -> None:
        self._items = []

    def total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    def total_price(self) -> Decimal:
        return sum((item.line_total for item in self._items), Decimal("0"))
