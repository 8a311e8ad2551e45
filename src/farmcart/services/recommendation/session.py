"""Stateful magic basket flow: generate, edit, commit.

``commit`` REPLACES the caller's cart with exactly the selected products. It
never merges with what was already in the cart.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Mapping, Optional, Sequence

from ...config import settings
from ...errors import BasketStateError, EmptyCommitError
from ...models.domain import CartItem, Farm, Product, UserPreferences
from ..cart.aggregator import aggregate_cart
from ..cart.models import AggregationResult
from ..cart.store import CartStore
from .models import BasketState, MagicBasket
from .selection import products_to_cart_items, select_basket

logger = logging.getLogger(__name__)

_EDITABLE_STATES = {BasketState.GENERATED, BasketState.EDITING}
_COMMITTABLE_STATES = {BasketState.GENERATED, BasketState.EDITING, BasketState.COMMITTED}


class MagicBasketSession:
    """Drives one shopper's magic basket through its state machine.

    ``generate`` models a latency-bearing backend call as an ``asyncio`` task.
    Calling ``generate`` again, or ``cancel``, abandons the pending task: the
    abandoned call raises ``asyncio.CancelledError`` and leaves the basket,
    the selection and the cart exactly as they were.
    """

    def __init__(
        self,
        cart_store: CartStore,
        *,
        delay_seconds: float | None = None,
        freshness_threshold: int | None = None,
        default_basket_size: int | None = None,
    ) -> None:
        self.cart_store = cart_store
        self.delay_seconds = (
            delay_seconds if delay_seconds is not None else settings.basket_generation_delay_seconds
        )
        self.freshness_threshold = (
            freshness_threshold if freshness_threshold is not None else settings.freshness_threshold
        )
        self.default_basket_size = (
            default_basket_size if default_basket_size is not None else settings.default_basket_size
        )
        self._state = BasketState.IDLE
        self._basket: MagicBasket | None = None
        self._selection: list[str] = []
        self._pending: asyncio.Task | None = None

    @property
    def state(self) -> BasketState:
        if self._pending is not None and not self._pending.done():
            return BasketState.GENERATING
        return self._state

    @property
    def basket(self) -> MagicBasket | None:
        return self._basket

    @property
    def selection(self) -> tuple[str, ...]:
        return tuple(self._selection)

    def cancel(self) -> bool:
        """Abandon the pending generation, if any. Returns True when one was cancelled."""

        task = self._pending
        if task is None or task.done():
            return False
        task.cancel()
        self._pending = None
        logger.warning("Cancelled pending magic basket generation")
        return True

    async def _produce(
        self,
        catalog: tuple[Product, ...],
        farms: dict[str, Farm],
        preferences: UserPreferences,
        basket_size: int,
    ) -> MagicBasket:
        await asyncio.sleep(self.delay_seconds)
        products = select_basket(
            catalog,
            farms,
            preferences,
            basket_size,
            freshness_threshold=self.freshness_threshold,
        )
        return MagicBasket(
            products=tuple(products),
            farms=farms,
            preferences=preferences,
            basket_size=basket_size,
        )

    async def generate(
        self,
        catalog: Optional[Sequence[Product]],
        farms: Optional[Mapping[str, Farm]],
        preferences: UserPreferences,
        basket_size: int | None = None,
    ) -> MagicBasket:
        size = basket_size if basket_size is not None else self.default_basket_size
        if size < 0:
            raise ValueError("basket_size must be >= 0")
        self.cancel()

        task = asyncio.ensure_future(
            self._produce(tuple(catalog or ()), dict(farms or {}), preferences, size)
        )
        self._pending = task
        try:
            basket = await task
        finally:
            superseded = self._pending is not task
            if not superseded:
                self._pending = None
        if superseded:
            # finished, but a newer generate() already took over
            raise asyncio.CancelledError()

        self._basket = basket
        self._selection = list(basket.product_ids)
        self._state = BasketState.GENERATED
        logger.info(
            "Generated magic basket with %d product(s) for '%s'",
            len(basket.products),
            basket.location_key,
        )
        return basket

    def toggle_selection(self, product_id: str) -> bool:
        """Flip membership of a proposed product. Returns True if now selected."""

        if self.state not in _EDITABLE_STATES or self._basket is None:
            raise BasketStateError(f"Cannot edit the magic basket while {self.state.value}.")
        if self._basket.get_product(product_id) is None:
            raise ValueError(f"Product '{product_id}' is not part of the proposed basket.")

        chosen = set(self._selection)
        if product_id in chosen:
            chosen.remove(product_id)
        else:
            chosen.add(product_id)
        self._selection = [pid for pid in self._basket.product_ids if pid in chosen]
        self._state = BasketState.EDITING
        return product_id in chosen

    def selected_products(self) -> List[Product]:
        if self._basket is None:
            return []
        return [self._basket.get_product(pid) for pid in self._selection]

    def grouping(self) -> AggregationResult:
        """Group the current selection exactly as the cart screen groups cart items."""

        if self._basket is None:
            raise BasketStateError("No magic basket has been generated yet.")
        items = products_to_cart_items(self.selected_products(), self._basket.farms)
        return aggregate_cart(items, self._basket.farms, self._basket.location_key)

    def commit(self, selection: Iterable[str] | None = None) -> list[CartItem]:
        """Replace the whole cart with the selected products, one of each."""

        if self.state not in _COMMITTABLE_STATES or self._basket is None:
            raise BasketStateError(f"Cannot commit the magic basket while {self.state.value}.")

        if isinstance(selection, str):
            raise TypeError("commit() expects a collection of product ids, not a single string.")
        product_ids = list(dict.fromkeys(self._selection if selection is None else selection))
        if not product_ids:
            raise EmptyCommitError("Select at least one product before adding the basket to the cart.")

        products: list[Product] = []
        for product_id in product_ids:
            product = self._basket.get_product(product_id)
            if product is None:
                raise ValueError(f"Product '{product_id}' is not part of the proposed basket.")
            products.append(product)

        items = products_to_cart_items(products, self._basket.farms)
        self.cart_store.replace_items(items)
        self._selection = product_ids
        self._state = BasketState.COMMITTED
        logger.info("Committed magic basket: cart replaced with %d item(s)", len(items))
        return items
