"""Exceptions raised by the fulfillment core.

Routine "cannot deliver this item here" outcomes are not exceptions; they are
reported in ``AggregationResult.unserviceable``. Everything below signals either
malformed input data or a caller mistake.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .services.cart.models import UnserviceableItem


class FulfillmentError(ValueError):
    """Base class for fulfillment core failures."""


class ZoneOverlapError(FulfillmentError):
    """Two delivery zones of the same farm claim the same location key."""

    def __init__(self, farm_id: str, location_key: str, zone_ids: Sequence[str]) -> None:
        self.farm_id = farm_id
        self.location_key = location_key
        self.zone_ids = tuple(zone_ids)
        super().__init__(
            f"Farm '{farm_id}' has overlapping delivery zones {list(self.zone_ids)} "
            f"for location '{location_key}'."
        )


class UnserviceableCartError(FulfillmentError):
    """Checkout attempted while some cart items cannot be delivered."""

    def __init__(self, items: Sequence["UnserviceableItem"]) -> None:
        self.items = tuple(items)
        names = ", ".join(
            f"{entry.cart_item.name or entry.cart_item.product_id} ({entry.cart_item.farm_name})"
            for entry in self.items
        )
        super().__init__(f"Cannot check out: {len(self.items)} item(s) cannot be delivered: {names}.")


class EmptyCommitError(FulfillmentError):
    """A magic basket commit was requested with nothing selected."""


class BasketStateError(FulfillmentError):
    """A magic basket operation was called in a state that does not allow it."""
