"""Derived cart grouping records produced by the aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, List

from ...models.domain import CartItem


class UnserviceableReason(str, Enum):
    UNRESOLVED_FARM = "UnresolvedFarm"
    NO_SERVICEABLE_ZONE = "NoServiceableZone"


@dataclass(slots=True)
class FarmGroup:
    """Items of one farm delivered through one of its zones."""

    farm_id: str
    farm_name: str
    items: List[CartItem] = field(default_factory=list)
    delivery_fee: Decimal = Decimal("0")
    minimum_order: Decimal = Decimal("0")
    delivery_days: tuple[str, ...] = ()
    estimated_delivery_time: str = ""

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def meets_minimum(self) -> bool:
        return self.subtotal >= self.minimum_order

    @property
    def minimum_order_shortfall(self) -> Decimal:
        return max(self.minimum_order - self.subtotal, Decimal("0"))


@dataclass(slots=True)
class CartGroup:
    """Zone-level partition of the cart; ``farms`` is ordered for display."""

    zone_id: str
    zone_name: str
    farms: Dict[str, FarmGroup] = field(default_factory=dict)

    @property
    def subtotal(self) -> Decimal:
        return sum((farm.subtotal for farm in self.farms.values()), Decimal("0"))

    @property
    def items(self) -> List[CartItem]:
        return [item for farm in self.farms.values() for item in farm.items]


@dataclass(slots=True, frozen=True)
class UnserviceableItem:
    cart_item: CartItem
    reason: UnserviceableReason


@dataclass(slots=True)
class AggregationResult:
    """Every input item ends up in exactly one of ``groups`` or ``unserviceable``."""

    groups: List[CartGroup]
    unserviceable: List[UnserviceableItem]
    location_key: str

    @property
    def deliverable_items(self) -> List[CartItem]:
        return [item for group in self.groups for item in group.items]

    @property
    def deliverable_subtotal(self) -> Decimal:
        return sum((group.subtotal for group in self.groups), Decimal("0"))

    @property
    def item_count(self) -> int:
        return len(self.deliverable_items) + len(self.unserviceable)

    @property
    def is_fully_serviceable(self) -> bool:
        return not self.unserviceable
