"""Domain models for catalog, delivery zone and cart records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Literal, Optional

SEASONS = frozenset({"spring", "summer", "fall", "winter", "year-round"})
DELIVERY_TYPES = frozenset({"standard", "express", "pickup"})
CART_ITEM_TYPES = frozenset({"product", "subscription"})

DeliveryType = Literal["standard", "express", "pickup"]
CartItemType = Literal["product", "subscription"]


def to_money(value: Any) -> Decimal:
    """Coerce a price-like value to ``Decimal`` without binary float noise."""

    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(slots=True, frozen=True)
class DeliveryZone:
    """A named set of location keys one farm delivers to."""

    id: str
    name: str
    areas: frozenset[str]
    delivery_days: tuple[str, ...] = ()
    delivery_fee: Decimal = Decimal("0")
    minimum_order: Decimal = Decimal("0")
    estimated_delivery_time: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "areas", frozenset(self.areas))
        object.__setattr__(self, "delivery_days", tuple(self.delivery_days))
        object.__setattr__(self, "delivery_fee", to_money(self.delivery_fee))
        object.__setattr__(self, "minimum_order", to_money(self.minimum_order))

    def covers(self, location_key: str) -> bool:
        return location_key in self.areas


@dataclass(slots=True, frozen=True)
class Farm:
    """A merchant farm and the zones it delivers to, in priority order."""

    id: str
    name: str
    delivery_zones: tuple[DeliveryZone, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "delivery_zones", tuple(self.delivery_zones))


@dataclass(slots=True, frozen=True)
class Product:
    """Immutable catalog entry offered by a single farm."""

    id: str
    farm_id: str
    name: str
    price: Decimal
    unit: str
    category_id: Optional[str] = None
    subcategory_id: Optional[str] = None
    variety_id: Optional[str] = None
    organic: bool = False
    in_season: bool = False
    pre_harvest: bool = False
    freshness: Optional[int] = None
    seasons: frozenset[str] = frozenset()
    in_stock: bool = True

    def __post_init__(self) -> None:
        price = to_money(self.price)
        if price < 0:
            raise ValueError(f"Product '{self.id}' has a negative price.")
        object.__setattr__(self, "price", price)
        object.__setattr__(self, "seasons", frozenset(self.seasons))
        unknown = self.seasons - SEASONS
        if unknown:
            raise ValueError(f"Product '{self.id}' has unknown seasons: {sorted(unknown)}")
        if self.pre_harvest and self.freshness is not None:
            raise ValueError(f"Pre-harvest product '{self.id}' cannot carry a freshness score.")
        if self.freshness is not None and not 0 <= self.freshness <= 100:
            raise ValueError(f"Product '{self.id}' freshness must be within 0-100.")


@dataclass(slots=True)
class CartItem:
    """A line in the shopper's cart; ``farm_name`` is denormalized for display."""

    id: str
    product_id: str
    farm_id: str
    farm_name: str
    price: Decimal
    quantity: int
    unit: str
    name: str = ""
    type: CartItemType = "product"
    metadata: Optional[dict[str, Any]] = None

    def __post_init__(self) -> None:
        self.price = to_money(self.price)
        if self.quantity < 1:
            raise ValueError(f"Cart item '{self.id}' quantity must be >= 1.")
        if self.type not in CART_ITEM_TYPES:
            raise ValueError(f"Cart item '{self.id}' has unknown type '{self.type}'.")

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass(slots=True, frozen=True)
class UserPreferences:
    """Shopper preferences supplied by the caller as a read-only snapshot."""

    target_location: str
    dietary_restrictions: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "dietary_restrictions",
            frozenset(item.strip().lower() for item in self.dietary_restrictions if item.strip()),
        )

    def requires(self, restriction: str) -> bool:
        return restriction.lower() in self.dietary_restrictions


@dataclass(slots=True, frozen=True)
class PickupLocation:
    name: str
    address: str


@dataclass(slots=True, frozen=True)
class DeliveryOption:
    """One entry of the fixed, order-wide delivery option catalog."""

    id: str
    type: DeliveryType
    name: str
    price: Decimal
    estimated_delivery: datetime
    description: str = ""
    pickup_location: Optional[PickupLocation] = None
    available_time_slots: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.type not in DELIVERY_TYPES:
            raise ValueError(f"Delivery option '{self.id}' has unknown type '{self.type}'.")
        price = to_money(self.price)
        if price < 0:
            raise ValueError(f"Delivery option '{self.id}' has a negative price.")
        object.__setattr__(self, "price", price)
        object.__setattr__(self, "available_time_slots", tuple(self.available_time_slots))
