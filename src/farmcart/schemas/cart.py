"""Cart aggregation request/response schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from ..models.domain import CartItem
from ..services.cart.models import AggregationResult, CartGroup, FarmGroup, UnserviceableItem
from .catalog import FarmModel


class CartItemModel(BaseModel):
    id: str
    product_id: str
    farm_id: str
    farm_name: str
    name: str = ""
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    unit: str = "each"
    type: Literal["product", "subscription"] = "product"
    metadata: Optional[dict[str, Any]] = None

    def to_domain(self) -> CartItem:
        return CartItem(
            id=self.id,
            product_id=self.product_id,
            farm_id=self.farm_id,
            farm_name=self.farm_name,
            name=self.name,
            price=self.price,
            quantity=self.quantity,
            unit=self.unit,
            type=self.type,
            metadata=self.metadata,
        )

    @classmethod
    def from_domain(cls, item: CartItem) -> "CartItemModel":
        return cls(
            id=item.id,
            product_id=item.product_id,
            farm_id=item.farm_id,
            farm_name=item.farm_name,
            name=item.name,
            price=item.price,
            quantity=item.quantity,
            unit=item.unit,
            type=item.type,
            metadata=item.metadata,
        )


class AggregateRequest(BaseModel):
    items: list[CartItemModel]
    farms: list[FarmModel]
    location_key: str = Field(..., min_length=1, description="Target postal code.")


class FarmGroupModel(BaseModel):
    farm_id: str
    farm_name: str
    items: list[CartItemModel]
    subtotal: Decimal
    delivery_fee: Decimal
    minimum_order: Decimal
    meets_minimum: bool
    delivery_days: list[str]
    estimated_delivery_time: str

    @classmethod
    def from_domain(cls, farm: FarmGroup) -> "FarmGroupModel":
        return cls(
            farm_id=farm.farm_id,
            farm_name=farm.farm_name,
            items=[CartItemModel.from_domain(item) for item in farm.items],
            subtotal=farm.subtotal,
            delivery_fee=farm.delivery_fee,
            minimum_order=farm.minimum_order,
            meets_minimum=farm.meets_minimum,
            delivery_days=list(farm.delivery_days),
            estimated_delivery_time=farm.estimated_delivery_time,
        )


class CartGroupModel(BaseModel):
    zone_id: str
    zone_name: str
    farms: list[FarmGroupModel]
    subtotal: Decimal

    @classmethod
    def from_domain(cls, group: CartGroup) -> "CartGroupModel":
        return cls(
            zone_id=group.zone_id,
            zone_name=group.zone_name,
            farms=[FarmGroupModel.from_domain(farm) for farm in group.farms.values()],
            subtotal=group.subtotal,
        )


class UnserviceableItemModel(BaseModel):
    item: CartItemModel
    reason: str

    @classmethod
    def from_domain(cls, entry: UnserviceableItem) -> "UnserviceableItemModel":
        return cls(item=CartItemModel.from_domain(entry.cart_item), reason=entry.reason.value)


class AggregationResponse(BaseModel):
    location_key: str
    groups: list[CartGroupModel]
    unserviceable: list[UnserviceableItemModel]
    deliverable_subtotal: Decimal

    @classmethod
    def from_result(cls, result: AggregationResult) -> "AggregationResponse":
        return cls(
            location_key=result.location_key,
            groups=[CartGroupModel.from_domain(group) for group in result.groups],
            unserviceable=[UnserviceableItemModel.from_domain(entry) for entry in result.unserviceable],
            deliverable_subtotal=result.deliverable_subtotal,
        )
