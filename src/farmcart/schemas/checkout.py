"""Checkout request/response schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..models.domain import DeliveryOption
from ..services.checkout.totals import Totals
from .cart import AggregationResponse, CartItemModel
from .catalog import FarmModel


class PickupLocationModel(BaseModel):
    name: str
    address: str


class DeliveryOptionModel(BaseModel):
    id: str
    type: Literal["standard", "express", "pickup"]
    name: str
    description: str
    price: Decimal
    estimated_delivery: datetime
    pickup_location: Optional[PickupLocationModel] = None
    available_time_slots: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, option: DeliveryOption) -> "DeliveryOptionModel":
        pickup = option.pickup_location
        return cls(
            id=option.id,
            type=option.type,
            name=option.name,
            description=option.description,
            price=option.price,
            estimated_delivery=option.estimated_delivery,
            pickup_location=PickupLocationModel(name=pickup.name, address=pickup.address) if pickup else None,
            available_time_slots=list(option.available_time_slots),
        )


class CheckoutRequest(BaseModel):
    items: list[CartItemModel]
    farms: list[FarmModel]
    location_key: str = Field(..., min_length=1)
    delivery_option_id: str = "standard"
    tax_rate: Optional[Decimal] = Field(default=None, ge=0)


class TotalsModel(BaseModel):
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    total: Decimal
    tax_rate: Decimal
    delivery_option_id: str
    item_count: int

    @classmethod
    def from_domain(cls, totals: Totals) -> "TotalsModel":
        return cls(
            subtotal=totals.subtotal,
            delivery_fee=totals.delivery_fee,
            tax=totals.tax,
            total=totals.total,
            tax_rate=totals.tax_rate,
            delivery_option_id=totals.delivery_option_id,
            item_count=totals.item_count,
        )


class CheckoutResponse(BaseModel):
    delivery_option: DeliveryOptionModel
    totals: TotalsModel
    grouping: AggregationResponse
