"""Magic basket request/response schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .cart import AggregationResponse
from .catalog import FarmModel, ProductModel


class BasketRequest(BaseModel):
    catalog: Optional[list[ProductModel]] = Field(default=None, description="Products to choose from.")
    farms: list[FarmModel] = Field(default_factory=list)
    location_key: str = Field(..., min_length=1, description="Target postal code.")
    dietary_restrictions: list[str] = Field(default_factory=list, description="e.g. ['organic'].")
    basket_size: Optional[int] = Field(default=None, ge=0)


class BasketResponse(BaseModel):
    product_ids: list[str]
    products: list[ProductModel]
    grouping: AggregationResponse
